from abc import ABC, abstractmethod

from prospect_intel.imaging.models import NormalizedImage
from prospect_intel.recognition.models import RecognitionOutput


class BaseRecognizer(ABC):
    """Contract for all text recognition adapters."""

    @abstractmethod
    def recognize(self, image: NormalizedImage) -> RecognitionOutput:
        """Read the text on one normalized screenshot slice.

        Args:
            image: A preprocessed slice.

        Returns:
            RecognitionOutput with text, lines, blocks and a [0, 1] confidence.
            Empty text with zero confidence is a valid answer.

        Raises:
            RecognitionError: on any failure.
        """
