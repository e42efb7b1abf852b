from abc import ABC, abstractmethod


class BaseRecognitionClient(ABC):
    """Contract for provider-specific vision model clients."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        system_prompt: str,
        user_prompt: str,
        image_png: bytes,
        json_schema: dict[str, object],
    ) -> str:
        """Return provider response as plain text."""
