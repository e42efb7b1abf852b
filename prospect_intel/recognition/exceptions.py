class RecognitionError(Exception):
    """Raised when text recognition fails."""


class RecognitionValidationError(RecognitionError):
    """Raised when the recognizer output does not match the result contract."""


class RecognitionNetworkError(RecognitionError):
    """Raised when the recognition provider call fails due to network/infrastructure issues."""
