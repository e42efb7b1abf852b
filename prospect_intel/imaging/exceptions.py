class ImagePreprocessingError(Exception):
    """Raised when a screenshot cannot be decoded or transformed."""
