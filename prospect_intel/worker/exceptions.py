class ScreenshotLoadError(Exception):
    """Raised when a scan directory exists but holds no readable screenshots."""
