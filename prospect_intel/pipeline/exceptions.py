class PipelineError(Exception):
    """Base exception for all scan pipeline errors."""


class InvalidTransitionError(PipelineError):
    """Raised when a state transition is not in the transition table."""


class ScanNotFoundError(PipelineError):
    """Raised when no status has been recorded for a scan id."""


class ScanInputError(PipelineError):
    """Raised when a scan is submitted with unusable input."""
