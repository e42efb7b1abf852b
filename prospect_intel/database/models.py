from dataclasses import dataclass
from datetime import datetime


@dataclass
class ScanJobRecord:
    """Represents a row from the scan_jobs table."""

    id: int
    scan_id: str
    status: str
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
