from pathlib import Path
from typing import ClassVar

from prospect_intel.imaging.models import RawImage
from prospect_intel.worker.exceptions import ScreenshotLoadError


def scan_directory(screenshots_root: Path, scan_id: str) -> Path:
    """Build path to a scan's screenshots: {screenshots_root}/{scan_id}/"""
    return screenshots_root / scan_id


class ScreenshotLoader:
    """Reads a scan's screenshots from disk in filename order."""

    IMAGE_EXTENSIONS: ClassVar[frozenset[str]] = frozenset(
        {".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif"}
    )

    def __init__(self, screenshots_root: Path) -> None:
        self._screenshots_root = screenshots_root

    def load(self, scan_id: str) -> list[RawImage]:
        """Load every image file of a scan.

        Image ids are the file stems, e.g. ``01.png`` becomes ``01``.

        Raises:
            FileNotFoundError: if the scan directory does not exist.
            ScreenshotLoadError: if the directory holds no image files.
        """
        directory = scan_directory(self._screenshots_root, scan_id)
        if not directory.is_dir():
            raise FileNotFoundError(f"Screenshot directory not found: {directory}")

        paths = sorted(
            p
            for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in self.IMAGE_EXTENSIONS
        )
        if not paths:
            raise ScreenshotLoadError(f"No screenshots found in {directory}")
        return [RawImage(id=p.stem, filename=p.name, data=p.read_bytes()) for p in paths]
