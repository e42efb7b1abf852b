import io
from dataclasses import dataclass

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class RawImage:
    """Screenshot as submitted by the caller. Never mutated."""

    id: str
    filename: str
    data: bytes


@dataclass(frozen=True)
class ImageMetrics:
    """Brightness statistics over the full pixel buffer."""

    mean_brightness: float
    dark_fraction: float
    bright_fraction: float
    is_dark_mode: bool
    has_noise: bool


@dataclass(frozen=True, eq=False)
class NormalizedImage:
    """One derived slice of a RawImage, ready for recognition.

    ``pixels`` is an RGB uint8 array of shape (height, width, 3).
    """

    source_image_id: str
    slice_index: int
    pixels: np.ndarray

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    def to_png(self) -> bytes:
        """Encode the slice as PNG for recognizers that take image files."""
        buf = io.BytesIO()
        Image.fromarray(self.pixels).save(buf, format="PNG")
        return buf.getvalue()
