"""Deterministic screenshot normalization ahead of text recognition.

Processing flow:
1. Decode the raw bytes to an RGB pixel buffer (Pillow).
2. Measure brightness over the full buffer (dark mode, noise signal).
3. Trim near-black border rows from the top and bottom.
4. Stretch contrast around the 128 midpoint, lifting dark-mode channels first.
5. Blur with a 3x3 weighted kernel when the noise signal is present.
6. Split tall screenshots into overlapping vertical slices.
"""

import io
import math
from typing import ClassVar

import numpy as np
from PIL import Image

from prospect_intel.imaging.exceptions import ImagePreprocessingError
from prospect_intel.imaging.models import ImageMetrics, NormalizedImage, RawImage
from prospect_intel.logging.logger import Log


class ImagePreprocessor:
    """Turns one RawImage into one or more NormalizedImage slices."""

    DARK_PIXEL_THRESHOLD: ClassVar[int] = 50
    BRIGHT_PIXEL_THRESHOLD: ClassVar[int] = 200
    DARK_MODE_MEAN: ClassVar[float] = 100.0
    DARK_MODE_FRACTION: ClassVar[float] = 0.5
    NOISE_FRACTION: ClassVar[float] = 0.3

    BORDER_PIXEL_THRESHOLD: ClassVar[int] = 30
    BORDER_ROW_FRACTION: ClassVar[float] = 0.9

    DARK_MODE_GAIN: ClassVar[float] = 1.4
    DARK_MODE_OFFSET: ClassVar[float] = 40.0
    MIDPOINT: ClassVar[float] = 128.0

    _BLUR_KERNEL: ClassVar[np.ndarray] = (
        np.array([[1, 2, 1], [2, 4, 2], [1, 2, 1]], dtype=np.float64) / 16.0
    )

    def __init__(
        self,
        *,
        max_slice_height: int = 2000,
        slice_overlap: int = 100,
        contrast_factor: float = 1.3,
    ) -> None:
        if max_slice_height <= 0:
            raise ValueError("max_slice_height must be positive")
        if not 0 <= slice_overlap < max_slice_height:
            raise ValueError("slice_overlap must be in [0, max_slice_height)")
        self._max_slice_height = max_slice_height
        self._slice_overlap = slice_overlap
        self._contrast_factor = contrast_factor

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, image: RawImage) -> list[NormalizedImage]:
        """Decode, clean up and segment a screenshot.

        Raises:
            ImagePreprocessingError: if the image cannot be decoded or transformed.
        """
        try:
            return self._run(image)
        except ImagePreprocessingError:
            raise
        except Exception as exc:
            raise ImagePreprocessingError(
                f"Preprocessing failed for image {image.id}: {exc}"
            ) from exc

    def decode(self, data: bytes) -> np.ndarray:
        """Decode encoded image bytes into an RGB uint8 array."""
        if not data:
            raise ImagePreprocessingError("Image payload is empty")
        try:
            with Image.open(io.BytesIO(data)) as img:
                rgb = img.convert("RGB")
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise ImagePreprocessingError(f"Cannot decode image: {exc}") from exc
        return np.asarray(rgb, dtype=np.uint8)

    def analyze(self, pixels: np.ndarray) -> ImageMetrics:
        brightness = self._brightness(pixels)
        total = brightness.size
        if total == 0:
            return ImageMetrics(0.0, 0.0, 0.0, is_dark_mode=False, has_noise=False)
        mean = float(brightness.mean())
        dark = float(np.count_nonzero(brightness < self.DARK_PIXEL_THRESHOLD)) / total
        bright = float(np.count_nonzero(brightness > self.BRIGHT_PIXEL_THRESHOLD)) / total
        return ImageMetrics(
            mean_brightness=mean,
            dark_fraction=dark,
            bright_fraction=bright,
            is_dark_mode=mean < self.DARK_MODE_MEAN or dark > self.DARK_MODE_FRACTION,
            has_noise=abs(bright - dark) > self.NOISE_FRACTION,
        )

    def autocrop(self, pixels: np.ndarray) -> np.ndarray:
        """Trim contiguous near-black rows from both ends.

        Returns the input unchanged when nothing is trimmed or when the
        remaining region would be empty.
        """
        height = pixels.shape[0]
        if height == 0 or pixels.shape[1] == 0:
            return pixels
        dark_share = (self._brightness(pixels) < self.BORDER_PIXEL_THRESHOLD).mean(axis=1)
        is_border = dark_share >= self.BORDER_ROW_FRACTION

        top = 0
        while top < height and is_border[top]:
            top += 1
        bottom = height
        while bottom > top and is_border[bottom - 1]:
            bottom -= 1

        if bottom - top <= 0:
            Log.debug("Autocrop region is degenerate, keeping original image")
            return pixels
        if top == 0 and bottom == height:
            return pixels
        return pixels[top:bottom].copy()

    def enhance_contrast(self, pixels: np.ndarray, *, dark_mode: bool) -> np.ndarray:
        values = pixels.astype(np.float64)
        if dark_mode:
            values = np.minimum(255.0, values * self.DARK_MODE_GAIN + self.DARK_MODE_OFFSET)
        factor = self.stretch_factor(self._contrast_factor)
        values = factor * (values - self.MIDPOINT) + self.MIDPOINT
        return np.clip(np.rint(values), 0, 255).astype(np.uint8)

    def reduce_noise(self, pixels: np.ndarray) -> np.ndarray:
        """Apply the 3x3 weighted blur to interior pixels; edges are kept."""
        height, width = pixels.shape[:2]
        if height < 3 or width < 3:
            return pixels.copy()
        source = pixels.astype(np.float64)
        blurred = np.zeros((height - 2, width - 2, source.shape[2]), dtype=np.float64)
        for dy in range(3):
            for dx in range(3):
                blurred += self._BLUR_KERNEL[dy, dx] * source[
                    dy : dy + height - 2, dx : dx + width - 2
                ]
        result = source.copy()
        result[1:-1, 1:-1] = blurred
        return np.clip(np.rint(result), 0, 255).astype(np.uint8)

    def segment(self, pixels: np.ndarray) -> list[np.ndarray]:
        """Cut a tall buffer into ceil(H / max) slices.

        Every slice after the first starts ``slice_overlap`` rows above the
        previous slice's end.
        """
        height = pixels.shape[0]
        if height <= self._max_slice_height:
            return [pixels]
        count = math.ceil(height / self._max_slice_height)
        slices: list[np.ndarray] = []
        for i in range(count):
            start = max(0, i * self._max_slice_height - (self._slice_overlap if i > 0 else 0))
            end = min(height, (i + 1) * self._max_slice_height)
            slices.append(pixels[start:end].copy())
        return slices

    @staticmethod
    def stretch_factor(constant: float) -> float:
        return 259.0 * (constant + 1.0) / (259.0 - constant)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, image: RawImage) -> list[NormalizedImage]:
        pixels = self.decode(image.data)
        metrics = self.analyze(pixels)
        Log.debug(
            f"Image {image.id}: mean={metrics.mean_brightness:.1f} "
            f"dark_mode={metrics.is_dark_mode} noise={metrics.has_noise}"
        )

        pixels = self.autocrop(pixels)
        pixels = self.enhance_contrast(pixels, dark_mode=metrics.is_dark_mode)
        if metrics.has_noise:
            pixels = self.reduce_noise(pixels)

        slices = self.segment(pixels)
        Log.info(
            f"Normalized image {image.id} ({image.filename}) into {len(slices)} slice(s)"
        )
        return [
            NormalizedImage(source_image_id=image.id, slice_index=i, pixels=s)
            for i, s in enumerate(slices)
        ]

    @staticmethod
    def _brightness(pixels: np.ndarray) -> np.ndarray:
        return pixels[..., :3].astype(np.float64).mean(axis=-1)
