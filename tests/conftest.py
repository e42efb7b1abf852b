from collections.abc import Callable

import pytest

from prospect_intel.imaging.models import NormalizedImage, RawImage
from tests.helpers import encode_png, solid_pixels


@pytest.fixture()
def screenshot_png() -> bytes:
    """Light-mode screenshot: white page with a grey text band."""
    pixels = solid_pixels(240, 160, 250)
    pixels[40:60, 20:140] = 60
    return encode_png(pixels)


@pytest.fixture()
def make_raw_image(screenshot_png: bytes) -> Callable[..., RawImage]:
    def _make(image_id: str = "img-1", data: bytes | None = None) -> RawImage:
        return RawImage(
            id=image_id,
            filename=f"{image_id}.png",
            data=screenshot_png if data is None else data,
        )

    return _make


@pytest.fixture()
def normalized_image() -> NormalizedImage:
    return NormalizedImage(
        source_image_id="img-1",
        slice_index=0,
        pixels=solid_pixels(20, 30, 200),
    )
