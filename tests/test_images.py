import random
from io import BytesIO
from unittest.mock import patch

import pytest
from PIL import Image

from mediashare.core.errors import ImageCompressionError
from mediashare.models.upload import ImageFile
from mediashare.utils import images
from mediashare.utils.images import compress_image, fit_within


def _noise_png(width: int, height: int, name: str = "photo.png") -> ImageFile:
    # Random pixels do not compress, which keeps the PNG well above the limits used below
    rng = random.Random(0)
    img = Image.frombytes("RGB", (width, height), rng.randbytes(width * height * 3))
    buf = BytesIO()
    img.save(buf, format="PNG")
    return ImageFile(name=name, content=buf.getvalue(), content_type="image/png")


def test_fit_within():
    assert fit_within(1000, 500, 2000, 3000) == (1000, 500)
    assert fit_within(4000, 2000, 2000, 3000) == (2000, 1000)
    assert fit_within(1000, 6000, 2000, 3000) == (500, 3000)


def test_small_file_is_returned_unchanged():
    file = ImageFile(name="tiny.png", content=b"x" * 100, content_type="image/png")
    assert compress_image(file) is file


def test_large_file_is_resized_jpeg():
    file = _noise_png(1200, 1000)
    result = compress_image(file, max_width=800, max_height=600, max_size_mb=1)

    assert result.content_type == "image/jpeg"
    assert result.name == "photo.png"
    assert result.size <= file.size
    with Image.open(BytesIO(result.content)) as img:
        assert img.format == "JPEG"
        assert img.width <= 800 and img.height <= 600
        assert img.size == (720, 600)


def test_retry_reencodes_from_decoded_image():
    file = _noise_png(400, 300)
    with patch.object(images, "_encode_jpeg", wraps=images._encode_jpeg) as encode:
        compress_image(file, max_size_mb=0.001)

    assert encode.call_count == 2
    first, second = encode.call_args_list
    assert first[0][0] is second[0][0]
    assert first[0][1] == pytest.approx(0.85)
    assert second[0][1] == pytest.approx(0.595)


def test_reduced_quality_is_floored():
    file = _noise_png(200, 200)
    with patch.object(images, "_encode_jpeg", wraps=images._encode_jpeg) as encode:
        compress_image(file, quality=0.6, max_size_mb=0.001)
    assert encode.call_args_list[1][0][1] == pytest.approx(0.5)


def test_transparent_png_is_flattened():
    img = Image.new("RGBA", (600, 600), (255, 0, 0, 0))
    buf = BytesIO()
    img.save(buf, format="PNG")
    file = ImageFile(name="alpha.png", content=buf.getvalue(), content_type="image/png")

    result = compress_image(file, max_size_mb=0.0001)

    with Image.open(BytesIO(result.content)) as out:
        assert out.mode == "RGB"


def test_undecodable_file_raises():
    file = ImageFile(name="broken.jpg", content=b"\x00" * (3 * 1024 * 1024), content_type="image/jpeg")
    with pytest.raises(ImageCompressionError):
        compress_image(file)
