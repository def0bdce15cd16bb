from io import BytesIO
from typing import Tuple
from PIL import Image, ImageOps
from mediashare.core.errors import ImageCompressionError
from mediashare.models.upload import ImageFile
from mediashare.utils.logger import logger

MB = 1024 * 1024

def fit_within(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """Scale (width, height) down proportionally so it fits the bounds."""
    if width <= max_width and height <= max_height:
        return width, height
    ratio = min(max_width / width, max_height / height)
    return max(1, int(width * ratio + 0.5)), max(1, int(height * ratio + 0.5))

def _flatten(img: Image.Image) -> Image.Image:
    # JPEG has no alpha channel; transparent areas end up black
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (0, 0, 0))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return img.convert("RGB")

def _encode_jpeg(img: Image.Image, quality: float) -> bytes:
    buf = BytesIO()
    img.save(buf, format="JPEG", quality=round(quality * 100), optimize=True)
    return buf.getvalue()

def compress_image(
    file: ImageFile,
    max_width: int = 2000,
    max_height: int = 3000,
    quality: float = 0.85,
    max_size_mb: float = 2,
) -> ImageFile:
    """Shrink an image to a JPEG under ``max_size_mb``.

    Files already under the limit are returned as-is. Otherwise the image is
    resized to fit ``max_width`` x ``max_height`` and encoded at ``quality``;
    if that is still too big it is encoded once more at a lower quality,
    starting again from the decoded pixels rather than from the first JPEG.
    """
    limit = max_size_mb * MB
    if file.size <= limit:
        return file

    try:
        with Image.open(BytesIO(file.content)) as src:
            src.load()
            img = ImageOps.exif_transpose(src)
            size = fit_within(img.width, img.height, max_width, max_height)
            resized = _flatten(img.resize(size, Image.LANCZOS) if size != img.size else img)
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageCompressionError(f"Failed to load the image: {e}") from e

    try:
        data = _encode_jpeg(resized, quality)
    except (OSError, ValueError) as e:
        raise ImageCompressionError(f"Failed to compress the image: {e}") from e

    if len(data) > limit:
        reduced_quality = max(0.5, quality * 0.7)
        try:
            data = _encode_jpeg(resized, reduced_quality)
        except (OSError, ValueError) as e:
            logger.warning(f"Reduced-quality pass failed for {file.name}, keeping first pass: {e}")

    logger.debug(f"Compressed {file.name}: {file.size} -> {len(data)} bytes at {size[0]}x{size[1]}")
    return ImageFile(name=file.name, content=data, content_type="image/jpeg")
