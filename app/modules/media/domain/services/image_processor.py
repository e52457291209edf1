# 📄 File: app/modules/media/domain/services/image_processor.py
# 🧭 Purpose (Layman Explanation):
# Shrinks big plant photos to a sensible size, saves them in a web-friendly format,
# makes square thumbnails, and gives every file a unique name.
# 🧪 Purpose (Technical Summary):
# Pillow-based image normalization: "fit inside, never enlarge" downscaling, deterministic
# re-encoding to JPEG (progressive) / PNG (level 9) / WEBP (method 6), center-cropped cover
# thumbnails, and sortable collision-resistant filename generation.
# 🔗 Dependencies:
# Pillow (Image, ImageOps), hashlib, uuid, time
# 🔄 Connected Modules / Calls From:
# upload_service.py (after validation passes)

import hashlib
import io
import time
from typing import Optional, Tuple, Union
from uuid import uuid4

from PIL import Image, ImageOps

from app.modules.media.domain.models.upload import ImageFormat, ProcessedImage
from app.shared.core.exceptions import ImageProcessingFailedError, UnsupportedFormatError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_WIDTH = 1200
DEFAULT_MAX_HEIGHT = 1200
DEFAULT_QUALITY = 85
THUMBNAIL_SIZE = 300
THUMBNAIL_QUALITY = 80

# Modes that must be flattened before JPEG encoding
_NON_JPEG_MODES = ("1", "RGBA", "LA", "P", "PA", "I", "I;16", "F")

# Modes PNG and WEBP encoders accept as-is
_WEB_MODES = ("1", "L", "LA", "P", "RGB", "RGBA")


def generate_secure_filename(original_name: str, extension: str) -> str:
    """
    Build ``{unix_ms}-{md5(name + unix_ms)[:8]}-{uuid4}{extension}``.

    The uuid guarantees uniqueness; the timestamp prefix keeps names sortable.
    """
    timestamp = int(time.time() * 1000)
    digest = hashlib.md5(f"{original_name}{timestamp}".encode("utf-8")).hexdigest()[:8]
    return f"{timestamp}-{digest}-{uuid4()}{extension}"


def resolve_format(format: Union[str, ImageFormat]) -> ImageFormat:
    try:
        return ImageFormat(format.lower() if isinstance(format, str) else format)
    except ValueError as e:
        raise UnsupportedFormatError(format, [f.value for f in ImageFormat]) from e


def _to_jpeg_mode(img: Image.Image) -> Image.Image:
    if img.mode in _NON_JPEG_MODES:
        return img.convert("RGB")
    return img


def _to_web_mode(img: Image.Image) -> Image.Image:
    if img.mode in _WEB_MODES:
        return img
    return img.convert("RGBA" if "A" in img.getbands() else "RGB")


def _encode(img: Image.Image, image_format: ImageFormat, quality: int) -> bytes:
    output = io.BytesIO()
    if image_format is not ImageFormat.JPEG:
        img = _to_web_mode(img)

    if image_format is ImageFormat.JPEG:
        _to_jpeg_mode(img).save(output, format="JPEG", quality=quality, progressive=True)
    elif image_format is ImageFormat.PNG:
        # Quality does not apply to lossless PNG
        img.save(output, format="PNG", compress_level=9)
    elif image_format is ImageFormat.WEBP:
        img.save(output, format="WEBP", quality=quality, method=6)

    return output.getvalue()


def fit_inside(size: Tuple[int, int], max_width: int, max_height: int) -> Tuple[int, int]:
    """Target size for a "fit inside, never enlarge" resize."""
    width, height = size
    if width <= max_width and height <= max_height:
        return width, height

    scale = min(max_width / width, max_height / height)
    return max(1, round(width * scale)), max(1, round(height * scale))


def process_and_optimize_image(
    buffer: bytes,
    max_width: int = DEFAULT_MAX_WIDTH,
    max_height: int = DEFAULT_MAX_HEIGHT,
    quality: int = DEFAULT_QUALITY,
    format: Union[str, ImageFormat] = ImageFormat.JPEG,
    original_name: str = "processed_image"
) -> ProcessedImage:
    """
    Downscale (if needed) and re-encode an uploaded image.

    Resizing happens only when the source exceeds max_width or max_height,
    keeping the aspect ratio and never upscaling. Output dimensions are
    read back from the encoded buffer.

    Args:
        buffer: Raw image bytes (already validated)
        max_width: Bounding box width
        max_height: Bounding box height
        quality: Encoder quality for JPEG and WEBP
        format: Output encoding, one of jpeg/png/webp
        original_name: Seed for the filename hash

    Returns:
        ProcessedImage with the encoded bytes, generated filename and dimensions

    Raises:
        UnsupportedFormatError: unknown output format
        ImageProcessingFailedError: any codec failure, original message preserved
    """
    image_format = resolve_format(format)

    try:
        with Image.open(io.BytesIO(buffer)) as img:
            original_size = img.size
            target_size = fit_inside(original_size, max_width, max_height)

            if target_size != original_size:
                img = img.resize(target_size, Image.Resampling.LANCZOS)

            output_buffer = _encode(img, image_format, quality)

        with Image.open(io.BytesIO(output_buffer)) as encoded:
            width, height = encoded.size
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as e:
        logger.error(f"Image processing failed: {e}")
        raise ImageProcessingFailedError(str(e) or type(e).__name__) from e

    filename = generate_secure_filename(original_name, image_format.extension)

    logger.debug(
        f"Image normalized {original_size[0]}x{original_size[1]} -> {width}x{height}",
        format=image_format.value,
        original_bytes=len(buffer),
        optimized_bytes=len(output_buffer),
    )

    return ProcessedImage(
        buffer=output_buffer,
        filename=filename,
        format=image_format,
        width=width,
        height=height,
    )


def create_thumbnail(
    buffer: bytes,
    size: int = THUMBNAIL_SIZE,
    quality: int = THUMBNAIL_QUALITY,
    original_name: Optional[str] = "thumbnail"
) -> ProcessedImage:
    """
    Create an exactly size x size JPEG thumbnail.

    The image is scaled to cover the square and center-cropped, so it is
    never letterboxed. Output is always JPEG regardless of input format.
    """
    try:
        with Image.open(io.BytesIO(buffer)) as img:
            thumb = ImageOps.fit(
                _to_jpeg_mode(img),
                (size, size),
                method=Image.Resampling.LANCZOS,
                centering=(0.5, 0.5)
            )
            output = io.BytesIO()
            thumb.save(output, format="JPEG", quality=quality)
    except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as e:
        logger.error(f"Thumbnail creation failed: {e}")
        raise ImageProcessingFailedError(str(e) or type(e).__name__, operation="Thumbnail creation") from e

    return ProcessedImage(
        buffer=output.getvalue(),
        filename=generate_secure_filename(original_name or "thumbnail", ImageFormat.JPEG.extension),
        format=ImageFormat.JPEG,
        width=thumb.width,
        height=thumb.height,
    )
