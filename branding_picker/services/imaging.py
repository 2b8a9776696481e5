"""
Branding Picker Imaging Utilities
Handles image upload validation and decoding into pixel buffers.
"""
import io

import numpy as np
from fastapi import HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from PIL import Image

from branding_picker.config import config
from branding_picker.services.colors.sampling import PixelBuffer

# Modes that carry transparency (directly or through a palette)
_ALPHA_MODES = {"RGBA", "LA", "PA", "P", "RGBa", "La"}


def validate_file_upload(file: UploadFile) -> None:
    """
    Validate uploaded file for size and format compliance.

    Args:
        file: FastAPI UploadFile object

    Raises:
        HTTPException: 400 for oversized files, 415 for unsupported formats
    """
    size = getattr(file, "size", None)
    if size and size > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    if file.content_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if file.filename:
        ext = file.filename.lower().rsplit('.', 1)[-1] if '.' in file.filename else ''
        if f".{ext}" not in config.SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=415,
                detail=f"Unsupported file extension. Supported: {', '.join(sorted(config.SUPPORTED_EXTENSIONS))}"
            )


def detect_image_type(file_bytes: bytes) -> str:
    """
    Detect image MIME type from magic bytes.

    Raises:
        HTTPException: 400 for unknown or truncated data
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    if file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    if file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    raise HTTPException(
        status_code=400,
        detail="Invalid image file. Magic bytes don't match supported formats."
    )


def _to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit integer and float grayscale modes down to 8-bit L."""
    data = np.asarray(image)
    if image.mode.startswith("I"):
        data = np.clip(data.astype(np.int64) >> 8, 0, 255)
    else:
        data = np.clip(np.rint(data), 0, 255)
    return Image.fromarray(data.astype(np.uint8))


def image_to_buffer(image: Image.Image) -> PixelBuffer:
    """Convert a PIL image to an RGB or RGBA pixel buffer, keeping transparency."""
    if image.mode.startswith("I") or image.mode == "F":
        image = _to_8bit(image)
    has_alpha = image.mode in _ALPHA_MODES or "transparency" in image.info
    target_mode = "RGBA" if has_alpha else "RGB"
    if image.mode != target_mode:
        image = image.convert(target_mode)
    return PixelBuffer.from_array(np.asarray(image, dtype=np.uint8))


def decode_image_bytes(file_bytes: bytes) -> PixelBuffer:
    """
    Decode raw image bytes into a pixel buffer.

    Raises:
        HTTPException: 400 for oversized, corrupt or undecodable data
    """
    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    detect_image_type(file_bytes)

    try:
        with Image.open(io.BytesIO(file_bytes)) as image:
            pixel_count = image.width * image.height
            if pixel_count > config.MAX_IMAGE_PIXELS:
                raise HTTPException(
                    status_code=400,
                    detail=f"Image too large: {pixel_count} pixels. Maximum: {config.MAX_IMAGE_PIXELS}"
                )
            image.load()
            return image_to_buffer(image)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to decode image: {e}")


async def read_image(file: UploadFile) -> PixelBuffer:
    """Read an uploaded file and decode it into a pixel buffer."""
    file_bytes = await file.read()
    return await run_in_threadpool(decode_image_bytes, file_bytes)
