"""Decode and encode Bitmaps using Pillow.

These helpers only convert between files/bytes and Bitmaps. All pixel
processing happens on NumPy arrays in the pipeline.

JPEG has no alpha channel, so translucent pixels are composited onto
black before encoding, as a browser canvas does when exporting JPEG.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from imgmod.bitmap import Bitmap
from imgmod.config.adjust import CONFIG
from imgmod.constants import DEFAULT_EXPORT_NAME, DEFAULT_QUALITY, EXPORT_MIME_TYPE

logger = logging.getLogger(__name__)


# ============================================================================
# Decoding
# ============================================================================


def _image_to_bitmap(im: Image.Image) -> Bitmap:
    im = ImageOps.exif_transpose(im)
    im = im.convert("RGBA")
    pixels = np.array(im, dtype=np.uint8)
    return Bitmap(width=im.width, height=im.height, pixels=pixels)


def decode_bitmap(data: bytes) -> Bitmap:
    """Decode encoded image bytes into an RGBA Bitmap.

    EXIF orientation is applied so the Bitmap matches what viewers show.

    :param data: Encoded image (PNG, JPEG, WebP, BMP, GIF, ...)
    :returns: Decoded Bitmap
    :raises ValueError: If the bytes are not a readable image or exceed Pillow's pixel limit
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            bitmap = _image_to_bitmap(im)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ValueError(f"Could not decode image ({len(data)} bytes): {exc}") from exc
    logger.debug("[codec] Decoded %dx%d from %d bytes", bitmap.width, bitmap.height, len(data))
    return bitmap


def load_bitmap(path: str | Path) -> Bitmap:
    """Load an image file into an RGBA Bitmap.

    :param path: Path to an image supported by Pillow
    :returns: Decoded Bitmap
    :raises FileNotFoundError: If the file does not exist
    :raises ValueError: If the file is not a readable image or exceeds Pillow's pixel limit
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Input file not found: {p}")
    try:
        with Image.open(p) as im:
            bitmap = _image_to_bitmap(im)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ValueError(f"Could not read image {p}: {exc}") from exc
    logger.debug("[codec] Loaded %s (%dx%d)", p, bitmap.width, bitmap.height)
    return bitmap


# ============================================================================
# Encoding
# ============================================================================


def flatten_alpha(bitmap: Bitmap) -> np.ndarray:
    """Composite RGBA onto black and return an RGB uint8 array [H, W, 3]."""
    if not bitmap.has_alpha():
        return bitmap.pixels[:, :, :3].copy()
    rgb = bitmap.pixels[:, :, :3].astype(np.float64)
    alpha = bitmap.pixels[:, :, 3:4].astype(np.float64) / 255.0
    return np.floor(rgb * alpha + 0.5).astype(np.uint8)


def encode_jpeg(bitmap: Bitmap, quality: int = DEFAULT_QUALITY) -> bytes:
    """Encode a Bitmap as JPEG.

    :param bitmap: Image to encode
    :param quality: Encoder quality, clamped to [1, 100]
    :returns: JPEG bytes
    """
    quality = CONFIG.quality.validate(quality)
    im = Image.fromarray(flatten_alpha(bitmap))
    buffer = io.BytesIO()
    im.save(buffer, format="JPEG", quality=quality, optimize=True)
    data = buffer.getvalue()
    logger.debug(
        "[codec] Encoded %dx%d JPEG at quality=%d (%d bytes)",
        bitmap.width,
        bitmap.height,
        quality,
        len(data),
    )
    return data


@dataclass(frozen=True)
class ExportResult:
    """Encoded output ready for download.

    Attributes:
        data: Encoded image bytes
        filename: Suggested download name
        mime_type: MIME type of data
        quality: Quality the bytes were encoded at
        width: Image width
        height: Image height
    """

    data: bytes
    filename: str = DEFAULT_EXPORT_NAME
    mime_type: str = EXPORT_MIME_TYPE
    quality: int = DEFAULT_QUALITY
    width: int = 0
    height: int = 0

    def __len__(self) -> int:
        return len(self.data)

    def save(self, directory: str | Path = ".") -> Path:
        """Write data to directory/filename and return the path."""
        path = Path(directory) / self.filename
        path.write_bytes(self.data)
        logger.info("[codec] Saved %s (%d bytes)", path, len(self.data))
        return path


def export_bitmap(bitmap: Bitmap, quality: int = DEFAULT_QUALITY) -> ExportResult:
    """Encode a Bitmap for download under the default export name.

    :param bitmap: Rendered image
    :param quality: Encoder quality, clamped to [1, 100]
    :returns: ExportResult with JPEG bytes
    """
    quality = CONFIG.quality.validate(quality)
    return ExportResult(
        data=encode_jpeg(bitmap, quality),
        quality=quality,
        width=bitmap.width,
        height=bitmap.height,
    )


def save_bitmap(bitmap: Bitmap, path: str | Path, quality: int = DEFAULT_QUALITY) -> Path:
    """Encode a Bitmap as JPEG and write it to path.

    :param bitmap: Image to save
    :param path: Output file path
    :param quality: Encoder quality, clamped to [1, 100]
    :returns: The written path
    """
    p = Path(path)
    p.write_bytes(encode_jpeg(bitmap, quality))
    logger.info("[codec] Wrote %s", p)
    return p
