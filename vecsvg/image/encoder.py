"""
Raster Encoding for VecSVG

Turns decoded bitmaps into bytes that can be embedded in an SVG document.
Bitmaps are numpy arrays, as produced by the editor's image importer:
grayscale (H, W), RGB (H, W, 3) or RGBA (H, W, 4).
"""

import base64
import io

import numpy as np
from PIL import Image


def bitmap_to_image(bitmap) -> Image.Image:
    """Convert a numpy bitmap to a Pillow image."""
    data = np.asarray(bitmap)
    if data.dtype != np.uint8:
        if np.issubdtype(data.dtype, np.floating) and data.size and data.max() <= 1.0:
            # Normalized 0..1 floats
            data = data * 255.0
        data = np.clip(np.rint(data), 0, 255).astype(np.uint8)

    if data.ndim == 3 and data.shape[2] == 1:
        data = data[:, :, 0]
    # Pillow infers L, RGB or RGBA from the array shape
    if data.ndim == 2 or (data.ndim == 3 and data.shape[2] in (3, 4)):
        return Image.fromarray(data)
    raise ValueError(f"Unsupported bitmap shape {data.shape}")


def encode_raster(bitmap, image_format: str = "PNG") -> bytes:
    """
    Compress a bitmap losslessly.

    Args:
        bitmap: numpy array of pixel data
        image_format: Pillow format name (PNG by default)

    Returns:
        Encoded image file bytes
    """
    buffer = io.BytesIO()
    bitmap_to_image(bitmap).save(buffer, format=image_format)
    return buffer.getvalue()


def encode_base64(data: bytes) -> str:
    """Base64 text for binary data."""
    return base64.b64encode(data).decode('ascii')
