"""
VecSVG Image Module

Raster encoding of bitmaps for embedding in SVG documents.
"""

from .encoder import bitmap_to_image, encode_raster, encode_base64

__all__ = [
    'bitmap_to_image',
    'encode_raster',
    'encode_base64',
]
