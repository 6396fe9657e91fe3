"""
VecSVG - SVG export for vector-graphics scene graphs.
"""

__version__ = "0.1.0"

from .core import (
    Matrix, Point, BoundingBox, Attribute, GradientRef, Group, PathShape,
    ImageElement, TextElement, LinearGradient, RadialGradient, GradientStop,
    ExportSettings
)
from .io import SVGExporter, export_as_string, export_as_bytes, export_svg

__all__ = [
    'Matrix', 'Point', 'BoundingBox', 'Attribute', 'GradientRef', 'Group',
    'PathShape', 'ImageElement', 'TextElement', 'LinearGradient',
    'RadialGradient', 'GradientStop', 'ExportSettings',
    'SVGExporter', 'export_as_string', 'export_as_bytes', 'export_svg',
]
