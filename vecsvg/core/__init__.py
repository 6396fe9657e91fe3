"""
VecSVG Core Module

Contains the core data structures:
- Geometry: Point, BoundingBox, Matrix
- Elements: the scene graph (groups, paths, images, text, gradients)
- Bounds: rendered extent measurement
- Settings: export parameters
"""

# Import order matters - geometry first, then elements, then bounds
from .geometry import Point, BoundingBox, Matrix
from .elements import (
    ElementKind, Attribute, AttributeValue, GradientRef, PathCommand,
    Element, Group, PathShape, ImageElement, TextElement,
    Gradient, LinearGradient, RadialGradient, GradientStop
)
from .bounds import measure_bounds
from .settings import ExportSettings

__all__ = [
    'Point', 'BoundingBox', 'Matrix',
    'ElementKind', 'Attribute', 'AttributeValue', 'GradientRef', 'PathCommand',
    'Element', 'Group', 'PathShape', 'ImageElement', 'TextElement',
    'Gradient', 'LinearGradient', 'RadialGradient', 'GradientStop',
    'measure_bounds',
    'ExportSettings',
]
