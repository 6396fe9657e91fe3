"""
VecSVG I/O Module

Handles SVG export and scene file loading/saving.
"""

from .svg_exporter import SVGExporter, export_as_string, export_as_bytes, export_svg
from .svg_document import SVGDocument, xml_text
from .path_format import format_path, format_number
from .transform_format import (
    TransformDecomposition, decompose, format_decomposition, transform_attribute
)
from .project_io import SceneFormatError, load_scene, save_scene

__all__ = [
    'SVGExporter', 'export_as_string', 'export_as_bytes', 'export_svg',
    'SVGDocument', 'xml_text',
    'format_path', 'format_number',
    'TransformDecomposition', 'decompose', 'format_decomposition', 'transform_attribute',
    'SceneFormatError', 'load_scene', 'save_scene',
]
