"""
VecSVG Export Settings

Tunable parameters for SVG export. The defaults produce the documented
output format; callers normally only change the generator name or the
indentation.
"""

from dataclasses import dataclass


@dataclass
class ExportSettings:
    """Parameters for one SVG export."""
    generator: str = "VecSVG"        # Named in the leading comment
    indent: str = "  "               # "" disables pretty printing
    xml_declaration: bool = True

    # Transform primitives below these are left out of the output
    min_translation: float = 1.0     # canvas units
    min_angle: float = 1.0           # degrees, for rotate and skewX
    scale_tolerance: float = 0.001   # relative distance from 1.0

    # Decimal places used when writing numbers
    translate_decimals: int = 2
    angle_decimals: int = 0
    scale_decimals: int = 3
    number_decimals: int = 3         # path data and plain numeric attributes

    # Attribute carrying the editor's element type marker
    type_attribute: str = "data-type"

    # Lossless format used for embedded bitmaps
    image_format: str = "PNG"
