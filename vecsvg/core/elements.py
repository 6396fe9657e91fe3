"""
VecSVG Scene Elements Module

Defines the scene graph consumed by the exporter: groups, path shapes,
images, text and gradient definitions.
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from itertools import count
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .geometry import Matrix


_element_ids = count(1)


class ElementKind(Enum):
    """Kinds of scene elements."""
    GROUP = "group"
    IMAGE = "image"
    PATH = "path"
    TEXT = "text"
    LINEAR_GRADIENT = "linear_gradient"
    RADIAL_GRADIENT = "radial_gradient"
    STOP = "stop"


GRADIENT_KINDS = (ElementKind.LINEAR_GRADIENT, ElementKind.RADIAL_GRADIENT)


class Attribute(Enum):
    """Attribute names an element may carry, valued by their SVG spelling."""
    FILL = "fill"
    STROKE = "stroke"
    STROKE_WIDTH = "stroke-width"
    STROKE_LINECAP = "stroke-linecap"
    STROKE_LINEJOIN = "stroke-linejoin"
    OPACITY = "opacity"
    TYPE = "type"

    X = "x"
    Y = "y"
    DX = "dx"
    DY = "dy"
    WIDTH = "width"
    HEIGHT = "height"

    TEXT_ANCHOR = "text-anchor"
    FONT_FAMILY = "font-family"
    FONT_SIZE = "font-size"
    FONT_STYLE = "font-style"
    FONT_WEIGHT = "font-weight"

    X1 = "x1"
    Y1 = "y1"
    X2 = "x2"
    Y2 = "y2"
    CX = "cx"
    CY = "cy"
    R = "r"
    FX = "fx"
    FY = "fy"
    GRADIENT_UNITS = "gradientUnits"

    OFFSET = "offset"
    STOP_COLOR = "stop-color"
    STOP_OPACITY = "stop-opacity"

    @classmethod
    def lookup(cls, name: Union[str, 'Attribute']) -> 'Attribute':
        """Accept an Attribute, its SVG name or its member name."""
        if isinstance(name, Attribute):
            return name
        try:
            return cls(name)
        except ValueError:
            return cls[name.upper()]


# Attributes whose numeric values are packed 0xRRGGBB colors
COLOR_ATTRIBUTES = (Attribute.FILL, Attribute.STROKE, Attribute.STOP_COLOR)

# Attributes allowed to reference a gradient
PAINT_ATTRIBUTES = (Attribute.FILL, Attribute.STROKE)


@dataclass(frozen=True)
class GradientRef:
    """An attribute value pointing at a gradient element."""
    gradient: 'Element'


AttributeValue = Union[int, float, str, GradientRef]


@dataclass
class PathCommand:
    """One path drawing instruction: a command letter and its arguments."""
    letter: str
    args: Tuple[float, ...] = ()

    @classmethod
    def from_sequence(cls, command: Sequence[Any]) -> 'PathCommand':
        """Build from a ["L", 10, 0] style list."""
        letter, *args = command
        return cls(str(letter), tuple(args))


def _normalize_attributes(
        attributes: Optional[Dict[Any, AttributeValue]]) -> Dict[Attribute, AttributeValue]:
    if not attributes:
        return {}
    return {Attribute.lookup(name): value for name, value in attributes.items()}


class Element(ABC):
    """
    Base class for all scene elements.

    Every element has:
    - id: unique integer identifier
    - attributes: Attribute -> value mapping (None means undefined)
    - transform: affine transform (identity if untransformed)
    - tag: XML tag the element is exported under
    """

    kind: ElementKind
    default_tag: str = ""

    def __init__(self, attributes: Optional[Dict[Any, AttributeValue]] = None,
                 transform: Optional[Matrix] = None,
                 element_id: Optional[int] = None,
                 tag: Optional[str] = None):
        self.id: int = element_id if element_id is not None else next(_element_ids)
        self.attributes: Dict[Attribute, AttributeValue] = _normalize_attributes(attributes)
        self.transform: Matrix = transform if transform is not None else Matrix.identity()
        self.tag: str = tag or self.default_tag
        self.children: List['Element'] = []

    def get(self, name: Union[str, Attribute], default: Any = None) -> Any:
        """Get an attribute value, or default when undefined."""
        value = self.attributes.get(Attribute.lookup(name))
        return default if value is None else value

    def set(self, name: Union[str, Attribute], value: Optional[AttributeValue]) -> 'Element':
        """Set an attribute; None removes it."""
        key = Attribute.lookup(name)
        if value is None:
            self.attributes.pop(key, None)
        else:
            self.attributes[key] = value
        return self

    @property
    def is_gradient(self) -> bool:
        return self.kind in GRADIENT_KINDS

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, tag={self.tag!r})"


class Group(Element):
    """A container of child elements."""

    kind = ElementKind.GROUP
    default_tag = "g"

    def __init__(self, children: Optional[List[Element]] = None, **kwargs):
        super().__init__(**kwargs)
        self.children = list(children) if children else []


class PathShape(Element):
    """
    A filled and/or stroked shape described by path commands.

    The tag may name the editor's shape type (rect, ellipse, ...); the
    exporter always writes it as an SVG path.
    """

    kind = ElementKind.PATH
    default_tag = "path"

    def __init__(self, commands: Optional[Sequence[Any]] = None, **kwargs):
        super().__init__(**kwargs)
        self.commands: List[PathCommand] = [
            cmd if isinstance(cmd, PathCommand) else PathCommand.from_sequence(cmd)
            for cmd in (commands or [])
        ]

    def move_to(self, x: float, y: float) -> 'PathShape':
        """Start a new subpath at the given point."""
        self.commands.append(PathCommand("M", (x, y)))
        return self

    def line_to(self, x: float, y: float) -> 'PathShape':
        """Draw a line to the given point."""
        self.commands.append(PathCommand("L", (x, y)))
        return self

    def cubic_to(self, cp1x: float, cp1y: float,
                 cp2x: float, cp2y: float,
                 x: float, y: float) -> 'PathShape':
        """Draw a cubic bezier curve."""
        self.commands.append(PathCommand("C", (cp1x, cp1y, cp2x, cp2y, x, y)))
        return self

    def quadratic_to(self, cpx: float, cpy: float,
                     x: float, y: float) -> 'PathShape':
        """Draw a quadratic bezier curve."""
        self.commands.append(PathCommand("Q", (cpx, cpy, x, y)))
        return self

    def close(self) -> 'PathShape':
        """Close the current subpath."""
        self.commands.append(PathCommand("Z"))
        return self


class ImageElement(Element):
    """
    A raster image.

    bitmap is a numpy uint8 array shaped (H, W), (H, W, 3) or (H, W, 4),
    or None when the image has no pixel data yet.
    """

    kind = ElementKind.IMAGE
    default_tag = "image"

    def __init__(self, bitmap=None, **kwargs):
        super().__init__(**kwargs)
        self.bitmap = bitmap

    @property
    def width_px(self) -> int:
        if self.bitmap is not None:
            return self.bitmap.shape[1]
        return 0

    @property
    def height_px(self) -> int:
        if self.bitmap is not None:
            return self.bitmap.shape[0]
        return 0


class TextElement(Element):
    """A single run of text."""

    kind = ElementKind.TEXT
    default_tag = "text"

    def __init__(self, text: str = "", **kwargs):
        super().__init__(**kwargs)
        self.text = text


class GradientStop(Element):
    """A color stop of a gradient."""

    kind = ElementKind.STOP
    default_tag = "stop"

    def __init__(self, offset: Optional[float] = None, color: Optional[AttributeValue] = None,
                 opacity: Optional[float] = None, **kwargs):
        super().__init__(**kwargs)
        self.set(Attribute.OFFSET, offset)
        self.set(Attribute.STOP_COLOR, color)
        self.set(Attribute.STOP_OPACITY, opacity)


class Gradient(Element):
    """Common base of linear and radial gradients; children are stops."""

    def __init__(self, stops: Optional[List[GradientStop]] = None, **kwargs):
        super().__init__(**kwargs)
        self.children = list(stops) if stops else []

    @property
    def stops(self) -> List[Element]:
        return self.children

    def add_stop(self, offset: float, color: AttributeValue,
                 opacity: Optional[float] = None) -> 'Gradient':
        self.children.append(GradientStop(offset, color, opacity))
        return self


class LinearGradient(Gradient):
    kind = ElementKind.LINEAR_GRADIENT
    default_tag = "linearGradient"


class RadialGradient(Gradient):
    kind = ElementKind.RADIAL_GRADIENT
    default_tag = "radialGradient"
