"""
Bounds Measurement for VecSVG

Computes the rendered extent of scene elements in canvas units.

The exporter needs bounds twice: once for the whole tree to size the
document, and once per transformed element, with that element's own
transform replaced by identity, to find its local center. The override is
passed explicitly so measuring never touches the scene graph.
"""

import logging
import re
from typing import List, Optional

from .elements import (
    Attribute, Element, ElementKind, ImageElement, PathCommand, PathShape,
    TextElement
)
from .geometry import BoundingBox, Matrix, Point

logger = logging.getLogger(__name__)

# Rough font metrics used to estimate text extents without a font engine
AVERAGE_GLYPH_WIDTH = 0.6    # fraction of font size
ASCENT = 0.8                 # fraction of font size above the baseline
DESCENT = 0.2                # fraction of font size below the baseline
DEFAULT_FONT_SIZE = 16.0

_LEADING_NUMBER = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


def flatten_cubic_bezier(p0: Point, p1: Point, p2: Point, p3: Point,
                         tolerance: float = 0.1) -> List[Point]:
    """
    Flatten a cubic bezier curve to line segments using recursive subdivision.

    Uses the de Casteljau algorithm with flatness test.
    """
    def is_flat(p0: Point, p1: Point, p2: Point, p3: Point, tol: float) -> bool:
        """Check if curve is flat enough to approximate with a line."""
        ux = 3*p1.x - 2*p0.x - p3.x
        uy = 3*p1.y - 2*p0.y - p3.y
        vx = 3*p2.x - 2*p3.x - p0.x
        vy = 3*p2.y - 2*p3.y - p0.y
        return max(ux*ux, vx*vx) + max(uy*uy, vy*vy) <= 16 * tol * tol

    def subdivide(p0: Point, p1: Point, p2: Point, p3: Point,
                  tol: float, points: List[Point], depth: int) -> None:
        if depth > 16 or is_flat(p0, p1, p2, p3, tol):
            points.append(p3)
        else:
            # de Casteljau subdivision at t=0.5
            q0 = Point((p0.x + p1.x) / 2, (p0.y + p1.y) / 2)
            q1 = Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)
            q2 = Point((p2.x + p3.x) / 2, (p2.y + p3.y) / 2)
            r0 = Point((q0.x + q1.x) / 2, (q0.y + q1.y) / 2)
            r1 = Point((q1.x + q2.x) / 2, (q1.y + q2.y) / 2)
            s = Point((r0.x + r1.x) / 2, (r0.y + r1.y) / 2)

            subdivide(p0, q0, r0, s, tol, points, depth + 1)
            subdivide(s, r1, q2, p3, tol, points, depth + 1)

    points = [p0]
    subdivide(p0, p1, p2, p3, tolerance, points, 0)
    return points


def flatten_quadratic_bezier(p0: Point, p1: Point, p2: Point,
                             tolerance: float = 0.1) -> List[Point]:
    """Flatten a quadratic bezier curve to line segments."""
    # Cubic equivalent control points
    cp1 = Point(p0.x + 2/3 * (p1.x - p0.x), p0.y + 2/3 * (p1.y - p0.y))
    cp2 = Point(p2.x + 2/3 * (p1.x - p2.x), p2.y + 2/3 * (p1.y - p2.y))
    return flatten_cubic_bezier(p0, cp1, cp2, p2, tolerance)


def path_points(commands: List[PathCommand]) -> List[Point]:
    """
    Walk path commands and return the points of their flattened outline.

    Handles absolute and relative M, L, H, V, C, S, Q, T, A and Z. Arcs
    contribute only their end point.
    """
    points: List[Point] = []
    current = Point(0.0, 0.0)
    start = Point(0.0, 0.0)
    last_control: Optional[Point] = None
    last_letter = ""

    for command in commands:
        letter = command.letter
        upper = letter.upper()
        args = [float(a) for a in command.args]
        relative = letter.islower()
        origin = current if relative else Point(0.0, 0.0)

        def at(i: int) -> Point:
            return Point(args[i] + origin.x, args[i + 1] + origin.y)

        try:
            if upper == 'M':
                current = at(0)
                start = current
                points.append(current)
                # Extra pairs after a moveto are implicit linetos
                for i in range(2, len(args) - 1, 2):
                    current = Point(args[i] + (current.x if relative else 0),
                                    args[i + 1] + (current.y if relative else 0))
                    points.append(current)
                last_control = None
            elif upper == 'L':
                for i in range(0, len(args) - 1, 2):
                    current = Point(args[i] + (current.x if relative else 0),
                                    args[i + 1] + (current.y if relative else 0))
                    points.append(current)
                last_control = None
            elif upper == 'H':
                x = args[0] + (current.x if relative else 0)
                current = Point(x, current.y)
                points.append(current)
                last_control = None
            elif upper == 'V':
                y = args[0] + (current.y if relative else 0)
                current = Point(current.x, y)
                points.append(current)
                last_control = None
            elif upper == 'C':
                cp1, cp2, end = at(0), at(2), at(4)
                points.extend(flatten_cubic_bezier(current, cp1, cp2, end)[1:])
                current = end
                last_control = cp2
            elif upper == 'S':
                cp2, end = at(0), at(2)
                if last_control is not None and last_letter in ('C', 'S'):
                    cp1 = Point(2 * current.x - last_control.x, 2 * current.y - last_control.y)
                else:
                    cp1 = current
                points.extend(flatten_cubic_bezier(current, cp1, cp2, end)[1:])
                current = end
                last_control = cp2
            elif upper == 'Q':
                cp, end = at(0), at(2)
                points.extend(flatten_quadratic_bezier(current, cp, end)[1:])
                current = end
                last_control = cp
            elif upper == 'T':
                end = at(0)
                if last_control is not None and last_letter in ('Q', 'T'):
                    cp = Point(2 * current.x - last_control.x, 2 * current.y - last_control.y)
                else:
                    cp = current
                points.extend(flatten_quadratic_bezier(current, cp, end)[1:])
                current = end
                last_control = cp
            elif upper == 'A':
                current = at(5)
                points.append(current)
                last_control = None
            elif upper == 'Z':
                current = start
                last_control = None
            else:
                logger.debug(f"Ignoring unknown path command {letter!r} while measuring")
        except IndexError:
            logger.debug(f"Path command {letter!r} has too few arguments: {command.args}")
        last_letter = upper

    return points


def _length(element: Element, attribute: Attribute, default: float) -> float:
    """
    Numeric value of a length attribute.

    Strings contribute their leading number, so "12px" reads as 12 and
    "100%" as 100. Anything unreadable gives the default.
    """
    value = element.get(attribute)
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            return float(match.group(1))
    logger.debug(f"Cannot read {attribute.value}={value!r} on {element!r} as a length, "
                 f"using {default}")
    return default


def _text_box(element: TextElement) -> Optional[BoundingBox]:
    text = element.text.rstrip()
    if not text:
        return None
    size = _length(element, Attribute.FONT_SIZE, DEFAULT_FONT_SIZE)
    x = _length(element, Attribute.X, 0.0) + _length(element, Attribute.DX, 0.0)
    y = _length(element, Attribute.Y, 0.0) + _length(element, Attribute.DY, 0.0)
    width = len(text) * size * AVERAGE_GLYPH_WIDTH

    anchor = element.get(Attribute.TEXT_ANCHOR, "start")
    if anchor == "middle":
        x -= width / 2
    elif anchor == "end":
        x -= width

    return BoundingBox(x, y - size * ASCENT, x + width, y + size * DESCENT)


def _image_box(element: ImageElement) -> Optional[BoundingBox]:
    if element.bitmap is None:
        return None
    x = _length(element, Attribute.X, 0.0)
    y = _length(element, Attribute.Y, 0.0)
    width = _length(element, Attribute.WIDTH, float(element.width_px))
    height = _length(element, Attribute.HEIGHT, float(element.height_px))
    return BoundingBox(x, y, x + width, y + height)


def _path_box(element: PathShape) -> Optional[BoundingBox]:
    box = BoundingBox.from_points(path_points(element.commands))
    if box is None:
        return None
    stroke = element.get(Attribute.STROKE)
    if stroke is not None and stroke != 'none':
        stroke_width = _length(element, Attribute.STROKE_WIDTH, 0.0)
        if stroke_width > 0:
            box = box.expanded(stroke_width / 2)
    return box


def _collect_points(element: Element, matrix: Matrix, points: List[Point]) -> None:
    """Append the canvas-space corners of everything element draws."""
    if element.kind == ElementKind.GROUP:
        for child in element.children:
            _collect_points(child, matrix.multiply(child.transform), points)
        return

    if element.kind == ElementKind.PATH:
        box = _path_box(element)
    elif element.kind == ElementKind.IMAGE:
        box = _image_box(element)
    elif element.kind == ElementKind.TEXT:
        box = _text_box(element)
    else:
        # Gradients and stops draw nothing by themselves
        box = None

    if box is not None:
        points.extend(matrix.apply(corner) for corner in box.corners())


def measure_bounds(element: Element, transform: Optional[Matrix] = None) -> BoundingBox:
    """
    Measure the rendered bounds of an element in canvas units.

    Args:
        element: Element to measure (children included)
        transform: Used in place of element.transform when given

    Returns:
        BoundingBox of everything drawn; BoundingBox(0, 0, 0, 0) when
        nothing is drawn
    """
    matrix = transform if transform is not None else element.transform
    points: List[Point] = []
    _collect_points(element, matrix, points)
    box = BoundingBox.from_points(points)
    if box is None:
        return BoundingBox(0, 0, 0, 0)
    return box
