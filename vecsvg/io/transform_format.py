"""
Transform Decomposition for VecSVG

Rewrites an element's affine matrix as a short list of readable SVG
transform primitives:

    translate(t) translate(c) rotate(θ) skewX(ω) scale(sx sy) translate(-c)

SVG applies a transform list right to left, so the element is moved to the
origin by its own center c, scaled, skewed, rotated, moved back and finally
shifted by t. Primitives too small to matter are left out.
"""

from dataclasses import dataclass
from typing import List, Optional
import math

from ..core.geometry import BoundingBox, Matrix, Point
from ..core.settings import ExportSettings


@dataclass
class TransformDecomposition:
    """Primitives recovered from an affine matrix. Angles in radians."""
    center: Point
    rotation: float
    skew: float
    scale_x: float
    scale_y: float
    translation: Point

    def linear(self) -> Matrix:
        """rotate · skewX · scale, without any translation."""
        return (Matrix.rotation(self.rotation)
                .skew_x(self.skew)
                .scale(self.scale_x, self.scale_y))

    def to_matrix(self) -> Matrix:
        """Recompose the primitives into a single matrix."""
        return (Matrix.translation(self.translation.x, self.translation.y)
                .translate(self.center.x, self.center.y)
                .multiply(self.linear())
                .translate(-self.center.x, -self.center.y))


def _outer_translation(target: Point, linear: Matrix, center: Point) -> Point:
    """
    Translation that, placed in front of translate(c) linear translate(-c),
    makes the whole list land on the target translation.
    """
    centered = (Matrix.translation(center.x, center.y)
                .multiply(linear)
                .translate(-center.x, -center.y))
    return target - centered.translation_part


def decompose(matrix: Matrix, center: Point) -> TransformDecomposition:
    """
    Split matrix into rotation, skew and scale about center plus a translation.

    Rotation comes from the first column, then with the rotation undone the
    remaining linear part is upper triangular [[sx, tan(ω)·sy], [0, sy]].
    A zero sy leaves the shear undetermined; skew is taken as 0 then.
    """
    rotation = math.atan2(matrix.b, matrix.a)
    cos_r = math.cos(rotation)
    sin_r = math.sin(rotation)

    # R(-θ) applied to the linear part
    scale_x = cos_r * matrix.a + sin_r * matrix.b
    shear = cos_r * matrix.c + sin_r * matrix.d
    scale_y = -sin_r * matrix.c + cos_r * matrix.d

    if scale_y != 0:
        skew = math.atan(shear / scale_y)
    else:
        skew = 0.0

    decomposition = TransformDecomposition(
        center=center,
        rotation=rotation,
        skew=skew,
        scale_x=scale_x,
        scale_y=scale_y,
        translation=Point(0.0, 0.0)
    )
    decomposition.translation = _outer_translation(
        matrix.translation_part, decomposition.linear(), center)
    return decomposition


def _fixed(value: float, decimals: int) -> str:
    text = f"{value:.{decimals}f}"
    if float(text) == 0:
        # Avoid "-0.00"
        return text.lstrip('-')
    return text


def format_decomposition(decomposition: TransformDecomposition,
                         settings: Optional[ExportSettings] = None) -> str:
    """
    Write the significant primitives of a decomposition as SVG text.

    The outer translation is recomputed from the primitives as written,
    rounded and with insignificant ones dropped, so the emitted list lands
    on the original matrix's translation.

    Returns:
        The transform list with a space after each primitive, or "" when
        nothing is significant
    """
    if settings is None:
        settings = ExportSettings()

    td = settings.translate_decimals
    rotation_text = _fixed(math.degrees(decomposition.rotation), settings.angle_decimals)
    skew_text = _fixed(math.degrees(decomposition.skew), settings.angle_decimals)
    sx = decomposition.scale_x
    sy = decomposition.scale_y
    tol = settings.scale_tolerance

    write_rotation = abs(math.degrees(decomposition.rotation)) >= settings.min_angle
    write_skew = abs(math.degrees(decomposition.skew)) >= settings.min_angle
    write_scale = abs(sx - 1) >= tol or abs(sy - 1) >= tol
    uniform = abs(sx - sy) <= tol * max(abs(sx), abs(sy))
    sx_text = _fixed(sx, settings.scale_decimals)
    sy_text = sx_text if uniform else _fixed(sy, settings.scale_decimals)

    center = decomposition.center
    write_center = ((write_rotation or write_skew or write_scale) and
                    center.length() >= settings.min_translation)
    if write_center:
        center = Point(float(_fixed(center.x, td)), float(_fixed(center.y, td)))
    else:
        center = Point(0.0, 0.0)

    written = Matrix.identity()
    if write_rotation:
        written = written.rotate(math.radians(float(rotation_text)))
    if write_skew:
        written = written.skew_x(math.radians(float(skew_text)))
    if write_scale:
        written = written.scale(float(sx_text), float(sy_text))

    target = decomposition.to_matrix().translation_part
    translation = _outer_translation(target, written, center)
    exact = _outer_translation(target, decomposition.linear(), center)
    # Rounded or dropped primitives still need their offset corrected
    write_translation = (exact.length() >= settings.min_translation or
                         (translation - exact).length() > 0.5 * 10 ** -td)

    parts: List[str] = []
    if write_translation:
        parts.append(f"translate({_fixed(translation.x, td)} {_fixed(translation.y, td)})")
    if write_center:
        parts.append(f"translate({_fixed(center.x, td)} {_fixed(center.y, td)})")
    if write_rotation:
        parts.append(f"rotate({rotation_text})")
    if write_skew:
        parts.append(f"skewX({skew_text})")
    if write_scale:
        if uniform:
            parts.append(f"scale({sx_text})")
        else:
            parts.append(f"scale({sx_text} {sy_text})")
    if write_center:
        parts.append(f"translate({_fixed(-center.x, td)} {_fixed(-center.y, td)})")

    return ''.join(part + ' ' for part in parts)


def transform_attribute(matrix: Matrix, local_bounds: BoundingBox,
                        settings: Optional[ExportSettings] = None) -> Optional[str]:
    """
    SVG transform attribute value for an element.

    Args:
        matrix: The element's transform
        local_bounds: The element's bounds measured with an identity transform

    Returns:
        The transform list, or None when the matrix is visually the identity
    """
    if matrix.is_identity():
        return None
    text = format_decomposition(decompose(matrix, local_bounds.center), settings)
    return text or None
