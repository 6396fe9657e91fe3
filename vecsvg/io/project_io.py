"""
Scene File I/O for VecSVG

Saves and loads scene graphs as JSON files.
Bitmaps are stored base64 encoded together with their shape and dtype.

A gradient used as a paint is stored inline where it is used:
    "attributes": {"fill": {"gradient": {"kind": "linear_gradient", ...}}}
"""

import base64
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from ..core.elements import (
    Attribute, Element, ElementKind, GradientRef, Group, ImageElement,
    LinearGradient, PathCommand, PathShape, RadialGradient, GradientStop,
    TextElement
)
from ..core.geometry import Matrix

logger = logging.getLogger(__name__)

FORMAT_VERSION = '1.0'

_ELEMENT_CLASSES = {
    ElementKind.GROUP: Group,
    ElementKind.IMAGE: ImageElement,
    ElementKind.PATH: PathShape,
    ElementKind.TEXT: TextElement,
    ElementKind.LINEAR_GRADIENT: LinearGradient,
    ElementKind.RADIAL_GRADIENT: RadialGradient,
    ElementKind.STOP: GradientStop,
}


class SceneFormatError(ValueError):
    """A scene file or dictionary is malformed."""


def bitmap_to_dict(bitmap) -> Dict[str, Any]:
    """Encode a numpy bitmap."""
    data = np.ascontiguousarray(bitmap)
    return {
        'shape': list(data.shape),
        'dtype': str(data.dtype),
        'data': base64.b64encode(data.tobytes()).decode('utf-8'),
    }


def dict_to_bitmap(bitmap_dict: Dict[str, Any]):
    """Decode a bitmap written by bitmap_to_dict."""
    try:
        raw = base64.b64decode(bitmap_dict['data'])
        dtype = np.dtype(bitmap_dict.get('dtype', 'uint8'))
        return np.frombuffer(raw, dtype=dtype).reshape(bitmap_dict['shape']).copy()
    except (KeyError, TypeError, ValueError) as e:
        raise SceneFormatError(f"Invalid bitmap data: {e}") from e


def _value_to_json(value: Any) -> Any:
    if isinstance(value, GradientRef):
        return {'gradient': element_to_dict(value.gradient)}
    return value


def _json_to_value(value: Any) -> Any:
    if isinstance(value, dict):
        if 'gradient' not in value:
            raise SceneFormatError(f"Unsupported attribute value: {value!r}")
        return GradientRef(dict_to_element(value['gradient']))
    return value


def element_to_dict(element: Element) -> Dict[str, Any]:
    """Convert an element and its subtree to a dictionary."""
    element_dict: Dict[str, Any] = {
        'kind': element.kind.value,
        'id': element.id,
        'tag': element.tag,
        'attributes': {
            attribute.value: _value_to_json(value)
            for attribute, value in element.attributes.items()
        },
    }
    if not element.transform.is_identity(0):
        element_dict['transform'] = element.transform.as_list()
    if element.children:
        element_dict['children'] = [element_to_dict(child) for child in element.children]

    if element.kind == ElementKind.PATH:
        element_dict['commands'] = [
            [command.letter, *command.args] for command in element.commands
        ]
    elif element.kind == ElementKind.IMAGE:
        if element.bitmap is not None:
            element_dict['bitmap'] = bitmap_to_dict(element.bitmap)
    elif element.kind == ElementKind.TEXT:
        element_dict['text'] = element.text

    return element_dict


def dict_to_element(element_dict: Dict[str, Any]) -> Element:
    """Convert a dictionary back to an element."""
    if not isinstance(element_dict, dict):
        raise SceneFormatError(f"Expected an element object, got {type(element_dict).__name__}")
    try:
        kind = ElementKind(element_dict['kind'])
    except (KeyError, ValueError) as e:
        raise SceneFormatError(f"Missing or unknown element kind: {element_dict.get('kind')!r}") from e

    try:
        attributes = {
            Attribute.lookup(name): _json_to_value(value)
            for name, value in element_dict.get('attributes', {}).items()
        }
    except (KeyError, ValueError) as e:
        raise SceneFormatError(f"Invalid attributes on {kind.value} element: {e}") from e

    transform = None
    if 'transform' in element_dict:
        values = element_dict['transform']
        if not isinstance(values, list) or len(values) != 6:
            raise SceneFormatError(f"Transform must be a list of 6 numbers, got {values!r}")
        transform = Matrix(*[float(v) for v in values])

    element = _ELEMENT_CLASSES[kind](
        element_id=element_dict.get('id'),
        tag=element_dict.get('tag'),
        transform=transform,
    )
    # GradientStop fills its own attributes from keyword arguments; replace them
    element.attributes = attributes

    element.children = [dict_to_element(child) for child in element_dict.get('children', [])]

    if kind == ElementKind.PATH:
        try:
            element.commands = [
                PathCommand.from_sequence(command)
                for command in element_dict.get('commands', [])
            ]
        except (TypeError, ValueError) as e:
            raise SceneFormatError(f"Invalid path commands: {e}") from e
    elif kind == ElementKind.IMAGE and 'bitmap' in element_dict:
        element.bitmap = dict_to_bitmap(element_dict['bitmap'])
    elif kind == ElementKind.TEXT:
        element.text = str(element_dict.get('text', ''))

    return element


def scene_to_dict(root: Element) -> Dict[str, Any]:
    """Convert a scene to a dictionary."""
    return {
        'version': FORMAT_VERSION,
        'root': element_to_dict(root),
    }


def dict_to_scene(scene_dict: Dict[str, Any]) -> Element:
    """Convert a dictionary to a scene root element."""
    if not isinstance(scene_dict, dict) or 'root' not in scene_dict:
        raise SceneFormatError("Scene file has no root element")
    version = scene_dict.get('version', FORMAT_VERSION)
    if version != FORMAT_VERSION:
        logger.warning(f"Scene file version {version} differs from {FORMAT_VERSION}")
    return dict_to_element(scene_dict['root'])


def save_scene(root: Element, filepath: Union[str, Path]) -> Path:
    """
    Save a scene to a JSON file.

    Args:
        root: Root element of the scene
        filepath: Path to save the file

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(scene_to_dict(root), f, indent=2, ensure_ascii=False)
    return path


def load_scene(filepath: Union[str, Path]) -> Element:
    """
    Load a scene from a JSON file.

    Raises:
        SceneFormatError: If the file is not a valid scene
        OSError: If the file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            scene_dict = json.load(f)
        except json.JSONDecodeError as e:
            raise SceneFormatError(f"{filepath} is not valid JSON: {e}") from e
    return dict_to_scene(scene_dict)
