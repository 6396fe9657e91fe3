"""
SVG Exporter for VecSVG

Walks a scene graph and writes it out as an SVG document.
"""

import logging
import math
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Optional, Union
from xml.etree import ElementTree as ET

from ..core.bounds import measure_bounds
from ..core.elements import Attribute, Element, ElementKind
from ..core.geometry import BoundingBox, Matrix
from ..core.settings import ExportSettings
from ..image.encoder import encode_base64, encode_raster
from .path_format import format_number, format_path
from .svg_document import SVGDocument, xml_text
from .transform_format import transform_attribute

logger = logging.getLogger(__name__)

IMAGE_ATTRIBUTES = (
    Attribute.X, Attribute.Y, Attribute.WIDTH, Attribute.HEIGHT,
    Attribute.OPACITY, Attribute.TYPE,
)
PATH_ATTRIBUTES = (
    Attribute.FILL, Attribute.STROKE, Attribute.STROKE_WIDTH,
    Attribute.STROKE_LINECAP, Attribute.STROKE_LINEJOIN,
    Attribute.OPACITY, Attribute.TYPE,
)
TEXT_ATTRIBUTES = (
    Attribute.FILL, Attribute.STROKE, Attribute.OPACITY,
    Attribute.X, Attribute.Y, Attribute.DX, Attribute.DY,
    Attribute.TEXT_ANCHOR, Attribute.FONT_FAMILY, Attribute.FONT_SIZE,
    Attribute.FONT_STYLE, Attribute.FONT_WEIGHT,
)

BoundsFunction = Callable[[Element, Optional[Matrix]], BoundingBox]


class SVGExporter:
    """
    Export scene graphs to SVG.

    The exporter itself holds no per-export state, so one instance can
    serve any number of exports, including concurrent ones.
    """

    def __init__(self,
                 settings: Optional[ExportSettings] = None,
                 measure: BoundsFunction = measure_bounds,
                 encode_image: Optional[Callable[[object], bytes]] = None,
                 encode_text: Callable[[bytes], str] = encode_base64):
        """
        Initialize the exporter.

        Args:
            settings: Output parameters (defaults to ExportSettings())
            measure: measure(element, transform_override) -> BoundingBox
            encode_image: encode_image(bitmap) -> compressed image bytes;
                defaults to Pillow in settings.image_format
            encode_text: encode_text(bytes) -> base64 text
        """
        self.settings = settings or ExportSettings()
        self.measure = measure
        self.encode_image = encode_image or partial(
            encode_raster, image_format=self.settings.image_format)
        self.encode_text = encode_text

        self._handlers: Dict[ElementKind, Callable[[Element, ET.Element, SVGDocument], None]] = {
            ElementKind.GROUP: self._export_group,
            ElementKind.IMAGE: self._export_image,
            ElementKind.PATH: self._export_path,
            ElementKind.TEXT: self._export_text,
        }

    def export_as_string(self, root: Element) -> str:
        """Export the tree under root as SVG text."""
        document = SVGDocument(self.settings)
        self._set_document_size(root, document.root)
        self._export_element(root, document.root, document)
        return document.to_string()

    def export_as_bytes(self, root: Element) -> bytes:
        """Export the tree under root as UTF-8 encoded SVG."""
        return self.export_as_string(root).encode('utf-8')

    def _set_document_size(self, root: Element, svg: ET.Element) -> None:
        bounds = self.measure(root, None)
        svg.set('width', str(math.ceil(bounds.x + bounds.width)))
        svg.set('height', str(math.ceil(bounds.y + bounds.height)))
        if math.floor(bounds.x) != 0 or math.floor(bounds.y) != 0:
            decimals = self.settings.number_decimals
            svg.set('viewBox', ' '.join([
                format_number(bounds.x, decimals),
                format_number(bounds.y, decimals),
                str(math.ceil(bounds.width)),
                str(math.ceil(bounds.height)),
            ]))

    def _export_element(self, element: Element, parent: ET.Element,
                        document: SVGDocument) -> None:
        handler = self._handlers.get(element.kind)
        if handler is None:
            logger.warning(f"Unhandled element kind {element.kind.value} ({element!r}), skipping")
            return
        handler(element, parent, document)

    def _apply_transform(self, element: Element, node: ET.Element) -> None:
        matrix = element.transform
        if matrix.is_identity():
            return
        local_bounds = self.measure(element, Matrix.identity())
        value = transform_attribute(matrix, local_bounds, self.settings)
        if value:
            node.set('transform', value)

    def _export_group(self, element: Element, parent: ET.Element,
                      document: SVGDocument) -> None:
        if not element.children:
            logger.debug(f"Skipping empty group {element!r}")
            return
        node = document.build_node(element, ())
        for child in element.children:
            self._export_element(child, node, document)
        if len(node) == 0:
            logger.debug(f"Skipping group {element!r}, none of its children were exported")
            return
        self._apply_transform(element, node)
        parent.append(node)

    def _export_image(self, element: Element, parent: ET.Element,
                      document: SVGDocument) -> None:
        if element.bitmap is None:
            logger.debug(f"Skipping image without bitmap {element!r}")
            return
        node = document.build_node(element, IMAGE_ATTRIBUTES)
        data = self.encode_image(element.bitmap)
        fmt = self.settings.image_format.lower()
        node.set('xlink:href', f"data:image/{fmt};base64,{self.encode_text(data)}")
        self._apply_transform(element, node)
        parent.append(node)

    def _export_path(self, element: Element, parent: ET.Element,
                     document: SVGDocument) -> None:
        if not element.commands:
            logger.debug(f"Skipping path without commands {element!r}")
            return
        node = document.build_node(element, PATH_ATTRIBUTES)
        node.tag = 'path'
        node.set('d', format_path(element.commands, self.settings.number_decimals))
        self._apply_transform(element, node)
        parent.append(node)

    def _export_text(self, element: Element, parent: ET.Element,
                     document: SVGDocument) -> None:
        text = xml_text(element.text).rstrip() if element.text else ""
        if not text:
            logger.debug(f"Skipping empty text {element!r}")
            return

        attributes = element.attributes
        stroke = attributes.get(Attribute.STROKE)
        if stroke is not None:
            # Text is drawn filled with its stroke color
            attributes = dict(attributes)
            attributes[Attribute.FILL] = stroke

        node = document.build_node(element, TEXT_ATTRIBUTES, attributes)
        node.text = text
        self._apply_transform(element, node)
        parent.append(node)


def export_as_string(root: Element, settings: Optional[ExportSettings] = None) -> str:
    """Export a scene graph as SVG text."""
    return SVGExporter(settings).export_as_string(root)


def export_as_bytes(root: Element, settings: Optional[ExportSettings] = None) -> bytes:
    """Export a scene graph as UTF-8 encoded SVG."""
    return SVGExporter(settings).export_as_bytes(root)


def export_svg(root: Element, filepath: Union[str, Path],
               settings: Optional[ExportSettings] = None) -> Path:
    """
    Export a scene graph to an SVG file.

    Args:
        root: Root element of the scene
        filepath: Destination; parent directories are created

    Returns:
        Path of the written file
    """
    path = Path(filepath)
    data = export_as_bytes(root, settings)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"Exported SVG to {path} ({len(data)} bytes)")
    return path
