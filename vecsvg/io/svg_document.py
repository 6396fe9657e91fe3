"""
SVG Document Assembly for VecSVG

SVGDocument is the state of one export in progress: the root <svg> node,
the <defs> section (created on first use) and the counter that numbers
gradient definitions. A fresh SVGDocument is made for every export.
"""

import logging
import re
from typing import Dict, Optional, Sequence
from xml.etree import ElementTree as ET

from ..core.elements import (
    COLOR_ATTRIBUTES, PAINT_ATTRIBUTES, Attribute, AttributeValue, Element,
    ElementKind, GradientRef
)
from ..core.settings import ExportSettings
from .path_format import format_number

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

LINEAR_GRADIENT_ATTRIBUTES = (
    Attribute.X1, Attribute.Y1, Attribute.X2, Attribute.Y2,
    Attribute.GRADIENT_UNITS,
)
RADIAL_GRADIENT_ATTRIBUTES = (
    Attribute.CX, Attribute.CY, Attribute.R, Attribute.FX, Attribute.FY,
    Attribute.GRADIENT_UNITS,
)
STOP_ATTRIBUTES = (Attribute.OFFSET, Attribute.STOP_COLOR, Attribute.STOP_OPACITY)


# Everything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile('[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


def color_to_hex(value: int) -> str:
    """Format a packed 0xRRGGBB color as #RRGGBB."""
    return f"#{int(value) & 0xFFFFFF:06X}"


def xml_text(value: str) -> str:
    """Remove characters that cannot appear in an XML 1.0 document."""
    cleaned = _INVALID_XML_CHARS.sub('', value)
    if cleaned != value:
        logger.debug(f"Removed {len(value) - len(cleaned)} invalid XML characters from {value!r}")
    return cleaned


class SVGDocument:
    """Accumulates the XML of a single export."""

    def __init__(self, settings: Optional[ExportSettings] = None):
        self.settings = settings or ExportSettings()
        self.root = ET.Element('svg')
        self.root.set('xmlns', SVG_NS)
        self.root.set('version', '1.1')
        self.root.set('xmlns:xlink', XLINK_NS)
        self.defs: Optional[ET.Element] = None
        self._gradient_count = 0

    def next_gradient_id(self) -> str:
        """A new gradient identifier, unique within this document."""
        self._gradient_count += 1
        return f"grad_{self._gradient_count}"

    def _get_defs(self) -> ET.Element:
        if self.defs is None:
            self.defs = ET.Element('defs')
        return self.defs

    def _attribute_name(self, attribute: Attribute) -> str:
        if attribute is Attribute.TYPE:
            return self.settings.type_attribute
        return attribute.value

    def _format_value(self, attribute: Attribute, value: AttributeValue) -> Optional[str]:
        """Text for an attribute value, or None if it must be left out."""
        if isinstance(value, GradientRef):
            if attribute not in PAINT_ATTRIBUTES:
                logger.debug(f"Dropping gradient reference on {attribute.value}")
                return None
            return self.define_gradient(value.gradient)
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (int, float)):
            if attribute in COLOR_ATTRIBUTES:
                return color_to_hex(value)
            return format_number(value, self.settings.number_decimals)
        if isinstance(value, str):
            return xml_text(value)
        logger.debug(f"Dropping {attribute.value} with unsupported value {value!r}")
        return None

    def build_node(self, element: Element, allowed: Sequence[Attribute],
                   attributes: Optional[Dict[Attribute, AttributeValue]] = None,
                   identify: bool = True) -> ET.Element:
        """
        Create the XML node for one element.

        Copies the allowed attributes that have a defined value, converting
        numeric colors to #RRGGBB and gradient references to url(#...).
        Children and the transform are left to the caller.

        Args:
            element: Source element
            allowed: Attributes to copy, in output order
            attributes: Values to use instead of element.attributes
            identify: Whether to write the element id
        """
        if attributes is None:
            attributes = element.attributes

        node = ET.Element(element.tag)
        if identify:
            node.set('id', str(element.id))

        for attribute in allowed:
            value = attributes.get(attribute)
            if value is None:
                continue
            text = self._format_value(attribute, value)
            if text is not None:
                node.set(self._attribute_name(attribute), text)
        return node

    def define_gradient(self, element: Element) -> Optional[str]:
        """
        Add a gradient definition to <defs>.

        Every call creates a new definition, even for a gradient that was
        defined before.

        Returns:
            url(#grad_<n>) for the new definition, or None if element is
            not a gradient
        """
        if element.kind == ElementKind.LINEAR_GRADIENT:
            node = self.build_node(element, LINEAR_GRADIENT_ATTRIBUTES)
        elif element.kind == ElementKind.RADIAL_GRADIENT:
            node = self.build_node(element, RADIAL_GRADIENT_ATTRIBUTES)
        else:
            logger.debug(f"Not a gradient: {element!r}")
            return None

        gradient_id = self.next_gradient_id()
        node.set('id', gradient_id)

        for stop in element.children:
            if stop.kind != ElementKind.STOP:
                logger.debug(f"Skipping {stop!r} inside gradient {gradient_id}")
                continue
            node.append(self.build_node(stop, STOP_ATTRIBUTES, identify=False))

        self._get_defs().append(node)
        return f"url(#{gradient_id})"

    def finish(self) -> ET.Element:
        """Put <defs> in front of the content and return the root node."""
        if self.defs is not None and (len(self.root) == 0 or self.root[0] is not self.defs):
            self.root.insert(0, self.defs)
        return self.root

    def to_string(self) -> str:
        """Serialize the finished document."""
        root = self.finish()
        if self.settings.indent:
            ET.indent(root, space=self.settings.indent)
        lines = []
        if self.settings.xml_declaration:
            lines.append('<?xml version="1.0" encoding="UTF-8" standalone="no"?>')
        lines.append(f"<!-- Created with {self.settings.generator} -->")
        lines.append(ET.tostring(root, encoding='unicode'))
        return '\n'.join(lines) + '\n'
