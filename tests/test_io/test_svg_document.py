"""
Tests for node building and gradient definitions.
"""

import unittest

from vecsvg.core.elements import (
    Attribute, GradientRef, Group, LinearGradient, PathShape, RadialGradient
)
from vecsvg.core.settings import ExportSettings
from vecsvg.io.svg_document import SVGDocument, color_to_hex, xml_text


class TestColorToHex(unittest.TestCase):

    def test_colors(self):
        self.assertEqual(color_to_hex(0xFF0000), '#FF0000')
        self.assertEqual(color_to_hex(255), '#0000FF')
        self.assertEqual(color_to_hex(0), '#000000')
        self.assertEqual(color_to_hex(0xAB12CD), '#AB12CD')


class TestXmlText(unittest.TestCase):

    def test_valid_text_is_unchanged(self):
        self.assertEqual(xml_text("tab\tline\nGrüße €"), "tab\tline\nGrüße €")

    def test_forbidden_characters_are_removed(self):
        self.assertEqual(xml_text("a\x00b\x1fc\x7f"), "abc\x7f")
        self.assertEqual(xml_text("x\udfffy"), "xy")


class TestBuildNode(unittest.TestCase):
    """Test SVGDocument.build_node."""

    def setUp(self):
        self.document = SVGDocument()

    def test_copies_allowed_attributes_only(self):
        shape = PathShape(tag='rect', element_id=7, attributes={
            'fill': 0x00FF00, 'stroke': 'none', 'opacity': 0.5, 'x': 3})
        node = self.document.build_node(shape, (Attribute.FILL, Attribute.STROKE, Attribute.OPACITY))
        self.assertEqual(node.tag, 'rect')
        self.assertEqual(node.attrib, {
            'id': '7', 'fill': '#00FF00', 'stroke': 'none', 'opacity': '0.5'})

    def test_undefined_values_are_dropped(self):
        shape = PathShape(attributes={'fill': None})
        node = self.document.build_node(shape, (Attribute.FILL, Attribute.STROKE))
        self.assertNotIn('fill', node.attrib)
        self.assertNotIn('stroke', node.attrib)

    def test_numbers_are_formatted(self):
        shape = PathShape(attributes={'stroke-width': 2.0, 'opacity': 0.33333})
        node = self.document.build_node(shape, (Attribute.STROKE_WIDTH, Attribute.OPACITY))
        self.assertEqual(node.get('stroke-width'), '2')
        self.assertEqual(node.get('opacity'), '0.333')

    def test_type_marker_name_comes_from_settings(self):
        shape = PathShape(attributes={'type': 'ellipse'})
        node = self.document.build_node(shape, (Attribute.TYPE,))
        self.assertEqual(node.get('data-type'), 'ellipse')

        document = SVGDocument(ExportSettings(type_attribute='kind'))
        node = document.build_node(shape, (Attribute.TYPE,))
        self.assertEqual(node.get('kind'), 'ellipse')

    def test_gradient_reference_on_fill(self):
        gradient = LinearGradient().add_stop(0, 0xFF0000)
        shape = PathShape(attributes={'fill': GradientRef(gradient)})
        node = self.document.build_node(shape, (Attribute.FILL,))
        self.assertEqual(node.get('fill'), 'url(#grad_1)')
        self.assertEqual(len(self.document.defs), 1)

    def test_gradient_reference_on_other_attribute_is_dropped(self):
        shape = PathShape(attributes={'opacity': GradientRef(LinearGradient())})
        node = self.document.build_node(shape, (Attribute.OPACITY,))
        self.assertNotIn('opacity', node.attrib)
        self.assertIsNone(self.document.defs)

    def test_reference_to_non_gradient_is_dropped(self):
        shape = PathShape(attributes={'stroke': GradientRef(Group())})
        node = self.document.build_node(shape, (Attribute.STROKE,))
        self.assertNotIn('stroke', node.attrib)
        self.assertIsNone(self.document.defs)


class TestDefineGradient(unittest.TestCase):
    """Test the gradient registry."""

    def setUp(self):
        self.document = SVGDocument()

    def test_not_a_gradient(self):
        self.assertIsNone(self.document.define_gradient(PathShape()))
        self.assertIsNone(self.document.defs)

    def test_linear_gradient(self):
        gradient = LinearGradient(attributes={
            'x1': 0, 'y1': 0, 'x2': 1, 'y2': 0, 'gradientUnits': 'objectBoundingBox',
            'cx': 5})
        gradient.add_stop(0, 0xFF0000).add_stop(1, 0x0000FF, 0.25)

        self.assertEqual(self.document.define_gradient(gradient), 'url(#grad_1)')
        node = self.document.defs[0]
        self.assertEqual(node.tag, 'linearGradient')
        self.assertEqual(node.attrib, {
            'id': 'grad_1', 'x1': '0', 'y1': '0', 'x2': '1', 'y2': '0',
            'gradientUnits': 'objectBoundingBox'})

        stops = list(node)
        self.assertEqual(len(stops), 2)
        self.assertEqual(stops[0].attrib, {'offset': '0', 'stop-color': '#FF0000'})
        self.assertEqual(stops[1].attrib, {
            'offset': '1', 'stop-color': '#0000FF', 'stop-opacity': '0.25'})

    def test_radial_gradient(self):
        gradient = RadialGradient(attributes={
            'cx': 50, 'cy': 50, 'r': 25.5, 'fx': 40, 'fy': 40, 'x1': 3})
        gradient.add_stop(0.5, '#ffffff')
        self.document.define_gradient(gradient)
        node = self.document.defs[0]
        self.assertEqual(node.tag, 'radialGradient')
        self.assertEqual(node.get('r'), '25.5')
        self.assertNotIn('x1', node.attrib)
        self.assertEqual(node[0].get('stop-color'), '#ffffff')

    def test_each_use_gets_its_own_definition(self):
        gradient = LinearGradient().add_stop(0, 0)
        first = self.document.define_gradient(gradient)
        second = self.document.define_gradient(gradient)
        self.assertEqual((first, second), ('url(#grad_1)', 'url(#grad_2)'))
        self.assertEqual([node.get('id') for node in self.document.defs], ['grad_1', 'grad_2'])

    def test_counter_is_per_document(self):
        gradient = LinearGradient()
        SVGDocument().define_gradient(gradient)
        self.assertEqual(SVGDocument().define_gradient(gradient), 'url(#grad_1)')


class TestFinish(unittest.TestCase):

    def test_defs_come_first(self):
        document = SVGDocument()
        document.root.append(document.build_node(Group(), ()))
        document.define_gradient(LinearGradient())
        root = document.finish()
        self.assertEqual(root[0].tag, 'defs')
        self.assertEqual(len(root), 2)
        # Finishing twice does not move or duplicate defs
        self.assertEqual(len(document.finish()), 2)

    def test_no_defs(self):
        document = SVGDocument()
        self.assertEqual(len(document.finish()), 0)

    def test_to_string_header(self):
        text = SVGDocument(ExportSettings(generator='Tester')).to_string()
        self.assertTrue(text.startswith('<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'))
        self.assertIn('<!-- Created with Tester -->', text)
        self.assertIn('xmlns="http://www.w3.org/2000/svg"', text)
        self.assertIn('xmlns:xlink="http://www.w3.org/1999/xlink"', text)
        self.assertIn('version="1.1"', text)


if __name__ == '__main__':
    unittest.main()
