"""
Tests for raster encoding.
"""

import io
import unittest

import numpy as np
from PIL import Image

from vecsvg.image.encoder import bitmap_to_image, encode_base64, encode_raster

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


class TestBitmapToImage(unittest.TestCase):
    """Test numpy to Pillow conversion."""

    def test_modes(self):
        self.assertEqual(bitmap_to_image(np.zeros((4, 5), dtype=np.uint8)).mode, 'L')
        self.assertEqual(bitmap_to_image(np.zeros((4, 5, 3), dtype=np.uint8)).mode, 'RGB')
        self.assertEqual(bitmap_to_image(np.zeros((4, 5, 4), dtype=np.uint8)).mode, 'RGBA')

    def test_single_channel_is_squeezed(self):
        image = bitmap_to_image(np.full((2, 2, 1), 7, dtype=np.uint8))
        self.assertEqual(image.mode, 'L')
        self.assertEqual(image.getpixel((1, 1)), 7)

    def test_normalized_floats(self):
        bitmap = np.array([[0.0, 0.5, 1.0]])
        image = bitmap_to_image(bitmap)
        self.assertEqual([image.getpixel((x, 0)) for x in range(3)], [0, 128, 255])

    def test_out_of_range_values_are_clipped(self):
        image = bitmap_to_image(np.array([[-20, 300]], dtype=np.int32))
        self.assertEqual([image.getpixel((x, 0)) for x in range(2)], [0, 255])

    def test_unsupported_shape(self):
        with self.assertRaises(ValueError):
            bitmap_to_image(np.zeros((2, 2, 2), dtype=np.uint8))
        with self.assertRaises(ValueError):
            bitmap_to_image(np.zeros(5, dtype=np.uint8))


class TestEncodeRaster(unittest.TestCase):
    """Test image compression."""

    def test_png_is_lossless(self):
        rng = np.random.default_rng(1)
        bitmap = rng.integers(0, 256, size=(6, 9, 4), dtype=np.uint8)
        data = encode_raster(bitmap)
        self.assertTrue(data.startswith(PNG_SIGNATURE))

        decoded = np.asarray(Image.open(io.BytesIO(data)))
        np.testing.assert_array_equal(decoded, bitmap)

    def test_other_format(self):
        data = encode_raster(np.zeros((3, 3, 3), dtype=np.uint8), image_format='BMP')
        self.assertTrue(data.startswith(b'BM'))


class TestEncodeBase64(unittest.TestCase):

    def test_text(self):
        self.assertEqual(encode_base64(b'hi'), 'aGk=')
        self.assertEqual(encode_base64(b''), '')


if __name__ == '__main__':
    unittest.main()
