"""
Unit Tests for the pixel transforms.

This test suite verifies svg2png.conversion.pixels: unpremultiplication and
ARGB -> RGBA reordering, the rgb/grayscale row formats and the white-on-alpha
grayscale classification.
"""

import os
import sys
import unittest

import numpy as np

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from svg2png.conversion.pixels import (
    classify,
    classify_for_format,
    transform_rows,
    unpremultiply,
    unpremultiply_row,
)
from svg2png.conversion.rasterizer import RasterBuffer


def make_buffer(rows, padding=0, fill=0):
    """Builds a RasterBuffer from rows of (a, r, g, b) tuples, with ``padding`` extra words per row."""
    height, width = len(rows), len(rows[0])
    words = np.full((height, width + padding), fill, dtype=np.uint32)
    for y, row in enumerate(rows):
        for x, (a, r, g, b) in enumerate(row):
            words[y, x] = (a << 24) | (r << 16) | (g << 8) | b
    return RasterBuffer(width, height, (width + padding) * 4, words.tobytes())


class TestUnpremultiply(unittest.TestCase):

    def test_opaque_pixels_are_unchanged_and_reordered(self):
        buffer = make_buffer([[(255, 10, 20, 30), (255, 255, 0, 128)]])
        out = unpremultiply(buffer)
        self.assertEqual(out.dtype, np.uint8)
        self.assertEqual(out.shape, (1, 2, 4))
        self.assertEqual(out[0, 0].tolist(), [10, 20, 30, 255])
        self.assertEqual(out[0, 1].tolist(), [255, 0, 128, 255])

    def test_transparent_pixels_become_zero(self):
        # Stale colour in a zero-alpha pixel must not leak
        buffer = make_buffer([[(0, 200, 100, 50), (0, 0, 0, 0)]])
        self.assertEqual(unpremultiply(buffer).tolist(), [[[0, 0, 0, 0], [0, 0, 0, 0]]])

    def test_division_truncates(self):
        # 0x80402010: a=128, r=64, g=32, b=16
        buffer = make_buffer([[(0x80, 0x40, 0x20, 0x10)]])
        self.assertEqual(unpremultiply(buffer)[0, 0].tolist(), [127, 63, 31, 128])

    def test_small_alpha(self):
        buffer = make_buffer([[(3, 1, 2, 3)]])
        self.assertEqual(unpremultiply(buffer)[0, 0].tolist(), [85, 170, 255, 3])

    def test_row_bytes_are_rgba_ordered(self):
        row = np.array([(0x80 << 24) | (0x40 << 16) | (0x20 << 8) | 0x10], dtype=np.uint32)
        self.assertEqual(unpremultiply_row(row), bytes([127, 63, 31, 128]))

    def test_stride_padding_is_ignored(self):
        buffer = make_buffer([[(255, 1, 2, 3)], [(255, 4, 5, 6)]], padding=3, fill=0xDEADBEEF)
        out = unpremultiply(buffer)
        self.assertEqual(out.shape, (2, 1, 4))
        self.assertEqual(out[1, 0].tolist(), [4, 5, 6, 255])

    def test_source_buffer_is_not_modified(self):
        buffer = make_buffer([[(128, 64, 64, 64), (0, 9, 9, 9)]])
        before = bytes(buffer.data)
        unpremultiply(buffer)
        list(transform_rows(buffer))
        self.assertEqual(buffer.data, before)


class TestTransformRows(unittest.TestCase):

    def setUp(self):
        self.buffer = make_buffer([
            [(255, 255, 255, 255), (128, 64, 32, 16)],
            [(0, 0, 0, 0), (255, 0, 0, 0)],
        ])

    def test_rgba_rows(self):
        rows = list(transform_rows(self.buffer, "rgba"))
        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[0], bytes([255, 255, 255, 255, 127, 63, 31, 128]))
        self.assertEqual(rows[1], bytes([0, 0, 0, 0, 0, 0, 0, 255]))

    def test_rgb_rows_are_composited_over_black(self):
        rows = list(transform_rows(self.buffer, "rgb"))
        self.assertEqual(rows[0], bytes([255, 255, 255, 64, 32, 16]))
        self.assertEqual(rows[1], bytes([0, 0, 0, 0, 0, 0]))

    def test_grayscale_rows(self):
        rows = list(transform_rows(self.buffer, "grayscale"))
        # (64 * 11 + 32 * 16 + 16 * 5) // 32 == 40
        self.assertEqual(rows[0], bytes([255, 40]))
        self.assertEqual(rows[1], bytes([0, 0]))

    def test_grayscale_uses_qgray_weights(self):
        buffer = make_buffer([[(255, 255, 0, 0), (255, 0, 255, 0), (255, 0, 0, 255)]])
        # 2805 // 32, 4080 // 32, 1275 // 32
        self.assertEqual(next(transform_rows(buffer, "grayscale")), bytes([87, 127, 39]))

    def test_rows_are_generated_lazily(self):
        rows = transform_rows(self.buffer, "rgba")
        self.assertEqual(len(next(rows)), 8)

    def test_unknown_format(self):
        with self.assertRaises(ValueError):
            list(transform_rows(self.buffer, "cmyk"))


class TestClassify(unittest.TestCase):

    def test_fully_transparent_buffer_is_grayscale(self):
        buffer = make_buffer([[(0, 0, 0, 0)] * 4] * 3)
        self.assertTrue(classify(buffer))

    def test_transparent_pixels_with_stale_colour_are_grayscale(self):
        buffer = make_buffer([[(0, 40, 40, 40), (255, 255, 255, 255)]])
        self.assertTrue(classify(buffer))

    def test_white_shape_with_varying_alpha(self):
        buffer = make_buffer([[(255, 255, 255, 255), (128, 128, 128, 128), (1, 1, 1, 1), (0, 0, 0, 0)]])
        self.assertTrue(classify(buffer))

    def test_gray_pixel_is_not_a_white_mask(self):
        # r == g == b but the straight colour would be gray, not white
        buffer = make_buffer([[(255, 255, 255, 255), (200, 100, 100, 100)]])
        self.assertFalse(classify(buffer))

    def test_single_coloured_pixel_fails(self):
        rows = [[(255, 255, 255, 255)] * 5 for _ in range(5)]
        rows[4][4] = (255, 255, 254, 255)
        self.assertFalse(classify(make_buffer(rows)))

    def test_opaque_black_is_not_a_white_mask(self):
        self.assertFalse(classify(make_buffer([[(255, 0, 0, 0)]])))

    def test_padding_is_not_classified(self):
        buffer = make_buffer([[(255, 255, 255, 255)]], padding=1, fill=0xFF102030)
        self.assertTrue(classify(buffer))

    def test_format_specific_classification(self):
        gray = make_buffer([[(200, 100, 100, 100)]])
        red = make_buffer([[(255, 255, 0, 0)]])
        self.assertFalse(classify_for_format(gray, "rgba"))
        self.assertTrue(classify_for_format(gray, "rgb"))
        self.assertFalse(classify_for_format(red, "rgb"))
        self.assertTrue(classify_for_format(red, "grayscale"))


if __name__ == "__main__":
    unittest.main()
