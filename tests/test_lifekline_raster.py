from __future__ import annotations

import unittest

import numpy as np

from lifekline_plot.primitives import ChartPrimitives, TextLabel
from lifekline_plot.raster import rasterize

WHITE = (255, 255, 255, 255)


def _primitives(*labels: TextLabel) -> ChartPrimitives:
    return ChartPrimitives(width=200, height=100, background=(0, 0, 0, 0), axis_labels=labels)


class RasterTextTests(unittest.TestCase):
    def test_label_inside_canvas_is_drawn(self) -> None:
        image = rasterize(_primitives(TextLabel(x=100, y=60, text="88", fill=WHITE, font_size=20)))
        self.assertEqual(image.shape, (100, 200, 4))
        self.assertGreater(int(np.count_nonzero(image[..., 3])), 0)

    def test_label_left_of_canvas_is_clipped_not_shifted(self) -> None:
        image = rasterize(_primitives(TextLabel(x=0, y=60, text="88", fill=WHITE, font_size=20, anchor="end")))
        self.assertEqual(int(np.count_nonzero(image[..., 3])), 0)

    def test_label_above_canvas_is_clipped_not_shifted(self) -> None:
        image = rasterize(_primitives(TextLabel(x=100, y=0, text="88", fill=WHITE, font_size=20)))
        self.assertEqual(int(np.count_nonzero(image[..., 3])), 0)

    def test_label_straddling_left_edge_keeps_only_its_right_part(self) -> None:
        straddling = rasterize(_primitives(TextLabel(x=0, y=60, text="8888", fill=WHITE, font_size=20)))
        whole = rasterize(_primitives(TextLabel(x=100, y=60, text="8888", fill=WHITE, font_size=20)))
        drawn = np.nonzero(straddling[..., 3])[1]
        self.assertGreater(drawn.size, 0)
        # Same glyph columns as the centred copy, moved 100px left and cut at x=0.
        self.assertLessEqual(int(drawn.max()), int(np.nonzero(whole[..., 3])[1].max()) - 100 + 1)
        self.assertLess(np.count_nonzero(straddling[..., 3]), np.count_nonzero(whole[..., 3]))


if __name__ == "__main__":
    unittest.main()
