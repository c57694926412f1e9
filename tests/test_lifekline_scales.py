from __future__ import annotations

import unittest

import numpy as np

from lifekline_plot.scales import (
    AGE_GRID_TICKS,
    VALUE_GRID_TICKS,
    Padding,
    PlotArea,
    clamp_to_domain,
    clip_to_domain,
    format_tick,
    map_age,
    map_ages,
    map_value,
    map_values,
)


class CoordinateMapperTests(unittest.TestCase):
    def test_default_canvas_yields_expected_plot_area(self) -> None:
        area = PlotArea.from_canvas(1200, 500, Padding(top=60, right=60, bottom=80, left=80))
        self.assertEqual((area.left, area.top, area.width, area.height), (80, 60, 1060, 360))
        self.assertEqual(area.right, 1140)
        self.assertEqual(area.bottom, 420)
        self.assertEqual(area.center_y, 240)

    def test_concrete_age_and_value_mapping(self) -> None:
        self.assertEqual(map_age(50, 80, 1060), 610)
        self.assertEqual(map_value(75, 60, 360), 150)

    def test_domain_edges_map_exactly_to_plot_edges(self) -> None:
        for left, width in ((80.0, 1060.0), (0.0, 1.0), (12.5, 333.3), (7.1, 0.3)):
            self.assertEqual(map_age(0, left, width), left)
            self.assertEqual(map_age(100, left, width), left + width)
        for top, height in ((60.0, 360.0), (0.0, 1.0), (10.0, 250.0)):
            self.assertEqual(map_value(0, top, height), top + height)
            self.assertEqual(map_value(100, top, height), top)

    def test_vectorized_mapping_is_bit_identical_to_scalar(self) -> None:
        ages = [0, 7, 13, 33, 50, 67, 99, 100]
        values = [0, 1, 12.5, 33.3, 72, 99.9, 100, 41]
        xs = map_ages(np.asarray(ages), 80, 1060)
        ys = map_values(np.asarray(values), 60, 360)
        self.assertEqual(xs.tolist(), [map_age(a, 80, 1060) for a in ages])
        self.assertEqual(ys.tolist(), [map_value(v, 60, 360) for v in values])

    def test_mapping_functions_do_not_clamp(self) -> None:
        self.assertEqual(map_age(-10, 80, 1000), -20)
        self.assertEqual(map_value(150, 60, 360), -120)

    def test_clamp_helpers(self) -> None:
        self.assertEqual(clamp_to_domain(-3), 0.0)
        self.assertEqual(clamp_to_domain(104), 100.0)
        self.assertEqual(clamp_to_domain(42.5), 42.5)
        clipped, count = clip_to_domain(np.asarray([-1.0, 50.0, 101.0]))
        self.assertEqual(clipped.tolist(), [0.0, 50.0, 100.0])
        self.assertEqual(count, 2)

    def test_invalid_layout_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PlotArea.from_canvas(100, 100, Padding(top=60, right=60, bottom=80, left=80))
        with self.assertRaises(ValueError):
            Padding(top=-1)

    def test_grid_ticks_and_labels(self) -> None:
        self.assertEqual(VALUE_GRID_TICKS, (0, 25, 50, 75, 100))
        self.assertEqual(AGE_GRID_TICKS, (0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100))
        self.assertEqual(format_tick(75.0), "75")
        self.assertEqual(format_tick(72.5), "72.5")


if __name__ == "__main__":
    unittest.main()
