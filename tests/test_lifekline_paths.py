from __future__ import annotations

import unittest

import numpy as np

from lifekline_plot.adapters.normalize import normalize_series
from lifekline_plot.errors import FortuneDataError
from lifekline_plot.paths import (
    build_area_geometry,
    build_geometries,
    build_line_geometry,
    build_series_points,
    format_coord,
)
from lifekline_plot.scales import PlotArea


def _area() -> PlotArea:
    return PlotArea(left=80, top=60, width=1060, height=360)


class PathBuilderTests(unittest.TestCase):
    def test_points_follow_input_order_with_non_decreasing_x(self) -> None:
        series = normalize_series(list(range(0, 101, 10)), [50, 60, 55, 70, 80, 75, 65, 60, 58, 52, 50])
        points = build_series_points(series, _area())
        xs = [x for x, _ in points]
        self.assertEqual(len(points), 11)
        self.assertEqual(xs, sorted(xs))
        self.assertEqual(points[0], (80.0, 240.0))
        self.assertEqual(points[5], (610.0, 150.0))
        self.assertEqual(points[-1][0], 1140.0)

    def test_area_closes_on_zero_baseline(self) -> None:
        series = normalize_series([10, 50, 90], [40, 75, 20])
        line, area = build_geometries(series, _area())
        self.assertFalse(line.closed)
        self.assertTrue(area.closed)
        self.assertEqual(area.points[: len(line.points)], line.points)
        x_first = line.points[0][0]
        x_last = line.points[-1][0]
        self.assertEqual(area.points[-2:], ((x_last, 420.0), (x_first, 420.0)))

    def test_empty_series_yields_empty_geometries(self) -> None:
        series = normalize_series([], [])
        line, area = build_geometries(series, _area())
        self.assertTrue(line.empty)
        self.assertTrue(area.empty)
        self.assertEqual(line.to_svg_path(), "")
        self.assertEqual(area.to_svg_path(), "")
        self.assertEqual(build_area_geometry((), _area()).points, ())

    def test_svg_path_serialization(self) -> None:
        line = build_line_geometry(((80.0, 240.0), (610.0, 150.0)))
        self.assertEqual(line.to_svg_path(), "M 80 240 L 610 150")
        area = build_area_geometry(line.points, _area())
        self.assertEqual(area.to_svg_path(), "M 80 240 L 610 150 L 610 420 L 80 420 Z")
        self.assertEqual(format_coord(0.1 + 0.2), "0.30000000000000004")

    def test_out_of_domain_inputs_are_clamped_and_logged(self) -> None:
        with self.assertLogs("lifekline_plot.adapters.normalize", level="WARNING") as logs:
            series = normalize_series([-5, 50, 120], [110, 50, -20], source_name="overall")
        self.assertEqual(series.ages.tolist(), [0.0, 50.0, 100.0])
        self.assertEqual(series.values.tolist(), [100.0, 50.0, 0.0])
        self.assertEqual(len(logs.records), 2)
        self.assertIn("overall", logs.output[0])

    def test_normalize_rejects_mismatched_and_non_numeric_input(self) -> None:
        with self.assertRaises(FortuneDataError):
            normalize_series([0, 10], [1])
        with self.assertRaises(FortuneDataError):
            normalize_series([0, 10], ["a", 2])
        with self.assertRaises(FortuneDataError):
            normalize_series(np.zeros((2, 2)), np.zeros((2, 2)))
        with self.assertRaises(FortuneDataError):
            normalize_series([0, np.nan], [1, 2])


if __name__ == "__main__":
    unittest.main()
