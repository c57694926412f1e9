from __future__ import annotations

from dataclasses import dataclass

from lifekline_plot.scales import PlotArea, map_ages, map_values
from lifekline_plot.series import SeriesData


Point = tuple[float, float]


@dataclass(frozen=True)
class PathGeometry:
    points: tuple[Point, ...] = ()
    closed: bool = False

    @property
    def empty(self) -> bool:
        return not self.points

    def to_svg_path(self) -> str:
        if not self.points:
            return ""
        parts = [f"{'M' if i == 0 else 'L'} {format_coord(x)} {format_coord(y)}" for i, (x, y) in enumerate(self.points)]
        if self.closed:
            parts.append("Z")
        return " ".join(parts)


def build_series_points(series: SeriesData, area: PlotArea) -> tuple[Point, ...]:
    """Map an already-clamped series into plot space, preserving input order."""
    if series.empty:
        return ()
    xs = map_ages(series.ages, area.left, area.width)
    ys = map_values(series.values, area.top, area.height)
    return tuple(zip(xs.tolist(), ys.tolist()))


def build_line_geometry(points: tuple[Point, ...]) -> PathGeometry:
    return PathGeometry(points=tuple(points), closed=False)


def build_area_geometry(points: tuple[Point, ...], area: PlotArea) -> PathGeometry:
    if not points:
        return PathGeometry(closed=True)
    baseline_y = area.baseline_y
    x_first = points[0][0]
    x_last = points[-1][0]
    closing = ((x_last, baseline_y), (x_first, baseline_y))
    return PathGeometry(points=tuple(points) + closing, closed=True)


def build_geometries(series: SeriesData, area: PlotArea) -> tuple[PathGeometry, PathGeometry]:
    points = build_series_points(series, area)
    return build_line_geometry(points), build_area_geometry(points, area)


def format_coord(value: float) -> str:
    # Shortest round-trip repr keeps SVG coordinates bit-exact.
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text
