from lifekline_plot.annotations import AnnotationMarker, resolve_critical_points
from lifekline_plot.errors import FortuneDataError
from lifekline_plot.paths import PathGeometry, build_area_geometry, build_geometries, build_line_geometry, build_series_points
from lifekline_plot.primitives import ChartPrimitives, CircleMarker, FilledRegion, FrameRect, GridLine, Polyline, TextLabel
from lifekline_plot.raster import rasterize, save_png
from lifekline_plot.scales import Padding, PlotArea, clamp_to_domain, map_age, map_ages, map_value, map_values
from lifekline_plot.svg import render_svg, write_svg

__all__ = [
    "AnnotationMarker",
    "ChartPrimitives",
    "CircleMarker",
    "FilledRegion",
    "FortuneDataError",
    "FrameRect",
    "GridLine",
    "Padding",
    "PathGeometry",
    "PlotArea",
    "Polyline",
    "TextLabel",
    "build_area_geometry",
    "build_geometries",
    "build_line_geometry",
    "build_series_points",
    "clamp_to_domain",
    "map_age",
    "map_ages",
    "map_value",
    "map_values",
    "rasterize",
    "render_svg",
    "resolve_critical_points",
    "save_png",
    "write_svg",
]
