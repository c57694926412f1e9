from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from lifekline_plot.paths import Point
from lifekline_plot.series import RGBA


TextAnchor = Literal["start", "middle", "end"]


@dataclass(frozen=True)
class GridLine:
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: RGBA
    stroke_width: float = 1.0


@dataclass(frozen=True)
class FrameRect:
    x: float
    y: float
    width: float
    height: float
    stroke: RGBA
    stroke_width: float = 2.0


@dataclass(frozen=True)
class Polyline:
    points: tuple[Point, ...]
    stroke: RGBA
    stroke_width: float = 3.0


@dataclass(frozen=True)
class FilledRegion:
    points: tuple[Point, ...]
    fill: RGBA
    opacity: float = 0.1


@dataclass(frozen=True)
class CircleMarker:
    cx: float
    cy: float
    r: float
    fill: RGBA | None
    stroke: RGBA | None
    stroke_width: float = 2.0
    opacity: float = 1.0
    index: int | None = None


@dataclass(frozen=True)
class TextLabel:
    x: float
    y: float
    text: str
    fill: RGBA
    font_size: float = 12.0
    anchor: TextAnchor = "middle"
    bold: bool = False
    rotate_deg: int = 0


Primitive = GridLine | FrameRect | Polyline | FilledRegion | CircleMarker | TextLabel


@dataclass(frozen=True)
class ChartPrimitives:
    """Everything needed to draw one chart state, grouped by layer."""

    width: float
    height: float
    background: RGBA | None = None
    grid_lines: tuple[GridLine, ...] = ()
    tick_labels: tuple[TextLabel, ...] = ()
    area: FilledRegion | None = None
    line: Polyline | None = None
    point_markers: tuple[CircleMarker, ...] = ()
    hover_decorations: tuple[CircleMarker | TextLabel, ...] = ()
    critical_markers: tuple[CircleMarker, ...] = ()
    critical_labels: tuple[TextLabel, ...] = ()
    axis_labels: tuple[TextLabel, ...] = ()
    frame: FrameRect | None = None

    def draw_order(self) -> tuple[Primitive, ...]:
        out: list[Primitive] = []
        out.extend(self.grid_lines)
        out.extend(self.tick_labels)
        if self.area is not None:
            out.append(self.area)
        if self.line is not None:
            out.append(self.line)
        out.extend(self.point_markers)
        out.extend(self.hover_decorations)
        out.extend(self.critical_markers)
        out.extend(self.critical_labels)
        out.extend(self.axis_labels)
        if self.frame is not None:
            out.append(self.frame)
        return tuple(out)
