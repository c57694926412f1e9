from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from lifekline_plot.primitives import (
    ChartPrimitives,
    CircleMarker,
    FilledRegion,
    FrameRect,
    GridLine,
    Polyline,
    TextLabel,
)
from lifekline_plot.raster import rasterize
from lifekline_plot.scales import AGE_GRID_TICKS, VALUE_GRID_TICKS, Padding, PlotArea, format_tick
from lifekline_plot.series import RGBA, hex_to_rgba
from lifekline_plot.svg import render_svg

from .categories import DEFAULT_CATEGORY, CategorySelector, FortuneCategory, category_option, category_value, coerce_category
from .geometry import build_annotations, build_paths
from .interaction import (
    DEFAULT_MARKER_STRIDE,
    HoverController,
    HoverState,
    PointerEvent,
    Tooltip,
    build_tooltip,
    visible_marker_indices,
)
from .schema import FortuneDataset
from .summary import render_summary_markdown
from .validation import validate_dataset

LOGGER = logging.getLogger(__name__)

WHITE: RGBA = (255, 255, 255, 255)


@dataclass(frozen=True)
class ChartConfig:
    width: float = 1200.0
    height: float = 500.0
    padding: Padding = field(default_factory=Padding)
    marker_stride: int = DEFAULT_MARKER_STRIDE
    background: RGBA = (0, 0, 0, 230)
    grid_color: RGBA = (255, 255, 255, 26)
    tick_label_color: RGBA = (255, 255, 255, 128)
    axis_label_color: RGBA = (255, 255, 255, 153)
    frame_color: RGBA = (255, 255, 255, 51)
    frame_width: float = 2.0
    line_width: float = 3.0
    area_opacity: float = 0.1
    marker_radius: float = 4.0
    marker_stroke_width: float = 2.0
    marker_opacity: float = 0.8
    hover_marker_radius: float = 8.0
    hover_stroke_width: float = 3.0
    halo_radius: float = 15.0
    halo_opacity: float = 0.3
    critical_color: str = "#fbbf24"
    critical_radius: float = 8.0
    critical_stroke_width: float = 3.0
    critical_glyph: str = "⚡"
    x_axis_label: str = "年龄 (虚岁)"
    y_axis_label: str = "运势"
    default_headline_score: float = 72.0

    def __post_init__(self) -> None:
        if self.marker_stride < 1:
            raise ValueError("marker_stride must be >= 1")
        if not 0.0 <= self.area_opacity <= 1.0:
            raise ValueError("area_opacity must be within [0, 1]")
        hex_to_rgba(self.critical_color)
        # Raises when the padding leaves no room for the plot.
        self.plot_area()

    def plot_area(self) -> PlotArea:
        return PlotArea.from_canvas(self.width, self.height, self.padding)


def derive_primitives(
    dataset: FortuneDataset,
    category: FortuneCategory,
    hovered_index: int | None = None,
    config: ChartConfig | None = None,
) -> ChartPrimitives:
    """Full, side-effect-free derivation of one chart state."""
    cfg = config or ChartConfig()
    area = cfg.plot_area()
    color = hex_to_rgba(category_option(category).color)

    grid_lines, tick_labels = _build_grid(area, cfg)
    axis_labels = _build_axis_labels(area, cfg)
    frame = FrameRect(
        x=area.left,
        y=area.top,
        width=area.width,
        height=area.height,
        stroke=cfg.frame_color,
        stroke_width=cfg.frame_width,
    )

    line, area_path = build_paths(dataset, category, area)
    point_markers: list[CircleMarker] = []
    hover_decorations: list[CircleMarker | TextLabel] = []
    for index in visible_marker_indices(len(line.points), hovered_index, cfg.marker_stride):
        x, y = line.points[index]
        hovered = index == hovered_index
        point_markers.append(
            CircleMarker(
                cx=x,
                cy=y,
                r=cfg.hover_marker_radius if hovered else cfg.marker_radius,
                fill=color,
                stroke=WHITE,
                stroke_width=cfg.hover_stroke_width if hovered else cfg.marker_stroke_width,
                opacity=1.0 if hovered else cfg.marker_opacity,
                index=index,
            )
        )
        if hovered:
            value = category_value(dataset.yearly_data[index], category)
            hover_decorations.append(
                CircleMarker(
                    cx=x,
                    cy=y,
                    r=cfg.halo_radius,
                    fill=None,
                    stroke=color,
                    stroke_width=2.0,
                    opacity=cfg.halo_opacity,
                    index=index,
                )
            )
            hover_decorations.append(
                TextLabel(x=x, y=y - 25, text=format_tick(value), fill=WHITE, font_size=14, bold=True)
            )

    critical_color = hex_to_rgba(cfg.critical_color)
    critical_markers: list[CircleMarker] = []
    critical_labels: list[TextLabel] = []
    for marker in build_annotations(dataset, category, area):
        critical_markers.append(
            CircleMarker(
                cx=marker.x,
                cy=marker.y,
                r=cfg.critical_radius,
                fill=critical_color,
                stroke=WHITE,
                stroke_width=cfg.critical_stroke_width,
            )
        )
        critical_labels.append(
            TextLabel(x=marker.x, y=marker.y - 20, text=cfg.critical_glyph, fill=critical_color, font_size=16)
        )

    return ChartPrimitives(
        width=cfg.width,
        height=cfg.height,
        background=cfg.background,
        grid_lines=grid_lines,
        tick_labels=tick_labels,
        area=None if area_path.empty else FilledRegion(points=area_path.points, fill=color, opacity=cfg.area_opacity),
        line=None if line.empty else Polyline(points=line.points, stroke=color, stroke_width=cfg.line_width),
        point_markers=tuple(point_markers),
        hover_decorations=tuple(hover_decorations),
        critical_markers=tuple(critical_markers),
        critical_labels=tuple(critical_labels),
        axis_labels=axis_labels,
        frame=frame,
    )


def _build_grid(area: PlotArea, cfg: ChartConfig) -> tuple[tuple[GridLine, ...], tuple[TextLabel, ...]]:
    lines: list[GridLine] = []
    labels: list[TextLabel] = []
    for value in VALUE_GRID_TICKS:
        y = area.y_for_value(value)
        lines.append(GridLine(x1=area.left, y1=y, x2=area.right, y2=y, stroke=cfg.grid_color))
        labels.append(
            TextLabel(x=area.left - 15, y=y + 5, text=format_tick(value), fill=cfg.tick_label_color, anchor="end")
        )
    for age in AGE_GRID_TICKS:
        x = area.x_for_age(age)
        lines.append(GridLine(x1=x, y1=area.top, x2=x, y2=area.bottom, stroke=cfg.grid_color))
        labels.append(TextLabel(x=x, y=area.bottom + 25, text=format_tick(age), fill=cfg.tick_label_color))
    return tuple(lines), tuple(labels)


def _build_axis_labels(area: PlotArea, cfg: ChartConfig) -> tuple[TextLabel, ...]:
    return (
        TextLabel(
            x=cfg.width / 2,
            y=cfg.height - 20,
            text=cfg.x_axis_label,
            fill=cfg.axis_label_color,
            font_size=14,
            bold=True,
        ),
        TextLabel(
            x=area.left - 55,
            y=cfg.height / 2,
            text=cfg.y_axis_label,
            fill=cfg.axis_label_color,
            font_size=14,
            bold=True,
            rotate_deg=-90,
        ),
    )


class ChartView:
    """Composition root: owns the selection state and re-derives on every change."""

    def __init__(
        self,
        dataset: FortuneDataset,
        config: ChartConfig | None = None,
        *,
        category: FortuneCategory | str = DEFAULT_CATEGORY,
    ) -> None:
        self._config = config or ChartConfig()
        self._dataset = dataset
        self._selector = CategorySelector(active=coerce_category(category))
        self._hover = HoverController(point_count=len(dataset.yearly_data))
        self._report_dataset(dataset)
        self._refresh()

    @property
    def dataset(self) -> FortuneDataset:
        return self._dataset

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def active_category(self) -> FortuneCategory:
        return self._selector.active

    @property
    def hovered_index(self) -> int | None:
        return self._hover.hovered_index

    @property
    def hover_state(self) -> HoverState:
        return self._hover.state

    @property
    def primitives(self) -> ChartPrimitives:
        return self._primitives

    @property
    def tooltip(self) -> Tooltip | None:
        return self._tooltip

    def select_category(self, category: FortuneCategory | str) -> bool:
        changed = self._selector.select(category)
        self._refresh()
        return changed

    def pointer_enter(self, index: int) -> HoverState:
        state = self._hover.pointer_enter(index)
        self._refresh()
        return state

    def pointer_leave(self, index: int) -> HoverState:
        state = self._hover.pointer_leave(index)
        self._refresh()
        return state

    def handle_event(self, event: PointerEvent) -> HoverState:
        state = self._hover.on_event(event)
        self._refresh()
        return state

    def replace_dataset(self, dataset: FortuneDataset) -> None:
        """Swap the dataset; the selection state starts over with defaults."""
        self._dataset = dataset
        self._selector = CategorySelector()
        self._hover = HoverController(point_count=len(dataset.yearly_data))
        self._report_dataset(dataset)
        self._refresh()

    def headline_score(self) -> float:
        if not self._dataset.yearly_data:
            return self._config.default_headline_score
        return self._selector.value_of(self._dataset.yearly_data[0])

    def visible_marker_indices(self) -> tuple[int, ...]:
        return visible_marker_indices(
            len(self._dataset.yearly_data),
            self._hover.hovered_index,
            self._config.marker_stride,
        )

    def to_svg(self) -> str:
        return render_svg(self._primitives)

    def to_rgba(self, *, scale: float = 1.0) -> np.ndarray:
        return rasterize(self._primitives, scale=scale)

    def summary_markdown(self) -> str:
        return render_summary_markdown(self._dataset)

    def _refresh(self) -> None:
        self._primitives = derive_primitives(
            self._dataset,
            self._selector.active,
            self._hover.hovered_index,
            self._config,
        )
        self._tooltip = build_tooltip(self._dataset, self._hover.hovered_index, self._selector.active)

    @staticmethod
    def _report_dataset(dataset: FortuneDataset) -> None:
        report = validate_dataset(dataset)
        for message in report.errors:
            LOGGER.warning("fortune data contract violation: %s", message)
        for message in report.warnings:
            LOGGER.debug("fortune data note: %s", message)
