from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Mapping

from .categories import FortuneCategory, category_value
from .schema import FortuneDataset, Trend

LOGGER = logging.getLogger(__name__)

HoverState = Literal["idle", "hovering"]
PointerPhase = Literal["pointer_enter", "pointer_leave"]

DEFAULT_MARKER_STRIDE = 5


@dataclass(frozen=True)
class PointerEvent:
    """Pointer crossing a data-point marker, identified by its series index."""

    phase: PointerPhase
    index: int


def parse_pointer_event(event_type: str, payload: object) -> PointerEvent | None:
    if event_type not in {"pointer_enter", "pointer_leave"} or not isinstance(payload, Mapping):
        return None
    raw_index = payload.get("index")
    if isinstance(raw_index, bool) or not isinstance(raw_index, int):
        return None
    return PointerEvent(phase=event_type, index=raw_index)


@dataclass
class HoverController:
    """Two-state hover machine over the discrete points of one series.

    `point_count` bounds the valid indices; entering an index outside it is
    ignored. Transitions are immediate, there is no debouncing.
    """

    point_count: int = 0
    hovered_index: int | None = None

    def __post_init__(self) -> None:
        if self.point_count < 0:
            raise ValueError("point_count must be >= 0")
        if self.hovered_index is not None and not self._valid(self.hovered_index):
            raise ValueError("hovered_index must index an existing point")

    @property
    def state(self) -> HoverState:
        return "idle" if self.hovered_index is None else "hovering"

    def pointer_enter(self, index: int) -> HoverState:
        if not self._valid(index):
            LOGGER.debug("ignoring pointer_enter for out-of-range index %s (count=%d)", index, self.point_count)
            return self.state
        self.hovered_index = index
        return self.state

    def pointer_leave(self, index: int) -> HoverState:
        # A leave for a marker other than the hovered one is stale.
        if self.hovered_index == index:
            self.hovered_index = None
        return self.state

    def on_event(self, event: PointerEvent) -> HoverState:
        if event.phase == "pointer_enter":
            return self.pointer_enter(event.index)
        return self.pointer_leave(event.index)

    def reset(self, point_count: int | None = None) -> HoverState:
        if point_count is not None:
            if point_count < 0:
                raise ValueError("point_count must be >= 0")
            self.point_count = point_count
        self.hovered_index = None
        return self.state

    def _valid(self, index: int) -> bool:
        return 0 <= index < self.point_count


def visible_marker_indices(count: int, hovered_index: int | None, stride: int = DEFAULT_MARKER_STRIDE) -> tuple[int, ...]:
    """Indices drawn as markers: every `stride`-th index plus the hovered one.

    The stride samples positions in the series, not ages. With the usual
    11-point series (ages 0, 10, ..., 100) and the default stride of 5 only
    ages 0, 50 and 100 get a marker until another point is hovered.
    """
    if stride < 1:
        raise ValueError("stride must be >= 1")
    visible = set(range(0, count, stride))
    if hovered_index is not None and 0 <= hovered_index < count:
        visible.add(hovered_index)
    return tuple(sorted(visible))


@dataclass(frozen=True)
class Tooltip:
    index: int
    age: int
    year_label: str
    trend: Trend
    category: FortuneCategory
    category_value: float
    key_events: str


def build_tooltip(
    dataset: FortuneDataset,
    hovered_index: int | None,
    category: FortuneCategory,
) -> Tooltip | None:
    if hovered_index is None or not 0 <= hovered_index < len(dataset.yearly_data):
        return None
    entry = dataset.yearly_data[hovered_index]
    return Tooltip(
        index=hovered_index,
        age=entry.age,
        year_label=entry.year,
        trend=entry.trend,
        category=category,
        category_value=category_value(entry, category),
        key_events=entry.key_events,
    )
