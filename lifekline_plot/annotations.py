from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from lifekline_plot.adapters.normalize import clamp_scalar
from lifekline_plot.scales import PlotArea, map_age, map_value


@dataclass(frozen=True)
class AnnotationMarker:
    """Plot position of one critical-point marker.

    `matched` is False when no yearly entry shares the point's age and the
    marker fell back to the vertical center of the plot area.
    """

    age: int
    description: str
    x: float
    y: float
    matched: bool


def resolve_critical_points(
    points: Sequence[tuple[int, str]],
    value_by_age: Mapping[int, float],
    area: PlotArea,
) -> tuple[AnnotationMarker, ...]:
    markers: list[AnnotationMarker] = []
    for age, description in points:
        x = map_age(clamp_scalar(age, label="critical point age"), area.left, area.width)
        value = value_by_age.get(age)
        if value is None:
            y = area.center_y
            matched = False
        else:
            y = map_value(clamp_scalar(value, label="critical point value"), area.top, area.height)
            matched = True
        markers.append(AnnotationMarker(age=age, description=description, x=x, y=y, matched=matched))
    return tuple(markers)
