from __future__ import annotations

import logging
import math

from lifekline_plot.adapters import normalize_series
from lifekline_plot.annotations import AnnotationMarker, resolve_critical_points
from lifekline_plot.paths import PathGeometry, build_geometries
from lifekline_plot.scales import PlotArea
from lifekline_plot.series import SeriesData

from .categories import FortuneCategory, category_value
from .schema import FortuneDataset

LOGGER = logging.getLogger(__name__)


def category_series(dataset: FortuneDataset, category: FortuneCategory) -> SeriesData:
    """Age/value series of one metric, one point per yearly entry.

    A NaN or infinite value is plotted on the zero baseline and reported as a
    warning, so point indices always line up with `yearly_data`.
    """
    ages: list[int] = []
    values: list[float] = []
    for entry in dataset.yearly_data:
        value = category_value(entry, category)
        if not math.isfinite(value):
            LOGGER.warning("age %d: non-finite %s score %r plotted at the baseline", entry.age, category.value, value)
            value = 0.0
        ages.append(entry.age)
        values.append(value)
    return normalize_series(ages, values, source_name=category.value)


def build_paths(
    dataset: FortuneDataset,
    category: FortuneCategory,
    area: PlotArea,
) -> tuple[PathGeometry, PathGeometry]:
    """Line and area geometry of the active metric, in ascending age order."""
    return build_geometries(category_series(dataset, category), area)


def build_annotations(
    dataset: FortuneDataset,
    category: FortuneCategory,
    area: PlotArea,
) -> tuple[AnnotationMarker, ...]:
    # Non-finite values sit on the baseline, as in `category_series`.
    value_by_age: dict[int, float] = {}
    for entry in dataset.yearly_data:
        value = category_value(entry, category)
        value_by_age.setdefault(entry.age, value if math.isfinite(value) else 0.0)
    return resolve_critical_points(
        [(point.age, point.description) for point in dataset.critical_points],
        value_by_age,
        area,
    )
