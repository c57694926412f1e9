from __future__ import annotations

import math
from dataclasses import dataclass

from lifekline_plot.errors import FortuneDataError

from .categories import FortuneCategory, category_value
from .schema import FortuneDataset, age_order_errors, non_finite_scores


@dataclass(frozen=True)
class ValidationReport:
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_dataset(dataset: FortuneDataset) -> ValidationReport:
    errors: list[str] = list(age_order_errors(dataset.yearly_data))
    warnings: list[str] = []

    if dataset.empty:
        warnings.append("yearlyData is empty; only the chart frame will render")

    for entry in dataset.yearly_data:
        bad = non_finite_scores(entry)
        if bad:
            errors.append(f"Age {entry.age} has non-finite score(s): {', '.join(bad)}")
        if not 0 <= entry.age <= 100:
            warnings.append(f"Age {entry.age} is outside [0, 100] and will be clamped")
        for category in FortuneCategory:
            value = category_value(entry, category)
            if not math.isfinite(value):
                continue
            if not 0 <= value <= 100:
                warnings.append(f"Age {entry.age}: {category.value}={value:g} is outside [0, 100] and will be clamped")
        if not entry.year.strip():
            warnings.append(f"Age {entry.age} has no year label")

    known_ages = set(dataset.ages())
    for point in dataset.critical_points:
        if not 0 <= point.age <= 100:
            warnings.append(f"Critical point age {point.age} is outside [0, 100] and will be clamped")
        if point.age not in known_ages:
            warnings.append(
                f"Critical point at age {point.age} has no yearly entry; marker is placed at the plot center"
            )

    return ValidationReport(errors=tuple(errors), warnings=tuple(warnings))


def require_valid_dataset(dataset: FortuneDataset) -> None:
    report = validate_dataset(dataset)
    if report.errors:
        joined = "; ".join(report.errors)
        raise FortuneDataError(f"Fortune dataset validation failed: {joined}")
