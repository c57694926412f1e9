from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping

import pandas as pd

from lifekline_plot.errors import FortuneDataError

Trend = Literal["up", "down", "flat"]
TRENDS: tuple[str, ...] = ("up", "down", "flat")

TREND_ALIASES: dict[str, Trend] = {
    "up": "up",
    "rising": "up",
    "上升": "up",
    "down": "down",
    "falling": "down",
    "下降": "down",
    "flat": "flat",
    "stable": "flat",
    "平稳": "flat",
}

TREND_LABELS: dict[str, str] = {
    "up": "上升",
    "down": "下降",
    "flat": "平稳",
}


@dataclass(frozen=True)
class YearlyFortune:
    age: int
    overall: float
    wealth: float
    career: float
    trend: Trend = "flat"
    year: str = ""
    key_events: str = ""
    love: float | None = None
    children: float | None = None
    health: float | None = None

    def __post_init__(self) -> None:
        if self.trend not in TRENDS:
            raise FortuneDataError(f"Unsupported trend: {self.trend}")


@dataclass(frozen=True)
class CriticalPoint:
    age: int
    description: str = ""


@dataclass(frozen=True)
class LifePhases:
    childhood: str = ""
    youth: str = ""
    middle_age: str = ""
    old_age: str = ""


@dataclass(frozen=True)
class FortuneDataset:
    bazi: str = ""
    summary: str = ""
    yearly_data: tuple[YearlyFortune, ...] = ()
    life_phases: LifePhases = field(default_factory=LifePhases)
    critical_points: tuple[CriticalPoint, ...] = ()

    @property
    def empty(self) -> bool:
        return not self.yearly_data

    def entry_for_age(self, age: int) -> YearlyFortune | None:
        for entry in self.yearly_data:
            if entry.age == age:
                return entry
        return None

    def ages(self) -> tuple[int, ...]:
        return tuple(entry.age for entry in self.yearly_data)


FORTUNE_DATASET_JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "https://lifekline.dev/schemas/fortune_dataset.schema.json",
    "title": "Life K-Line Fortune Dataset",
    "type": "object",
    "properties": {
        "bazi": {"type": "string"},
        "summary": {"type": "string"},
        "yearlyData": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["age", "overall", "wealth", "career"],
                "properties": {
                    "age": {"type": "integer", "minimum": 0, "maximum": 100},
                    "year": {"type": "string"},
                    "overall": {"type": "number", "minimum": 0, "maximum": 100},
                    "wealth": {"type": "number", "minimum": 0, "maximum": 100},
                    "career": {"type": "number", "minimum": 0, "maximum": 100},
                    "love": {"type": "number", "minimum": 0, "maximum": 100},
                    "children": {"type": "number", "minimum": 0, "maximum": 100},
                    "health": {"type": "number", "minimum": 0, "maximum": 100},
                    "trend": {"type": "string", "enum": sorted(TREND_ALIASES)},
                    "keyEvents": {"type": "string"},
                },
            },
        },
        "lifePhases": {
            "type": "object",
            "properties": {
                "childhood": {"type": "string"},
                "youth": {"type": "string"},
                "middleAge": {"type": "string"},
                "oldAge": {"type": "string"},
            },
        },
        "criticalPoints": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["age"],
                "properties": {
                    "age": {"type": "integer"},
                    "description": {"type": "string"},
                },
            },
        },
    },
}


def fortune_dataset_schema() -> dict[str, object]:
    return json.loads(json.dumps(FORTUNE_DATASET_JSON_SCHEMA))


def parse_trend(raw: object) -> Trend:
    text = str(raw).strip().lower() if raw is not None else "flat"
    trend = TREND_ALIASES.get(text)
    if trend is None:
        raise FortuneDataError(f"Unsupported trend: {raw!r}")
    return trend


def dataset_from_dict(payload: Mapping[str, object], *, strict: bool = True) -> FortuneDataset:
    """Build a dataset from the generation service's JSON object.

    Absent `yearlyData`, `lifePhases` or `criticalPoints` are treated as empty.
    With `strict`, data-contract errors (such as repeated or decreasing ages)
    are rejected here so that rendering only ever sees validated data.
    """
    if not isinstance(payload, Mapping):
        raise TypeError("Fortune payload must be a mapping")

    raw_yearly = payload.get("yearlyData")
    if raw_yearly is None:
        raw_yearly = []
    if not isinstance(raw_yearly, list):
        raise FortuneDataError("`yearlyData` must be a list when provided")

    yearly: list[YearlyFortune] = []
    for index, raw in enumerate(raw_yearly):
        if not isinstance(raw, Mapping):
            raise FortuneDataError(f"yearlyData[{index}] must be an object")
        try:
            yearly.append(
                YearlyFortune(
                    age=_coerce_int(raw["age"]),
                    year=str(raw.get("year", "")),
                    overall=float(raw["overall"]),
                    wealth=float(raw["wealth"]),
                    career=float(raw["career"]),
                    love=_coerce_optional_float(raw.get("love")),
                    children=_coerce_optional_float(raw.get("children")),
                    health=_coerce_optional_float(raw.get("health")),
                    trend=parse_trend(raw.get("trend")),
                    key_events=str(raw.get("keyEvents", "")),
                )
            )
            bad = non_finite_scores(yearly[-1])
            if bad:
                raise FortuneDataError(f"yearlyData[{index}] has a non-finite score: {', '.join(bad)}")
        except FortuneDataError:
            raise
        except KeyError as exc:
            raise FortuneDataError(f"yearlyData[{index}] is missing field {exc.args[0]!r}") from exc
        except (TypeError, ValueError) as exc:
            raise FortuneDataError(f"yearlyData[{index}] has an invalid field: {exc}") from exc

    raw_phases = payload.get("lifePhases") or {}
    if not isinstance(raw_phases, Mapping):
        raise FortuneDataError("`lifePhases` must be an object when provided")
    phases = LifePhases(
        childhood=str(raw_phases.get("childhood", "")),
        youth=str(raw_phases.get("youth", "")),
        middle_age=str(raw_phases.get("middleAge", "")),
        old_age=str(raw_phases.get("oldAge", "")),
    )

    raw_points = payload.get("criticalPoints") or []
    if not isinstance(raw_points, list):
        raise FortuneDataError("`criticalPoints` must be a list when provided")
    points: list[CriticalPoint] = []
    for index, raw in enumerate(raw_points):
        if not isinstance(raw, Mapping) or "age" not in raw:
            raise FortuneDataError(f"criticalPoints[{index}] must be an object with an `age`")
        points.append(CriticalPoint(age=_coerce_int(raw["age"]), description=str(raw.get("description", ""))))

    dataset = FortuneDataset(
        bazi=str(payload.get("bazi", "")),
        summary=str(payload.get("summary", "")),
        yearly_data=tuple(yearly),
        life_phases=phases,
        critical_points=tuple(points),
    )
    if strict:
        errors = age_order_errors(dataset.yearly_data)
        if errors:
            raise FortuneDataError(f"Fortune payload rejected: {'; '.join(errors)}")
    return dataset


def dataset_from_json(text: str, *, strict: bool = True) -> FortuneDataset:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FortuneDataError(f"Fortune payload is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise FortuneDataError("Fortune payload must be a JSON object")
    return dataset_from_dict(payload, strict=strict)


def load_dataset(path: str | Path, *, strict: bool = True) -> FortuneDataset:
    return dataset_from_json(Path(path).read_text(encoding="utf-8"), strict=strict)


def dataset_to_dict(dataset: FortuneDataset) -> dict[str, object]:
    yearly: list[dict[str, object]] = []
    for entry in dataset.yearly_data:
        item: dict[str, object] = {
            "age": entry.age,
            "year": entry.year,
            "overall": entry.overall,
            "wealth": entry.wealth,
            "career": entry.career,
            "trend": entry.trend,
            "keyEvents": entry.key_events,
        }
        for key in ("love", "children", "health"):
            value = getattr(entry, key)
            if value is not None:
                item[key] = value
        yearly.append(item)
    return {
        "bazi": dataset.bazi,
        "summary": dataset.summary,
        "yearlyData": yearly,
        "lifePhases": {
            "childhood": dataset.life_phases.childhood,
            "youth": dataset.life_phases.youth,
            "middleAge": dataset.life_phases.middle_age,
            "oldAge": dataset.life_phases.old_age,
        },
        "criticalPoints": [{"age": p.age, "description": p.description} for p in dataset.critical_points],
    }


YEARLY_COLUMNS: tuple[str, ...] = (
    "age",
    "year",
    "overall",
    "wealth",
    "career",
    "love",
    "children",
    "health",
    "trend",
    "key_events",
)


def yearly_frame(dataset: FortuneDataset) -> pd.DataFrame:
    rows = [
        {
            "age": e.age,
            "year": e.year,
            "overall": e.overall,
            "wealth": e.wealth,
            "career": e.career,
            "love": e.love,
            "children": e.children,
            "health": e.health,
            "trend": e.trend,
            "key_events": e.key_events,
        }
        for e in dataset.yearly_data
    ]
    return pd.DataFrame(rows, columns=list(YEARLY_COLUMNS))


def _coerce_int(raw: object) -> int:
    if isinstance(raw, bool):
        raise FortuneDataError("age must be an integer, not a boolean")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise FortuneDataError(f"age must be an integer: {raw!r}")
        return int(raw)
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise FortuneDataError(f"age must be an integer: {raw!r}") from exc


def _coerce_optional_float(raw: object) -> float | None:
    if raw is None:
        return None
    return float(raw)


def non_finite_scores(entry: YearlyFortune) -> list[str]:
    """Names of the score fields of `entry` holding NaN or an infinity."""
    scores = {
        "overall": entry.overall,
        "wealth": entry.wealth,
        "career": entry.career,
        "love": entry.love,
        "children": entry.children,
        "health": entry.health,
    }
    return [name for name, value in scores.items() if value is not None and not math.isfinite(value)]


def age_order_errors(yearly_data: tuple[YearlyFortune, ...]) -> list[str]:
    errors: list[str] = []
    for prev, current in zip(yearly_data, yearly_data[1:]):
        if current.age == prev.age:
            errors.append(f"Duplicate age {current.age} in yearlyData")
        elif current.age < prev.age:
            errors.append(f"yearlyData ages must increase: {current.age} follows {prev.age}")
    return errors
