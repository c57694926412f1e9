from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .schema import YearlyFortune


class FortuneCategory(str, Enum):
    OVERALL = "overall"
    WEALTH = "wealth"
    CAREER = "career"


@dataclass(frozen=True)
class CategoryOption:
    category: FortuneCategory
    label: str
    color: str


CATEGORY_OPTIONS: tuple[CategoryOption, ...] = (
    CategoryOption(FortuneCategory.OVERALL, "总运势", "#8b5cf6"),
    CategoryOption(FortuneCategory.WEALTH, "财运", "#22c55e"),
    CategoryOption(FortuneCategory.CAREER, "事业", "#3b82f6"),
)

DEFAULT_CATEGORY = FortuneCategory.OVERALL


def category_value(entry: YearlyFortune, category: FortuneCategory) -> float:
    match category:
        case FortuneCategory.OVERALL:
            return entry.overall
        case FortuneCategory.WEALTH:
            return entry.wealth
        case FortuneCategory.CAREER:
            return entry.career
    raise ValueError(f"Unsupported fortune category: {category!r}")


def coerce_category(raw: FortuneCategory | str) -> FortuneCategory:
    if isinstance(raw, FortuneCategory):
        return raw
    try:
        return FortuneCategory(str(raw).strip().lower())
    except ValueError as exc:
        choices = ", ".join(c.value for c in FortuneCategory)
        raise ValueError(f"category must be one of: {choices}") from exc


def category_option(category: FortuneCategory) -> CategoryOption:
    for option in CATEGORY_OPTIONS:
        if option.category is category:
            return option
    raise ValueError(f"Unsupported fortune category: {category!r}")


@dataclass
class CategorySelector:
    """Holds the single active metric; switching never touches hover state."""

    active: FortuneCategory = DEFAULT_CATEGORY

    def select(self, category: FortuneCategory | str) -> bool:
        target = coerce_category(category)
        if target is self.active:
            return False
        self.active = target
        return True

    @property
    def option(self) -> CategoryOption:
        return category_option(self.active)

    def value_of(self, entry: YearlyFortune) -> float:
        return category_value(entry, self.active)
