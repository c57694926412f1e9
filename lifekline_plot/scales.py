from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


DOMAIN_MIN = 0.0
DOMAIN_MAX = 100.0

VALUE_GRID_TICKS: tuple[int, ...] = (0, 25, 50, 75, 100)
AGE_GRID_TICKS: tuple[int, ...] = tuple(range(0, 101, 10))


@dataclass(frozen=True)
class Padding:
    top: float = 60.0
    right: float = 60.0
    bottom: float = 80.0
    left: float = 80.0

    def __post_init__(self) -> None:
        if min(self.top, self.right, self.bottom, self.left) < 0:
            raise ValueError("padding values must be >= 0")


@dataclass(frozen=True)
class PlotArea:
    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("plot area width/height must be > 0")

    @classmethod
    def from_canvas(cls, width: float, height: float, padding: Padding | None = None) -> "PlotArea":
        pad = padding or Padding()
        return cls(
            left=pad.left,
            top=pad.top,
            width=width - pad.left - pad.right,
            height=height - pad.top - pad.bottom,
        )

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2

    def x_for_age(self, age: float) -> float:
        return map_age(age, self.left, self.width)

    def y_for_value(self, value: float) -> float:
        return map_value(value, self.top, self.height)

    @property
    def baseline_y(self) -> float:
        return map_value(0, self.top, self.height)


def map_age(age: float, plot_left: float, plot_width: float) -> float:
    return plot_left + (age / 100) * plot_width


def map_value(value: float, plot_top: float, plot_height: float) -> float:
    # Inverted axis: larger values render higher on the canvas.
    return plot_top + plot_height - (value / 100) * plot_height


def map_ages(ages: np.ndarray, plot_left: float, plot_width: float) -> np.ndarray:
    return plot_left + (np.asarray(ages, dtype=np.float64) / 100) * plot_width


def map_values(values: np.ndarray, plot_top: float, plot_height: float) -> np.ndarray:
    return plot_top + plot_height - (np.asarray(values, dtype=np.float64) / 100) * plot_height


def clamp_to_domain(value: float) -> float:
    return float(min(DOMAIN_MAX, max(DOMAIN_MIN, value)))


def clip_to_domain(values: np.ndarray) -> tuple[np.ndarray, int]:
    """Clip an array into the fixed [0, 100] domain.

    Returns the clipped copy and the number of entries that were out of range.
    """
    arr = np.asarray(values, dtype=np.float64)
    out_of_range = int(np.count_nonzero((arr < DOMAIN_MIN) | (arr > DOMAIN_MAX)))
    return np.clip(arr, DOMAIN_MIN, DOMAIN_MAX), out_of_range


def format_tick(value: float) -> str:
    if not math.isfinite(value):
        return f"{value:g}"
    rounded = round(float(value))
    if rounded == value:
        return str(int(rounded))
    return f"{value:g}"
