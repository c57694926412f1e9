from __future__ import annotations

from dataclasses import dataclass

import numpy as np


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class SeriesData:
    ages: np.ndarray
    values: np.ndarray
    source_name: str | None = None

    @property
    def empty(self) -> bool:
        return self.ages.size == 0


def hex_to_rgba(color: str, alpha: float = 1.0) -> RGBA:
    text = color.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) != 6:
        raise ValueError(f"unsupported hex color: {color!r}")
    r = int(text[0:2], 16)
    g = int(text[2:4], 16)
    b = int(text[4:6], 16)
    a = int(round(max(0.0, min(1.0, alpha)) * 255))
    return (r, g, b, a)
