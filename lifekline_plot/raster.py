from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from lifekline_plot.primitives import (
    ChartPrimitives,
    CircleMarker,
    FilledRegion,
    FrameRect,
    GridLine,
    Polyline,
    Primitive,
    TextLabel,
)
from lifekline_plot.series import RGBA


DEFAULT_BACKGROUND: RGBA = (0, 0, 0, 230)
FONT_FALLBACK_PATTERNS = (
    "notosanscjk",
    "noto sans cjk",
    "notosanssc",
    "sourcehansans",
    "wqy",
    "pingfang",
    "hiragino sans gb",
    "microsoft yahei",
    "dejavusansmono",
    "dejavu sans mono",
    "menlo",
)

_ANCHOR_FRACTION = {"start": 0.0, "middle": 0.5, "end": 1.0}


def rasterize(primitives: ChartPrimitives, *, scale: float = 1.0) -> np.ndarray:
    """Draw a primitive set into an RGBA array of shape (height, width, 4)."""
    if scale <= 0:
        raise ValueError("scale must be > 0")
    size = (max(1, int(round(primitives.width * scale))), max(1, int(round(primitives.height * scale))))
    background = primitives.background if primitives.background is not None else DEFAULT_BACKGROUND
    image = Image.new("RGBA", size, background)
    for item in primitives.draw_order():
        layer = _draw_layer(item, size=size, scale=scale)
        if layer is not None:
            image = Image.alpha_composite(image, layer)
    return np.asarray(image, dtype=np.uint8).copy()


def save_png(primitives: ChartPrimitives, out_path: str | Path, *, scale: float = 1.0) -> Path:
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(rasterize(primitives, scale=scale)).save(path)
    return path


def _draw_layer(item: Primitive, *, size: tuple[int, int], scale: float) -> Image.Image | None:
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    opacity = 1.0

    if isinstance(item, GridLine):
        draw.line(
            [(item.x1 * scale, item.y1 * scale), (item.x2 * scale, item.y2 * scale)],
            fill=item.stroke,
            width=_px(item.stroke_width, scale),
        )
    elif isinstance(item, FilledRegion):
        if len(item.points) < 3:
            return None
        draw.polygon([(x * scale, y * scale) for x, y in item.points], fill=item.fill)
        opacity = item.opacity
    elif isinstance(item, Polyline):
        if len(item.points) < 2:
            return None
        draw.line(
            [(x * scale, y * scale) for x, y in item.points],
            fill=item.stroke,
            width=_px(item.stroke_width, scale),
            joint="curve",
        )
    elif isinstance(item, CircleMarker):
        r = item.r * scale
        draw.ellipse(
            [item.cx * scale - r, item.cy * scale - r, item.cx * scale + r, item.cy * scale + r],
            fill=item.fill,
            outline=item.stroke,
            width=_px(item.stroke_width, scale) if item.stroke is not None else 0,
        )
        opacity = item.opacity
    elif isinstance(item, FrameRect):
        draw.rectangle(
            [item.x * scale, item.y * scale, (item.x + item.width) * scale, (item.y + item.height) * scale],
            outline=item.stroke,
            width=_px(item.stroke_width, scale),
        )
    elif isinstance(item, TextLabel):
        if not item.text:
            return None
        _draw_text(layer, item, scale=scale)
    else:
        raise TypeError(f"unsupported primitive: {type(item)!r}")

    if opacity < 1.0:
        alpha = layer.getchannel("A").point(lambda v: int(v * max(0.0, opacity)))
        layer.putalpha(alpha)
    return layer


def _draw_text(layer: Image.Image, item: TextLabel, *, scale: float) -> None:
    font = _load_font(item.font_size * scale)
    probe = ImageDraw.Draw(layer)
    left, top, right, bottom = probe.textbbox((0, 0), item.text, font=font)
    w = max(1, int(right - left))
    h = max(1, int(bottom - top))
    stroke = 1 if item.bold else 0

    patch = Image.new("RGBA", (w + 2 * stroke, h + 2 * stroke), (0, 0, 0, 0))
    ImageDraw.Draw(patch).text(
        (stroke - left, stroke - top),
        item.text,
        fill=item.fill,
        font=font,
        stroke_width=stroke,
        stroke_fill=item.fill,
    )
    if item.rotate_deg:
        # SVG rotates clockwise for positive angles, Pillow counter-clockwise.
        patch = patch.rotate(-item.rotate_deg, expand=True)
        x0 = int(round(item.x * scale - patch.width / 2))
        y0 = int(round(item.y * scale - patch.height / 2))
    else:
        # Text y is the baseline, as in SVG.
        x0 = int(round(item.x * scale - patch.width * _ANCHOR_FRACTION[item.anchor]))
        y0 = int(round(item.y * scale - patch.height))
    # Clip at the canvas edge like SVG does; Pillow rejects negative destinations.
    src_x, src_y = max(0, -x0), max(0, -y0)
    if src_x >= patch.width or src_y >= patch.height:
        return
    layer.alpha_composite(patch, dest=(max(0, x0), max(0, y0)), source=(src_x, src_y))


def _px(width: float, scale: float) -> int:
    return max(1, int(round(width * scale)))


@lru_cache(maxsize=64)
def _load_font(font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path()
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError:
            pass
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=1)
def _resolve_font_path() -> Path | None:
    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in FONT_FALLBACK_PATTERNS:
        p = pattern.replace(" ", "")
        for path in sorted(candidates):
            name = path.name.lower().replace(" ", "")
            if p in name:
                return path
    return None
