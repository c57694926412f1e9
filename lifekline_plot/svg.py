from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from lifekline_plot.paths import PathGeometry, format_coord
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

SVG_NS = "http://www.w3.org/2000/svg"
FONT_FAMILY = "monospace"


def render_svg(primitives: ChartPrimitives) -> str:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": format_coord(primitives.width),
            "height": format_coord(primitives.height),
            "viewBox": f"0 0 {format_coord(primitives.width)} {format_coord(primitives.height)}",
        },
    )
    if primitives.background is not None:
        ET.SubElement(
            root,
            "rect",
            {"x": "0", "y": "0", "width": "100%", "height": "100%", **_paint("fill", primitives.background)},
        )
    for item in primitives.draw_order():
        _append(root, item)
    return ET.tostring(root, encoding="unicode")


def write_svg(primitives: ChartPrimitives, out_path: str | Path) -> Path:
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_svg(primitives), encoding="utf-8")
    return path


def _append(root: ET.Element, item: Primitive) -> None:
    if isinstance(item, GridLine):
        ET.SubElement(
            root,
            "line",
            {
                "x1": format_coord(item.x1),
                "y1": format_coord(item.y1),
                "x2": format_coord(item.x2),
                "y2": format_coord(item.y2),
                **_paint("stroke", item.stroke),
                "stroke-width": format_coord(item.stroke_width),
            },
        )
    elif isinstance(item, FilledRegion):
        if not item.points:
            return
        ET.SubElement(
            root,
            "path",
            {
                "d": PathGeometry(points=item.points, closed=True).to_svg_path(),
                **_paint("fill", item.fill),
                "opacity": format_coord(item.opacity),
            },
        )
    elif isinstance(item, Polyline):
        if not item.points:
            return
        ET.SubElement(
            root,
            "path",
            {
                "d": PathGeometry(points=item.points).to_svg_path(),
                "fill": "none",
                **_paint("stroke", item.stroke),
                "stroke-width": format_coord(item.stroke_width),
                "stroke-linecap": "round",
                "stroke-linejoin": "round",
            },
        )
    elif isinstance(item, CircleMarker):
        attrs = {
            "cx": format_coord(item.cx),
            "cy": format_coord(item.cy),
            "r": format_coord(item.r),
            "stroke-width": format_coord(item.stroke_width),
        }
        attrs.update(_paint("fill", item.fill) if item.fill is not None else {"fill": "none"})
        if item.stroke is not None:
            attrs.update(_paint("stroke", item.stroke))
        if item.opacity != 1.0:
            attrs["opacity"] = format_coord(item.opacity)
        if item.index is not None:
            attrs["data-index"] = str(item.index)
        ET.SubElement(root, "circle", attrs)
    elif isinstance(item, TextLabel):
        attrs = {
            "x": format_coord(item.x),
            "y": format_coord(item.y),
            **_paint("fill", item.fill),
            "font-size": format_coord(item.font_size),
            "font-family": FONT_FAMILY,
            "text-anchor": item.anchor,
        }
        if item.bold:
            attrs["font-weight"] = "bold"
        if item.rotate_deg:
            attrs["transform"] = f"rotate({item.rotate_deg}, {format_coord(item.x)}, {format_coord(item.y)})"
        elem = ET.SubElement(root, "text", attrs)
        elem.text = item.text
    elif isinstance(item, FrameRect):
        ET.SubElement(
            root,
            "rect",
            {
                "x": format_coord(item.x),
                "y": format_coord(item.y),
                "width": format_coord(item.width),
                "height": format_coord(item.height),
                "fill": "none",
                **_paint("stroke", item.stroke),
                "stroke-width": format_coord(item.stroke_width),
            },
        )
    else:
        raise TypeError(f"unsupported primitive: {type(item)!r}")


def _paint(attr: str, color: RGBA) -> dict[str, str]:
    r, g, b, a = color
    out = {attr: f"#{r:02x}{g:02x}{b:02x}"}
    if a != 255:
        out[f"{attr}-opacity"] = format_coord(round(a / 255.0, 3))
    return out
