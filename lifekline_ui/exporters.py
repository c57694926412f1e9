from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from lifekline_plot.raster import save_png
from lifekline_plot.svg import write_svg

from .categories import FortuneCategory
from .chart_view import ChartConfig, derive_primitives
from .schema import FortuneDataset, yearly_frame
from .summary import render_summary_ascii, render_summary_markdown

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartExportBundle:
    svg_charts: dict[str, Path]
    png_charts: dict[str, Path]
    summary_ascii: Path
    summary_markdown: Path
    yearly_csv: Path

    def as_dict(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for category, path in self.svg_charts.items():
            out[f"svg_{category}"] = str(path)
        for category, path in self.png_charts.items():
            out[f"png_{category}"] = str(path)
        out["summary_ascii"] = str(self.summary_ascii)
        out["summary_markdown"] = str(self.summary_markdown)
        out["yearly_csv"] = str(self.yearly_csv)
        return out


def export_chart_bundle(
    dataset: FortuneDataset,
    *,
    out_dir: str | Path,
    prefix: str = "life_kline",
    config: ChartConfig | None = None,
    categories: tuple[FortuneCategory, ...] = tuple(FortuneCategory),
    png_scale: float = 1.0,
) -> ChartExportBundle:
    cfg = config or ChartConfig()
    root = Path(out_dir)
    root.mkdir(parents=True, exist_ok=True)

    svg_charts: dict[str, Path] = {}
    png_charts: dict[str, Path] = {}
    for category in categories:
        primitives = derive_primitives(dataset, category, None, cfg)
        svg_charts[category.value] = write_svg(primitives, root / f"{prefix}_{category.value}.svg")
        png_charts[category.value] = save_png(primitives, root / f"{prefix}_{category.value}.png", scale=png_scale)

    path_ascii = root / f"{prefix}_summary.txt"
    path_markdown = root / f"{prefix}_summary.md"
    path_csv = root / f"{prefix}_yearly.csv"
    path_ascii.write_text(render_summary_ascii(dataset), encoding="utf-8")
    path_markdown.write_text(render_summary_markdown(dataset), encoding="utf-8")
    yearly_frame(dataset).to_csv(path_csv, index=False)

    LOGGER.info("exported life k-line bundle to %s (%d categories)", root, len(categories))
    return ChartExportBundle(
        svg_charts=svg_charts,
        png_charts=png_charts,
        summary_ascii=path_ascii,
        summary_markdown=path_markdown,
        yearly_csv=path_csv,
    )
