from __future__ import annotations

from dataclasses import dataclass

from .schema import TREND_LABELS, FortuneDataset

LIFE_PHASE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("childhood", "童年期 (0-18岁)"),
    ("youth", "青年期 (19-35岁)"),
    ("middle_age", "中年期 (36-60岁)"),
    ("old_age", "老年期 (61-100岁)"),
)


@dataclass(frozen=True)
class SummaryRenderConfig:
    title: str = "百岁流年走势图 (100年)"
    include_yearly_table: bool = True
    max_text_chars: int = 80

    def __post_init__(self) -> None:
        if self.max_text_chars < 12:
            raise ValueError("max_text_chars must be >= 12")


def render_summary_ascii(dataset: FortuneDataset, config: SummaryRenderConfig | None = None) -> str:
    cfg = config or SummaryRenderConfig()
    lines: list[str] = []
    lines.append(cfg.title)
    lines.append(f"八字命盘: {dataset.bazi or '-'}")
    lines.append(f"命理摘要: {_clip(dataset.summary, cfg.max_text_chars) or '-'}")

    lines.append("")
    lines.append("[人生阶段运势总结]")
    for attr, label in LIFE_PHASE_SECTIONS:
        text = getattr(dataset.life_phases, attr)
        lines.append(f"{label}: {_clip(text, cfg.max_text_chars) or '-'}")

    lines.append("")
    lines.append("[人生关键转折点]")
    if dataset.critical_points:
        for point in dataset.critical_points:
            lines.append(f"  - {point.age}岁: {_clip(point.description, cfg.max_text_chars)}")
    else:
        lines.append("  (none)")

    if cfg.include_yearly_table and dataset.yearly_data:
        lines.append("")
        lines.append("[流年数据]")
        lines.append(f"{'age':>4} {'year':<6} {'overall':>7} {'wealth':>7} {'career':>7} trend")
        for entry in dataset.yearly_data:
            lines.append(
                f"{entry.age:>4} {entry.year:<6} {entry.overall:>7g} {entry.wealth:>7g} {entry.career:>7g} "
                f"{TREND_LABELS[entry.trend]}"
            )

    return "\n".join(lines) + "\n"


def render_summary_markdown(dataset: FortuneDataset, config: SummaryRenderConfig | None = None) -> str:
    cfg = config or SummaryRenderConfig()
    lines: list[str] = []
    lines.append(f"# {cfg.title}")
    lines.append("")
    lines.append(f"**八字命盘**: {dataset.bazi or '-'}")
    lines.append("")
    lines.append(f"**命理摘要**: {dataset.summary or '-'}")
    lines.append("")
    lines.append("## 人生阶段运势总结")
    lines.append("")
    for attr, label in LIFE_PHASE_SECTIONS:
        text = getattr(dataset.life_phases, attr)
        lines.append(f"- **{label}**: {text or '-'}")
    lines.append("")

    if dataset.critical_points:
        lines.append("## 人生关键转折点")
        lines.append("")
        for point in dataset.critical_points:
            lines.append(f"- **{point.age}岁**: {point.description}")
        lines.append("")

    if cfg.include_yearly_table and dataset.yearly_data:
        lines.append("## 流年数据")
        lines.append("")
        lines.append("| 年龄 | 年份 | 总运势 | 财运 | 事业 | 趋势 | 流年详批 |")
        lines.append("| --- | --- | --- | --- | --- | --- | --- |")
        for entry in dataset.yearly_data:
            lines.append(
                f"| {entry.age} | {entry.year} | {entry.overall:g} | {entry.wealth:g} | {entry.career:g} | "
                f"{TREND_LABELS[entry.trend]} | {_escape_cell(entry.key_events)} |"
            )
        lines.append("")

    return "\n".join(lines)


def _clip(text: str, limit: int) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")
