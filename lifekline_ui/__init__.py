"""Fortune dataset contracts, selection state and the life k-line chart view."""

from .categories import (
    CATEGORY_OPTIONS,
    CategoryOption,
    CategorySelector,
    FortuneCategory,
    category_option,
    category_value,
    coerce_category,
)
from .chart_view import ChartConfig, ChartView, derive_primitives
from .exporters import ChartExportBundle, export_chart_bundle
from .geometry import build_annotations, build_paths, category_series
from .interaction import (
    HoverController,
    PointerEvent,
    Tooltip,
    build_tooltip,
    parse_pointer_event,
    visible_marker_indices,
)
from .schema import (
    FORTUNE_DATASET_JSON_SCHEMA,
    CriticalPoint,
    FortuneDataset,
    LifePhases,
    YearlyFortune,
    dataset_from_dict,
    dataset_from_json,
    dataset_to_dict,
    fortune_dataset_schema,
    load_dataset,
    yearly_frame,
)
from .summary import SummaryRenderConfig, render_summary_ascii, render_summary_markdown
from .validation import ValidationReport, require_valid_dataset, validate_dataset

__all__ = [
    "CATEGORY_OPTIONS",
    "CategoryOption",
    "CategorySelector",
    "ChartConfig",
    "ChartExportBundle",
    "ChartView",
    "CriticalPoint",
    "FORTUNE_DATASET_JSON_SCHEMA",
    "FortuneCategory",
    "FortuneDataset",
    "HoverController",
    "LifePhases",
    "PointerEvent",
    "SummaryRenderConfig",
    "Tooltip",
    "ValidationReport",
    "YearlyFortune",
    "build_annotations",
    "build_paths",
    "build_tooltip",
    "category_option",
    "category_series",
    "category_value",
    "coerce_category",
    "dataset_from_dict",
    "dataset_from_json",
    "dataset_to_dict",
    "derive_primitives",
    "export_chart_bundle",
    "fortune_dataset_schema",
    "load_dataset",
    "parse_pointer_event",
    "render_summary_ascii",
    "render_summary_markdown",
    "require_valid_dataset",
    "validate_dataset",
    "visible_marker_indices",
    "yearly_frame",
]
