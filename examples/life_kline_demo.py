from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from lifekline_ui import ChartView, export_chart_bundle, load_dataset, parse_pointer_event


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render the life k-line chart for a fortune dataset.")
    parser.add_argument("--dataset", default=str(Path(__file__).with_name("sample_fortune.json")))
    parser.add_argument("--export-dir", default="examples/out")
    parser.add_argument("--hover", type=int, default=None, help="index of the point to hover in the preview")
    return parser.parse_args()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args()
    dataset = load_dataset(args.dataset)

    bundle = export_chart_bundle(dataset, out_dir=args.export_dir)

    view = ChartView(dataset)
    if args.hover is not None:
        event = parse_pointer_event("pointer_enter", {"index": args.hover})
        if event is not None:
            view.handle_event(event)
    preview = Path(args.export_dir) / "life_kline_preview.svg"
    preview.write_text(view.to_svg(), encoding="utf-8")

    print("Artifacts:")
    for key, value in bundle.as_dict().items():
        print(f"- {key}: {value}")
    print(f"- preview: {preview}")
    if view.tooltip is not None:
        tip = view.tooltip
        print(f"Hovered: age={tip.age} year={tip.year_label} trend={tip.trend} {tip.category.value}={tip.category_value:g}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
