from __future__ import annotations

import unittest

from lifekline_ui.categories import CATEGORY_OPTIONS, CategorySelector, FortuneCategory, category_option, category_value
from lifekline_ui.interaction import (
    HoverController,
    PointerEvent,
    build_tooltip,
    parse_pointer_event,
    visible_marker_indices,
)
from lifekline_ui.schema import FortuneDataset, YearlyFortune


def _dataset() -> FortuneDataset:
    return FortuneDataset(
        yearly_data=tuple(
            YearlyFortune(
                age=age,
                year=f"Y{age}",
                overall=50 + i,
                wealth=40 + i,
                career=30 + i,
                trend="up" if i % 2 else "flat",
                key_events=f"event {age}",
            )
            for i, age in enumerate(range(0, 101, 10))
        )
    )


class CategorySelectorTests(unittest.TestCase):
    def test_accessor_returns_selected_field(self) -> None:
        entry = YearlyFortune(age=30, overall=70, wealth=60, career=80)
        self.assertEqual(category_value(entry, FortuneCategory.OVERALL), 70)
        self.assertEqual(category_value(entry, FortuneCategory.WEALTH), 60)
        self.assertEqual(category_value(entry, FortuneCategory.CAREER), 80)

    def test_selector_switches_and_rejects_unknown(self) -> None:
        selector = CategorySelector()
        self.assertIs(selector.active, FortuneCategory.OVERALL)
        self.assertTrue(selector.select("wealth"))
        self.assertFalse(selector.select(FortuneCategory.WEALTH))
        self.assertEqual(selector.option.color, "#22c55e")
        with self.assertRaises(ValueError):
            selector.select("love")
        self.assertIs(selector.active, FortuneCategory.WEALTH)

    def test_options_cover_every_category(self) -> None:
        self.assertEqual({o.category for o in CATEGORY_OPTIONS}, set(FortuneCategory))
        self.assertEqual(category_option(FortuneCategory.OVERALL).label, "总运势")


class HoverControllerTests(unittest.TestCase):
    def test_enter_then_leave_returns_to_idle(self) -> None:
        hover = HoverController(point_count=11)
        self.assertEqual(hover.state, "idle")
        self.assertEqual(hover.pointer_enter(3), "hovering")
        self.assertEqual(hover.hovered_index, 3)
        self.assertEqual(hover.pointer_leave(3), "idle")
        self.assertIsNone(hover.hovered_index)

    def test_reentrant_enter_replaces_index_and_stale_leave_is_noop(self) -> None:
        hover = HoverController(point_count=11)
        hover.pointer_enter(4)
        hover.pointer_enter(5)
        self.assertEqual(hover.hovered_index, 5)
        self.assertEqual(hover.pointer_leave(4), "hovering")
        self.assertEqual(hover.hovered_index, 5)

    def test_out_of_range_enter_is_ignored(self) -> None:
        hover = HoverController(point_count=2)
        self.assertEqual(hover.pointer_enter(2), "idle")
        self.assertEqual(hover.pointer_enter(-1), "idle")
        hover.pointer_enter(1)
        self.assertEqual(hover.pointer_enter(7), "hovering")
        self.assertEqual(hover.hovered_index, 1)

    def test_events_dispatch_through_parser(self) -> None:
        hover = HoverController(point_count=3)
        enter = parse_pointer_event("pointer_enter", {"index": 2})
        leave = parse_pointer_event("pointer_leave", {"index": 2})
        self.assertEqual(enter, PointerEvent(phase="pointer_enter", index=2))
        assert enter is not None and leave is not None
        hover.on_event(enter)
        self.assertEqual(hover.hovered_index, 2)
        hover.on_event(leave)
        self.assertEqual(hover.state, "idle")

    def test_parser_rejects_unknown_events(self) -> None:
        self.assertIsNone(parse_pointer_event("click", {"index": 1}))
        self.assertIsNone(parse_pointer_event("pointer_enter", {"index": "1"}))
        self.assertIsNone(parse_pointer_event("pointer_enter", {"index": True}))
        self.assertIsNone(parse_pointer_event("pointer_leave", None))

    def test_reset_and_invalid_construction(self) -> None:
        hover = HoverController(point_count=3, hovered_index=1)
        self.assertEqual(hover.reset(point_count=0), "idle")
        self.assertEqual(hover.pointer_enter(0), "idle")
        with self.assertRaises(ValueError):
            HoverController(point_count=2, hovered_index=5)


class VisibleMarkerTests(unittest.TestCase):
    def test_stride_samples_indices_not_ages(self) -> None:
        self.assertEqual(visible_marker_indices(11, None, 5), (0, 5, 10))
        self.assertEqual(visible_marker_indices(11, 3, 5), (0, 3, 5, 10))
        self.assertEqual(visible_marker_indices(11, 5, 5), (0, 5, 10))
        self.assertEqual(visible_marker_indices(4, None, 1), (0, 1, 2, 3))
        self.assertEqual(visible_marker_indices(0, None, 5), ())

    def test_invalid_stride_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            visible_marker_indices(11, None, 0)


class TooltipTests(unittest.TestCase):
    def test_tooltip_only_while_hovering(self) -> None:
        dataset = _dataset()
        self.assertIsNone(build_tooltip(dataset, None, FortuneCategory.OVERALL))
        self.assertIsNone(build_tooltip(dataset, 11, FortuneCategory.OVERALL))

        tooltip = build_tooltip(dataset, 3, FortuneCategory.WEALTH)
        assert tooltip is not None
        self.assertEqual(tooltip.age, 30)
        self.assertEqual(tooltip.year_label, "Y30")
        self.assertEqual(tooltip.trend, "up")
        self.assertEqual(tooltip.category_value, 43)
        self.assertEqual(tooltip.key_events, "event 30")


if __name__ == "__main__":
    unittest.main()
