from __future__ import annotations

import math
import unittest

import numpy as np

from chartaxis import Axis, FixedLabelMeasurer, LinearTickGenerator, Log10DataTransform, LogTickGenerator, Range


class _FixedTicks:
    def __init__(self, ticks: list[float]) -> None:
        self.ticks = ticks

    def begin_pass(self, value_range: Range) -> None:
        pass

    def get_ticks(self, value_range: Range) -> np.ndarray:
        return np.asarray(self.ticks, dtype=np.float64)

    def get_minor_ticks(self, value_range: Range) -> np.ndarray:
        return np.empty(0, dtype=np.float64)

    def increase_density(self) -> None:
        pass

    def decrease_density(self) -> None:
        pass


class AxisLayoutTests(unittest.TestCase):
    def test_bottom_axis_centers_labels_under_ticks(self) -> None:
        axis = Axis(orientation="bottom").set_range(0.0, 100.0)
        layout = axis.layout(400.0, 60.0)
        ticks = layout.arrangement.major_ticks
        self.assertEqual(len(layout.major_segments), len(ticks))
        self.assertEqual(len(layout.labels), len(ticks))
        for seg, label, tick in zip(layout.major_segments, layout.labels, ticks, strict=True):
            x = tick * 4.0
            self.assertAlmostEqual(seg.start[0], x)
            self.assertEqual((seg.start[1], seg.end[1]), (0.0, 10.0))
            self.assertAlmostEqual(label.x + label.width / 2.0, x)
            self.assertEqual(label.y, 10.0)
        max_h = max(label.height for label in layout.labels)
        self.assertEqual((layout.width, layout.height), (400.0, 10.0 + max_h))

    def test_top_axis_puts_ticks_on_lower_edge(self) -> None:
        layout = Axis(orientation="top").set_range(0.0, 10.0).layout(300.0, 40.0)
        for seg in layout.major_segments:
            self.assertEqual(seg.end[1], layout.height)
            self.assertEqual(seg.start[1], layout.height - 10.0)
        self.assertTrue(all(label.y == 0.0 for label in layout.labels))

    def test_left_axis_right_aligns_labels_before_ticks(self) -> None:
        layout = Axis(orientation="left").set_range(0.0, 100.0).layout(80.0, 300.0)
        max_w = max(label.width for label in layout.labels)
        self.assertEqual(layout.width, 10.0 + max_w + 5.0)
        self.assertEqual(layout.height, 300.0)
        for label in layout.labels:
            self.assertAlmostEqual(label.x + label.width, max_w)
        for seg in layout.major_segments:
            self.assertEqual(seg.end[0], layout.width)
            self.assertEqual(seg.start[1], seg.end[1])

    def test_right_axis_mirrors_vertical_coordinates(self) -> None:
        layout = Axis(orientation="right").set_range(0.0, 100.0).layout(80.0, 300.0)
        by_tick = {label.tick: label for label in layout.labels}
        self.assertAlmostEqual(by_tick[0.0].y + by_tick[0.0].height / 2.0, 300.0)
        self.assertAlmostEqual(by_tick[100.0].y + by_tick[100.0].height / 2.0, 0.0)
        self.assertTrue(all(label.x == 15.0 for label in layout.labels))

    def test_reversed_axis_flips_label_order(self) -> None:
        layout = Axis().set_range(0.0, 100.0).set_reversed(True).layout(400.0, 40.0)
        by_tick = {label.tick: label for label in layout.labels}
        self.assertGreater(by_tick[0.0].x, by_tick[100.0].x)

    def test_explicit_ticks_replace_arranged_labels(self) -> None:
        layout = Axis().set_range(0.0, 100.0).set_ticks([0.0, 33.0, 66.0]).layout(400.0, 40.0)
        self.assertEqual([label.tick for label in layout.labels], [0.0, 33.0, 66.0])
        self.assertEqual([label.text for label in layout.labels], ["0", "33", "66"])

    def test_hidden_ticks_draw_no_segments(self) -> None:
        layout = Axis().set_range(0.0, 100.0).set_ticks_visible(False).layout(400.0, 40.0)
        self.assertEqual(layout.major_segments, ())
        self.assertEqual(layout.minor_segments, ())
        self.assertGreater(len(layout.labels), 0)

    def test_minor_ticks_visibility_flag(self) -> None:
        axis = Axis().set_range(0.0, 100.0)
        self.assertGreater(len(axis.layout(400.0, 40.0).minor_segments), 0)
        axis.set_minor_ticks_visible(False)
        self.assertEqual(axis.layout(400.0, 40.0).minor_segments, ())

    def test_minor_segments_are_shorter(self) -> None:
        layout = Axis().set_range(0.0, 100.0).layout(400.0, 40.0)
        for seg in layout.minor_segments:
            self.assertEqual(seg.end[1] - seg.start[1], 5.0)

    def test_point_range_has_one_centered_label(self) -> None:
        layout = Axis().set_range(5.0, 5.0).layout(400.0, 40.0)
        self.assertEqual(layout.arrangement.major_ticks, (5.0,))
        self.assertEqual(layout.minor_segments, ())
        self.assertEqual(len(layout.labels), 1)
        label = layout.labels[0]
        self.assertAlmostEqual(label.x + label.width / 2.0, 200.0)

    def test_unbounded_size_falls_back_to_default_extent(self) -> None:
        layout = Axis().set_range(0.0, 1.0).layout(math.inf, math.inf)
        self.assertEqual(layout.width, 128.0)

    def test_max_ticks_bound_respected(self) -> None:
        axis = Axis(tick_generator=LinearTickGenerator(initial_level=6)).set_range(0.0, 100.0).set_max_ticks(5)
        layout = axis.layout(2000.0, 40.0)
        self.assertLessEqual(len(layout.arrangement.major_ticks), 5)

    def test_zero_length_axis_has_no_geometry(self) -> None:
        layout = Axis().set_range(0.0, 100.0).layout(0.0, 40.0)
        self.assertEqual(layout.major_segments, ())
        self.assertEqual(layout.labels, ())
        self.assertGreater(len(layout.arrangement.major_ticks), 0)

    def test_log_axis_labels_data_values(self) -> None:
        axis = Axis(
            value_range=Range(0.0, 3.0),
            data_transform=Log10DataTransform(),
            tick_generator=LogTickGenerator(),
        )
        layout = axis.layout(600.0, 40.0)
        ticks = layout.arrangement.major_ticks
        self.assertIn(1.0, ticks)
        self.assertIn(1000.0, ticks)
        self.assertTrue(all(t > 0 for t in ticks))
        texts = {label.tick: label.text for label in layout.labels}
        self.assertEqual(texts[1000.0], "1000")

    def test_injected_measurer_sizes_labels(self) -> None:
        axis = Axis(measurer=FixedLabelMeasurer(30.0)).set_range(0.0, 100.0)
        layout = axis.layout(400.0, 40.0)
        self.assertEqual(layout.arrangement.major_ticks, (0.0, 20.0, 40.0, 60.0, 80.0, 100.0))
        self.assertTrue(all(label.width == 30.0 for label in layout.labels))
        self.assertEqual(layout.height, 40.0)

    def test_first_major_tick_below_range_is_not_drawn(self) -> None:
        axis = Axis(tick_generator=_FixedTicks([-10.0, 0.0, 50.0, 100.0]), measurer=FixedLabelMeasurer(1.0))
        layout = axis.set_range(0.0, 100.0).layout(400.0, 40.0)
        self.assertEqual(len(layout.major_segments), 3)
        self.assertEqual(layout.major_segments[0].start[0], 0.0)
        self.assertEqual([label.tick for label in layout.labels], [-10.0, 0.0, 50.0, 100.0])

    def test_label_precision_follows_tick_spacing(self) -> None:
        layout = Axis().set_range(0.0, 1.0).set_ticks([0.0, 0.25, 0.5]).layout(400.0, 40.0)
        self.assertEqual([label.text for label in layout.labels], ["0", "0.25", "0.5"])

    def test_formatter_overrides_default_text(self) -> None:
        axis = Axis(formatter=lambda v: f"{v:.0f}%").set_range(0.0, 100.0).set_ticks([0.0, 50.0])
        layout = axis.layout(400.0, 40.0)
        self.assertEqual([label.text for label in layout.labels], ["0%", "50%"])

    def test_infinite_range_lays_out_unit_interval(self) -> None:
        layout = Axis(measurer=FixedLabelMeasurer(30.0)).set_range(0.0, math.inf).layout(400.0, 40.0)
        ticks = layout.arrangement.major_ticks
        self.assertEqual(ticks[0], 0.0)
        self.assertAlmostEqual(ticks[-1], 1.0)
        self.assertTrue(all(0.0 <= seg.start[0] <= 400.0 for seg in layout.major_segments))

    def test_invalid_orientation_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Axis(orientation="diagonal")  # type: ignore[arg-type]

    def test_max_ticks_below_two_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Axis().set_max_ticks(1)


if __name__ == "__main__":
    unittest.main()
