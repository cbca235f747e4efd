from __future__ import annotations

import unittest

from yieldplot import PlotDataError
from yieldplot.labels import LabelTuning, place_label, place_labels
from yieldplot.layout import PlotArea
from yieldplot.series import AnchorPoint


AREA = PlotArea(left=95.0, top=80.0, width=790.0, height=360.0)


class LabelPlacementTests(unittest.TestCase):
    def test_interior_label_is_centered_and_lifted(self) -> None:
        placement = place_label(AnchorPoint(x=400.0, y=300.0, value=4.2), 1, 3, AREA)
        self.assertEqual(placement.align, "center")
        self.assertEqual(placement.x, 400.0)
        self.assertEqual(placement.y, 268.0)

    def test_first_label_starts_right_of_anchor(self) -> None:
        placement = place_label(AnchorPoint(x=300.0, y=300.0, value=4.2), 0, 3, AREA)
        self.assertEqual(placement.align, "left")
        self.assertEqual(placement.x, 310.0)

    def test_last_label_ends_left_of_anchor(self) -> None:
        placement = place_label(AnchorPoint(x=600.0, y=300.0, value=4.2), 2, 3, AREA)
        self.assertEqual(placement.align, "right")
        self.assertEqual(placement.x, 590.0)

    def test_single_point_is_treated_as_first(self) -> None:
        placement = place_label(AnchorPoint(x=AREA.left, y=300.0, value=4.2), 0, 1, AREA)
        self.assertEqual(placement.align, "left")
        self.assertEqual(placement.x, AREA.left + 10.0)

    def test_edge_labels_clamp_horizontally(self) -> None:
        tuning = LabelTuning(edge_offset=0.0, inset_x=10.0)
        first = place_label(AnchorPoint(x=AREA.left, y=300.0, value=1.0), 0, 3, AREA, tuning)
        last = place_label(AnchorPoint(x=AREA.right, y=300.0, value=1.0), 2, 3, AREA, tuning)
        self.assertEqual(first.x, AREA.left + 10.0)
        self.assertEqual(last.x, AREA.right - 10.0)

    def test_label_y_stays_inside_inset_for_any_anchor(self) -> None:
        lo = AREA.top + 16.0
        hi = AREA.bottom - 16.0
        for anchor_y in (-10_000.0, -50.0, 0.0, 80.0, 95.0, 120.0, 260.0, 439.0, 440.0, 600.0, 10_000.0):
            for index in range(3):
                placement = place_label(AnchorPoint(x=400.0, y=anchor_y, value=0.0), index, 3, AREA)
                self.assertGreaterEqual(placement.y, lo, msg=f"anchor_y={anchor_y}")
                self.assertLessEqual(placement.y, hi, msg=f"anchor_y={anchor_y}")

    def test_label_x_stays_inside_inset(self) -> None:
        for anchor_x in (-500.0, AREA.left, 500.0, AREA.right, 5_000.0):
            for index in range(3):
                placement = place_label(AnchorPoint(x=anchor_x, y=300.0, value=0.0), index, 3, AREA)
                self.assertGreaterEqual(placement.x, AREA.left + 10.0)
                self.assertLessEqual(placement.x, AREA.right - 10.0)

    def test_min_gap_pushes_label_away_from_anchor(self) -> None:
        tuning = LabelTuning(lift=5.0, min_gap=12.0, min_gap_push=20.0)
        placement = place_label(AnchorPoint(x=400.0, y=300.0, value=4.0), 1, 3, AREA, tuning)
        self.assertEqual(placement.y, 280.0)

    def test_min_gap_push_is_reclamped_near_plot_top(self) -> None:
        tuning = LabelTuning(lift=5.0, min_gap=12.0, min_gap_push=20.0)
        placement = place_label(AnchorPoint(x=400.0, y=100.0, value=4.9), 1, 3, AREA, tuning)
        self.assertEqual(placement.y, AREA.top + 16.0)

    def test_anchor_near_top_clamps_label_to_inset(self) -> None:
        placement = place_label(AnchorPoint(x=400.0, y=90.0, value=4.95), 1, 3, AREA)
        self.assertEqual(placement.y, AREA.top + 16.0)

    def test_place_labels_is_pure(self) -> None:
        anchors = (
            AnchorPoint(x=95.0, y=160.0, value=4.6),
            AnchorPoint(x=490.0, y=300.0, value=4.2),
            AnchorPoint(x=885.0, y=250.0, value=4.4),
        )
        first = place_labels(anchors, AREA)
        second = place_labels(anchors, AREA)
        self.assertEqual(first, second)
        self.assertEqual([p.align for p in first], ["left", "center", "right"])

    def test_rejects_out_of_range_index(self) -> None:
        with self.assertRaises(PlotDataError):
            place_label(AnchorPoint(x=1.0, y=1.0, value=1.0), 3, 3, AREA)

    def test_tuning_rejects_push_smaller_than_gap(self) -> None:
        with self.assertRaises(PlotDataError):
            LabelTuning(min_gap=24.0, min_gap_push=10.0)
        with self.assertRaises(PlotDataError):
            LabelTuning(lift=-1.0)


if __name__ == "__main__":
    unittest.main()
