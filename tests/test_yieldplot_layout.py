from __future__ import annotations

import unittest

from yieldplot import PlotDataError
from yieldplot.layout import (
    Margins,
    ValueAxis,
    anchor_points,
    compute_layout,
    horizontal_gridlines,
    map_x,
    map_y,
    vertical_gridlines,
)
from yieldplot.scales import MAX_GRIDLINES, format_axis_value, format_point_value, gridline_values
from yieldplot.series import YieldPoint


class LayoutEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.axis = ValueAxis(min=3.6, max=5.0)
        self.area = compute_layout(980, 520, self.axis)

    def test_plot_area_sits_inside_fixed_margins(self) -> None:
        self.assertEqual((self.area.left, self.area.top), (95.0, 80.0))
        self.assertEqual((self.area.width, self.area.height), (790.0, 360.0))
        self.assertEqual((self.area.right, self.area.bottom), (885.0, 440.0))
        self.assertFalse(self.area.is_empty)

    def test_surface_smaller_than_margins_degenerates_to_empty_area(self) -> None:
        area = compute_layout(150, 100, self.axis)
        self.assertTrue(area.is_empty)
        self.assertEqual((area.width, area.height), (0.0, 0.0))

    def test_custom_margins(self) -> None:
        area = compute_layout(200, 100, self.axis, Margins(left=10, top=5, right=20, bottom=15))
        self.assertEqual((area.left, area.top, area.width, area.height), (10.0, 5.0, 170.0, 80.0))

    def test_axis_endpoints_map_exactly_to_plot_edges(self) -> None:
        for axis in (ValueAxis(3.6, 5.0), ValueAxis(1.0, 7.0), ValueAxis(0.1, 0.3)):
            area = compute_layout(980, 520, axis)
            self.assertEqual(map_y(axis.min, axis, area), area.bottom)
            self.assertEqual(map_y(axis.max, axis, area), area.top)

    def test_wide_axis_range_endpoints(self) -> None:
        axis = ValueAxis(1.0, 7.0)
        area = compute_layout(980, 520, axis)
        self.assertEqual(map_y(7.0, axis, area), area.top)
        self.assertEqual(map_y(1.0, axis, area), area.bottom)
        self.assertAlmostEqual(map_y(4.0, axis, area), (area.top + area.bottom) / 2.0, places=9)

    def test_values_outside_axis_are_not_clamped(self) -> None:
        self.assertLess(map_y(5.5, self.axis, self.area), self.area.top)
        self.assertGreater(map_y(3.0, self.axis, self.area), self.area.bottom)

    def test_single_point_maps_to_plot_left(self) -> None:
        self.assertEqual(map_x(0, 1, self.area), self.area.left)

    def test_x_mapping_spans_plot_width_and_is_monotonic(self) -> None:
        for count in (2, 3, 7, 14):
            xs = [map_x(i, count, self.area) for i in range(count)]
            self.assertEqual(xs[0], self.area.left)
            self.assertEqual(xs[-1], self.area.right)
            self.assertEqual(xs, sorted(xs))

    def test_x_mapping_rejects_out_of_range_index(self) -> None:
        with self.assertRaises(PlotDataError):
            map_x(3, 3, self.area)
        with self.assertRaises(PlotDataError):
            map_x(0, 0, self.area)

    def test_invalid_axis_range_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            ValueAxis(5.0, 5.0)
        with self.assertRaises(PlotDataError):
            ValueAxis(5.0, 3.6)

    def test_three_point_scenario_orders_anchors(self) -> None:
        points = [YieldPoint("1M", 5.20), YieldPoint("2Y", 4.10), YieldPoint("10Y", 4.50)]
        anchors = anchor_points(points, self.axis, self.area)
        self.assertEqual(len(anchors), 3)
        self.assertLess(anchors[0].x, anchors[1].x)
        self.assertLess(anchors[1].x, anchors[2].x)
        y_1m, y_2y, y_10y = (a.y for a in anchors)
        self.assertLess(y_1m, y_10y)
        self.assertLess(y_10y, y_2y)
        self.assertEqual([a.value for a in anchors], [5.20, 4.10, 4.50])

    def test_horizontal_gridlines_cover_axis_inclusively(self) -> None:
        lines = horizontal_gridlines(self.axis, 0.2, self.area)
        self.assertEqual(len(lines), 8)
        self.assertAlmostEqual(lines[0][0], 3.6, places=9)
        self.assertEqual(lines[-1][0], 5.0)
        self.assertEqual(lines[0][1], self.area.bottom)
        self.assertEqual(lines[-1][1], self.area.top)

    def test_vertical_gridlines_one_per_index(self) -> None:
        self.assertEqual(vertical_gridlines(4, self.area), tuple(map_x(i, 4, self.area) for i in range(4)))
        self.assertEqual(vertical_gridlines(1, self.area), (self.area.left,))
        self.assertEqual(vertical_gridlines(0, self.area), ())


class ScalesTests(unittest.TestCase):
    def test_gridline_values_integer_step(self) -> None:
        self.assertEqual(gridline_values(1.0, 7.0, 1.0).tolist(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0])

    def test_gridline_values_step_not_dividing_range(self) -> None:
        values = gridline_values(1.0, 2.0, 0.3).tolist()
        self.assertEqual(len(values), 4)
        self.assertLessEqual(values[-1], 2.0)

    def test_gridline_values_reject_non_positive_step(self) -> None:
        with self.assertRaises(PlotDataError):
            gridline_values(1.0, 2.0, 0.0)
        with self.assertRaises(PlotDataError):
            gridline_values(1.0, 2.0, -0.5)

    def test_gridline_values_reject_excessive_count(self) -> None:
        self.assertEqual(len(gridline_values(0.0, 999.0, 1.0)), MAX_GRIDLINES)
        with self.assertRaises(PlotDataError):
            gridline_values(0.0, 1000.0, 1.0)
        with self.assertRaises(PlotDataError):
            gridline_values(3.6, 5.0, 1e-9)
        with self.assertRaises(PlotDataError):
            gridline_values(3.6, 5.0, 1e-320)

    def test_axis_values_use_one_decimal_and_percent(self) -> None:
        self.assertEqual(format_axis_value(3.6), "3.6%")
        self.assertEqual(format_axis_value(4.0), "4.0%")
        self.assertEqual(format_axis_value(3.8000000000000003), "3.8%")

    def test_point_values_use_two_decimals_and_percent(self) -> None:
        self.assertEqual(format_point_value(4.1), "4.10%")
        self.assertEqual(format_point_value(5.2), "5.20%")
        self.assertEqual(format_point_value(4.245), "4.25%")
        self.assertEqual(format_point_value(-0.001), "0.00%")


if __name__ == "__main__":
    unittest.main()
