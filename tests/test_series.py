import math

import numpy as np
import pytest

from plotview.canvas import color_to_scalar, new_buffer
from plotview.color import WHITE, Color
from plotview.series import Bounds, Point2, Point3, Series, SeriesType


def _white_buffer(size=50):
    return new_buffer(size, size, color_to_scalar(WHITE))


def _draw(series, buffer, unit=1, offset=0.0):
    series.draw(buffer, 0, 49, 0, 49, 1.0, 0.0, 1.0, 0.0, 0.0, 0.0, unit, offset)


def _open_bounds():
    return Bounds(math.inf, -math.inf, math.inf, -math.inf)


def test_add_value_keys_continue_after_existing_entries():
    s = Series("a")
    s.add_value([1.5, 2.5]).add_value([3.5])
    assert s.rows == [(0.0, 1.5), (1.0, 2.5), (2.0, 3.5)]
    assert (s.dims, s.depth) == (1, 1)


def test_set_value_replaces_and_restarts_keys():
    s = Series("a")
    s.add_value([7.0, 8.0, 9.0])
    s.set_value([4.0])
    assert s.rows == [(0.0, 4.0)]


def test_add_points_sets_depth():
    s = Series("a")
    s.add([(2.0, Point2(1.0, 3.0))])
    assert s.depth == 2
    s.set([(5.0, Point3(1.0, 2.0, 3.0))])
    assert s.rows == [(5.0, 1.0, 2.0, 3.0)]
    assert s.depth == 3


def test_mixed_values_in_one_call_raise():
    with pytest.raises(ValueError):
        Series("a").add([(0, 1.0), (1, Point2(1.0, 2.0))])


def test_clear_resets_shape():
    s = Series("a").add_value([1.0])
    s.clear()
    assert len(s) == 0
    assert (s.dims, s.depth) == (0, 0)


def test_changing_depth_warns_and_verify_fails():
    s = Series("a").add_value([1.0])
    with pytest.warns(UserWarning):
        s.add_value([Point2(1.0, 2.0)])
    with pytest.raises(ValueError):
        s.verify_params()


def test_verify_params_accepts_matching_types():
    s = Series("a", SeriesType.RANGE).add_value([Point2(0.0, 1.0)])
    s.verify_params()
    assert s.depth == 2
    s.set_type(SeriesType.LINE)
    with pytest.raises(ValueError):
        s.verify_params()


def test_verify_params_dynamic_color_adds_depth():
    s = Series("a").set_dynamic_color(True).add_value([Point2(1.0, 0.5)])
    s.verify_params()
    with pytest.raises(ValueError):
        s.set_dynamic_color(False).verify_params()


def test_collides_only_for_bars():
    assert Series("a", SeriesType.HISTOGRAM).collides()
    assert Series("a", SeriesType.VISTOGRAM).collides()
    assert not Series("a", SeriesType.LINE).collides()


def test_bounds_of_line_series():
    s = Series("a").add([(1.0, -2.0), (4.0, 6.0)])
    b = s.bounds(_open_bounds())
    assert (b.x_min, b.x_max, b.y_min, b.y_max) == (1.0, 4.0, -2.0, 6.0)
    assert b.n_max == 2
    assert b.p_max == 0


def test_bounds_only_widen():
    s = Series("a").add([(1.0, 2.0)])
    start = Bounds(-10.0, 10.0, -10.0, 10.0, n_max=5, p_max=3)
    b = s.bounds(start)
    assert b == start


def test_bounds_histogram_padding():
    s = Series("h", SeriesType.HISTOGRAM).add_value([1.0])
    assert s.bounds(_open_bounds()).p_max == 30


def test_bounds_vertical_uses_value_as_x():
    s = Series("v", SeriesType.VERTICAL).add([(100.0, 3.0)])
    b = s.bounds(_open_bounds())
    assert (b.x_min, b.x_max) == (3.0, 3.0)
    assert b.y_min == math.inf


def test_bounds_horizontal_uses_value_as_y():
    s = Series("h", SeriesType.HORIZONTAL).add([(100.0, 3.0)])
    b = s.bounds(_open_bounds())
    assert (b.y_min, b.y_max) == (3.0, 3.0)
    assert b.x_min == math.inf


def test_bounds_range_covers_both_values():
    s = Series("r", SeriesType.RANGE).add([(0.0, Point2(-1.0, 5.0))])
    b = s.bounds(_open_bounds())
    assert (b.y_min, b.y_max) == (-1.0, 5.0)


def test_draw_empty_series_leaves_buffer():
    buffer = _white_buffer()
    before = buffer.copy()
    _draw(Series("a"), buffer)
    assert np.array_equal(buffer, before)


def test_draw_line_changes_buffer():
    buffer = _white_buffer()
    before = buffer.copy()
    color = Color(200, 10, 10)
    _draw(Series("a", SeriesType.LINE, color).add([(5.0, 5.0), (40.0, 40.0)]), buffer)
    assert not np.array_equal(buffer, before)
    assert buffer[0, 49].tolist() == before[0, 49].tolist()


def test_draw_histogram_fills_bar():
    buffer = _white_buffer()
    color = Color(10, 200, 10)
    _draw(Series("h", SeriesType.HISTOGRAM, color).add([(10.0, 30.0)]), buffer)
    assert buffer[15, 10].tolist() == list(color_to_scalar(color))


def test_draw_circle_fills_center():
    buffer = _white_buffer()
    color = Color(10, 10, 200)
    _draw(Series("c", SeriesType.CIRCLE, color).add([(20.0, Point2(20.0, 5.0))]), buffer)
    assert buffer[20, 20].tolist() == list(color_to_scalar(color))


def test_dot_draws_series_color():
    buffer = _white_buffer()
    color = Color(120, 40, 200)
    Series("d", SeriesType.LINE, color).dot(buffer, 25, 25, 3)
    assert buffer[25, 25].tolist() == list(color_to_scalar(color))


def test_default_color_is_hash_of_label():
    assert Series("label").color == Color.hash("label")
    assert Series("x").set_color(WHITE).color == WHITE