import numpy as np
import pytest

from plotview.canvas import (
    PALENESS,
    Layer,
    channel_to_pale,
    color_to_scalar,
    draw_circle,
    draw_line,
    draw_rectangle,
    draw_text,
    fill_polygon,
    new_buffer,
    text_size,
    value_to_snap,
)
from plotview.color import Color


def test_channel_to_pale_bounds():
    assert channel_to_pale(0) == PALENESS
    assert channel_to_pale(255) == 255 - PALENESS


def test_channel_to_pale_monotonic():
    values = [channel_to_pale(c) for c in range(256)]
    assert values == sorted(values)


def test_color_to_scalar_is_bgr():
    scalar = color_to_scalar(Color(255, 0, 0))
    assert scalar == (channel_to_pale(0), channel_to_pale(0), channel_to_pale(255))


@pytest.mark.parametrize("value", [0.003, 0.7, 1.0, 3.3, 7.9, 10.0, 42.0, 999.0])
def test_value_to_snap_invariants(value):
    snap = value_to_snap(value)
    assert snap <= value * (1 + 1e-9)
    assert snap > value / 2.5


def test_value_to_snap_exact_power_of_ten():
    assert value_to_snap(10.0) == pytest.approx(10.0)


def test_value_to_snap_rejects_nonpositive():
    with pytest.raises(ValueError):
        value_to_snap(0.0)


def test_new_buffer_shape_and_fill():
    buf = new_buffer(5, 3, (1, 2, 3))
    assert buf.shape == (3, 5, 3)
    assert (buf == np.array([1, 2, 3], dtype=np.uint8)).all()


def test_draw_line_marks_row():
    buf = new_buffer(20, 10, (0, 0, 0))
    draw_line(buf, (2, 5), (17, 5), (9, 9, 9), 1)
    assert (buf[5, 5] == 9).all()
    assert (buf[0, 0] == 0).all()


def test_draw_rectangle_filled_and_outline():
    filled = new_buffer(20, 20, (0, 0, 0))
    draw_rectangle(filled, (15, 15), (4, 4), (7, 7, 7), -1)
    assert (filled[10, 10] == 7).all()
    outline = new_buffer(20, 20, (0, 0, 0))
    draw_rectangle(outline, (4, 4), (15, 15), (7, 7, 7), 1)
    assert (outline[4, 10] == 7).all()
    assert (outline[10, 10] == 0).all()


def test_draw_circle_filled():
    buf = new_buffer(30, 30, (0, 0, 0))
    draw_circle(buf, (15, 15), 5, (50, 60, 70), -1)
    assert tuple(buf[15, 15]) == (50, 60, 70)
    assert (buf[0, 0] == 0).all()


def test_draw_circle_negative_radius():
    with pytest.raises(ValueError):
        draw_circle(new_buffer(5, 5, (0, 0, 0)), (2, 2), -1, (1, 1, 1), 1)


def test_fill_polygon_interior():
    buf = new_buffer(20, 20, (0, 0, 0))
    fill_polygon(buf, [(2, 2), (18, 2), (18, 18), (2, 18)], (5, 5, 5))
    assert (buf[10, 10] == 5).all()


def test_text_size_grows_with_text_and_scale():
    w1, h1 = text_size("W", 0.4)
    w2, _ = text_size("WWWW", 0.4)
    _, h3 = text_size("W", 0.8)
    assert w2 > w1
    assert h3 > h1
    assert text_size("", 0.4) == (0, 0)


def test_draw_text_paints_only_given_colour():
    buf = new_buffer(100, 40, (0, 0, 0))
    draw_text(buf, "Hi", (5, 30), (255, 255, 255), 0.4)
    changed = buf.any(axis=2)
    assert changed.any()
    assert (buf[changed] == 255).all()


def test_draw_text_empty_changes_nothing():
    buf = new_buffer(20, 20, (0, 0, 0))
    draw_text(buf, "", (5, 15), (255, 255, 255), 0.4)
    assert not buf.any()


def test_layer_opaque_draws_in_place():
    buf = new_buffer(4, 4, (0, 0, 0))
    layer = Layer(buf)
    assert layer.with_alpha(255) is buf


def test_layer_blends_on_flush():
    buf = new_buffer(4, 4, (0, 0, 0))
    layer = Layer(buf)
    target = layer.with_alpha(128)
    target[...] = 200
    assert not buf.any()
    layer.flush()
    assert 0 < int(buf[0, 0, 0]) < 200


def test_layer_context_manager_flushes():
    buf = new_buffer(4, 4, (0, 0, 0))
    with Layer(buf) as layer:
        layer.with_color(Color(0, 0, 0, 64))[...] = 255
    assert 0 < int(buf[1, 1, 1]) < 255