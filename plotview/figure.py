"""Figures: axes, grid, labels and legend around a set of data series."""

from __future__ import annotations

import math
from typing import Iterator, Optional

import numpy as np

from plotview.canvas import (
    Layer,
    color_to_scalar,
    draw_circle,
    draw_line,
    draw_rectangle,
    draw_text,
    text_size,
    value_to_snap,
)
from plotview.color import BLACK, LIGHT, WHITE, Color
from plotview.series import Bounds, Series, SeriesType
from plotview.window import View, Window

FLT_MAX = 3.4028234663852886e38
FLT_MIN = 1.1754943508222875e-38

_AXIS_SCALE = 0.3
_LEGEND_SCALE = 0.4

_shared_figures: dict[str, Figure] = {}


def _ticks(low: float, high: float, step: float) -> Iterator[float]:
    """Multiples of ``step`` from ``low`` up to and including ``high``."""
    if not (math.isfinite(step) and step > 0 and math.isfinite(low) and math.isfinite(high)):
        return
    value = math.ceil(low / step) * step
    while value <= high:
        yield value
        value += step


def _tick_label(value: float) -> str:
    return f"{(0.0 if value == 0 else value):.4g}"


def _grid_step(span: float, plot_size: int, grid_size: int) -> float:
    if span == 0:
        return 1.0
    cells = max(1, plot_size // grid_size) if grid_size > 0 else 1
    return value_to_snap(span / cells)


class Figure:
    """Plots named series into a view, with axes, grid and legend."""

    def __init__(self, view: View) -> None:
        self.view = view
        self._series: list[Series] = []
        self.border_size = 50
        self.background_color: Color = WHITE
        self.axis_color: Color = BLACK
        self.sub_axis_color: Color = LIGHT
        self.text_color: Color = BLACK
        self.include_zero_x = True
        self.include_zero_y = True
        self.aspect_square = False
        self.grid_spacing = 60
        self.grid_padding = 20

    @property
    def all_series(self) -> tuple[Series, ...]:
        return tuple(self._series)

    def clear(self) -> Figure:
        self._series.clear()
        return self

    def origin(self, x: bool, y: bool) -> Figure:
        """Choose whether the value range must include zero on each axis."""
        self.include_zero_x, self.include_zero_y = x, y
        return self

    def square(self, square: bool) -> Figure:
        self.aspect_square = square
        return self

    def border(self, size: int) -> Figure:
        self.border_size = size
        return self

    def alpha(self, alpha: int) -> Figure:
        self.background_color = self.background_color.with_alpha(alpha)
        self.axis_color = self.axis_color.with_alpha(alpha)
        self.sub_axis_color = self.sub_axis_color.with_alpha(alpha)
        self.text_color = self.text_color.with_alpha(alpha)
        return self

    def grid_size(self, size: int) -> Figure:
        self.grid_spacing = size
        return self

    def set_background_color(self, color: Color) -> Figure:
        self.background_color = color
        return self

    def set_axis_color(self, color: Color) -> Figure:
        self.axis_color = color
        return self

    def set_subaxis_color(self, color: Color) -> Figure:
        self.sub_axis_color = color
        return self

    def set_text_color(self, color: Color) -> Figure:
        self.text_color = color
        return self

    def series(self, label: str) -> Series:
        """The series called ``label``, created as a line on first use."""
        for s in self._series:
            if s.label == label:
                return s
        s = Series(label, SeriesType.LINE, Color.hash(label))
        self._series.append(s)
        return s

    def draw(self, buffer: np.ndarray, bounds: Bounds) -> None:
        """Render the figure into ``buffer`` for the given value bounds."""
        rows, cols = buffer.shape[:2]
        border = self.border_size
        x_min, x_max = bounds.x_min, bounds.x_max
        y_min, y_max = bounds.y_min, bounds.y_max
        n_max, p_max = bounds.n_max, bounds.p_max

        with Layer(buffer) as layer:
            draw_rectangle(
                layer.with_color(self.background_color),
                (0, 0),
                (cols, rows),
                color_to_scalar(self.background_color),
                -1,
            )
            draw_rectangle(
                layer.with_color(self.sub_axis_color),
                (border, border),
                (cols - border, rows - border),
                color_to_scalar(self.sub_axis_color),
                1,
            )

            w_plot = cols - 2 * border
            h_plot = rows - 2 * border

            if p_max and w_plot and h_plot:
                dx = p_max * (x_max - x_min) / w_plot
                dy = p_max * (y_max - y_min) / h_plot
                x_min -= dx
                x_max += dx
                y_min -= dy
                y_max += dy

            if self.aspect_square and w_plot and h_plot:
                if h_plot * (x_max - x_min) < w_plot * (y_max - y_min):
                    dx = w_plot * (y_max - y_min) / h_plot - (x_max - x_min)
                    x_min -= dx / 2
                    x_max += dx / 2
                elif w_plot * (y_max - y_min) < h_plot * (x_max - x_min):
                    dy = h_plot * (x_max - x_min) / w_plot - (y_max - y_min)
                    y_min -= dy / 2
                    y_max += dy / 2

            x_axis = max(x_min, min(x_max, 0.0))
            y_axis = max(y_min, min(y_max, 0.0))

            x_grid = _grid_step(x_max - x_min, w_plot, self.grid_spacing)
            y_grid = _grid_step(y_max - y_min, h_plot, self.grid_spacing)

            xs = w_plot / (x_max - x_min) if x_max != x_min else 1.0
            xd = border - x_min * xs
            ys = h_plot / (y_min - y_max) if y_max != y_min else 1.0
            yd = rows - y_min * ys - border

            unit = max(1, (min(cols, rows) - 2 * border) // max(1, n_max) // 10)

            sub_axis = color_to_scalar(self.sub_axis_color)
            for x in _ticks(x_min, x_max, x_grid):
                draw_line(
                    layer.with_color(self.sub_axis_color),
                    (int(x * xs + xd), border),
                    (int(x * xs + xd), rows - border),
                    sub_axis,
                    1,
                )
            for y in _ticks(y_min, y_max, y_grid):
                draw_line(
                    layer.with_color(self.sub_axis_color),
                    (border, int(y * ys + yd)),
                    (cols - border, int(y * ys + yd)),
                    sub_axis,
                    1,
                )

            text = color_to_scalar(self.text_color)
            if 0 < abs(x_grid * xs) < 30:
                x_grid *= math.ceil(30.0 / abs(x_grid * xs))
            for x in _ticks(x_min, x_max, x_grid):
                label = _tick_label(x)
                width, height = text_size(label, _AXIS_SCALE)
                org = (int(x * xs + xd - width / 2), rows - border + 5 + height)
                draw_text(layer.with_color(self.text_color), label, org, text, _AXIS_SCALE)
            if 0 < abs(y_grid * ys) < 20:
                y_grid *= math.ceil(20.0 / abs(y_grid * ys))
            for y in _ticks(y_min, y_max, y_grid):
                label = _tick_label(y)
                width, height = text_size(label, _AXIS_SCALE)
                org = (border - 5 - width, int(y * ys + yd + height / 2))
                draw_text(layer.with_color(self.text_color), label, org, text, _AXIS_SCALE)

            draw_line(
                layer.with_color(self.text_color),
                (border, int(y_axis * ys + yd)),
                (cols - border, int(y_axis * ys + yd)),
                text,
                1,
            )
            draw_line(
                layer.with_color(self.axis_color),
                (int(x_axis * xs + xd), border),
                (int(x_axis * xs + xd), rows - border),
                color_to_scalar(self.axis_color),
                1,
            )

            index = sum(1 for s in self._series if s.collides())
            count = len(self._series)
            for s in reversed(self._series):
                if s.collides():
                    index -= 1
                s.draw(
                    layer.with_color(s.color),
                    x_min,
                    x_max,
                    y_min,
                    y_max,
                    xs,
                    xd,
                    ys,
                    yd,
                    x_axis,
                    y_axis,
                    unit,
                    index / count,
                )

            background = color_to_scalar(self.background_color)
            index = 0
            for s in self._series:
                if not s.legend:
                    continue
                width, _ = text_size(s.label, _LEGEND_SCALE)
                org_x = cols - border - width - 17
                org_y = border + 15 * index + 15
                draw_text(
                    layer.with_color(self.background_color),
                    s.label,
                    (org_x + 1, org_y + 1),
                    background,
                    _LEGEND_SCALE,
                )
                draw_circle(
                    layer.with_color(self.background_color),
                    (cols - border - 10 + 1, org_y - 3 + 1),
                    3,
                    background,
                    -1,
                )
                draw_text(
                    layer.with_color(self.text_color), s.label, (org_x, org_y), text, _LEGEND_SCALE
                )
                s.dot(layer.with_color(s.color), cols - border - 10, org_y - 3, 3)
                index += 1

    def _value_bounds(self) -> Bounds:
        bounds = Bounds(
            x_min=0.0 if self.include_zero_x else FLT_MAX,
            x_max=0.0 if self.include_zero_x else FLT_MIN,
            y_min=0.0 if self.include_zero_y else FLT_MAX,
            y_max=0.0 if self.include_zero_y else FLT_MIN,
            n_max=0,
            p_max=self.grid_padding,
        )
        for s in self._series:
            s.verify_params()
            bounds = s.bounds(bounds)
        return bounds

    def show(self, flush: bool = True) -> bool:
        """Draw the figure into its view; returns whether there was data to draw."""
        bounds = self._value_bounds()
        if not bounds.n_max:
            return False
        self.draw(self.view.buffer(), bounds)
        self.view.finish()
        if flush:
            self.view.flush()
        return True


def figure(name: str) -> Figure:
    """The shared figure called ``name``, drawn in a view of the current window."""
    if name not in _shared_figures:
        _shared_figures[name] = Figure(Window.current().view(name))
    return _shared_figures[name]