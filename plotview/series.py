"""Data series that a figure plots, and how each kind of series is drawn."""

from __future__ import annotations

import enum
import numbers
import warnings
from dataclasses import dataclass, replace
from typing import Iterable, Sequence, Union

import numpy as np

from plotview.canvas import (
    Layer,
    color_to_scalar,
    draw_circle,
    draw_line,
    draw_rectangle,
    fill_polygon,
)
from plotview.color import Color


@dataclass(frozen=True)
class Point2:
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Point3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


Value = Union[float, Point2, Point3, Sequence[float]]


class SeriesType(enum.Enum):
    LINE = enum.auto()
    DOT_LINE = enum.auto()
    DOTS = enum.auto()
    FILL_LINE = enum.auto()
    RANGE_LINE = enum.auto()
    HISTOGRAM = enum.auto()
    VISTOGRAM = enum.auto()
    HORIZONTAL = enum.auto()
    VERTICAL = enum.auto()
    RANGE = enum.auto()
    CIRCLE = enum.auto()


_LINE_TYPES = {
    SeriesType.LINE,
    SeriesType.DOT_LINE,
    SeriesType.DOTS,
    SeriesType.FILL_LINE,
    SeriesType.RANGE_LINE,
}

_EXPECTED_DEPTH = {
    SeriesType.LINE: 1,
    SeriesType.DOT_LINE: 1,
    SeriesType.DOTS: 1,
    SeriesType.FILL_LINE: 1,
    SeriesType.VISTOGRAM: 1,
    SeriesType.HISTOGRAM: 1,
    SeriesType.HORIZONTAL: 1,
    SeriesType.VERTICAL: 1,
    SeriesType.RANGE_LINE: 3,
    SeriesType.RANGE: 2,
    SeriesType.CIRCLE: 2,
}


@dataclass
class Bounds:
    """Value range and sizing hints gathered over the series of a figure."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float
    n_max: int = 0
    p_max: int = 0


def _components(value: Value) -> tuple[float, ...]:
    if isinstance(value, Point2):
        return (float(value.x), float(value.y))
    if isinstance(value, Point3):
        return (float(value.x), float(value.y), float(value.z))
    if isinstance(value, numbers.Real):
        return (float(value),)
    components = tuple(float(v) for v in value)
    if not 1 <= len(components) <= 3:
        raise ValueError(f"a value has 1 to 3 components, got {len(components)}")
    return components


class Series:
    """A labelled set of keyed values with a drawing style."""

    def __init__(self, label: str, type_: SeriesType = SeriesType.LINE, color: Color | None = None) -> None:
        self.label = label
        self.type = type_
        self.color = color if color is not None else Color.hash(label)
        self.legend = True
        self.dynamic_color = False
        self.dims = 0
        self.depth = 0
        self._rows: list[tuple[float, ...]] = []

    @property
    def rows(self) -> list[tuple[float, ...]]:
        """Stored entries, each a key followed by its value components."""
        return list(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def set_type(self, type_: SeriesType) -> Series:
        self.type = type_
        return self

    def set_color(self, color: Color) -> Series:
        self.color = color
        return self

    def set_dynamic_color(self, dynamic_color: bool) -> Series:
        self.dynamic_color = dynamic_color
        return self

    def set_legend(self, legend: bool) -> Series:
        self.legend = legend
        return self

    def _ensure_dims_depth(self, dims: int, depth: int) -> None:
        if self.dims != dims:
            if self.dims != 0:
                warnings.warn(
                    f"incorrect dims (input dimensions), was {self.dims} now {dims}",
                    stacklevel=3,
                )
            self.dims = dims
        if self.depth != depth:
            if self.depth != 0:
                warnings.warn(
                    f"incorrect depth (output dimensions), was {self.depth} now {depth}",
                    stacklevel=3,
                )
            self.depth = depth

    def add(self, data: Iterable[tuple[float, Value]]) -> Series:
        """Append (key, value) pairs; all values must have the same shape."""
        rows = [(float(key), *_components(value)) for key, value in data]
        if not rows:
            return self
        depth = len(rows[0]) - 1
        if any(len(row) - 1 != depth for row in rows):
            raise ValueError("all values added together must have the same number of components")
        self._ensure_dims_depth(1, depth)
        self._rows.extend(rows)
        return self

    def add_value(self, values: Iterable[Value]) -> Series:
        """Append values keyed by their position after the existing entries."""
        start = len(self._rows)
        return self.add((start + i, value) for i, value in enumerate(values))

    def set(self, data: Iterable[tuple[float, Value]]) -> Series:
        """Replace all entries with the given (key, value) pairs."""
        data = list(data)
        self.clear()
        return self.add(data)

    def set_value(self, values: Iterable[Value]) -> Series:
        """Replace all entries with values keyed 0, 1, 2, ..."""
        return self.set(enumerate(list(values)))

    def clear(self) -> Series:
        self._rows.clear()
        self.dims = 0
        self.depth = 0
        return self

    def collides(self) -> bool:
        """Whether bars of this series take space that others must avoid."""
        return self.type in (SeriesType.HISTOGRAM, SeriesType.VISTOGRAM)

    def _flip_axis(self) -> bool:
        return self.type in (SeriesType.VERTICAL, SeriesType.VISTOGRAM)

    def verify_params(self) -> None:
        """Raise ValueError if the stored shape does not suit the series type."""
        depth = _EXPECTED_DEPTH[self.type] + (1 if self.dynamic_color else 0)
        if self._rows:
            if self.dims != 1:
                raise ValueError(f"incorrect dims ({self.dims}), should equal 1")
            if self.depth != depth:
                raise ValueError(f"incorrect depth ({self.depth}), should equal {depth}")

    def bounds(self, bounds: Bounds) -> Bounds:
        """Return ``bounds`` widened to include this series."""
        x_min, x_max = bounds.x_min, bounds.x_max
        y_min, y_max = bounds.y_min, bounds.y_max
        for row in self._rows:
            xe, xd = 0, self.dims
            ye, yd = self.dims, self.depth - (1 if self.dynamic_color else 0)
            if self.type is SeriesType.CIRCLE:
                yd = 1
            if self._flip_axis():
                xe, ye = ye, xe
                xd, yd = yd, xd
            if self.type is not SeriesType.HORIZONTAL:
                if xd != 1:
                    raise ValueError(f"incorrect x dimension ({xd}), should equal 1")
                x = row[xe]
                x_min = min(x_min, x)
                x_max = max(x_max, x)
            if self.type is not SeriesType.VERTICAL:
                for y in row[ye : ye + yd]:
                    y_min = min(y_min, y)
                    y_max = max(y_max, y)
        n_max = max(bounds.n_max, len(self._rows))
        p_max = bounds.p_max
        if self.collides():
            p_max = max(30, p_max)
        return replace(bounds, x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max, n_max=n_max, p_max=p_max)

    def dot(self, buffer: np.ndarray, x: int, y: int, r: int) -> None:
        """Draw a filled dot in the series colour."""
        with Layer(buffer) as layer:
            draw_circle(layer.with_color(self.color), (x, y), r, color_to_scalar(self.color), -1)

    def draw(
        self,
        buffer: np.ndarray,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        xs: float,
        xd: float,
        ys: float,
        yd: float,
        x_axis: float,
        y_axis: float,
        unit: int,
        offset: float,
    ) -> None:
        """Draw the series, mapping values to pixels by ``v * scale + shift``."""
        if self.dims == 0 or self.depth == 0:
            return

        def px(x: float) -> int:
            return int(x * xs + xd)

        def py(y: float) -> int:
            return int(y * ys + yd)

        base = color_to_scalar(self.color)
        dims = self.dims
        with Layer(buffer) as layer:
            if self.type in _LINE_TYPES:
                self._draw_areas(layer, base, px, py, y_axis)
                self._draw_lines(layer, base, px, py)
            elif self.type in (SeriesType.HISTOGRAM, SeriesType.VISTOGRAM):
                u = 2 * unit
                o = int(2 * u * offset)
                color = base
                for row in self._rows:
                    x, y = row[0], row[dims]
                    if self.dynamic_color:
                        color = color_to_scalar(Color.cos(row[dims + 1]))
                    target = layer.with_color(self.color)
                    if self.type is SeriesType.HISTOGRAM:
                        draw_rectangle(target, (px(x) - u + o, py(y_axis)), (px(x) + u + o, py(y)), color, -1)
                    else:
                        draw_rectangle(target, (px(x_axis), py(x) - u + o), (px(y), py(x) + u + o), color, -1)
            elif self.type in (SeriesType.HORIZONTAL, SeriesType.VERTICAL):
                color = base
                for row in self._rows:
                    y = row[dims]
                    if self.dynamic_color:
                        color = color_to_scalar(Color.cos(row[dims + 1]))
                    target = layer.with_color(self.color)
                    if self.type is SeriesType.HORIZONTAL:
                        draw_line(target, (px(x_min), py(y)), (px(x_max), py(y)), color, 1)
                    else:
                        draw_line(target, (px(y), py(y_min)), (px(y), py(y_max)), color, 1)
            elif self.type is SeriesType.RANGE:
                color = base
                last = None
                for row in self._rows:
                    x, y_a, y_b = row[0], row[dims], row[dims + 1]
                    if self.dynamic_color:
                        color = color_to_scalar(Color.cos(row[dims + 2]))
                    point_a, point_b = (px(x), py(y_a)), (px(x), py(y_b))
                    if last is not None:
                        fill_polygon(layer.with_color(self.color), [point_a, point_b, last[1], last[0]], color)
                    last = (point_a, point_b)
            elif self.type is SeriesType.CIRCLE:
                color = base
                for row in self._rows:
                    x, y, r = row[0], row[dims], row[dims + 1]
                    if self.dynamic_color:
                        color = color_to_scalar(Color.cos(row[dims + 2]))
                    draw_circle(layer.with_color(self.color), (px(x), py(y)), r, color, -1)

    def _draw_areas(self, layer: Layer, base, px, py, y_axis: float) -> None:
        dims = self.dims
        color = base
        last = None
        if self.type is SeriesType.FILL_LINE:
            for row in self._rows:
                x, y = row[0], row[dims]
                if self.dynamic_color:
                    color = color_to_scalar(Color.cos(row[dims + 1]))
                point = (px(x), py(y))
                if last is not None:
                    last_x, last_y = last
                    points = [
                        point,
                        (point[0], py(y_axis)),
                        (px(last_x), py(y_axis)),
                        (px(last_x), py(last_y)),
                    ]
                    fill_polygon(layer.with_alpha(self.color.a // 2), points, color)
                last = (x, y)
        elif self.type is SeriesType.RANGE_LINE:
            for row in self._rows:
                x, y1, y2 = row[0], row[dims + 1], row[dims + 2]
                if self.dynamic_color:
                    color = color_to_scalar(Color.cos(row[dims + 1]))
                if last is not None:
                    last_x, last_y1, last_y2 = last
                    points = [
                        (px(x), py(y1)),
                        (px(x), py(y2)),
                        (px(last_x), py(last_y2)),
                        (px(last_x), py(last_y1)),
                    ]
                    fill_polygon(layer.with_alpha(self.color.a // 2), points, color)
                last = (x, y1, y2)

    def _draw_lines(self, layer: Layer, base, px, py) -> None:
        dims = self.dims
        color = base
        connect = self.type is not SeriesType.DOTS
        dots = self.type in (SeriesType.DOT_LINE, SeriesType.DOTS)
        last = None
        for row in self._rows:
            x, y = row[0], row[dims]
            if self.dynamic_color:
                color = color_to_scalar(Color.cos(row[dims + 1]))
            point = (px(x), py(y))
            if last is not None and connect:
                draw_line(layer.with_color(self.color), (px(last[0]), py(last[1])), point, color, 1)
            if dots:
                draw_circle(layer.with_color(self.color), point, 2, color, 1)
            last = (x, y)