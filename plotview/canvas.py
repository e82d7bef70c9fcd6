"""Pixel buffers and drawing primitives.

Buffers are ``numpy`` arrays of shape (height, width, 3) and dtype uint8,
holding channels in blue, green, red order.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from plotview.color import Color

PALENESS = 32
_FONT = ImageFont.load_default()
_REFERENCE_SCALE = 0.4

Scalar = Sequence[int]
PointLike = Sequence[float]


def channel_to_pale(c: int) -> int:
    """Compress a channel toward the middle so colours look paler."""
    return c * (255 - 2 * PALENESS) // 255 + PALENESS


def color_to_scalar(color: Color) -> tuple[int, int, int]:
    """Pale blue, green, red triple for a colour."""
    return (channel_to_pale(color.b), channel_to_pale(color.g), channel_to_pale(color.r))


def value_to_snap(value: float) -> float:
    """Largest 1, 2 or 5 times a power of ten that does not exceed ``value``."""
    if value <= 0:
        raise ValueError("value must be positive")
    return max(
        10 ** math.floor(math.log10(value)),
        10 ** math.floor(math.log10(value / 2)) * 2,
        10 ** math.floor(math.log10(value / 5)) * 5,
    )


def new_buffer(width: int, height: int, color: Scalar) -> np.ndarray:
    """A buffer of the given size filled with a scalar colour."""
    if width < 0 or height < 0:
        raise ValueError("buffer size must not be negative")
    buffer = np.empty((height, width, 3), dtype=np.uint8)
    buffer[...] = tuple(color)
    return buffer


def _fill(color: Scalar) -> tuple[int, ...]:
    return tuple(int(c) for c in color)


def _paint(buffer: np.ndarray, action) -> None:
    if buffer.shape[0] == 0 or buffer.shape[1] == 0:
        return
    image = Image.fromarray(np.ascontiguousarray(buffer), "RGB")
    action(ImageDraw.Draw(image))
    buffer[...] = np.asarray(image)


def draw_line(
    buffer: np.ndarray,
    start: PointLike,
    end: PointLike,
    color: Scalar,
    thickness: int = 1,
) -> None:
    points = [(int(start[0]), int(start[1])), (int(end[0]), int(end[1]))]
    _paint(buffer, lambda d: d.line(points, fill=_fill(color), width=max(1, thickness)))


def draw_rectangle(
    buffer: np.ndarray,
    start: PointLike,
    end: PointLike,
    color: Scalar,
    thickness: int = 1,
) -> None:
    """Draw a rectangle; a negative thickness fills it."""
    x0, x1 = sorted((int(start[0]), int(end[0])))
    y0, y1 = sorted((int(start[1]), int(end[1])))
    box = [x0, y0, x1, y1]
    if thickness < 0:
        _paint(buffer, lambda d: d.rectangle(box, fill=_fill(color)))
    else:
        _paint(buffer, lambda d: d.rectangle(box, outline=_fill(color), width=max(1, thickness)))


def draw_circle(
    buffer: np.ndarray,
    center: PointLike,
    radius: float,
    color: Scalar,
    thickness: int = 1,
) -> None:
    """Draw a circle; a negative thickness fills it."""
    if radius < 0:
        raise ValueError("radius must not be negative")
    cx, cy = int(center[0]), int(center[1])
    r = int(radius)
    box = [cx - r, cy - r, cx + r, cy + r]
    if thickness < 0:
        _paint(buffer, lambda d: d.ellipse(box, fill=_fill(color)))
    else:
        _paint(buffer, lambda d: d.ellipse(box, outline=_fill(color), width=max(1, thickness)))


def fill_polygon(buffer: np.ndarray, points: Iterable[PointLike], color: Scalar) -> None:
    polygon = [(int(p[0]), int(p[1])) for p in points]
    if len(polygon) < 2:
        return
    _paint(buffer, lambda d: d.polygon(polygon, fill=_fill(color)))


def _text_mask(text: str, scale: float) -> Image.Image | None:
    if not text:
        return None
    left, top, right, bottom = _FONT.getbbox(text)
    width, height = right - left, bottom - top
    if width <= 0 or height <= 0:
        return None
    mask = Image.new("L", (width, height), 0)
    ImageDraw.Draw(mask).text((-left, -top), text, fill=255, font=_FONT)
    factor = scale / _REFERENCE_SCALE
    size = (max(1, round(width * factor)), max(1, round(height * factor)))
    if size != mask.size:
        mask = mask.resize(size, Image.Resampling.BILINEAR)
    return mask


def text_size(text: str, scale: float) -> tuple[int, int]:
    """Width and height in pixels of ``text`` drawn at ``scale``."""
    mask = _text_mask(text, scale)
    return (0, 0) if mask is None else mask.size


def draw_text(
    buffer: np.ndarray,
    text: str,
    origin: PointLike,
    color: Scalar,
    scale: float,
) -> None:
    """Draw ``text`` with its bottom-left corner at ``origin``."""
    mask = _text_mask(text, scale)
    if mask is None or buffer.shape[0] == 0 or buffer.shape[1] == 0:
        return
    canvas = Image.new("L", (buffer.shape[1], buffer.shape[0]), 0)
    canvas.paste(mask, (int(origin[0]), int(origin[1]) - mask.height))
    selected = np.asarray(canvas) > 127
    buffer[selected] = _fill(color)


class Layer:
    """Draws onto a buffer at a given opacity, blending on flush."""

    def __init__(self, buffer: np.ndarray) -> None:
        self._original = buffer
        self._alpha = 0
        self._interim: np.ndarray | None = None

    def _setup(self, alpha: int) -> None:
        if alpha != 255:
            self._interim = self._original.copy()
        self._alpha = alpha

    def with_alpha(self, alpha: int) -> np.ndarray:
        """Buffer to draw on for the given opacity."""
        if alpha != self._alpha:
            self.flush()
            self._setup(alpha)
        return self._interim if self._interim is not None else self._original

    def with_color(self, color: Color) -> np.ndarray:
        return self.with_alpha(color.a)

    def flush(self) -> None:
        """Blend pending translucent drawing into the underlying buffer."""
        if self._interim is None:
            return
        weight = self._alpha / 255
        blended = self._interim.astype(np.float64) * weight + self._original.astype(
            np.float64
        ) * (1 - weight)
        self._original[...] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)
        self._interim = None

    def __enter__(self) -> Layer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.flush()