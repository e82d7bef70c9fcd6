"""Windows made of rectangular views drawn into one shared pixel buffer.

A window keeps a single buffer; views are named regions of it.  Flushing a
dirty window takes a snapshot of the buffer (with an optional cursor drawn
on top) as the displayed frame and hands it to an optional display hook.
"""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional

import numpy as np
from PIL import Image

from plotview.canvas import (
    Layer,
    color_to_scalar,
    draw_line,
    draw_rectangle,
    draw_text,
    new_buffer,
    text_size,
)
from plotview.color import BLACK, GRAY, GREEN, WHITE, Color

MouseCallback = Callable[[int, int, int, int, Any], None]
DisplayHook = Callable[["Window", np.ndarray], None]

_TEXT_SCALE = 0.4
_TITLE_SCALE = 0.4
_window_counter = itertools.count()


@dataclass
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Offset:
    x: int
    y: int


def _default_size() -> Size:
    return Size(300, 300)


class View:
    """A named rectangular region of a window."""

    def __init__(self, window: Window, title: str = "", size: Optional[Size] = None) -> None:
        size = size or _default_size()
        self.window = window
        self.title = title
        self.rect = Rect(0, 0, size.width, size.height)
        self.frameless = False
        self.background_color: Color = BLACK
        self.frame_color: Color = GREEN
        self.text_color: Color = BLACK
        self.hidden = False
        self._mouse_callback: Optional[MouseCallback] = None
        self._mouse_param: Any = None

    def resize(self, rect: Rect) -> View:
        self.rect = Rect(rect.x, rect.y, rect.width, rect.height)
        self.window.mark_dirty()
        return self

    def set_size(self, size: Size) -> View:
        self.rect.width = size.width
        self.rect.height = size.height
        self.window.mark_dirty()
        return self

    def set_offset(self, offset: Offset) -> View:
        self.rect.x = offset.x
        self.rect.y = offset.y
        self.window.mark_dirty()
        return self

    def autosize(self) -> View:
        """Let the next image drawn decide the view's size."""
        return self.set_size(Size(0, 0))

    def set_title(self, title: str) -> View:
        self.title = title
        self.window.mark_dirty()
        return self

    def alpha(self, alpha: int) -> View:
        self.background_color = self.background_color.with_alpha(alpha)
        self.frame_color = self.frame_color.with_alpha(alpha)
        self.text_color = self.text_color.with_alpha(alpha)
        self.window.mark_dirty()
        return self

    def set_background_color(self, color: Color) -> View:
        self.background_color = color
        self.window.mark_dirty()
        return self

    def set_frame_color(self, color: Color) -> View:
        self.frame_color = color
        self.window.mark_dirty()
        return self

    def set_text_color(self, color: Color) -> View:
        self.text_color = color
        self.window.mark_dirty()
        return self

    def mouse(self, callback: Optional[MouseCallback], param: Any = None) -> View:
        """Register a mouse callback; without ``param`` the view itself is passed."""
        self._mouse_callback = callback
        self._mouse_param = self if param is None else param
        return self

    def on_mouse(self, event: int, x: int, y: int, flags: int) -> None:
        if self._mouse_callback is not None:
            self._mouse_callback(event, x, y, flags, self._mouse_param)

    def has(self, offset: Offset) -> bool:
        """Whether the window point lies inside this view."""
        r = self.rect
        return r.x <= offset.x < r.x + r.width and r.y <= offset.y < r.y + r.height

    def _canvas(self) -> np.ndarray:
        self.window.ensure(self.rect)
        return self.window.buffer

    def draw_rect(self, rect: Rect, color: Color) -> None:
        """Fill a rectangle given relative to the view."""
        buffer = self._canvas()
        x, y = self.rect.x + rect.x, self.rect.y + rect.y
        with Layer(buffer) as layer:
            draw_rectangle(
                layer.with_color(color),
                (x, y),
                (x + rect.width, y + rect.height),
                color_to_scalar(color),
                -1,
            )
        self.window.mark_dirty()

    def draw_fill(self, color: Color = WHITE) -> None:
        buffer = self._canvas()
        r = self.rect
        with Layer(buffer) as layer:
            draw_rectangle(
                layer.with_color(color),
                (r.x, r.y),
                (r.x + r.width - 1, r.y + r.height - 1),
                color_to_scalar(color),
                -1,
            )
        self.window.mark_dirty()

    def draw_image(self, image: np.ndarray, alpha: int = 255) -> None:
        """Copy an image into the view, scaling it to the view's size."""
        img = np.asarray(image, dtype=np.uint8)
        if img.ndim == 2:
            img = np.stack([img] * 3, axis=-1)
        if img.ndim != 3 or img.shape[2] != 3:
            raise ValueError("image must have shape (height, width, 3)")
        r = self.rect
        if r.width == 0 and r.height == 0:
            r.height, r.width = img.shape[0], img.shape[1]
        buffer = self._canvas()
        if r.width > 0 and r.height > 0:
            if img.shape[1] != r.width or img.shape[0] != r.height:
                img = np.asarray(Image.fromarray(img, "RGB").resize((r.width, r.height)))
            with Layer(buffer) as layer:
                target = layer.with_alpha(alpha)
                target[r.y : r.y + r.height, r.x : r.x + r.width] = img
        self.window.mark_dirty()

    def draw_text(self, text: str, offset: Offset, color: Color) -> None:
        """Write text with its top-left corner at ``offset`` within the view."""
        buffer = self._canvas()
        _, height = text_size(text, _TEXT_SCALE)
        origin = (self.rect.x + offset.x, self.rect.y + height + offset.y)
        with Layer(buffer) as layer:
            draw_text(layer.with_color(color), text, origin, color_to_scalar(color), _TEXT_SCALE)
        self.window.mark_dirty()

    def draw_frame(self, title: str) -> None:
        """Draw the border and title bar around the view."""
        buffer = self._canvas()
        r = self.rect
        with Layer(buffer) as layer:
            draw_rectangle(
                layer.with_color(self.background_color),
                (r.x, r.y),
                (r.x + r.width - 1, r.y + r.height - 1),
                color_to_scalar(self.background_color),
                1,
            )
            draw_rectangle(
                layer.with_color(self.frame_color),
                (r.x + 1, r.y + 1),
                (r.x + r.width - 2, r.y + r.height - 2),
                color_to_scalar(self.frame_color),
                1,
            )
            draw_rectangle(
                layer.with_color(self.frame_color),
                (r.x + 2, r.y + 2),
                (r.x + r.width - 3, r.y + 16),
                color_to_scalar(self.frame_color),
                -1,
            )
            width, _ = text_size(title, _TITLE_SCALE)
            draw_text(
                layer.with_color(self.text_color),
                title,
                (r.x + 2 + (r.width - width) // 2, r.y + 14),
                color_to_scalar(self.text_color),
                _TITLE_SCALE,
            )
        self.window.mark_dirty()

    def buffer(self) -> np.ndarray:
        """The view's region of the window buffer, as a writable array view."""
        buffer = self._canvas()
        r = self.rect
        return buffer[r.y : r.y + r.height, r.x : r.x + r.width]

    def finish(self) -> None:
        if not self.frameless:
            self.draw_frame(self.title)
        self.window.mark_dirty()

    def flush(self) -> None:
        self.window.flush()

    def hide(self, hidden: bool = True) -> None:
        if self.hidden != hidden:
            self.hidden = hidden
            self.draw_fill()


class Window:
    """A pixel buffer shared by named views, shown on flush."""

    _shared: ClassVar[Optional[Window]] = None

    def __init__(self, title: str = "", clock: Callable[[], float] = time.perf_counter) -> None:
        self.title = title
        self.name = f"plotview_{next(_window_counter)}"
        self.offset = Offset(0, 0)
        self.buffer: Optional[np.ndarray] = None
        self.views: dict[str, View] = {}
        self.dirty = False
        self.fps = 1.0
        self.hidden = False
        self.show_cursor = False
        self.cursor = Offset(-10, -10)
        self.frame: Optional[np.ndarray] = None
        self.on_display: Optional[DisplayHook] = None
        self._clock = clock
        self._start = clock()
        self._flush_time = 0.0

    def _runtime(self) -> float:
        return self._clock() - self._start

    def resize(self, rect: Rect) -> Window:
        self.set_offset(Offset(rect.x, rect.y))
        self.set_size(Size(rect.width, rect.height))
        return self

    def set_size(self, size: Size) -> Window:
        """Replace the buffer, keeping whatever of the old content still fits."""
        buffer = new_buffer(size.width, size.height, color_to_scalar(GRAY))
        current = self.buffer
        if current is not None:
            rows, cols = current.shape[:2]
            if cols > 0 and rows > 0 and size.width > 0 and size.height > 0:
                w, h = min(cols, size.width), min(rows, size.height)
                buffer[:h, :w] = current[:h, :w]
        self.buffer = buffer
        self.mark_dirty()
        return self

    def set_offset(self, offset: Offset) -> Window:
        self.offset = offset
        return self

    def set_title(self, title: str) -> Window:
        self.title = title
        return self

    def set_fps(self, fps: float) -> Window:
        self.fps = fps
        return self

    def ensure(self, rect: Rect) -> Window:
        """Grow the buffer so that ``rect`` fits inside it."""
        right, bottom = rect.x + rect.width, rect.y + rect.height
        if self.buffer is None:
            self.set_size(Size(right, bottom))
        else:
            rows, cols = self.buffer.shape[:2]
            if right > cols or bottom > rows:
                self.set_size(Size(max(cols, right), max(rows, bottom)))
        return self

    def set_cursor(self, cursor: bool) -> Window:
        self.show_cursor = cursor
        return self

    def flush(self) -> None:
        """Show the buffer if anything changed since the last flush."""
        buffer = self.buffer
        if self.dirty and buffer is not None and buffer.shape[0] > 0 and buffer.shape[1] > 0:
            frame = buffer.copy()
            if self.show_cursor:
                cx, cy = self.cursor.x, self.cursor.y
                white, black = color_to_scalar(WHITE), color_to_scalar(BLACK)
                draw_line(frame, (cx - 4, cy + 1), (cx + 6, cy + 1), white, 1)
                draw_line(frame, (cx + 1, cy - 4), (cx + 1, cy + 6), white, 1)
                draw_line(frame, (cx - 5, cy), (cx + 5, cy), black, 1)
                draw_line(frame, (cx, cy - 5), (cx, cy + 5), black, 1)
            self.frame = frame
            if self.on_display is not None:
                self.on_display(self, frame)
        self.dirty = False
        self._flush_time = self._runtime()

    def view(self, name: str, size: Optional[Size] = None) -> View:
        """The view called ``name``, created on first use."""
        if name not in self.views:
            self.views[name] = View(self, name, size or _default_size())
        return self.views[name]

    def mark_dirty(self) -> None:
        self.dirty = True

    def tick(self) -> None:
        """Flush if more than one frame period has passed since the last flush."""
        if self.fps > 0 and self._runtime() - self._flush_time > 1.0 / self.fps:
            self.flush()

    def hide(self, hidden: bool = True) -> None:
        if self.hidden != hidden:
            self.hidden = hidden
            if hidden:
                self.frame = None
            else:
                self.mark_dirty()
                self.flush()

    def on_mouse(self, event: int, x: int, y: int, flags: int) -> None:
        """Pass a mouse event to the first view under the pointer."""
        point = Offset(x, y)
        for name in sorted(self.views):
            view = self.views[name]
            if view.has(point):
                view.on_mouse(event, x, y, flags)
                break
        self.cursor = point
        if self.show_cursor:
            self.mark_dirty()
            self.flush()

    @classmethod
    def current(cls) -> Window:
        """The shared window, created on first use."""
        if Window._shared is None:
            Window._shared = Window("")
        return Window._shared

    @classmethod
    def make_current(cls, window: Window) -> Window:
        Window._shared = window
        return window

    @classmethod
    def new_current(cls, title: str = "") -> Window:
        """Replace the shared window with a fresh one."""
        Window._shared = Window(title)
        return Window._shared