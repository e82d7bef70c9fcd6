"""Window-style convenience functions acting on the current shared window."""

from __future__ import annotations

from typing import Any, Optional, Union

import numpy as np

from plotview.window import MouseCallback, Offset, Size, View, Window


def destroy_window(view: str) -> None:
    """Hide the named view, blanking its region."""
    Window.current().view(view).hide()


def imshow(view: str, img: np.ndarray) -> None:
    """Draw an image into the named view and show the window."""
    target = Window.current().view(view)
    target.draw_image(img)
    target.finish()
    target.flush()


def move_window(view: str, x: int, y: int) -> None:
    Window.current().view(view).set_offset(Offset(x, y))


def named_window(view: str, flags: int = 0) -> View:
    """Create the named view if it does not exist yet."""
    return Window.current().view(view)


def resize_window(view: str, width: Union[int, Size], height: Optional[int] = None) -> None:
    """Resize the named view, given a width and height or a Size."""
    if isinstance(width, Size):
        size = width
    else:
        if height is None:
            raise TypeError("height is required when width is not a Size")
        size = Size(width, height)
    Window.current().view(view).set_size(size)


def set_mouse_callback(view: str, on_mouse: Optional[MouseCallback], userdata: Any = None) -> None:
    Window.current().view(view).mouse(on_mouse, userdata)


def set_window_title(view: str, title: str) -> None:
    Window.current().view(view).set_title(title)