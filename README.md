# plotview

plotview draws charts into in-memory RGB image buffers. Buffers are numpy
arrays of shape `(height, width, 3)` with channels in blue, green, red order.
Figures are drawn into views. A view is a named rectangle inside a window
buffer, and the window buffer grows as needed to fit every view.

## Installation

```
pip install plotview
```

To run the tests:

```
pip install "plotview[test]"
pytest
```

## Figures and series

`plotview.figure.figure(name)` returns the shared figure with that name. The
figure is created on first use and draws into the view of the same name in
`Window.current()`. `Figure.series(label)` returns the series with that label,
creating it on first use as a line in a colour derived from the label.

```python
from plotview.figure import figure
from plotview.series import SeriesType
from plotview.color import Color

fig = figure("loss")
fig.series("train").add_value([0.9, 0.7, 0.5, 0.4])
fig.series("validate").set_type(SeriesType.DOT_LINE).add_value([1.0, 0.8, 0.6])
fig.series("hist").set_type(SeriesType.HISTOGRAM).set_color(Color.from_hue(4.0)).add_value([0.3, 0.5])
fig.show()
```

`Figure.show(flush=True)` works out the value bounds of all series, draws the
figure into its view, draws the view's frame and flushes the window. It
returns `False`, and draws nothing, when no series holds data. A series whose
stored value shape does not suit its type raises `ValueError`.

These figure settings return the figure, so calls can be chained:

- `origin(x, y)` chooses whether each axis must include zero.
- `square(square)` keeps the aspect ratio square.
- `border(size)` sets the border size.
- `grid_size(size)` sets the grid spacing.
- `alpha(alpha)` sets the opacity of the figure colours.
- `set_background_color`, `set_axis_color`, `set_subaxis_color` and
  `set_text_color` set the colours.

`Figure.draw(buffer, bounds)` renders into any buffer for a given
`plotview.series.Bounds`.

Series (`plotview.series.Series`) hold keyed values. A value is a number, a
`Point2`, a `Point3` or a sequence of one to three numbers. There are four
ways to fill a series:

- `add(pairs)` appends key and value pairs.
- `add_value(values)` appends values keyed by their position.
- `set(pairs)` replaces all entries with key and value pairs.
- `set_value(values)` replaces all entries with values keyed 0, 1, 2, and so on.

Every `SeriesType` can be drawn: `LINE`, `DOT_LINE`, `DOTS`, `FILL_LINE`,
`RANGE_LINE`, `HISTOGRAM`, `VISTOGRAM`, `HORIZONTAL`, `VERTICAL`, `RANGE` and
`CIRCLE`. With `set_dynamic_color(True)`, one extra value component per entry
picks that entry's colour.

## Windows and views

`plotview.window.Window.current()` returns the shared window.
`Window.make_current(window)` and `Window.new_current(title)` replace it.
`Window.view(name, size)` returns a named view, creating it on first use.

A view can be changed with `set_offset`, `set_size`, `resize`, `autosize`,
`set_title` and the colour setters. It can be drawn into with `draw_rect`,
`draw_fill`, `draw_image`, `draw_text` and `draw_frame`. `View.buffer()`
returns the view's region of the window buffer as a writable array view.
`View.mouse(callback, param)` registers a callback. `Window.on_mouse(event, x,
y, flags)` passes an event to the first view, by name, under the pointer.

`plotview.highgui` has short helpers that act on the current window:
`imshow`, `named_window`, `move_window`, `resize_window`, `set_window_title`,
`set_mouse_callback` and `destroy_window`.

## Colours and drawing primitives

`plotview.color.Color` is an immutable RGBA colour. It has these constructors:

- hue-based: `Color.from_hue`, `Color.cos`
- gray: `Color.from_gray`
- palette picks: `Color.index`, `Color.hash`, `Color.uniq`

`with_alpha`, `gamma` and `hue` work on a colour. The module also defines
named constants such as `RED`, `GREEN`, `BLUE`, `GRAY` and `WHITE`.

`plotview.canvas` holds the low-level drawing functions: `new_buffer`,
`draw_line`, `draw_rectangle`, `draw_circle`, `fill_polygon`, `draw_text` and
`text_size`. It also has `Layer`, which draws at a given opacity and blends
into the buffer on `flush` or when its `with` block exits.

## Utilities

- `plotview.progress.Progress` tracks a position against a total. It reports
  average, last-mark and smoothed speeds, the percentage done (`percent`) and
  the estimated seconds left (`eta`).
- `plotview.table.Table` formats numbers into columns and writes them to a
  text stream with `write_header` and `write`. Columns are added with `add`,
  `add_fixed` or `add_scientific`. `border()` turns separators on or off.

## What plotview does not do

plotview opens no on-screen windows and reads no keyboard input. It has no
trackbars and no region selection. When a dirty window is flushed, the
finished image is stored in `Window.frame`. If `Window.on_display` is set,
that function is called with the window and the image, and can save or show
the image however the caller likes.