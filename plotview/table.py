"""Fixed-width text tables for progress reports."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TextIO


class Alignment(enum.Enum):
    NONE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    INTERNAL = enum.auto()


class FloatFormat(enum.Enum):
    NONE = enum.auto()
    FIXED = enum.auto()
    SCIENTIFIC = enum.auto()
    HEX = enum.auto()
    DEFAULT = enum.auto()


@dataclass
class _Entry:
    string: str = ""
    width: int = 0
    align: Alignment = Alignment.NONE
    float_format: FloatFormat = FloatFormat.NONE
    precision: int = 0
    fill: str = ""


_ALIGN_CODES = {
    Alignment.NONE: ">",
    Alignment.RIGHT: ">",
    Alignment.LEFT: "<",
    Alignment.INTERNAL: "=",
}


def _hex_float(value: float) -> str:
    text = value.hex()
    mantissa, _, exponent = text.partition("p")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}p{exponent}"


def _format(entry: _Entry, value: float) -> str:
    precision = entry.precision - 1 if entry.precision > 0 else 6
    if entry.float_format is FloatFormat.FIXED:
        body = f"{value:.{precision}f}"
    elif entry.float_format is FloatFormat.SCIENTIFIC:
        body = f"{value:.{precision}e}"
    elif entry.float_format is FloatFormat.HEX:
        body = _hex_float(value)
    else:
        body = f"{value:.{max(precision, 1)}g}"
    if entry.width <= len(body):
        return body
    fill = entry.fill or " "
    align = _ALIGN_CODES[entry.align]
    if align == "=" and body[:1] in "+-":
        return body[0] + body[1:].rjust(entry.width - 1, fill)
    if align == "<":
        return body.ljust(entry.width, fill)
    return body.rjust(entry.width, fill)


class Table:
    """Columns of formatted numbers with an optional bordered header."""

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._keys: list[str] = []
        self._hsep = ""
        self._vsep = ""

    def _add(self, key: str, entry: _Entry) -> None:
        self._entries[key] = entry
        self._keys.append(key)

    def add(self, key: str, width: int) -> None:
        """Add a column with general number formatting."""
        self._add(key, _Entry(width=width))

    def add_fixed(self, key: str, width: int, precision: int = -1) -> None:
        """Add a fixed-point column; a negative precision keeps the default."""
        self._add(
            key,
            _Entry(width=width, float_format=FloatFormat.FIXED, precision=precision + 1),
        )

    def add_scientific(self, key: str, width: int, precision: int = -1) -> None:
        """Add a scientific-notation column; a negative precision keeps the default."""
        self._add(
            key,
            _Entry(width=width, float_format=FloatFormat.SCIENTIFIC, precision=precision + 1),
        )

    def set(self, key: str, value: float) -> None:
        """Format ``value`` into the column ``key``; unknown keys raise KeyError."""
        entry = self._entries[key]
        entry.string = _format(entry, float(value))

    def write_header(self, stream: TextIO) -> None:
        for key in self._keys:
            stream.write(self._hsep + key.rjust(self._entries[key].width))
        stream.write(self._hsep + "\n")
        if self._vsep:
            for key in self._keys:
                stream.write(
                    self._hsep + self._vsep.rjust(self._entries[key].width, self._vsep[0])
                )
            stream.write(self._hsep + "\n")

    def write(self, stream: TextIO) -> None:
        for key in self._keys:
            stream.write(self._hsep + self._entries[key].string)
        stream.write(self._hsep)

    def border(self, show: bool = True) -> None:
        if show:
            self._hsep, self._vsep = " | ", "-"
        else:
            self._hsep, self._vsep = "", ""

    def __str__(self) -> str:
        parts = [self._hsep + self._entries[key].string for key in self._keys]
        return "".join(parts) + self._hsep