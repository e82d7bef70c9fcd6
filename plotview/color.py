"""RGBA colours and hue-based colour generators."""

from __future__ import annotations

import math
import zlib
from dataclasses import dataclass

_color_counter: dict[str, int] = {}


def _channel(value: float) -> int:
    """Truncate a channel value toward zero and keep it within a byte."""
    return min(255, max(0, int(value)))


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"channel {name} must be an int in 0..255, got {value!r}")

    def with_alpha(self, alpha: int) -> Color:
        """Return the same colour with another alpha."""
        return Color(self.r, self.g, self.b, alpha)

    def gamma(self, gamma: float) -> Color:
        """Apply gamma correction to the colour channels, keeping alpha."""
        exponent = 1 / gamma
        return Color(
            _channel((self.r / 255) ** exponent * 255),
            _channel((self.g / 255) ** exponent * 255),
            _channel((self.b / 255) ** exponent * 255),
            self.a,
        )

    def hue(self) -> float:
        """Hue of the colour in the range [0, 6)."""
        lo = min(self.r, self.g, self.b)
        hi = max(self.r, self.g, self.b)
        if lo == hi:
            return 0.0
        span = float(hi - lo)
        if self.r == hi:
            value = (self.g - self.b) / span
        elif self.g == hi:
            value = 2.0 + (self.b - self.r) / span
        else:
            value = 4.0 + (self.r - self.g) / span
        if value < 0:
            value += 6
        return value

    @classmethod
    def from_gray(cls, v: int) -> Color:
        return cls(v, v, v)

    @classmethod
    def from_hue(cls, hue: float) -> Color:
        """Fully saturated colour for a hue in [0, 6)."""
        whole = int(hue)
        f = (hue - whole) * 255
        sector = int(math.fmod(whole, 6))
        if sector == 0:
            return cls(255, _channel(f), 0)
        if sector == 1:
            return cls(_channel(255 - f), 255, 0)
        if sector == 2:
            return cls(0, 255, _channel(f))
        if sector == 3:
            return cls(0, _channel(255 - f), 255)
        if sector == 4:
            return cls(_channel(f), 0, 255)
        if sector == 5:
            return cls(255, 0, _channel(255 - f))
        return cls(0, 0, 0)

    @classmethod
    def cos(cls, hue: float) -> Color:
        """Smooth cosine-based colour for a hue in [0, 6)."""
        return cls(
            _channel((math.cos(hue * 1.047) + 1) * 127.9),
            _channel((math.cos((hue - 2) * 1.047) + 1) * 127.9),
            _channel((math.cos((hue - 4) * 1.047) + 1) * 127.9),
        )

    @classmethod
    def index(
        cls,
        index: int,
        density: int = 16,
        avoid: float = 2.0,
        range_: float = 2.0,
    ) -> Color:
        """Pick one of ``density`` distinct colours; by default greens are avoided."""
        index &= 0xFF
        density &= 0xFF
        if density == 0:
            raise ValueError("density must be positive")
        if avoid > 0:
            step = density / (6 - range_)
            offset = (avoid + range_ / 2) * step
            index = int(offset + index % density) & 0xFF
            density = int(density + step * range_) & 0xFF
            if density == 0:
                raise ValueError("density overflowed to zero")
        hue = index % density * 6.0 / density
        return cls.cos(hue)

    @classmethod
    def hash(cls, seed: str) -> Color:
        """Deterministic colour derived from a string."""
        return cls.index(zlib.crc32(seed.encode("utf-8")))

    @classmethod
    def uniq(cls, name: str) -> Color:
        """Colour assigned to ``name`` in order of first use."""
        if name not in _color_counter:
            _color_counter[name] = len(_color_counter)
        return cls.index(_color_counter[name])


RED = Color.from_hue(0.0)
ORANGE = Color.from_hue(0.5)
YELLOW = Color.from_hue(1.0)
LAWN = Color.from_hue(1.5)
GREEN = Color.from_hue(2.0)
AQUA = Color.from_hue(2.5)
CYAN = Color.from_hue(3.0)
SKY = Color.from_hue(3.5)
BLUE = Color.from_hue(4.0)
PURPLE = Color.from_hue(4.5)
MAGENTA = Color.from_hue(5.0)
PINK = Color.from_hue(5.5)
BLACK = Color.from_gray(0)
DARK = Color.from_gray(32)
GRAY = Color.from_gray(128)
LIGHT = Color.from_gray(223)
WHITE = Color.from_gray(255)