"""Basic geometric and color value types used by the renderer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Vec2:
    """A two-dimensional vector or point."""

    x: float = 0.0
    y: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def length_squared(self) -> float:
        """Squared Euclidean length."""
        return self.x * self.x + self.y * self.y


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield from (self.x, self.y, self.w, self.h)

    def intersects(self, other: Rect) -> bool:
        """True if the two rectangles overlap; touching edges do not count."""
        return (
            self.x < other.x + other.w
            and other.x < self.x + self.w
            and self.y < other.y + other.h
            and other.y < self.y + self.h
        )

    def shrink(self, amount: float) -> Rect:
        """Move every edge inwards by ``amount``, never below zero size."""
        w = max(self.w, 2 * amount)
        h = max(self.h, 2 * amount)
        return Rect(self.x + amount, self.y + amount, w - 2 * amount, h - 2 * amount)


NULL_RECT = Rect(-8192.0, -8192.0, 16384.0, 16384.0)


def _saturate(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class Colorf:
    """A color with floating-point channels, nominally in [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield from (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class Color:
    """A color with 8-bit channels."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"channel {name} must be an integer in 0..255, got {value!r}")

    def __iter__(self) -> Iterator[int]:
        yield from (self.r, self.g, self.b, self.a)

    def to_floats(self) -> Colorf:
        """Channels scaled to [0, 1]."""
        return Colorf(self.r / 255.0, self.g / 255.0, self.b / 255.0, self.a / 255.0)

    @staticmethod
    def from_floats(values: Iterable[float]) -> Color:
        """Build a color from four float channels, clamping each to [0, 1]."""
        channels = [_saturate(v) for v in values]
        if len(channels) != 4:
            raise ValueError("expected four channel values")
        return Color(*(int(c * 255.0) for c in channels))

    def to_u32(self) -> int:
        """Pack as ``r | g << 8 | b << 16 | a << 24``."""
        return self.r | (self.g << 8) | (self.b << 16) | (self.a << 24)


RED = Color(255, 0, 0, 255)
GREEN = Color(0, 255, 0, 255)
BLUE = Color(0, 0, 255, 255)
WHITE = Color(255, 255, 255, 255)
BLACK = Color(0, 0, 0, 255)
YELLOW = Color(255, 255, 0, 255)


@dataclass(frozen=True)
class Image:
    """A texture handle with its size and an optional sub-region."""

    handle: Any = None
    w: int = 0
    h: int = 0
    region: tuple[int, int, int, int] = field(default=(0, 0, 0, 0))

    def is_subimage(self) -> bool:
        """True when the image carries a size, i.e. refers to a region."""
        return not (self.w == 0 and self.h == 0)