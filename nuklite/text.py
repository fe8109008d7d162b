"""Font interface and text measurement: clamping and bounds of UTF-8 text."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .utf8 import decode

Point = tuple[float, float]


@dataclass(frozen=True)
class Glyph:
    """Placement and texture coordinates of one rendered glyph."""

    uv: tuple[Point, Point] = ((0.0, 0.0), (0.0, 0.0))
    offset: Point = (0.0, 0.0)
    width: float = 0.0
    height: float = 0.0
    xadvance: float = 0.0


WidthFunction = Callable[[float, bytes], float]
QueryFunction = Callable[[float, int, int], Glyph]


@dataclass
class UserFont:
    """A font given by callbacks.

    ``width(height, data)`` measures UTF-8 bytes; ``query(height, rune,
    next_rune)`` returns the :class:`Glyph` for ``rune``.
    """

    height: float
    width: WidthFunction
    query: QueryFunction | None = None
    texture: Any = None

    def text_width(self, data: bytes) -> float:
        """Width of ``data`` at this font's height."""
        return float(self.width(self.height, bytes(data)))


@dataclass(frozen=True)
class ClampResult:
    """How much of a text fits: bytes, glyphs and their width."""

    length: int
    glyphs: int
    width: float


@dataclass(frozen=True)
class TextBounds:
    """Size of a text block, end offset of the last line, and consumption."""

    size: Point
    offset: Point
    remaining: int
    glyphs: int


def _rune_set(separators: Iterable[int | str]) -> frozenset[int]:
    return frozenset(ord(s) if isinstance(s, str) else int(s) for s in separators)


def text_clamp(font: UserFont, data: bytes, space: float,
               separators: Iterable[int | str] = ()) -> ClampResult:
    """Find how much of ``data`` fits into ``space``.

    When the text does not fit and a separator was seen, the length is cut
    back to just after the last separator.
    """
    data = bytes(data)
    seps = _rune_set(separators)
    text_len = len(data)

    width = 0.0
    last_width = 0.0
    length = 0
    glyphs = 0
    sep_len = 0
    sep_glyphs = 0
    sep_width = 0.0

    rune, glyph_len = decode(data)
    while glyph_len and width < space and length < text_len:
        length += glyph_len
        measured = font.text_width(data[:length])
        if rune in seps:
            sep_width = last_width = width
            sep_glyphs = glyphs + 1
            sep_len = length
        else:
            last_width = sep_width = width
            sep_glyphs = glyphs + 1
        width = measured
        rune, glyph_len = decode(data[length:])
        glyphs += 1

    if length >= text_len:
        return ClampResult(length, glyphs, last_width)
    return ClampResult(sep_len or length, sep_glyphs, sep_width)


def text_bounds(font: UserFont | None, data: bytes, row_height: float,
                stop_on_new_line: bool = False) -> TextBounds:
    """Measure a possibly multi-line text.

    ``remaining`` is the byte offset where measuring stopped; with
    ``stop_on_new_line`` it points at the first line break.
    """
    data = bytes(data)
    if font is None or not data:
        return TextBounds((0.0, row_height), (0.0, row_height), 0, 0)

    rune, glyph_len = decode(data)
    if not glyph_len:
        return TextBounds((0.0, 0.0), (0.0, 0.0), 0, 0)
    glyph_width = font.text_width(data[:glyph_len])

    size_x = 0.0
    size_y = 0.0
    line_width = 0.0
    text_len = 0
    glyphs = 0
    byte_len = len(data)

    while text_len < byte_len and glyph_len:
        if rune == ord("\n"):
            size_x = max(size_x, line_width)
            size_y += row_height
            line_width = 0.0
            glyphs += 1
            if stop_on_new_line:
                break
            text_len += 1
            rune, glyph_len = decode(data[text_len:])
            continue

        if rune == ord("\r"):
            text_len += 1
            glyphs += 1
            rune, glyph_len = decode(data[text_len:])
            continue

        glyphs += 1
        text_len += glyph_len
        line_width += glyph_width
        rune, glyph_len = decode(data[text_len:])
        glyph_width = font.text_width(data[text_len:text_len + glyph_len])

    size_x = max(size_x, line_width)
    offset = (line_width, size_y + row_height)
    if line_width > 0 or size_y == 0.0:
        size_y += row_height
    return TextBounds((size_x, size_y), offset, text_len, glyphs)