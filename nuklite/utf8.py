"""UTF-8 decoding and encoding of single glyphs and glyph sequences."""

from __future__ import annotations

from collections.abc import Iterator

UTF_SIZE = 4
UTF_INVALID = 0xFFFD

_UTF_BYTE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_UTF_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_UTF_MIN = (0x0, 0x0, 0x80, 0x800, 0x10000)
_UTF_MAX = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)


def _validate(rune: int, kind: int) -> tuple[int, int]:
    """Replace out-of-range runes and return the rune with its encoded length."""
    if not _UTF_MIN[kind] <= rune <= _UTF_MAX[kind] or 0xD800 <= rune <= 0xDFFF:
        rune = UTF_INVALID
    length = next(i for i in range(1, UTF_SIZE + 1) if rune <= _UTF_MAX[i])
    return rune, length


def _decode_byte(byte: int) -> tuple[int, int]:
    """Classify one byte; kind 0 is a continuation, 1..4 a lead byte."""
    for kind, (mask, lead) in enumerate(zip(_UTF_MASK, _UTF_BYTE)):
        if byte & mask == lead:
            return byte & ~mask & 0xFF, kind
    return 0, len(_UTF_MASK)


def _decode_at(data: bytes, pos: int) -> tuple[int, int]:
    end = len(data)
    if pos >= end:
        return UTF_INVALID, 0
    rune, length = _decode_byte(data[pos])
    if not 1 <= length <= UTF_SIZE:
        return UTF_INVALID, 1
    consumed = 1
    for offset in range(1, min(length, end - pos)):
        payload, kind = _decode_byte(data[pos + offset])
        rune = (rune << 6) | payload
        if kind != 0:
            return UTF_INVALID, offset
        consumed += 1
    if consumed < length:
        return UTF_INVALID, 0
    rune, _ = _validate(rune, length)
    return rune, length


def decode(data: bytes) -> tuple[int, int]:
    """Decode the first glyph of ``data``.

    Returns ``(rune, length)``. A length of 0 means no glyph could be
    decoded (empty or truncated input); invalid sequences yield
    ``UTF_INVALID`` as rune.
    """
    return _decode_at(bytes(data), 0)


def encode(rune: int) -> bytes:
    """Encode one code point; invalid code points encode ``UTF_INVALID``."""
    rune, length = _validate(rune, 0)
    out = bytearray(length)
    for i in range(length - 1, 0, -1):
        out[i] = _UTF_BYTE[0] | (rune & ~_UTF_MASK[0] & 0xFF)
        rune >>= 6
    out[0] = _UTF_BYTE[length] | (rune & 0xFF & ~_UTF_MASK[length])
    return bytes(out)


def iter_glyphs(data: bytes) -> Iterator[tuple[int, int, int]]:
    """Yield ``(offset, rune, length)`` for every decodable glyph in order."""
    data = bytes(data)
    pos = 0
    rune, length = _decode_at(data, pos)
    while length and pos < len(data):
        yield pos, rune, length
        pos += length
        rune, length = _decode_at(data, pos)


def utf_len(data: bytes) -> int:
    """Count the glyphs in ``data`` up to the first undecodable position."""
    return sum(1 for _ in iter_glyphs(data))


def utf_at(data: bytes, index: int) -> tuple[int, int, int] | None:
    """Return ``(offset, rune, length)`` of glyph ``index``.

    An index equal to the glyph count yields the end position with an
    invalid rune and length 0; anything further, or negative, yields None.
    """
    if index < 0:
        return None
    end = 0
    count = 0
    for position, glyph in enumerate(iter_glyphs(data)):
        if position == index:
            return glyph
        offset, _, length = glyph
        end = offset + length
        count = position + 1
    if count == index:
        return end, UTF_INVALID, 0
    return None