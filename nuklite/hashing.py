"""32-bit MurmurHash3 as used for widget and window identifiers."""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _mix_block(k1: int) -> int:
    k1 = (k1 * _C1) & _MASK
    k1 = _rotl(k1, 15)
    return (k1 * _C2) & _MASK


def murmur_hash(key: bytes | str, seed: int = 0) -> int:
    """Hash ``key`` (text is hashed as UTF-8) with a 32-bit ``seed``."""
    data = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    h1 = seed & _MASK
    body = len(data) // 4 * 4

    for (k1,) in struct.iter_unpack("<I", data[:body]):
        h1 ^= _mix_block(k1)
        h1 = _rotl(h1, 13)
        h1 = (h1 * 5 + 0xE6546B64) & _MASK

    tail = data[body:]
    if tail:
        h1 ^= _mix_block(int.from_bytes(tail, "little"))

    h1 ^= len(data) & _MASK
    h1 ^= h1 >> 16
    h1 = (h1 * 0x85EBCA6B) & _MASK
    h1 ^= h1 >> 13
    h1 = (h1 * 0xC2B2AE35) & _MASK
    h1 ^= h1 >> 16
    return h1