"""Vertex layout description and encoding of vertices into bytes."""

from __future__ import annotations

import enum
import math
import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .geometry import Colorf, Color, Vec2

SCHAR_MIN, SCHAR_MAX = -127, 127
UCHAR_MIN, UCHAR_MAX = 0, 255
SSHORT_MIN, SSHORT_MAX = -32767, 32767
USHORT_MIN, USHORT_MAX = 0, 65535
SINT_MIN, SINT_MAX = -2147483647, 2147483647
UINT_MIN, UINT_MAX = 0, 4294967295


class VertexAttribute(enum.IntEnum):
    """Which vertex attribute a layout element holds."""

    POSITION = 0
    COLOR = 1
    TEXCOORD = 2


class VertexFormat(enum.IntEnum):
    """Storage format of a layout element; colors come after the scalars."""

    SCHAR = 0
    SSHORT = 1
    SINT = 2
    UCHAR = 3
    USHORT = 4
    UINT = 5
    FLOAT = 6
    DOUBLE = 7
    R8G8B8 = 8
    R16G15B16 = 9
    R32G32B32 = 10
    R8G8B8A8 = 11
    B8G8R8A8 = 12
    R16G15B16A16 = 13
    R32G32B32A32 = 14
    R32G32B32A32_FLOAT = 15
    R32G32B32A32_DOUBLE = 16
    RGB32 = 17
    RGBA32 = 18

    @property
    def is_color(self) -> bool:
        return self >= VertexFormat.R8G8B8


class AntiAliasing(enum.IntEnum):
    OFF = 0
    ON = 1


_SCALAR_SIZE = {
    VertexFormat.SCHAR: 1,
    VertexFormat.SSHORT: 2,
    VertexFormat.SINT: 4,
    VertexFormat.UCHAR: 1,
    VertexFormat.USHORT: 2,
    VertexFormat.UINT: 4,
    VertexFormat.FLOAT: 4,
    VertexFormat.DOUBLE: 8,
}

_COLOR_SIZE = {
    VertexFormat.R8G8B8: 4,
    VertexFormat.R16G15B16: 6,
    VertexFormat.R32G32B32: 12,
    VertexFormat.R8G8B8A8: 4,
    VertexFormat.B8G8R8A8: 4,
    VertexFormat.R16G15B16A16: 8,
    VertexFormat.R32G32B32A32: 16,
    VertexFormat.R32G32B32A32_FLOAT: 16,
    VertexFormat.R32G32B32A32_DOUBLE: 32,
    VertexFormat.RGB32: 4,
    VertexFormat.RGBA32: 4,
}

# (struct code, lower bound, upper bound) for integer scalar formats
_INT_FORMATS = {
    VertexFormat.SCHAR: ("b", SCHAR_MIN, SCHAR_MAX),
    VertexFormat.SSHORT: ("h", SSHORT_MIN, SSHORT_MAX),
    VertexFormat.SINT: ("i", SINT_MIN, SINT_MAX),
    VertexFormat.UCHAR: ("B", UCHAR_MIN, UCHAR_MAX),
    VertexFormat.USHORT: ("H", USHORT_MIN, USHORT_MAX),
    VertexFormat.UINT: ("I", UINT_MIN, UINT_MAX),
}


@dataclass(frozen=True)
class LayoutElement:
    """One attribute of a vertex: what it is, how it is stored, and where."""

    attribute: VertexAttribute
    format: VertexFormat
    offset: int

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("offset must not be negative")
        if (self.attribute is VertexAttribute.COLOR) != self.format.is_color:
            raise ValueError(
                f"format {self.format.name} does not suit attribute {self.attribute.name}"
            )

    @property
    def size(self) -> int:
        """Number of bytes the element occupies."""
        if self.format.is_color:
            return _COLOR_SIZE[self.format]
        return 2 * _SCALAR_SIZE[self.format]


@dataclass(frozen=True)
class NullTexture:
    """Texture and coordinate used for untextured shapes."""

    texture: Any = None
    uv: Vec2 = field(default_factory=Vec2)


@dataclass(frozen=True)
class ConvertConfig:
    """Settings for turning draw commands into vertices and indices."""

    vertex_layout: tuple[LayoutElement, ...]
    vertex_size: int
    vertex_alignment: int = 4
    global_alpha: float = 1.0
    line_aa: AntiAliasing = AntiAliasing.ON
    shape_aa: AntiAliasing = AntiAliasing.ON
    circle_segment_count: int = 22
    arc_segment_count: int = 22
    curve_segment_count: int = 22
    tex_null: NullTexture = field(default_factory=NullTexture)

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertex_layout", tuple(self.vertex_layout))
        if not self.vertex_layout:
            raise ValueError("vertex layout must not be empty")
        if self.vertex_size <= 0:
            raise ValueError("vertex size must be positive")
        if self.vertex_alignment <= 0:
            raise ValueError("vertex alignment must be positive")
        for element in self.vertex_layout:
            if element.offset + element.size > self.vertex_size:
                raise ValueError(
                    f"{element.attribute.name} element does not fit into the vertex"
                )


def _pack_f32(value: float) -> bytes:
    try:
        return struct.pack("<f", value)
    except OverflowError:
        return struct.pack("<f", math.copysign(math.inf, value))


def _scaled(value: float, limit: int) -> int:
    return min(int(value * float(limit)), limit)


def encode_color(values: Iterable[float], fmt: VertexFormat) -> bytes:
    """Encode four float channels in a color format (little-endian)."""
    fmt = VertexFormat(fmt)
    if not fmt.is_color:
        raise ValueError(f"{fmt.name} is not a color format")
    channels = [max(0.0, min(1.0, float(v))) for v in values]
    if len(channels) != 4:
        raise ValueError("expected four color channels")

    if fmt in (VertexFormat.R8G8B8A8, VertexFormat.R8G8B8):
        return bytes(Color.from_floats(channels))
    if fmt is VertexFormat.B8G8R8A8:
        col = Color.from_floats(channels)
        return bytes((col.b, col.g, col.r, col.a))
    if fmt is VertexFormat.R16G15B16:
        return struct.pack("<3H", *(_scaled(c, USHORT_MAX) for c in channels[:3]))
    if fmt is VertexFormat.R16G15B16A16:
        return struct.pack("<4H", *(_scaled(c, USHORT_MAX) for c in channels))
    if fmt is VertexFormat.R32G32B32:
        return struct.pack("<3I", *(_scaled(c, UINT_MAX) for c in channels[:3]))
    if fmt is VertexFormat.R32G32B32A32:
        return struct.pack("<4I", *(_scaled(c, UINT_MAX) for c in channels))
    if fmt is VertexFormat.R32G32B32A32_FLOAT:
        return struct.pack("<4f", *channels)
    if fmt is VertexFormat.R32G32B32A32_DOUBLE:
        return struct.pack("<4d", *channels)
    return struct.pack("<I", Color.from_floats(channels).to_u32())


def encode_values(values: Iterable[float], fmt: VertexFormat) -> bytes:
    """Encode scalar values one after another, clamped to the format's range."""
    fmt = VertexFormat(fmt)
    if fmt.is_color:
        raise ValueError(f"{fmt.name} is a color format")
    out = bytearray()
    for value in values:
        value = float(value)
        if fmt is VertexFormat.FLOAT:
            out += _pack_f32(value)
        elif fmt is VertexFormat.DOUBLE:
            out += struct.pack("<d", value)
        else:
            code, low, high = _INT_FORMATS[fmt]
            clamped = low if math.isnan(value) else max(float(low), min(value, float(high)))
            out += struct.pack("<" + code, int(clamped))
    return bytes(out)


def encode_vertex(config: ConvertConfig, pos: Sequence[float] | Vec2,
                  uv: Sequence[float] | Vec2,
                  color: Sequence[float] | Colorf) -> bytes:
    """Encode one vertex according to ``config``; unused bytes are zero."""
    vertex = bytearray(config.vertex_size)
    for element in config.vertex_layout:
        if element.attribute is VertexAttribute.POSITION:
            data = encode_values(tuple(pos), element.format)
        elif element.attribute is VertexAttribute.TEXCOORD:
            data = encode_values(tuple(uv), element.format)
        else:
            data = encode_color(tuple(color), element.format)
        vertex[element.offset:element.offset + len(data)] = data
    return bytes(vertex)