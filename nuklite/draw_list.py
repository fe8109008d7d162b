"""Draw list: paths and shapes turned into encoded vertices, indices and commands."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from .geometry import NULL_RECT, Color, Image, Rect, Vec2
from .tessellate import Mesh, MeshVertex, fill_poly_convex as _fill_mesh
from .tessellate import stroke_poly_line as _stroke_mesh
from .text import UserFont
from .utf8 import UTF_INVALID, decode
from .vertex_layout import USHORT_MAX, AntiAliasing, ConvertConfig, encode_vertex

_CIRCLE_SEGMENTS = 12


@dataclass
class DrawCommand:
    """A run of indices drawn with one clip rectangle and texture."""

    clip_rect: Rect
    texture: Any = None
    elem_count: int = 0


class DrawList:
    """Accumulates draw commands, vertex bytes and element indices."""

    def __init__(self, config: ConvertConfig, line_aa: AntiAliasing | None = None,
                 shape_aa: AntiAliasing | None = None, index_bits: int = 16) -> None:
        if index_bits not in (16, 32):
            raise ValueError("index_bits must be 16 or 32")
        self.config = config
        self.line_aa = config.line_aa if line_aa is None else line_aa
        self.shape_aa = config.shape_aa if shape_aa is None else shape_aa
        self.index_bits = index_bits
        self.commands: list[DrawCommand] = []
        self.vertices = bytearray()
        self.elements: list[int] = []
        self.vertex_count = 0
        self.path: list[Vec2] = []
        self.clip_rect = NULL_RECT
        self.circle_vtx = tuple(
            Vec2(math.cos(a), math.sin(a))
            for a in (i / _CIRCLE_SEGMENTS * 2 * math.pi for i in range(_CIRCLE_SEGMENTS))
        )

    # commands -----------------------------------------------------------

    def _push_command(self, clip: Rect, texture: Any) -> DrawCommand:
        cmd = DrawCommand(clip, texture)
        self.commands.append(cmd)
        self.clip_rect = clip
        return cmd

    def add_clip(self, rect: Rect) -> None:
        """Start a new command clipped to ``rect``."""
        if not self.commands:
            self._push_command(rect, self.config.tex_null.texture)
            return
        prev = self.commands[-1]
        if prev.elem_count == 0:
            prev.clip_rect = rect
        self._push_command(rect, prev.texture)

    def push_image(self, texture: Any) -> None:
        """Make ``texture`` current, starting a command only when needed."""
        if not self.commands:
            self._push_command(NULL_RECT, texture)
            return
        prev = self.commands[-1]
        if prev.elem_count == 0:
            prev.texture = texture
        elif prev.texture != texture:
            self._push_command(prev.clip_rect, texture)

    def _append_mesh(self, mesh: Mesh) -> None:
        if not mesh.vertices:
            return
        if not self.commands:
            self.add_clip(NULL_RECT)
        base = self.vertex_count
        total = base + len(mesh.vertices)
        if self.index_bits == 16 and total >= USHORT_MAX:
            raise OverflowError("too many vertices for 16-bit vertex indices")
        for v in mesh.vertices:
            self.vertices += encode_vertex(self.config, v.pos, v.uv, v.color)
        self.vertex_count = total
        self.elements.extend(base + i for i in mesh.indices)
        self.commands[-1].elem_count += len(mesh.indices)

    def _with_alpha(self, color: Color) -> Color:
        alpha = min(255, max(0, int(color.a * self.config.global_alpha)))
        return Color(color.r, color.g, color.b, alpha)

    # paths --------------------------------------------------------------

    def path_clear(self) -> None:
        """Discard the current path."""
        self.path = []

    def path_line_to(self, pos: Vec2) -> None:
        """Append a point to the current path."""
        if not self.commands:
            self.add_clip(NULL_RECT)
        null_texture = self.config.tex_null.texture
        if self.commands[-1].texture != null_texture:
            self.push_image(null_texture)
        self.path.append(pos)

    def path_arc_to_fast(self, center: Vec2, radius: float, a_min: int, a_max: int) -> None:
        """Append points of the precomputed 12-step circle from ``a_min`` to ``a_max``."""
        if a_min < 0 or a_max < 0:
            raise ValueError("arc steps must not be negative")
        for a in range(a_min, a_max + 1):
            c = self.circle_vtx[a % _CIRCLE_SEGMENTS]
            self.path_line_to(Vec2(center.x + c.x * radius, center.y + c.y * radius))

    def path_arc_to(self, center: Vec2, radius: float, a_min: float, a_max: float,
                    segments: int) -> None:
        """Append ``segments + 1`` points along an arc between two angles."""
        if radius == 0.0:
            return
        if segments <= 0:
            raise ValueError("segments must be positive")
        d_angle = (a_max - a_min) / segments
        sin_d, cos_d = math.sin(d_angle), math.cos(d_angle)
        cx = math.cos(a_min) * radius
        cy = math.sin(a_min) * radius
        for _ in range(segments + 1):
            self.path_line_to(Vec2(center.x + cx, center.y + cy))
            cx, cy = cx * cos_d - cy * sin_d, cy * cos_d + cx * sin_d

    def path_rect_to(self, a: Vec2, b: Vec2, rounding: float) -> None:
        """Append the outline of the rectangle from ``a`` to ``b``."""
        r = min(rounding, abs(b.x - a.x), abs(b.y - a.y))
        if r == 0.0:
            for p in (a, Vec2(b.x, a.y), b, Vec2(a.x, b.y)):
                self.path_line_to(p)
            return
        self.path_arc_to_fast(Vec2(a.x + r, a.y + r), r, 6, 9)
        self.path_arc_to_fast(Vec2(b.x - r, a.y + r), r, 9, 12)
        self.path_arc_to_fast(Vec2(b.x - r, b.y - r), r, 0, 3)
        self.path_arc_to_fast(Vec2(a.x + r, b.y - r), r, 3, 6)

    def path_curve_to(self, p2: Vec2, p3: Vec2, p4: Vec2, num_segments: int) -> None:
        """Append a cubic Bezier curve starting at the last path point."""
        if not self.path:
            raise ValueError("a curve needs a starting point in the path")
        num_segments = max(num_segments, 1)
        p1 = self.path[-1]
        t_step = 1.0 / num_segments
        for step in range(1, num_segments + 1):
            t = t_step * step
            u = 1.0 - t
            w1, w2, w3, w4 = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
            self.path_line_to(Vec2(
                w1 * p1.x + w2 * p2.x + w3 * p3.x + w4 * p4.x,
                w1 * p1.y + w2 * p2.y + w3 * p3.y + w4 * p4.y,
            ))

    def path_fill(self, color: Color) -> None:
        """Fill the current path as a convex polygon and clear it."""
        self.fill_poly_convex(self.path, color, self.config.shape_aa)
        self.path_clear()

    def path_stroke(self, color: Color, closed: bool, thickness: float) -> None:
        """Stroke the current path and clear it."""
        self.stroke_poly_line(self.path, color, closed, thickness, self.config.line_aa)
        self.path_clear()

    # shapes -------------------------------------------------------------

    def stroke_poly_line(self, points: Iterable[Sequence[float] | Vec2], color: Color,
                         closed: bool, thickness: float, aliasing: AntiAliasing) -> None:
        """Stroke a polyline; the global alpha is applied twice, as for all strokes."""
        pts = list(points)
        if len(pts) < 2:
            return
        color = self._with_alpha(self._with_alpha(color))
        self._append_mesh(_stroke_mesh(pts, color, closed, thickness, aliasing,
                                       self.config.tex_null.uv))

    def fill_poly_convex(self, points: Iterable[Sequence[float] | Vec2], color: Color,
                         aliasing: AntiAliasing) -> None:
        """Fill a convex polygon."""
        pts = list(points)
        if len(pts) < 3:
            return
        self._append_mesh(_fill_mesh(pts, self._with_alpha(color), aliasing,
                                     self.config.tex_null.uv))

    def stroke_line(self, a: Vec2, b: Vec2, color: Color, thickness: float) -> None:
        if not color.a:
            return
        if self.line_aa == AntiAliasing.ON:
            self.path_line_to(a)
            self.path_line_to(b)
        else:
            half = Vec2(0.5, 0.5)
            self.path_line_to(a - half)
            self.path_line_to(b - half)
        self.path_stroke(color, False, thickness)

    def _rect_path(self, rect: Rect, rounding: float) -> None:
        end = Vec2(rect.x + rect.w, rect.y + rect.h)
        if self.line_aa == AntiAliasing.ON:
            self.path_rect_to(Vec2(rect.x, rect.y), end, rounding)
        else:
            self.path_rect_to(Vec2(rect.x - 0.5, rect.y - 0.5), end, rounding)

    def fill_rect(self, rect: Rect, color: Color, rounding: float) -> None:
        if not color.a:
            return
        self._rect_path(rect, rounding)
        self.path_fill(color)

    def stroke_rect(self, rect: Rect, color: Color, rounding: float, thickness: float) -> None:
        if not color.a:
            return
        self._rect_path(rect, rounding)
        self.path_stroke(color, True, thickness)

    def fill_rect_multi_color(self, rect: Rect, left: Color, top: Color, right: Color,
                              bottom: Color) -> None:
        """Fill a rectangle with one color per corner, clockwise from top-left."""
        self.push_image(self.config.tex_null.texture)
        uv = self.config.tex_null.uv
        corners = (
            (Vec2(rect.x, rect.y), left),
            (Vec2(rect.x + rect.w, rect.y), top),
            (Vec2(rect.x + rect.w, rect.y + rect.h), right),
            (Vec2(rect.x, rect.y + rect.h), bottom),
        )
        self._append_mesh(Mesh(
            [MeshVertex(pos, uv, col.to_floats()) for pos, col in corners],
            [0, 1, 2, 0, 2, 3],
        ))

    def fill_triangle(self, a: Vec2, b: Vec2, c: Vec2, color: Color) -> None:
        if not color.a:
            return
        for p in (a, b, c):
            self.path_line_to(p)
        self.path_fill(color)

    def stroke_triangle(self, a: Vec2, b: Vec2, c: Vec2, color: Color,
                        thickness: float) -> None:
        if not color.a:
            return
        for p in (a, b, c):
            self.path_line_to(p)
        self.path_stroke(color, True, thickness)

    def _circle_path(self, center: Vec2, radius: float, segments: int) -> None:
        if segments <= 0:
            raise ValueError("segments must be positive")
        a_max = math.pi * 2.0 * (segments - 1.0) / segments
        self.path_arc_to(center, radius, 0.0, a_max, segments)

    def fill_circle(self, center: Vec2, radius: float, color: Color, segments: int) -> None:
        if not color.a:
            return
        self._circle_path(center, radius, segments)
        self.path_fill(color)

    def stroke_circle(self, center: Vec2, radius: float, color: Color, segments: int,
                      thickness: float) -> None:
        if not color.a:
            return
        self._circle_path(center, radius, segments)
        self.path_stroke(color, True, thickness)

    def stroke_curve(self, p0: Vec2, cp0: Vec2, cp1: Vec2, p1: Vec2, color: Color,
                     segments: int, thickness: float) -> None:
        if not color.a:
            return
        self.path_line_to(p0)
        self.path_curve_to(cp0, cp1, p1, segments)
        self.path_stroke(color, False, thickness)

    # images and text ----------------------------------------------------

    def _push_rect_uv(self, a: Vec2, c: Vec2, uva: Vec2, uvc: Vec2, color: Color) -> None:
        col = color.to_floats()
        self._append_mesh(Mesh(
            [
                MeshVertex(a, uva, col),
                MeshVertex(Vec2(c.x, a.y), Vec2(uvc.x, uva.y), col),
                MeshVertex(c, uvc, col),
                MeshVertex(Vec2(a.x, c.y), Vec2(uva.x, uvc.y), col),
            ],
            [0, 1, 2, 0, 2, 3],
        ))

    def add_image(self, image: Image, rect: Rect, color: Color) -> None:
        """Draw ``image`` (or its sub-region) stretched over ``rect``."""
        self.push_image(image.handle)
        a = Vec2(rect.x, rect.y)
        c = Vec2(rect.x + rect.w, rect.y + rect.h)
        if image.is_subimage():
            rx, ry, rw, rh = image.region
            uv0 = Vec2(rx / image.w, ry / image.h)
            uv1 = Vec2((rx + rw) / image.w, (ry + rh) / image.h)
            self._push_rect_uv(a, c, uv0, uv1, color)
        else:
            self._push_rect_uv(a, c, Vec2(0.0, 0.0), Vec2(1.0, 1.0), color)

    def add_text(self, font: UserFont, rect: Rect, data: bytes | str,
                 font_height: float, color: Color) -> None:
        """Draw UTF-8 text glyph by glyph using the font's glyph query."""
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        if not raw:
            return
        if not rect.intersects(self.clip_rect):
            return
        if font.query is None:
            raise ValueError("font has no glyph query")
        self.push_image(font.texture)
        unicode, glyph_len = decode(raw)
        if not glyph_len:
            return

        color = self._with_alpha(color)
        x = rect.x
        text_len = 0
        while text_len < len(raw) and glyph_len:
            if unicode == UTF_INVALID:
                break
            nxt, next_len = decode(raw[text_len + glyph_len:])
            glyph = font.query(font_height, unicode, 0 if nxt == UTF_INVALID else nxt)
            gx = x + glyph.offset[0]
            gy = rect.y + glyph.offset[1]
            self._push_rect_uv(Vec2(gx, gy), Vec2(gx + glyph.width, gy + glyph.height),
                               Vec2(*glyph.uv[0]), Vec2(*glyph.uv[1]), color)
            text_len += glyph_len
            x += glyph.xadvance
            glyph_len = next_len
            unicode = nxt