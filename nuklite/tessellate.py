"""Tessellation of polylines and convex polygons into triangle meshes."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .geometry import Color, Colorf, Vec2
from .vertex_layout import AntiAliasing

AA_SIZE = 1.0


@dataclass(frozen=True)
class MeshVertex:
    """One output vertex before it is encoded."""

    pos: Vec2
    uv: Vec2
    color: Colorf


@dataclass
class Mesh:
    """Vertices and triangle indices; indices refer to this mesh's vertices."""

    vertices: list[MeshVertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)


def _points(points: Iterable[Sequence[float] | Vec2]) -> list[Vec2]:
    return [p if isinstance(p, Vec2) else Vec2(*p) for p in points]


def _normalized(diff: Vec2) -> Vec2:
    length = diff.length_squared()
    inv = 1.0 / math.sqrt(length) if length != 0.0 else 1.0
    return diff * inv


def _miter(n0: Vec2, n1: Vec2) -> Vec2:
    dm = (n0 + n1) * 0.5
    dmr2 = dm.x * dm.x + dm.y * dm.y
    if dmr2 > 0.000001:
        dm = dm * min(100.0, 1.0 / dmr2)
    return dm


def _transparent(col: Colorf) -> Colorf:
    return Colorf(col.r, col.g, col.b, 0.0)


def _stroke_thin(mesh: Mesh, pts: list[Vec2], normals: list[Vec2], closed: bool,
                 count: int, col: Colorf, trans: Colorf, uv: Vec2) -> None:
    n = len(pts)
    temp = [Vec2()] * (2 * n)
    if not closed:
        temp[0] = pts[0] + normals[0] * AA_SIZE
        temp[1] = pts[0] - normals[0] * AA_SIZE
        d = normals[n - 1] * AA_SIZE
        temp[(n - 1) * 2] = pts[n - 1] + d
        temp[(n - 1) * 2 + 1] = pts[n - 1] - d

    idx1 = 0
    for i1 in range(count):
        wraps = i1 + 1 == n
        i2 = 0 if wraps else i1 + 1
        idx2 = 0 if wraps else idx1 + 3
        dm = _miter(normals[i1], normals[i2]) * AA_SIZE
        temp[i2 * 2] = pts[i2] + dm
        temp[i2 * 2 + 1] = pts[i2] - dm
        mesh.indices += [
            idx2, idx1, idx1 + 2, idx1 + 2, idx2 + 2, idx2,
            idx2 + 1, idx1 + 1, idx1, idx1, idx2, idx2 + 1,
        ]
        idx1 = idx2

    for i, point in enumerate(pts):
        mesh.vertices += [
            MeshVertex(point, uv, col),
            MeshVertex(temp[i * 2], uv, trans),
            MeshVertex(temp[i * 2 + 1], uv, trans),
        ]


def _stroke_thick(mesh: Mesh, pts: list[Vec2], normals: list[Vec2], closed: bool,
                  count: int, thickness: float, col: Colorf, trans: Colorf,
                  uv: Vec2) -> None:
    n = len(pts)
    half = (thickness - AA_SIZE) * 0.5
    temp = [Vec2()] * (4 * n)
    if not closed:
        for i in (0, n - 1):
            d1 = normals[i] * (half + AA_SIZE)
            d2 = normals[i] * half
            temp[i * 4:i * 4 + 4] = [pts[i] + d1, pts[i] + d2, pts[i] - d2, pts[i] - d1]

    idx1 = 0
    for i1 in range(count):
        wraps = i1 + 1 == n
        i2 = 0 if wraps else i1 + 1
        idx2 = 0 if wraps else idx1 + 4
        dm = _miter(normals[i1], normals[i2])
        dm_out = dm * (half + AA_SIZE)
        dm_in = dm * half
        p = pts[i2]
        temp[i2 * 4:i2 * 4 + 4] = [p + dm_out, p + dm_in, p - dm_in, p - dm_out]
        mesh.indices += [
            idx2 + 1, idx1 + 1, idx1 + 2, idx1 + 2, idx2 + 2, idx2 + 1,
            idx2 + 1, idx1 + 1, idx1, idx1, idx2, idx2 + 1,
            idx2 + 2, idx1 + 2, idx1 + 3, idx1 + 3, idx2 + 3, idx2 + 2,
        ]
        idx1 = idx2

    for i in range(n):
        mesh.vertices += [
            MeshVertex(temp[i * 4], uv, trans),
            MeshVertex(temp[i * 4 + 1], uv, col),
            MeshVertex(temp[i * 4 + 2], uv, col),
            MeshVertex(temp[i * 4 + 3], uv, trans),
        ]


def stroke_poly_line(points: Iterable[Sequence[float] | Vec2], color: Color,
                     closed: bool, thickness: float,
                     aliasing: AntiAliasing = AntiAliasing.ON,
                     uv: Vec2 = Vec2()) -> Mesh:
    """Build the triangles outlining a polyline; fewer than two points give nothing."""
    pts = _points(points)
    n = len(pts)
    mesh = Mesh()
    if n < 2:
        return mesh
    count = n if closed else n - 1
    col = color.to_floats()
    trans = _transparent(col)

    if aliasing == AntiAliasing.ON:
        normals = [Vec2()] * n
        for i1 in range(count):
            i2 = 0 if i1 + 1 == n else i1 + 1
            d = _normalized(pts[i2] - pts[i1])
            normals[i1] = Vec2(d.y, -d.x)
        if not closed:
            normals[n - 1] = normals[n - 2]
        if thickness > 1.0:
            _stroke_thick(mesh, pts, normals, closed, count, thickness, col, trans, uv)
        else:
            _stroke_thin(mesh, pts, normals, closed, count, col, trans, uv)
        return mesh

    for i1 in range(count):
        i2 = 0 if i1 + 1 == n else i1 + 1
        p1, p2 = pts[i1], pts[i2]
        diff = _normalized(p2 - p1)
        dx = diff.x * (thickness * 0.5)
        dy = diff.y * (thickness * 0.5)
        mesh.vertices += [
            MeshVertex(Vec2(p1.x + dy, p1.y - dx), uv, col),
            MeshVertex(Vec2(p2.x + dy, p2.y - dx), uv, col),
            MeshVertex(Vec2(p2.x - dy, p2.y + dx), uv, col),
            MeshVertex(Vec2(p1.x - dy, p1.y + dx), uv, col),
        ]
        idx = i1 * 4
        mesh.indices += [idx, idx + 1, idx + 2, idx, idx + 2, idx + 3]
    return mesh


def fill_poly_convex(points: Iterable[Sequence[float] | Vec2], color: Color,
                     aliasing: AntiAliasing = AntiAliasing.ON,
                     uv: Vec2 = Vec2()) -> Mesh:
    """Build the triangles filling a convex polygon; fewer than three points give nothing."""
    pts = _points(points)
    n = len(pts)
    mesh = Mesh()
    if n < 3:
        return mesh
    col = color.to_floats()

    if aliasing != AntiAliasing.ON:
        mesh.vertices = [MeshVertex(p, uv, col) for p in pts]
        for i in range(2, n):
            mesh.indices += [0, i - 1, i]
        return mesh

    trans = _transparent(col)
    inner, outer = 0, 1
    for i in range(2, n):
        mesh.indices += [inner, inner + ((i - 1) << 1), inner + (i << 1)]

    normals = [Vec2()] * n
    for i1 in range(n):
        i0 = i1 - 1 if i1 else n - 1
        d = _normalized(pts[i1] - pts[i0])
        normals[i0] = Vec2(d.y, -d.x)

    for i1 in range(n):
        i0 = i1 - 1 if i1 else n - 1
        dm = _miter(normals[i0], normals[i1]) * (AA_SIZE * 0.5)
        mesh.vertices += [
            MeshVertex(pts[i1] - dm, uv, col),
            MeshVertex(pts[i1] + dm, uv, trans),
        ]
        mesh.indices += [
            inner + (i1 << 1), inner + (i0 << 1), outer + (i0 << 1),
            outer + (i0 << 1), outer + (i1 << 1), inner + (i1 << 1),
        ]
    return mesh