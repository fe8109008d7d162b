import math

import pytest
from hypothesis import given, strategies as st

from nuklite.geometry import Color, Vec2
from nuklite.tessellate import Mesh, fill_poly_convex, stroke_poly_line
from nuklite.vertex_layout import AntiAliasing

RED = Color(255, 0, 0, 255)
SQUARE = [Vec2(0, 0), Vec2(10, 0), Vec2(10, 10), Vec2(0, 10)]


def _indices_valid(mesh: Mesh) -> bool:
    return all(0 <= i < len(mesh.vertices) for i in mesh.indices)


@pytest.mark.parametrize("fn,args", [
    (stroke_poly_line, ([Vec2(1, 1)], RED, False, 1.0)),
    (fill_poly_convex, ([Vec2(0, 0), Vec2(1, 1)], RED)),
])
def test_too_few_points_give_empty_mesh(fn, args):
    mesh = fn(*args)
    assert mesh.vertices == [] and mesh.indices == []


@pytest.mark.parametrize("closed", [False, True])
def test_thin_aa_stroke_counts(closed):
    mesh = stroke_poly_line(SQUARE, RED, closed, 1.0, AntiAliasing.ON)
    count = 4 if closed else 3
    assert len(mesh.vertices) == 3 * 4
    assert len(mesh.indices) == 12 * count
    assert _indices_valid(mesh)


@pytest.mark.parametrize("closed", [False, True])
def test_thick_aa_stroke_counts(closed):
    mesh = stroke_poly_line(SQUARE, RED, closed, 3.0, AntiAliasing.ON)
    count = 4 if closed else 3
    assert len(mesh.vertices) == 4 * 4
    assert len(mesh.indices) == 18 * count
    assert _indices_valid(mesh)


def test_thin_aa_stroke_keeps_points_and_fades_edges():
    mesh = stroke_poly_line(SQUARE, RED, True, 1.0, AntiAliasing.ON)
    solid = RED.to_floats()
    for i, point in enumerate(SQUARE):
        centre, edge_a, edge_b = mesh.vertices[3 * i:3 * i + 3]
        assert centre.pos == point
        assert centre.color == solid
        assert edge_a.color.a == 0.0 and edge_b.color.a == 0.0
        mid = (edge_a.pos + edge_b.pos) * 0.5
        assert mid.x == pytest.approx(point.x) and mid.y == pytest.approx(point.y)


def test_non_aa_stroke_of_horizontal_line():
    mesh = stroke_poly_line([Vec2(0, 0), Vec2(10, 0)], RED, False, 2.0, AntiAliasing.OFF)
    assert [v.pos for v in mesh.vertices] == [
        Vec2(0, -1), Vec2(10, -1), Vec2(10, 1), Vec2(0, 1),
    ]
    assert mesh.indices == [0, 1, 2, 0, 2, 3]


def test_non_aa_fill_uses_points_directly():
    uv = Vec2(0.25, 0.75)
    mesh = fill_poly_convex(SQUARE, RED, AntiAliasing.OFF, uv)
    assert [v.pos for v in mesh.vertices] == SQUARE
    assert all(v.uv == uv for v in mesh.vertices)
    assert mesh.indices == [0, 1, 2, 0, 2, 3]


def test_aa_fill_inner_outer_pairs_straddle_points():
    mesh = fill_poly_convex(SQUARE, RED, AntiAliasing.ON)
    assert len(mesh.vertices) == 8
    assert len(mesh.indices) == 2 * 3 + 4 * 6
    for i, point in enumerate(SQUARE):
        inner, outer = mesh.vertices[2 * i], mesh.vertices[2 * i + 1]
        assert inner.color.a == RED.to_floats().a
        assert outer.color.a == 0.0
        mid = (inner.pos + outer.pos) * 0.5
        assert mid.x == pytest.approx(point.x) and mid.y == pytest.approx(point.y)


def test_accepts_tuples_as_points():
    mesh = fill_poly_convex([(0, 0), (4, 0), (0, 4)], RED, AntiAliasing.OFF)
    assert mesh.vertices[1].pos == Vec2(4, 0)


@given(st.integers(min_value=3, max_value=20),
       st.sampled_from([AntiAliasing.ON, AntiAliasing.OFF]),
       st.floats(min_value=0.5, max_value=5.0),
       st.booleans())
def test_regular_polygon_invariants(n, aa, thickness, closed):
    pts = [Vec2(math.cos(2 * math.pi * i / n) * 50, math.sin(2 * math.pi * i / n) * 50)
           for i in range(n)]
    fill = fill_poly_convex(pts, RED, aa)
    stroke = stroke_poly_line(pts, RED, closed, thickness, aa)
    assert len(fill.indices) % 3 == 0
    assert len(stroke.indices) % 3 == 0
    assert _indices_valid(fill) and _indices_valid(stroke)
    for v in fill.vertices + stroke.vertices:
        assert math.isfinite(v.pos.x) and math.isfinite(v.pos.y)