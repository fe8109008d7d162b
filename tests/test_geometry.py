import pytest
from hypothesis import given
from hypothesis import strategies as st

from nuklite.geometry import (
    NULL_RECT,
    RED,
    WHITE,
    Color,
    Colorf,
    Image,
    Rect,
    Vec2,
)

coords = st.floats(min_value=-1000, max_value=1000, allow_nan=False)
sizes = st.floats(min_value=0.5, max_value=1000, allow_nan=False)
channels = st.integers(min_value=0, max_value=255)


def test_length_squared():
    assert Vec2(3.0, 4.0).length_squared() == 25.0


@given(coords, coords, coords, coords)
def test_vector_add_sub_round_trip(ax, ay, bx, by):
    a, b = Vec2(ax, ay), Vec2(bx, by)
    result = (a + b) - b
    assert result.x == pytest.approx(ax, abs=1e-9)
    assert result.y == pytest.approx(ay, abs=1e-9)


def test_vector_scale_and_negate():
    v = Vec2(1.5, -2.0)
    assert v * 2 == Vec2(3.0, -4.0)
    assert 2 * v == v * 2
    assert -v == Vec2(-1.5, 2.0)
    assert tuple(v) == (1.5, -2.0)


@given(coords, coords, sizes, sizes)
def test_rect_intersects_itself(x, y, w, h):
    r = Rect(x, y, w, h)
    assert r.intersects(r)


@given(coords, coords, sizes, sizes, coords, coords, sizes, sizes)
def test_intersection_is_symmetric(x1, y1, w1, h1, x2, y2, w2, h2):
    a, b = Rect(x1, y1, w1, h1), Rect(x2, y2, w2, h2)
    assert a.intersects(b) == b.intersects(a)


def test_touching_rects_do_not_intersect():
    a = Rect(0, 0, 10, 10)
    assert not a.intersects(Rect(10, 0, 10, 10))
    assert not a.intersects(Rect(0, 10, 10, 10))
    assert a.intersects(Rect(9, 9, 10, 10))


def test_shrink():
    assert Rect(0, 0, 10, 10).shrink(2) == Rect(2, 2, 6, 6)


@given(coords, coords, sizes, sizes, st.floats(min_value=0, max_value=100))
def test_shrink_keeps_size_non_negative(x, y, w, h, amount):
    r = Rect(x, y, w, h).shrink(amount)
    assert r.w >= 0
    assert r.h >= 0


def test_null_rect_values():
    assert NULL_RECT == Rect(-8192.0, -8192.0, 16384.0, 16384.0)


def test_color_to_u32_packs_channels_in_order():
    assert Color(0x01, 0x02, 0x03, 0x04).to_u32() == 0x04030201


def test_color_from_floats_of_white():
    assert Color.from_floats((1.0, 1.0, 1.0, 1.0)) == WHITE
    assert Color.from_floats((1.0, 0.0, 0.0, 1.0)) == RED


def test_color_from_floats_saturates():
    assert Color.from_floats((5.0, -3.0, 2.0, 1.5)) == Color(255, 0, 255, 255)


@given(channels, channels, channels, channels)
def test_color_float_round_trip_is_close(r, g, b, a):
    color = Color(r, g, b, a)
    back = Color.from_floats(color.to_floats())
    for original, restored in zip(color, back):
        assert abs(original - restored) <= 1


@given(channels, channels, channels, channels)
def test_to_floats_is_in_unit_range(r, g, b, a):
    f = Color(r, g, b, a).to_floats()
    assert all(0.0 <= c <= 1.0 for c in f)
    assert isinstance(f, Colorf)


def test_color_rejects_out_of_range():
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        Color(0, -1, 0)


def test_from_floats_needs_four_values():
    with pytest.raises(ValueError):
        Color.from_floats((1.0, 1.0, 1.0))


def test_image_subimage():
    assert not Image(handle=1).is_subimage()
    assert Image(handle=1, w=64, h=32, region=(0, 0, 16, 16)).is_subimage()