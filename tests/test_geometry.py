import math

import pytest

from asteroidfield.geometry import Aabb2d, BoundingCircle, Obb2d, Rot2, Vec2


def test_add_sub_round_trip():
    a, b = Vec2(1.5, -2.0), Vec2(3.0, 4.0)
    assert (a + b) - b == a


def test_scalar_mul_div_round_trip():
    a = Vec2(1.5, -2.0)
    result = (a * 3.0) / 3.0
    assert (result.x, result.y) == pytest.approx((a.x, a.y))
    assert 2 * a == a * 2


def test_dot_self_is_length_squared():
    a = Vec2(3.0, -7.0)
    assert a.dot(a) == a.length_squared()
    assert a.length() ** 2 == pytest.approx(a.length_squared())


def test_clamp_length_max_limits_and_keeps_direction():
    v = Vec2(3.0, 4.0)
    clamped = v.clamp_length_max(2.0)
    assert clamped.length() == pytest.approx(2.0)
    assert clamped.x * v.y == pytest.approx(clamped.y * v.x)


def test_clamp_length_max_leaves_short_vector():
    v = Vec2(3.0, 4.0)
    assert v.clamp_length_max(10.0) == v
    assert v.clamp_length_max(math.inf) == v


def test_lerp_endpoints_and_midpoint():
    a, b = Vec2(1.0, 2.0), Vec2(-5.0, 8.0)
    assert a.lerp(b, 0.0) == a
    end = a.lerp(b, 1.0)
    assert (end.x, end.y) == pytest.approx((b.x, b.y))
    mid = a.lerp(b, 0.5)
    assert (mid - a).length() == pytest.approx((b - mid).length())


def test_abs_is_symmetric():
    v = Vec2(-1.0, 2.0)
    assert v.abs() == Vec2(1.0, 2.0)
    assert (-v).abs() == v.abs()


def test_rot2_identity():
    rotated = Rot2(0.0).rotate(Vec2(2.0, -3.0))
    assert (rotated.x, rotated.y) == pytest.approx((2.0, -3.0))


@pytest.mark.parametrize("angle", [0.3, 1.0, math.pi, -2.2])
def test_rot2_preserves_length(angle):
    v = Vec2(2.0, -3.0)
    assert Rot2(angle).rotate(v).length() == pytest.approx(v.length())


def test_rot2_composition():
    v = Vec2(1.0, 2.0)
    composed = (Rot2(0.4) * Rot2(0.9)).rotate(v)
    stepwise = Rot2(0.4).rotate(Rot2(0.9).rotate(v))
    assert (composed.x, composed.y) == pytest.approx((stepwise.x, stepwise.y))
    product = Rot2(0.4) * v
    direct = Rot2(0.4).rotate(v)
    assert (product.x, product.y) == pytest.approx((direct.x, direct.y))


def test_rot2_quarter_turn():
    rotated = Rot2(math.pi / 2).rotate(Vec2.X)
    assert (rotated.x, rotated.y) == pytest.approx((0.0, 1.0), abs=1e-9)


def test_aabb_intersections():
    a = Aabb2d(Vec2(0.0, 0.0), Vec2(1.0, 1.0))
    overlapping = Aabb2d(Vec2(1.5, 0.0), Vec2(1.0, 1.0))
    touching = Aabb2d(Vec2(2.0, 0.0), Vec2(1.0, 1.0))
    separated = Aabb2d(Vec2(3.0, 0.0), Vec2(1.0, 1.0))
    assert a.intersects(overlapping) and overlapping.intersects(a)
    assert a.intersects(touching)
    assert not a.intersects(separated)
    assert not separated.intersects(a)


def test_aabb_transformed_by_quarter_turn_swaps_half_size():
    box = Aabb2d(Vec2(0.0, 0.0), Vec2(1.0, 3.0))
    moved = box.transformed_by(Vec2(5.0, -1.0), math.pi / 2)
    assert (moved.half_size.x, moved.half_size.y) == pytest.approx((3.0, 1.0))
    assert (moved.center.x, moved.center.y) == pytest.approx((5.0, -1.0))


def test_aabb_scale_keeps_center():
    box = Aabb2d(Vec2(2.0, 2.0), Vec2(1.0, 3.0))
    scaled = box.scale_around_center((2.0, 2.0))
    assert scaled.center == box.center
    assert scaled.half_size == box.half_size * 2.0


def test_aabb_and_circle():
    box = Aabb2d(Vec2(0.0, 0.0), Vec2(1.0, 1.0))
    assert box.intersects(BoundingCircle(Vec2(1.5, 0.0), 0.6))
    assert not box.intersects(BoundingCircle(Vec2(3.0, 3.0), 0.6))
    assert BoundingCircle(Vec2(1.5, 0.0), 0.6).intersects(box)


def test_circles_touching_and_apart():
    c = BoundingCircle(Vec2(0.0, 0.0), 1.0)
    assert c.intersects(BoundingCircle(Vec2(2.0, 0.0), 1.0))
    assert not c.intersects(BoundingCircle(Vec2(2.5, 0.0), 1.0))


def test_circle_transform_and_scale():
    c = BoundingCircle(Vec2(0.0, 0.0), 2.0)
    moved = c.transformed_by(Vec2(4.0, 1.0), 1.2)
    assert (moved.center.x, moved.center.y) == pytest.approx((4.0, 1.0))
    assert c.scale_around_center(3.0).radius == pytest.approx(c.radius * 3.0)


def test_obb_visible_area():
    assert Obb2d(Vec2(0.0, 0.0), Vec2(2.0, 3.0)).visible_area() == pytest.approx(24.0)


def test_obb_grow_shrink_round_trip():
    box = Obb2d(Vec2(1.0, 1.0), Vec2(2.0, 3.0), 0.5)
    assert box.grow(Vec2(0.5, 1.5)).shrink(Vec2(0.5, 1.5)) == box


def test_obb_scale_translate_rotate():
    box = Obb2d(Vec2(1.0, 1.0), Vec2(2.0, 3.0), 0.5)
    assert box.scale_around_center((2.0, 2.0)).half_size == box.half_size * 2.0
    assert box.translate_by(Vec2(1.0, -1.0)).center == box.center + Vec2(1.0, -1.0)
    assert box.rotate_by(0.25).rotation.angle == pytest.approx(0.75)
    assert box.rotate_by(0.25).center == box.center


def test_obb_transformed_by_does_not_rotate_center():
    box = Obb2d(Vec2(1.0, 0.0), Vec2(1.0, 1.0))
    moved = box.transformed_by(Vec2(0.0, 0.0), math.pi / 2)
    assert moved.center == box.center
    assert moved.rotation.angle == pytest.approx(math.pi / 2)


def test_obb_corners_surround_center():
    box = Obb2d(Vec2(2.0, -1.0), Vec2(1.0, 2.0), 0.7)
    corners = box.corners()
    assert len(corners) == 4
    total = Vec2()
    for corner in corners:
        total = total + corner
    mean = total / 4
    assert (mean.x, mean.y) == pytest.approx((box.center.x, box.center.y))
    for corner in corners:
        assert (corner - box.center).length() == pytest.approx(box.half_size.length())


@pytest.mark.parametrize(
    "center", [Vec2(1.5, 0.0), Vec2(2.0, 2.0), Vec2(3.0, 0.0), Vec2(0.0, 5.0)]
)
def test_axis_aligned_obb_matches_aabb(center):
    aabb_a = Aabb2d(Vec2(0.0, 0.0), Vec2(1.0, 1.0))
    aabb_b = Aabb2d(center, Vec2(1.0, 1.0))
    obb_a = Obb2d(aabb_a.center, aabb_a.half_size)
    obb_b = Obb2d(aabb_b.center, aabb_b.half_size)
    assert obb_a.intersects(obb_b) == aabb_a.intersects(aabb_b)
    assert obb_a.intersects(aabb_b) == aabb_a.intersects(aabb_b)
    assert aabb_b.intersects(obb_a) == aabb_a.intersects(aabb_b)


def test_rotated_obb_reaches_further():
    small = Obb2d(Vec2(1.3, 0.0), Vec2(0.1, 0.1))
    straight = Obb2d(Vec2(0.0, 0.0), Vec2(1.0, 1.0))
    turned = Obb2d(Vec2(0.0, 0.0), Vec2(1.0, 1.0), math.pi / 4)
    assert not straight.intersects(small)
    assert turned.intersects(small)
    assert small.intersects(turned)


def test_obb_and_circle():
    box = Obb2d(Vec2(0.0, 0.0), Vec2(1.0, 1.0), 0.3)
    assert box.intersects(BoundingCircle(Vec2(0.0, 0.0), 0.5))
    assert not box.intersects(BoundingCircle(Vec2(10.0, 0.0), 0.5))
    assert BoundingCircle(Vec2(0.0, 0.0), 0.5).intersects(box)


def test_intersects_rejects_unknown_shape():
    with pytest.raises(TypeError):
        Obb2d(Vec2(), Vec2.ONE).intersects("box")
    with pytest.raises(TypeError):
        Aabb2d(Vec2(), Vec2.ONE).intersects(3)