import math

import pytest

from lbpedit.geometry import (
    closest_point_on_line,
    distance,
    map_range,
    normalize,
    pt_inside_tri,
    tri_area,
)


def test_map_range_endpoints_and_midpoint():
    assert map_range(2, 2, 6, 10, 30) == pytest.approx(10)
    assert map_range(6, 2, 6, 10, 30) == pytest.approx(30)
    assert map_range(4, 2, 6, 10, 30) == pytest.approx((10 + 30) / 2)


@pytest.mark.parametrize("x", [-3.0, 0.0, 1.5, 7.25])
def test_map_range_round_trip(x):
    there = map_range(x, -1.0, 4.0, 10.0, 20.0)
    assert map_range(there, 10.0, 20.0, -1.0, 4.0) == pytest.approx(x)


def test_map_range_degenerate_source_range():
    with pytest.raises(ZeroDivisionError):
        map_range(1.0, 2.0, 2.0, 0.0, 1.0)


def test_tri_area_is_twice_the_area():
    assert tri_area((0, 0), (1, 0), (0, 1)) == pytest.approx(1.0)


def test_tri_area_ignores_orientation():
    a, b, c = (0.3, -1.2), (2.5, 0.4), (-0.7, 1.9)
    area = tri_area(a, b, c)
    assert tri_area(c, b, a) == pytest.approx(area)
    assert tri_area(b, c, a) == pytest.approx(area)
    assert area > 0


def test_tri_area_collinear_is_zero():
    assert tri_area((0, 0), (1, 1), (2, 2)) == pytest.approx(0.0)


def test_pt_inside_tri():
    a, b, c = (0.0, 0.0), (2.0, 0.0), (0.0, 2.0)
    centroid = ((a[0] + b[0] + c[0]) / 3, (a[1] + b[1] + c[1]) / 3)
    assert pt_inside_tri(centroid, a, b, c)
    assert pt_inside_tri(a, a, b, c)
    assert pt_inside_tri((1.0, 1.0), a, b, c)
    assert not pt_inside_tri((5.0, 5.0), a, b, c)
    assert not pt_inside_tri((-0.5, 0.5), a, b, c)


def test_distance():
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert distance((1, 2, 3), (1, 2, 3)) == 0
    assert distance((1, 2), (4, 6)) == pytest.approx(distance((4, 6), (1, 2)))


def test_normalize_has_unit_length_and_same_direction():
    v = normalize((3.0, 4.0))
    assert math.hypot(*v) == pytest.approx(1.0)
    assert v[1] / v[0] == pytest.approx(4.0 / 3.0)
    w = normalize((0.0, 0.0, -2.0))
    assert w == pytest.approx((0.0, 0.0, -1.0))


def test_normalize_zero_vector_is_nan():
    v = normalize((0.0, 0.0))
    assert len(v) == 2
    assert math.isnan(v[0])
    assert math.isnan(v[1])


def test_closest_point_on_line_clamps_to_segment():
    a, b = (0.0, 0.0), (1.0, 0.0)
    assert closest_point_on_line((-2.0, 1.0), a, b) == a
    assert closest_point_on_line((3.0, -1.0), a, b) == b
    assert closest_point_on_line((0.5, 3.0), a, b) == pytest.approx((0.5, 0.0))


def test_closest_point_on_line_3d_is_on_segment():
    a, b = (0.0, 0.0, -1.0), (2.0, 2.0, -1.0)
    pt = closest_point_on_line((2.0, 0.0, -1.0), a, b)
    assert distance(a, pt) + distance(pt, b) == pytest.approx(distance(a, b))
    assert pt[2] == pytest.approx(-1.0)