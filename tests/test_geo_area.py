import pytest

from geo_area import (
    compute_area,
    geodesic_area,
    m2_to_km2,
    resolve_platform_area,
    spherical_area,
)

SQUARE = [(-0.5, -0.5), (0.5, -0.5), (0.5, 0.5), (-0.5, 0.5)]


def test_fewer_than_three_vertices():
    assert spherical_area([]) == 0
    assert spherical_area([(0, 0), (1, 1)]) == 0
    assert geodesic_area([(0, 0), (1, 1)]) == 0


def test_one_degree_square_near_equator():
    assert spherical_area(SQUARE) == pytest.approx(111_320 * 111_320, rel=0.01)


def test_pre_closed_ring_gives_same_area():
    assert spherical_area(SQUARE + [SQUARE[0]]) == pytest.approx(spherical_area(SQUARE))


def test_rotation_invariant():
    expected = spherical_area(SQUARE)
    for k in range(1, len(SQUARE)):
        assert spherical_area(SQUARE[k:] + SQUARE[:k]) == pytest.approx(expected)


def test_orientation_invariant():
    assert spherical_area(list(reversed(SQUARE))) == pytest.approx(spherical_area(SQUARE))


def test_accepts_lists_as_vertices():
    assert spherical_area([list(v) for v in SQUARE]) == pytest.approx(spherical_area(SQUARE))


def test_self_intersecting_polygon_does_not_crash():
    bowtie = [(0, 0), (1, 1), (1, 0), (0, 1)]
    area = spherical_area(bowtie)
    assert isinstance(area, float)
    assert area >= 0


def test_geodesic_close_to_spherical():
    assert geodesic_area(SQUARE) == pytest.approx(spherical_area(SQUARE), rel=0.01)


def test_compute_area_prefers_platform_function():
    calls = []

    def platform(vertices):
        calls.append(vertices)
        return 42.0

    assert compute_area(SQUARE, platform_area=platform) == 42.0
    assert calls == [SQUARE]


def test_compute_area_falls_back_to_spherical():
    assert compute_area(SQUARE) == spherical_area(SQUARE)


def test_compute_area_short_input_skips_platform():
    def platform(vertices):
        raise AssertionError("should not be called")

    assert compute_area([(0, 0), (1, 1)], platform_area=platform) == 0


def test_resolve_platform_area():
    assert resolve_platform_area("geodesic") is geodesic_area
    assert resolve_platform_area("spherical") is None
    with pytest.raises(ValueError):
        resolve_platform_area("planar")


def test_m2_to_km2():
    assert m2_to_km2(2_500_000) == 2.5
