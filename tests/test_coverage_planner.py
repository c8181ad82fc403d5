import math

import pytest

from coverage_planner import (
    CoverageResult,
    DevicePosition,
    area_bounds_lnglat,
    plan,
    positions_to_lnglat,
    validate_parameters,
)


def test_reference_layout():
    result = plan(10, 10, 3, 100000)
    assert result.row_count == 3
    assert result.col_count == 4
    assert result.device_count == 9
    assert result.spacing == pytest.approx(4.5)
    assert result.total_cost == result.device_count * 100000
    assert result.coverage_rate == min(100, result.device_count * math.pi * 9 / 100 * 100)


@pytest.mark.parametrize("length, width, radius", [
    (10, 10, 3),
    (1, 1, 1),
    (25.5, 7, 2.2),
    (3, 40, 0.8),
    (12, 12, 15),
])
def test_positions_clip_the_rectangle(length, width, radius):
    result = plan(length, width, radius, 1)
    assert result.positions
    for p in result.positions:
        assert p.x - radius <= width
        assert p.y - radius <= length


@pytest.mark.parametrize("length, width, radius", [(10, 10, 3), (25.5, 7, 2.2), (100, 100, 0.1)])
def test_lattice_dimensions(length, width, radius):
    result = plan(length, width, radius, 1)
    assert result.row_count == math.ceil(length / (radius * math.sqrt(3))) + 1
    assert result.col_count == math.ceil(width / (radius * 1.5)) + 1


def test_odd_rows_are_staggered():
    radius = 2
    result = plan(20, 20, radius, 1)
    for p in result.positions:
        offset = 0 if p.row % 2 == 0 else radius * 1.5 / 2
        assert p.x == pytest.approx(p.col * radius * 1.5 + offset)
        assert p.y == pytest.approx(p.row * radius * math.sqrt(3))


def test_device_cap():
    result = plan(100, 100, 0.1, 10)
    assert result.device_count == 5000
    assert result.total_cost == 50000
    # lattice size is reported independent of truncation
    assert result.row_count == math.ceil(100 / (0.1 * math.sqrt(3))) + 1


def test_custom_cap_stops_mid_row():
    result = plan(10, 10, 1, 1, max_devices=7)
    assert result.device_count == 7
    assert [p.row for p in result.positions] == [0] * 7
    assert [p.col for p in result.positions] == list(range(7))


def test_coverage_rate_is_capped():
    result = plan(10, 10, 3, 1)
    assert 0 <= result.coverage_rate <= 100


@pytest.mark.parametrize("length, width, radius", [
    (10, 10, 0),
    (10, 10, -1),
    (0.5, 10, 1),
    (10, 0.9, 1),
    (float("nan"), 10, 1),
    (10, 10, float("nan")),
    (float("inf"), 10, 1),
    (10, float("inf"), 1),
    (10, 10, float("inf")),
    (1e300, 10, 1e-10),
    (10, 1e300, 1e-310),
])
def test_invalid_input_returns_none(length, width, radius):
    assert plan(length, width, radius, 100) is None


def test_zero_unit_cost():
    result = plan(5, 5, 1, 0)
    assert result.total_cost == 0


def test_validate_parameters():
    assert validate_parameters({"radius": 1, "length": 1, "width": 1, "unit_cost": 0}) == []
    errors = validate_parameters({"radius": 0, "length": 0.5, "width": 10, "unit_cost": -1})
    assert len(errors) == 3
    assert any("radius" in e for e in errors)
    assert any("length" in e for e in errors)
    assert any("cost" in e for e in errors)


def test_positions_to_lnglat_centres_the_area():
    result = CoverageResult(
        positions=[DevicePosition(5, 5, 0, 0), DevicePosition(5 + 111, 5 - 111, 1, 0)],
        row_count=1, col_count=1, spacing=1, total_cost=0, coverage_rate=0,
    )
    (lng0, lat0), (lng1, lat1) = positions_to_lnglat(result, 0.0, 0.0, 10, 10)
    assert (lng0, lat0) == pytest.approx((0.0, 0.0))
    assert lng1 == pytest.approx(1.0)
    assert lat1 == pytest.approx(-1.0)


def test_positions_to_lnglat_scales_longitude_with_latitude():
    result = CoverageResult(
        positions=[DevicePosition(1 + 55.5, 1, 0, 0)],
        row_count=1, col_count=1, spacing=1, total_cost=0, coverage_rate=0,
    )
    [(lng, lat)] = positions_to_lnglat(result, 10.0, 60.0, 2, 2)
    assert lat == pytest.approx(60.0)
    assert lng == pytest.approx(11.0)


def test_area_bounds_lnglat():
    south, west, north, east = area_bounds_lnglat(0.0, 0.0, 222, 111)
    assert (south, north) == pytest.approx((-1.0, 1.0))
    assert (west, east) == pytest.approx((-0.5, 0.5))


def test_cap_cannot_be_raised():
    result = plan(100, 100, 0.1, 1, max_devices=20000)
    assert result.device_count == 5000
