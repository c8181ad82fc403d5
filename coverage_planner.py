"""
Hexagonal coverage planning for a rectangular target area.

Rows are spaced ``r * sqrt(3)`` apart and columns ``1.5 * r`` apart, with
every odd row shifted by half a column so neighbouring rows interlock.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from config import DEVICE_LIMIT, KM_PER_DEGREE, MAX_DEVICES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DevicePosition:
    x: float  # km from the area's origin
    y: float
    row: int
    col: int


@dataclass(frozen=True)
class CoverageResult:
    positions: List[DevicePosition]
    row_count: int
    col_count: int
    spacing: float
    total_cost: float
    coverage_rate: float  # percent, upper-bound estimate

    @property
    def device_count(self):
        return len(self.positions)


def validate_parameters(params):
    errors = []
    if not params.get("radius", 0) > 0:
        errors.append("Coverage radius must be greater than 0 km.")
    if not params.get("length", 0) >= 1:
        errors.append("Area length must be at least 1 km.")
    if not params.get("width", 0) >= 1:
        errors.append("Area width must be at least 1 km.")
    if not params.get("unit_cost", 0) >= 0:
        errors.append("Unit cost cannot be negative.")
    return errors


def plan(length: float, width: float, radius: float, unit_cost: float,
         max_devices: int = MAX_DEVICES) -> Optional[CoverageResult]:
    """Lay out devices over a ``width`` x ``length`` km area.

    Returns ``None`` for a non-positive radius, a side shorter than 1 km, or
    inputs too large to lay out. ``max_devices`` can only lower the hard cap.
    """
    max_devices = min(max_devices, DEVICE_LIMIT)

    # NaN fails every comparison below, so it is rejected as well
    if not (radius > 0 and length >= 1 and width >= 1):
        logger.warning(f"Rejected coverage input: length={length}, width={width}, radius={radius}")
        return None

    row_spacing = radius * math.sqrt(3)
    col_spacing = radius * 1.5
    row_ratio = length / row_spacing
    col_ratio = width / col_spacing
    if not all(math.isfinite(v) for v in (length, width, radius, row_ratio, col_ratio)):
        logger.warning(f"Rejected non-finite coverage input: length={length}, width={width}, radius={radius}")
        return None

    row_count = math.ceil(row_ratio) + 1
    col_count = math.ceil(col_ratio) + 1

    positions = []
    for row in range(row_count):
        x_offset = 0 if row % 2 == 0 else col_spacing / 2
        y = row * row_spacing
        for col in range(col_count):
            if len(positions) >= max_devices:
                break
            x = col * col_spacing + x_offset
            # keep any circle that still clips the rectangle
            if x - radius <= width and y - radius <= length:
                positions.append(DevicePosition(x=x, y=y, row=row, col=col))
        if len(positions) >= max_devices:
            logger.info(f"Device cap of {max_devices} reached at row {row}")
            break

    area = length * width
    coverage_rate = min(100.0, len(positions) * math.pi * radius * radius / area * 100)

    result = CoverageResult(
        positions=positions,
        row_count=row_count,
        col_count=col_count,
        spacing=min(row_spacing, col_spacing),
        total_cost=len(positions) * unit_cost,
        coverage_rate=coverage_rate,
    )
    logger.info(
        f"Planned {result.device_count} devices ({row_count}x{col_count} lattice), "
        f"coverage {coverage_rate:.1f}%"
    )
    return result


def positions_to_lnglat(result, center_lng, center_lat, length, width):
    """Place the plan on a map, with the rectangle centred on the given point."""
    km_per_lng = KM_PER_DEGREE * math.cos(math.radians(center_lat))
    points = []
    for p in result.positions:
        dx = p.x - width / 2
        dy = p.y - length / 2
        lat = center_lat + dy / KM_PER_DEGREE
        lng = center_lng + dx / km_per_lng
        points.append((lng, lat))
    return points


def area_bounds_lnglat(center_lng, center_lat, length, width):
    """(south, west, north, east) of the target rectangle centred on the given point."""
    half_lat = length / 2 / KM_PER_DEGREE
    half_lng = width / 2 / (KM_PER_DEGREE * math.cos(math.radians(center_lat)))
    return center_lat - half_lat, center_lng - half_lng, center_lat + half_lat, center_lng + half_lng
