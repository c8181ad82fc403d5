"""
Surface area of geographic polygons.

Vertices are ``(longitude, latitude)`` pairs in decimal degrees. Results are
square metres.
"""
import logging

import numpy as np
from pyproj import Geod

from config import EARTH_RADIUS_M

logger = logging.getLogger(__name__)

_GEOD = Geod(ellps="WGS84")


def _closed_ring(vertices):
    ring = [tuple(v) for v in vertices]
    if ring[0] != ring[-1]:
        ring.append(ring[0])
    return ring


def spherical_area(vertices):
    """Area enclosed by the ring on a sphere of radius 6,371 km.

    Fewer than 3 vertices yields 0. The ring is closed if needed and winding
    order does not matter.
    """
    if len(vertices) < 3:
        return 0.0

    ring = np.radians(np.asarray(_closed_ring(vertices), dtype=float))
    lam, phi = ring[:, 0], ring[:, 1]
    total = np.sum((lam[1:] - lam[:-1]) * (2 + np.sin(phi[:-1]) + np.sin(phi[1:])))
    return float(abs(total * EARTH_RADIUS_M * EARTH_RADIUS_M / 2))


def geodesic_area(vertices):
    """Ellipsoidal (WGS84) area using pyproj."""
    if len(vertices) < 3:
        return 0.0
    lons = [v[0] for v in vertices]
    lats = [v[1] for v in vertices]
    area, _ = _GEOD.polygon_area_perimeter(lons, lats)
    return abs(area)


def compute_area(vertices, platform_area=None):
    """Use the platform area function when one is supplied, else the spherical formula."""
    if len(vertices) < 3:
        return 0.0
    if platform_area is not None:
        area = platform_area(vertices)
        logger.info(f"Area via {getattr(platform_area, '__name__', 'platform')}: {area:.1f} m²")
        return area
    area = spherical_area(vertices)
    logger.info(f"Area via spherical formula: {area:.1f} m²")
    return area


def resolve_platform_area(engine):
    if engine == "geodesic":
        return geodesic_area
    if engine == "spherical":
        return None
    raise ValueError(f"Unknown area engine: {engine!r}")


def m2_to_km2(area):
    return area / 1_000_000
