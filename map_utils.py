import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import folium
import numpy as np
import requests
from folium.plugins import Draw
from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from config import EARTH_RADIUS_M, MAP_CENTER, MAP_ZOOM, NOMINATIM_USER_AGENT

logger = logging.getLogger(__name__)

BASEMAPS = {
    "OpenStreetMap": "OpenStreetMap",
    "CartoDB Positron": "CartoDB positron",
    "Esri World Imagery": "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
}

# district search level -> Nominatim featuretype
DISTRICT_LEVELS = {
    "province": "state",
    "city": "city",
    "district": "settlement",
}


@dataclass(frozen=True)
class DistrictBoundary:
    name: str
    adcode: str
    level: str
    center: Tuple[float, float]  # (lng, lat)
    boundary: List[Tuple[float, float]]


def _geocoder():
    return Nominatim(user_agent=NOMINATIM_USER_AGENT, timeout=5)


def search_location(query, geocoder=None):
    """Search for a location using Nominatim geocoding service"""
    try:
        location = (geocoder or _geocoder()).geocode(query)
        if location:
            return location.latitude, location.longitude
        return None, None
    except GeopyError as e:
        logger.error(f"Location search error for {query!r}: {e}")
        return None, None


def _first_outer_ring(geojson):
    if geojson.get("type") == "Polygon":
        ring = geojson["coordinates"][0]
    elif geojson.get("type") == "MultiPolygon":
        ring = geojson["coordinates"][0][0]
    else:
        return None
    vertices = [(float(lng), float(lat)) for lng, lat in ring]
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        vertices = vertices[:-1]
    return vertices


def lookup_district(query, level="district", geocoder=None) -> Optional[DistrictBoundary]:
    """Find an administrative area by name and return its outline."""
    try:
        location = (geocoder or _geocoder()).geocode(
            query,
            geometry="geojson",
            extratags=True,
            featuretype=DISTRICT_LEVELS.get(level),
        )
    except GeopyError as e:
        logger.error(f"District lookup failed for {query!r}: {e}")
        return None

    if not location:
        logger.info(f"No district found for {query!r}")
        return None

    raw = location.raw
    vertices = _first_outer_ring(raw.get("geojson") or {})
    if not vertices or len(vertices) < 3:
        logger.info(f"District {query!r} has no polygon boundary")
        return None

    extratags = raw.get("extratags") or {}
    adcode = extratags.get("ISO3166-2") or extratags.get("ref") or str(raw.get("osm_id", ""))
    name = raw.get("name") or raw.get("display_name", query).split(",")[0]

    return DistrictBoundary(
        name=name,
        adcode=adcode,
        level=raw.get("addresstype") or level,
        center=(float(location.longitude), float(location.latitude)),
        boundary=vertices,
    )


def get_user_location():
    """Approximate coordinates of the client from its IP address."""
    try:
        response = requests.get("https://ipinfo.io/json", timeout=5)
        if response.status_code == 200:
            lat, lon = map(float, response.json()["loc"].split(","))
            return lat, lon
    except (requests.RequestException, KeyError, ValueError) as e:
        logger.error(f"Failed to retrieve location: {e}")
    return None, None


def create_map(center=None, zoom=MAP_ZOOM, basemap="OpenStreetMap", draw=None):
    """Create a Folium map, optionally with drawing controls for the given shapes."""
    m = folium.Map(location=center or MAP_CENTER, zoom_start=zoom, tiles=None, control_scale=True)

    folium.TileLayer(
        BASEMAPS[basemap],
        attr="Basemap provided by respective service",
        name=basemap,
    ).add_to(m)

    if draw:
        Draw(
            draw_options={
                'polyline': False,
                'rectangle': 'rectangle' in draw,
                'polygon': 'polygon' in draw,
                'circle': False,
                'marker': False,
                'circlemarker': False
            },
            edit_options={'edit': False}
        ).add_to(m)

    folium.LayerControl().add_to(m)
    return m


def extract_vertices(geometry):
    """Vertices of a drawn GeoJSON polygon as (lng, lat), without the closing point."""
    if not geometry or geometry.get('type') != 'Polygon':
        return []
    return _first_outer_ring(geometry) or []


def calculate_area_bounds(geometry):
    """Calculate the bounds and center of the drawn area"""
    vertices = extract_vertices(geometry)
    if not vertices:
        return None

    lons = [v[0] for v in vertices]
    lats = [v[1] for v in vertices]
    min_lat, max_lat = min(lats), max(lats)
    min_lon, max_lon = min(lons), max(lons)

    center_lat = (min_lat + max_lat) / 2

    return {
        'min_lat': min_lat,
        'max_lat': max_lat,
        'min_lon': min_lon,
        'max_lon': max_lon,
        'center_lat': center_lat,
        'center_lon': (min_lon + max_lon) / 2,
        # measured along the centre latitude so the width is not skewed
        'width': haversine_distance(center_lat, min_lon, center_lat, max_lon),
        'height': haversine_distance(min_lat, min_lon, max_lat, min_lon)
    }


def haversine_distance(lat1, lon1, lat2, lon2):
    """
    Calculate the great circle distance between two points
    on the earth (specified in decimal degrees)
    """
    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(np.radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = np.sin(dlat / 2)**2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2)**2
    c = 2 * np.arcsin(np.sqrt(a))
    return float(c * EARTH_RADIUS_M)
