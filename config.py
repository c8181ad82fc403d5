import os

from dotenv import load_dotenv

load_dotenv()

EARTH_RADIUS_M = 6_371_000.0  # spherical Earth (m)
KM_PER_DEGREE = 111.0  # approximate km per degree of latitude

# Hard cap on emitted device positions per coverage plan; the env setting can only lower it
DEVICE_LIMIT = 5000
MAX_DEVICES = min(DEVICE_LIMIT, int(os.getenv("MAX_DEVICES", DEVICE_LIMIT)))

# "geodesic" uses pyproj on the WGS84 ellipsoid, "spherical" the built-in formula
AREA_ENGINE = os.getenv("AREA_ENGINE", "geodesic").lower()

MAP_CENTER = [
    float(os.getenv("MAP_CENTER_LAT", 39.90923)),
    float(os.getenv("MAP_CENTER_LNG", 116.397428)),
]
MAP_ZOOM = int(os.getenv("MAP_ZOOM", 11))

NOMINATIM_USER_AGENT = os.getenv("NOMINATIM_USER_AGENT", "lowalt_deploy_planner")
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", 10))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
