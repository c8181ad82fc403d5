# area_export.py
import json
from datetime import datetime, timezone
from io import BytesIO

import pandas as pd
from simplekml import Kml

from geo_area import m2_to_km2


def build_area_record(boundary, area, name=None, adcode=None, level=None, center=None, timestamp=None):
    record = {}
    for key, value in (("name", name), ("adcode", adcode), ("level", level)):
        if value is not None:
            record[key] = value
    if center is not None:
        record["center"] = [center[0], center[1]]
    record["boundary"] = [[lng, lat] for lng, lat in boundary]
    record["area"] = area
    record["areaKm2"] = m2_to_km2(area)
    when = timestamp or datetime.now(timezone.utc)
    record["timestamp"] = when.isoformat()
    return record


def to_json(record):
    return json.dumps(record, indent=2, ensure_ascii=False)


def export_filename(kind, name=None, when=None):
    day = (when or datetime.now(timezone.utc)).strftime("%Y-%m-%d")
    if kind == "district":
        return f"district-area-{name}-{day}.json"
    return f"polygon-area-{day}.json"


def positions_dataframe(points):
    df = pd.DataFrame(points, columns=["longitude", "latitude"])
    df.insert(0, "device", range(1, len(df) + 1))
    return df


def positions_csv(points):
    return positions_dataframe(points).to_csv(index=False)


def positions_kmz(points):
    kml = Kml()
    for i, (lng, lat) in enumerate(points, start=1):
        kml.newpoint(name=f"#{i}", coords=[(lng, lat)])
    buff = BytesIO()
    kml.savekmz(buff)
    return buff.getvalue()
