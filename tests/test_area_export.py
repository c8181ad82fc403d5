import json
from datetime import datetime, timezone

from area_export import (
    build_area_record,
    export_filename,
    positions_csv,
    positions_kmz,
    to_json,
)

WHEN = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)
BOUNDARY = [(116.4, 39.9), (116.5, 39.9), (116.5, 40.0)]


def test_polygon_record_omits_district_fields():
    record = build_area_record(BOUNDARY, 2_000_000.0, timestamp=WHEN)
    assert set(record) == {"boundary", "area", "areaKm2", "timestamp"}
    assert record["boundary"] == [[116.4, 39.9], [116.5, 39.9], [116.5, 40.0]]
    assert record["areaKm2"] == 2.0
    assert record["timestamp"] == "2026-03-14T09:30:00+00:00"


def test_district_record():
    record = build_area_record(
        BOUNDARY, 1.0, name="朝阳区", adcode="110105", level="district",
        center=(116.44, 39.92), timestamp=WHEN,
    )
    assert record["name"] == "朝阳区"
    assert record["adcode"] == "110105"
    assert record["level"] == "district"
    assert record["center"] == [116.44, 39.92]


def test_to_json_round_trips_and_keeps_unicode():
    record = build_area_record(BOUNDARY, 1.0, name="朝阳区", timestamp=WHEN)
    text = to_json(record)
    assert "朝阳区" in text
    assert json.loads(text) == record


def test_export_filename():
    assert export_filename("district", name="Chaoyang", when=WHEN) == "district-area-Chaoyang-2026-03-14.json"
    assert export_filename("polygon", when=WHEN) == "polygon-area-2026-03-14.json"


def test_positions_csv():
    lines = positions_csv([(116.4, 39.9), (116.5, 39.8)]).strip().splitlines()
    assert lines[0] == "device,longitude,latitude"
    assert lines[1] == "1,116.4,39.9"
    assert len(lines) == 3


def test_positions_kmz_is_zip():
    data = positions_kmz([(116.4, 39.9)])
    assert data[:2] == b"PK"
