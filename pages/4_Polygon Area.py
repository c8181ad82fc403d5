import logging
from datetime import datetime, timezone

import streamlit as st
from streamlit_folium import st_folium

from area_export import build_area_record, export_filename, to_json
from config import AREA_ENGINE, LOG_LEVEL, MAP_CENTER
from geo_area import compute_area, m2_to_km2, resolve_platform_area
from map_utils import create_map, extract_vertices, search_location
from overlays import OverlayGroup, boundary_polygon
from ui_state import clear_history, get_history, push_history

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Polygon Area", layout="wide")
st.title("📐 Polygon Area")

if "polygon_center" not in st.session_state:
    st.session_state.polygon_center = MAP_CENTER
if "polygon_current" not in st.session_state:
    st.session_state.polygon_current = None

left, right = st.columns([2, 1], gap="large")

with left:
    query = st.text_input("Search location", "")
    if query:
        lat, lon = search_location(query)
        if lat is not None:
            st.session_state.polygon_center = [lat, lon]
        else:
            st.warning("Location not found.")

    m = create_map(center=st.session_state.polygon_center, zoom=13, draw=("polygon", "rectangle"))
    current = st.session_state.polygon_current
    with OverlayGroup(m) as overlays:
        if current:
            overlays.add(boundary_polygon(current["vertices"], tooltip=f"{m2_to_km2(current['area']):.4f} km²"))
        map_output = st_folium(m, height=600, use_container_width=True, returned_objects=["last_active_drawing"])

    drawing = (map_output or {}).get("last_active_drawing")
    if drawing and isinstance(drawing, dict) and "geometry" in drawing:
        vertices = extract_vertices(drawing["geometry"])
        if len(vertices) < 3:
            st.warning("Draw a polygon with at least three points.")
        elif not current or vertices != current["vertices"]:
            try:
                area = compute_area(vertices, platform_area=resolve_platform_area(AREA_ENGINE))
            except ValueError as e:
                logger.error(f"Area calculation failed: {e}")
                st.error(f"❌ {e}")
                st.stop()
            current = {"vertices": vertices, "area": area, "at": datetime.now(timezone.utc)}
            st.session_state.polygon_current = current
            push_history("polygon_history", current)
            st.rerun()

with right:
    st.subheader("📊 Result")
    if current:
        st.metric("Area", f"{m2_to_km2(current['area']):.4f} km²", f"{current['area']:,.0f} m²", delta_color="off")
        st.text_area(
            "Vertices (lat, lng)",
            "\n".join(f"{lat:.6f}, {lng:.6f}" for lng, lat in current["vertices"]),
            height=160,
        )
        record = build_area_record(current["vertices"], current["area"], timestamp=current["at"])
        b1, b2 = st.columns(2)
        b1.download_button("⬇️ JSON", data=to_json(record), file_name=export_filename("polygon", when=current["at"]),
                           mime="application/json")
        if b2.button("🗑️ Clear"):
            st.session_state.polygon_current = None
            st.rerun()
    else:
        st.info("Draw a polygon on the map to measure it.")

    history = get_history("polygon_history")
    if history:
        st.subheader("🕘 History")
        for item in history:
            st.markdown(f"- {m2_to_km2(item['area']):.2f} km² · {len(item['vertices'])} points · "
                        f"{item['at']:%H:%M:%S}")
        if st.button("Clear history"):
            clear_history("polygon_history")
            st.rerun()
