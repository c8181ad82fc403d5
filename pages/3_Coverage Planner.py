import logging

import streamlit as st
from streamlit_folium import st_folium

from area_export import positions_csv, positions_dataframe, positions_kmz
from config import LOG_LEVEL, MAP_CENTER
from coverage_planner import area_bounds_lnglat, plan, positions_to_lnglat, validate_parameters
from device_presets import DEVICE_PRESETS
from map_utils import calculate_area_bounds, create_map, search_location
from overlays import OverlayGroup, area_rectangle, coverage_circle
from utils import create_coverage_plot

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

# circles drawn on the map beyond this count are skipped to keep the page responsive
MAP_CIRCLE_LIMIT = 1500

st.set_page_config(page_title="Coverage Planner", layout="wide")
st.title("🛰️ Coverage Planner")

for key, default in (
    ("coverage_result", None),
    ("coverage_params", None),
    ("coverage_center", MAP_CENTER),
    ("drawn_area", None),
):
    if key not in st.session_state:
        st.session_state[key] = default

drawn = st.session_state.drawn_area or {}
left, right = st.columns([1, 2], gap="large")

with left:
    with st.expander("🛠️ Device & Area", expanded=True):
        preset_name = st.selectbox("Device preset", list(DEVICE_PRESETS))
        preset = DEVICE_PRESETS[preset_name]
        radius = st.number_input("Coverage radius (km)", min_value=0.1, value=float(preset["coverage_radius"]), step=0.5)
        unit_cost = st.number_input("Unit price (¥)", min_value=0.0, value=float(preset["unit_cost"]), step=10000.0)
        length = st.number_input("Area length (km)", min_value=1.0, value=max(1.0, drawn.get("length", 10.0)), step=1.0)
        width = st.number_input("Area width (km)", min_value=1.0, value=max(1.0, drawn.get("width", 10.0)), step=1.0)
        view = st.radio("View", ["Canvas", "Map"], horizontal=True)

    if view == "Map":
        query = st.text_input("Search area centre", "")
        if query:
            lat, lon = search_location(query)
            if lat is not None:
                st.session_state.coverage_center = [lat, lon]
            else:
                st.warning("Location not found.")
        st.caption("Draw a rectangle to take its size and centre, or click the map to move the centre.")

    if st.button("🧮 Calculate Coverage"):
        params = {"radius": radius, "length": length, "width": width, "unit_cost": unit_cost}
        errors = validate_parameters(params)
        if errors:
            for e in errors:
                st.error(e)
            st.stop()
        st.session_state.coverage_result = plan(length, width, radius, unit_cost)
        st.session_state.coverage_params = params

result = st.session_state.coverage_result
params = st.session_state.coverage_params
center_lat, center_lon = st.session_state.coverage_center

with right:
    if view == "Canvas":
        if result:
            st.plotly_chart(
                create_coverage_plot(result, params["length"], params["width"], params["radius"]),
                use_container_width=True,
            )
        else:
            st.info("Set the parameters and press **Calculate Coverage**.")
    else:
        m = create_map(center=[center_lat, center_lon], zoom=11, draw=("rectangle",))
        with OverlayGroup(m) as overlays:
            if result:
                overlays.add(area_rectangle(*area_bounds_lnglat(center_lon, center_lat, params["length"], params["width"])))
                points = positions_to_lnglat(result, center_lon, center_lat, params["length"], params["width"])
                for i, (lng, lat) in enumerate(points[:MAP_CIRCLE_LIMIT]):
                    overlays.add(coverage_circle(lat, lng, params["radius"], label=f"#{i + 1}"))
                if len(points) > MAP_CIRCLE_LIMIT:
                    st.caption(f"Showing the first {MAP_CIRCLE_LIMIT} of {len(points)} devices.")
            map_output = st_folium(m, height=600, use_container_width=True,
                                   returned_objects=["last_active_drawing", "last_clicked"])

        map_output = map_output or {}
        drawing = map_output.get("last_active_drawing")
        clicked = map_output.get("last_clicked")
        if drawing and isinstance(drawing, dict) and "geometry" in drawing:
            bounds = calculate_area_bounds(drawing["geometry"])
            if bounds:
                area = {"length": round(bounds["height"] / 1000, 2), "width": round(bounds["width"] / 1000, 2)}
                if area != st.session_state.drawn_area:
                    logger.info(f"Calculated area bounds: {bounds}")
                    st.session_state.drawn_area = area
                    st.session_state.coverage_center = [bounds["center_lat"], bounds["center_lon"]]
                    st.rerun()
            else:
                st.error("❌ Could not read the drawn area. Please draw it again.")
        elif clicked and [clicked["lat"], clicked["lng"]] != st.session_state.coverage_center:
            st.session_state.coverage_center = [clicked["lat"], clicked["lng"]]
            st.rerun()

if result:
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Devices", result.device_count, f"{result.row_count} rows × {result.col_count} cols", delta_color="off")
    c2.metric("Total cost", f"¥{result.total_cost / 10000:.1f}万")
    c3.metric("Coverage rate", f"{result.coverage_rate:.1f}%")
    c4.metric("Spacing", f"{result.spacing:.2f} km")

    points = positions_to_lnglat(result, center_lon, center_lat, params["length"], params["width"])
    st.caption(f"Positions and exports are placed around the area centre ({center_lat:.5f}, {center_lon:.5f}). "
               "Switch to the Map view to move it.")
    with st.expander("📋 Device positions"):
        st.dataframe(positions_dataframe(points), use_container_width=True, hide_index=True)

    dl1, dl2 = st.columns(2)
    with dl1:
        st.download_button("⬇️ CSV", data=positions_csv(points), file_name="coverage_plan.csv", mime="text/csv")
    with dl2:
        st.download_button("⬇️ KMZ", data=positions_kmz(points), file_name="coverage_plan.kmz",
                           mime="application/vnd.google-earth.kmz")
