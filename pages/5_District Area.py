import logging
from datetime import datetime, timezone

import streamlit as st
from streamlit_folium import st_folium

from area_export import build_area_record, export_filename, to_json
from config import AREA_ENGINE, LOG_LEVEL, MAP_CENTER
from geo_area import compute_area, m2_to_km2, resolve_platform_area
from map_utils import DISTRICT_LEVELS, create_map, lookup_district
from overlays import OverlayGroup, boundary_polygon
from ui_state import clear_history, get_history, push_history

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="District Area", layout="wide")
st.title("🏙️ District Area")

if "district_current" not in st.session_state:
    st.session_state.district_current = None

left, right = st.columns([1, 2], gap="large")

with left:
    with st.form("district_search"):
        level = st.selectbox("Level", list(DISTRICT_LEVELS), index=list(DISTRICT_LEVELS).index("district"))
        query = st.text_input("District name", "")
        searched = st.form_submit_button("🔍 Search")

    if searched and query.strip():
        with st.spinner("Looking up boundary..."):
            district = lookup_district(query.strip(), level=level)
        if district is None:
            st.warning("District not found. Please check the name.")
        else:
            try:
                area = compute_area(district.boundary, platform_area=resolve_platform_area(AREA_ENGINE))
            except ValueError as e:
                logger.error(f"Area calculation failed: {e}")
                st.error(f"❌ {e}")
                st.stop()
            entry = {"district": district, "area": area, "at": datetime.now(timezone.utc)}
            st.session_state.district_current = entry
            push_history("district_history", entry)
            logger.info(f"District {district.name} ({district.adcode}): {area:.0f} m²")

    current = st.session_state.district_current
    if current:
        d = current["district"]
        st.subheader(d.name)
        st.markdown(f"**Code:** `{d.adcode}`  \n**Level:** {d.level}  \n"
                    f"**Centre:** {d.center[1]:.6f}, {d.center[0]:.6f}  \n**Boundary points:** {len(d.boundary)}")
        st.metric("Area", f"{m2_to_km2(current['area']):,.2f} km²", f"{current['area']:,.0f} m²", delta_color="off")
        record = build_area_record(d.boundary, current["area"], name=d.name, adcode=d.adcode,
                                   level=d.level, center=d.center, timestamp=current["at"])
        st.download_button("⬇️ JSON", data=to_json(record),
                           file_name=export_filename("district", name=d.name, when=current["at"]),
                           mime="application/json")

    history = get_history("district_history")
    if history:
        st.subheader("🕘 History")
        for item in history:
            st.markdown(f"- **{item['district'].name}** · {item['district'].level} · "
                        f"{m2_to_km2(item['area']):,.2f} km²")
        if st.button("Clear history"):
            clear_history("district_history")
            st.rerun()

with right:
    current = st.session_state.district_current
    center = [current["district"].center[1], current["district"].center[0]] if current else MAP_CENTER
    m = create_map(center=center, zoom=9 if current else 5)
    with OverlayGroup(m) as overlays:
        if current:
            handle = overlays.add(boundary_polygon(current["district"].boundary, tooltip=current["district"].name))
            m.fit_bounds(handle.element.get_bounds())
        st_folium(m, height=600, use_container_width=True, returned_objects=[])
