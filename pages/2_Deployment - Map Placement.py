import logging

import streamlit as st
from streamlit_folium import st_folium

from config import LOG_LEVEL, MAP_CENTER
from device_store import DeviceNotFoundError
from map_utils import create_map, get_user_location, search_location
from overlays import OverlayGroup, coverage_circle, device_marker
from ui_state import get_repository, set_repository

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Deployment", layout="wide")
st.title("📍 Device Deployment")

if "deploy_center" not in st.session_state:
    st.session_state.deploy_center = MAP_CENTER

repo = get_repository()
left, right = st.columns([1, 2], gap="large")

with left:
    query = st.text_input("Search location", "")
    if query:
        lat, lon = search_location(query)
        if lat is not None:
            st.session_state.deploy_center = [lat, lon]
        else:
            st.warning("Location not found.")
    if st.checkbox("Centre on my location"):
        lat, lon = get_user_location()
        if lat is not None:
            st.session_state.deploy_center = [lat, lon]

    st.subheader(f"⏳ Pending ({len(repo.undeployed())})")
    pending = {d.id: f"{d.name} ({d.coverage_range} km)" for d in repo.undeployed()}
    target_id = None
    if pending:
        target_id = st.radio("Device to place", list(pending), format_func=pending.get)
        st.caption("Click on the map to deploy the selected device.")
    else:
        st.success("All devices are deployed.")

    st.subheader(f"✅ Deployed ({len(repo.deployed())})")
    for d in repo.deployed():
        lng, lat = d.position
        col_a, col_b = st.columns([3, 1])
        col_a.markdown(f"**{d.name}**  \n{lat:.6f}, {lng:.6f}")
        if col_b.button("Recall", key=f"undeploy_{d.id}"):
            try:
                set_repository(repo.undeploy(d.id))
                st.rerun()
            except DeviceNotFoundError as e:
                logger.error(f"Undeploy failed: {e}")
                st.error(f"❌ Device not found: {e}")

with right:
    m = create_map(center=st.session_state.deploy_center, zoom=13)
    with OverlayGroup(m) as overlays:
        for d in repo.deployed():
            lng, lat = d.position
            overlays.add(device_marker(d))
            overlays.add(coverage_circle(lat, lng, d.coverage_range, label=d.name))
        map_output = st_folium(m, height=600, use_container_width=True, returned_objects=["last_clicked"])

    clicked = (map_output or {}).get("last_clicked")
    click_key = (clicked["lng"], clicked["lat"]) if clicked else None
    # st_folium keeps returning the last click, deploy once per new click
    if target_id and click_key and click_key != st.session_state.get("last_deploy_click"):
        st.session_state.last_deploy_click = click_key
        try:
            set_repository(repo.deploy(target_id, clicked["lng"], clicked["lat"]))
            st.rerun()
        except (ValueError, DeviceNotFoundError) as e:
            logger.error(f"Deployment failed: {e}")
            st.error(f"❌ Deployment failed: {e}")
