import logging

import pandas as pd
import streamlit as st

from config import LOG_LEVEL
from device_presets import DEVICE_TYPES
from device_store import DeviceNotFoundError, validate_device
from ui_state import get_repository, set_repository

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Devices", layout="wide")
st.title("🗂️ Device Inventory")

repo = get_repository()

with st.expander("➕ Add Device", expanded=len(repo) == 0):
    with st.form("add_device", clear_on_submit=True):
        name = st.text_input("Name", max_chars=100)
        device_type = st.selectbox("Type", DEVICE_TYPES)
        price = st.number_input("Price (¥)", min_value=0.0, value=0.0, step=1000.0)
        coverage_range = st.number_input("Coverage range (km)", min_value=0.0, value=1.0, step=0.5)
        submitted = st.form_submit_button("Add")

        if submitted:
            errors = validate_device(name, device_type, price, coverage_range)
            if errors:
                for e in errors:
                    st.warning(e)
            else:
                repo, device = repo.add(name, device_type, price, coverage_range)
                set_repository(repo)
                st.success(f"✅ Added {device.name}")

if len(repo) == 0:
    st.info("No devices yet.")
    st.stop()

df = pd.DataFrame([
    {
        "Name": d.name,
        "Type": d.type,
        "Price (¥)": d.price,
        "Coverage (km)": d.coverage_range,
        "Deployed": "✅" if d.deployed else "—",
        "Position": f"{d.position[1]:.6f}, {d.position[0]:.6f}" if d.position else "",
    }
    for d in repo
])
st.dataframe(df, use_container_width=True, hide_index=True)

st.subheader("✏️ Edit / Delete")
labels = {d.id: f"{d.name} ({d.type})" for d in repo}
selected_id = st.selectbox("Device", list(labels), format_func=labels.get)
selected = repo.get(selected_id)

with st.form("edit_device"):
    new_name = st.text_input("Name", value=selected.name, max_chars=100)
    type_options = DEVICE_TYPES if selected.type in DEVICE_TYPES else DEVICE_TYPES + [selected.type]
    new_type = st.selectbox("Type", type_options, index=type_options.index(selected.type))
    new_price = st.number_input("Price (¥)", min_value=0.0, value=float(selected.price), step=1000.0)
    new_range = st.number_input("Coverage range (km)", min_value=0.0, value=float(selected.coverage_range), step=0.5)
    save, delete = st.columns(2)
    saved = save.form_submit_button("💾 Save")
    deleted = delete.form_submit_button("🗑️ Delete")

if saved or deleted:
    try:
        if saved:
            repo = repo.update(selected_id, name=new_name, type=new_type, price=new_price, coverage_range=new_range)
        else:
            repo = repo.delete(selected_id)
        set_repository(repo)
        st.rerun()
    except (ValueError, DeviceNotFoundError) as e:
        logger.error(f"Device change failed: {e}")
        st.error(f"❌ {e}")
