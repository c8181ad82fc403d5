import logging

import streamlit as st

from config import LOG_LEVEL
from fleet_stats import summarize
from ui_state import get_repository

logging.basicConfig(level=LOG_LEVEL)

st.set_page_config(page_title="Low-Altitude Deployment Planner", page_icon="📡", layout="wide")
st.markdown("""
<style>
.block-container {
    padding-top: 1rem !important;
    padding-bottom: 1rem !important;
}
.stButton>button {
    background-color: #0891b2;
    color: white;
    border-radius: 8px;
    border: none;
    font-weight: 600;
}
.stButton>button:hover {
    background-color: #06b6d4;
}
#MainMenu {visibility: hidden;}
@media only screen and (max-width: 768px) {
  .block-container {padding-left:0.5rem;padding-right:0.5rem;}
  iframe {height:300px !important;}
}
</style>
""", unsafe_allow_html=True)

repo = get_repository()
stats = summarize(repo)

st.title("📡 Low-Altitude Deployment Planner")
st.caption("Plan, place and track low-altitude network devices")

c1, c2, c3, c4 = st.columns(4)
c1.metric("Devices", stats.total_devices)
c2.metric("Deployed", stats.deployed_devices, f"{stats.deployment_rate:.0f}%")
c3.metric("Coverage (deployed)", f"{stats.total_coverage:.1f} km")
c4.metric("Inventory value", f"¥{stats.total_cost:,.0f}")

st.markdown("""
---
### 🧭 Tools

- **Devices** – add, edit and remove devices in the inventory
- **Deployment** – place devices on the map and review their coverage
- **Coverage Planner** – hexagonal layout, device count, cost and coverage rate for a rectangular area
- **Polygon Area** – draw an area and measure it
- **District Area** – look up an administrative district and measure its boundary
- **Statistics** – deployment and cost breakdown

Use the sidebar to switch between tools. Inventory and history live in this browser session only.
""")
