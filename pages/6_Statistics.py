import logging

import pandas as pd
import streamlit as st

from config import LOG_LEVEL
from fleet_stats import summarize
from ui_state import get_repository
from utils import create_type_breakdown

logging.basicConfig(level=LOG_LEVEL)

st.set_page_config(page_title="Statistics", layout="wide")
st.title("📊 Statistics")

stats = summarize(get_repository())

c1, c2, c3, c4 = st.columns(4)
c1.metric("Total devices", stats.total_devices)
c2.metric("Deployed", stats.deployed_devices, f"{stats.deployment_rate:.0f}%", delta_color="off")
c3.metric("Total coverage", f"{stats.total_coverage:.1f} km")
c4.metric("Total cost", f"¥{stats.total_cost:,.0f}")

c5, c6, c7 = st.columns(3)
c5.metric("Pending", stats.undeployed_devices)
c6.metric("Average price", f"¥{stats.average_price:,.0f}")
c7.metric("Average coverage", f"{stats.average_coverage:.1f} km")

if stats.total_devices:
    left, right = st.columns(2)
    with left:
        st.plotly_chart(create_type_breakdown(stats), use_container_width=True)
    with right:
        df = pd.DataFrame(
            [(t, n, n / stats.total_devices * 100) for t, n in stats.devices_by_type.items()],
            columns=["Type", "Devices", "Share (%)"],
        )
        st.dataframe(df.round(1), use_container_width=True, hide_index=True)
else:
    st.info("No devices in the inventory.")
