# =============================================================================
# 02_Centers.py - Blood transfusion centers directory
# =============================================================================
from __future__ import annotations
import streamlit as st

from btc_core.analytics.centers import filter_centers
from btc_core.state.session import load_view_model
from btc_core.ui.theme import apply_css, LEVEL_COLORS
from btc_core.ui.components import header, connection_banner, status_badge

st.set_page_config(
    page_title="Centers - BTC Network",
    page_icon="🏥",
    layout="wide",
)

apply_css()
header("Transfusion Centers", "Stock levels and contacts of every BTC", icon="🏥")

vm = load_view_model("centers")
if vm is None:
    st.stop()

if connection_banner(vm.connectivity, key="centers_retry"):
    load_view_model("centers", force=True)
    st.rerun()

# ============================================================================
# FILTERS
# ============================================================================
wilaya_options = {"all": "All wilayas"}
wilaya_options.update({w.get("id"): w.get("name") or f"Wilaya {w.get('id')}" for w in vm.wilayas})

col_search, col_wilaya = st.columns([3, 2])
with col_search:
    search = st.text_input("Search centers", key="center_search", placeholder="Name, wilaya or address")
with col_wilaya:
    wilaya_id = st.selectbox("Wilaya", list(wilaya_options), format_func=wilaya_options.get, key="center_wilaya")

centers = filter_centers(vm.centers, search, wilaya_id)
st.caption(f"{len(centers)} of {len(vm.centers)} centers")

# ============================================================================
# CENTER CARDS
# ============================================================================
if not centers:
    st.info("No centers match the current filters.")

for i in range(0, len(centers), 2):
    cols = st.columns(2)
    for col, center in zip(cols, centers[i:i + 2]):
        with col, st.container(border=True):
            level = center.stock_level.value
            st.markdown(
                f"**{center.name}** &nbsp; {status_badge(level, LEVEL_COLORS[level])}",
                unsafe_allow_html=True,
            )
            st.caption(f"📍 {center.wilaya} · {center.address}")
            st.write(f"📞 {center.tel} · ✉️ {center.email} · 👤 {center.contact}")
            st.metric("Units in stock", center.total_stock)
            if center.stock_by_type:
                st.write(" · ".join(f"{label}: {units}" for label, units in center.stock_by_type.items()))
