# =============================================================================
# 01_Analytics.py - Request analytics, wilaya performance and alert feed
# =============================================================================
from __future__ import annotations
import pandas as pd
import streamlit as st

from btc_core.state.session import load_view_model
from btc_core.ui.theme import apply_css, SEVERITY_ICONS, DANGER_COLOR, INFO_COLOR
from btc_core.ui.components import header, connection_banner
from btc_core.ui.charts import distribution_pie, distribution_bar, region_performance_chart, scope_stock_chart

st.set_page_config(
    page_title="Analytics - BTC Network",
    page_icon="📊",
    layout="wide",
)

apply_css()
header("Analytics", "Blood requests, wilaya performance and live alerts", icon="📊")

vm = load_view_model("analytics")
if vm is None:
    st.stop()

if connection_banner(vm.connectivity, key="analytics_retry"):
    load_view_model("analytics", force=True)
    st.rerun()

# ============================================================================
# DISTRIBUTIONS
# ============================================================================
col_priority, col_group = st.columns(2)
with col_priority:
    fig = distribution_pie(vm.requests_by_priority, title="Requests by Priority")
    if fig is None:
        st.info("No request priorities to show.")
    else:
        st.plotly_chart(fig, use_container_width=True)
with col_group:
    fig = distribution_bar(vm.requests_by_blood_group, title="Requests by Blood Group", color=DANGER_COLOR)
    if fig is None:
        st.info("No requests by blood group.")
    else:
        st.plotly_chart(fig, use_container_width=True)

col_status, col_type = st.columns(2)
with col_status:
    fig = distribution_pie(vm.requests_by_status, title="Requests by Status")
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)
with col_type:
    fig = distribution_pie(vm.requests_by_donation_type, title="Requests by Donation Type")
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)

# ============================================================================
# WILAYA PERFORMANCE
# ============================================================================
st.markdown("### Wilaya Performance")
fig = region_performance_chart(vm.region_performance)
if fig is None:
    st.info("No wilaya statistics available.")
else:
    st.plotly_chart(fig, use_container_width=True)
    st.dataframe(
        pd.DataFrame([{
            "Wilaya": r.region,
            "Requests": r.request_count,
            "Centers": r.center_count,
            "Score": r.score,
            "Efficiency": r.efficiency,
        } for r in vm.region_performance]),
        use_container_width=True,
        hide_index=True,
    )

# ============================================================================
# STOCK BY WILAYA AND CENTER
# ============================================================================
col_wilaya_stock, col_center_stock = st.columns(2)
with col_wilaya_stock:
    fig = scope_stock_chart(vm.stock_by_wilaya, title="Units by Wilaya")
    if fig is None:
        st.info("No stock figures by wilaya.")
    else:
        st.plotly_chart(fig, use_container_width=True)
with col_center_stock:
    fig = scope_stock_chart(vm.stock_by_center, title="Units by Center", color=INFO_COLOR)
    if fig is None:
        st.info("No stock figures by center.")
    else:
        st.plotly_chart(fig, use_container_width=True)

# ============================================================================
# ALERTS
# ============================================================================
st.markdown("### Alerts")
if not vm.alerts:
    st.success("No active alerts.")
for alert in vm.alerts:
    icon = SEVERITY_ICONS.get(alert.severity, "⚪")
    st.markdown(f"{icon} **{alert.category}**: {alert.message}  \n<small>{alert.timestamp}</small>",
                unsafe_allow_html=True)
