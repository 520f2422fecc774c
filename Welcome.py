from __future__ import annotations
import streamlit as st

from btc_core.logging import setup_logging
from btc_core.state.session import load_view_model
from btc_core.ui.theme import apply_css, HEALTH_COLORS
from btc_core.ui.components import header, kpi_card, connection_banner
from btc_core.ui.charts import stock_bar_chart, distribution_bar

# ============================================================================
# PAGE CONFIGURATION
# ============================================================================
st.set_page_config(
    page_title="BTC Network - Overview",
    page_icon="🩸",
    layout="wide",
)

setup_logging()
apply_css()

header("BTC Network Dashboard", "National blood transfusion network at a glance")

vm = load_view_model("overview")
if vm is None:
    st.stop()

if connection_banner(vm.connectivity, key="overview_retry"):
    load_view_model("overview", force=True)
    st.rerun()

# ============================================================================
# KPIs
# ============================================================================
c1, c2, c3, c4 = st.columns(4)
with c1:
    kpi_card("Blood Centers", f"{vm.totals.centers:,}")
with c2:
    kpi_card("Registered Donors", f"{vm.totals.donors:,}")
with c3:
    kpi_card("Blood Requests", f"{vm.totals.requests:,}")
with c4:
    kpi_card(
        "Units in Stock",
        f"{vm.totals.stock:,}",
        caption=f"{vm.critical_stock_count} critical · {vm.low_stock_count} low",
    )

# ============================================================================
# STOCK BY BLOOD GROUP
# ============================================================================
st.markdown("### Blood Stock by Group")
col_chart, col_table = st.columns([3, 2])
with col_chart:
    fig = stock_bar_chart(vm.stock)
    if fig is None:
        st.info("No stock data available.")
    else:
        st.plotly_chart(fig, use_container_width=True)
with col_table:
    for row in vm.stock:
        color = HEALTH_COLORS[row.health.value]
        minimum = "n/a" if row.min_stock is None else row.min_stock
        st.markdown(
            f"**{row.blood_group}** &nbsp; {row.available} / {minimum} units "
            f"<span style='color:{color};font-weight:600'>{row.health.value.upper()}</span>",
            unsafe_allow_html=True,
        )

# ============================================================================
# TOP WILAYAS
# ============================================================================
st.markdown("### Top Wilayas by Requests")
fig = distribution_bar(vm.top_wilayas)
if fig is None:
    st.info("No request data by wilaya.")
else:
    st.plotly_chart(fig, use_container_width=True)
