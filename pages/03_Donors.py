# =============================================================================
# 03_Donors.py - Donor directory
# =============================================================================
from __future__ import annotations
import pandas as pd
import streamlit as st

from btc_core.analytics.donors import filter_donors
from btc_core.analytics.enums import BloodGroup
from btc_core.state.session import load_view_model
from btc_core.ui.theme import apply_css
from btc_core.ui.components import header, kpi_card, connection_banner
from btc_core.ui.charts import distribution_pie, donors_by_wilaya_chart

st.set_page_config(
    page_title="Donors - BTC Network",
    page_icon="🧑‍🤝‍🧑",
    layout="wide",
)

apply_css()
header("Donors", "Registered blood donors across the network", icon="🧑‍🤝‍🧑")

vm = load_view_model("donors")
if vm is None:
    st.stop()

if connection_banner(vm.connectivity, key="donors_retry"):
    load_view_model("donors", force=True)
    st.rerun()

c1, c2, c3 = st.columns(3)
with c1:
    kpi_card("Donors", len(vm.donors))
with c2:
    kpi_card("Average Age", vm.average_donor_age, caption="years")
with c3:
    kpi_card("Donated this month", sum(row.new_this_month for row in vm.donors_by_wilaya))

col_types, col_wilayas = st.columns(2)
with col_types:
    fig = distribution_pie(vm.donors_by_blood_type, title="Donors by Blood Type")
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)
with col_wilayas:
    fig = donors_by_wilaya_chart(vm.donors_by_wilaya)
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)

# ============================================================================
# DIRECTORY
# ============================================================================
wilaya_options = {"all": "All wilayas"}
wilaya_options.update({w.get("id"): w.get("name") or f"Wilaya {w.get('id')}" for w in vm.wilayas})
group_options = {"all": "All blood groups"}
group_options.update({group.value: group.label for group in BloodGroup})

col_search, col_wilaya, col_group = st.columns([3, 2, 2])
with col_search:
    search = st.text_input("Search donors", key="donor_search", placeholder="Name, commune or wilaya")
with col_wilaya:
    wilaya_id = st.selectbox("Wilaya", list(wilaya_options), format_func=wilaya_options.get, key="donor_wilaya")
with col_group:
    blood_group = st.selectbox("Blood group", list(group_options), format_func=group_options.get,
                               key="donor_blood_group")

donors = filter_donors(vm.donors, search, wilaya_id, blood_group)
st.caption(f"{len(donors)} of {len(vm.donors)} donors")

if donors:
    st.dataframe(
        pd.DataFrame([{
            "Name": d.name,
            "Blood Group": d.blood_group,
            "Age": d.age,
            "Wilaya": d.wilaya,
            "Commune": d.commune,
            "Phone": d.tel,
            "Contact": d.contact_method,
            "Availability": d.availability,
            "Last Donation": d.last_donation,
        } for d in donors]),
        use_container_width=True,
        hide_index=True,
    )
else:
    st.info("No donors match the current filters.")
