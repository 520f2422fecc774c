import asyncio
from typing import Optional

import streamlit as st

from btc_core.analytics.view_model import ViewModel
from btc_core.errors import ErrorContext
from btc_core.services.dashboard_service import get_dashboard_service

# Central registry for session-state keys used across the app.
SESSION_DEFAULTS = {
    "view_models": {},          # page -> ViewModel of its last cycle
    "center_search": "",
    "center_wilaya": "all",
    "donor_search": "",
    "donor_wilaya": "all",
    "donor_blood_group": "all",
}


def init_state():
    """Initialize session state with defaults."""
    for k, v in SESSION_DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v if not isinstance(v, dict) else dict(v)


def get_view_model(page: str) -> Optional[ViewModel]:
    return st.session_state.get("view_models", {}).get(page)


def refresh_view_model(page: str) -> Optional[ViewModel]:
    """
    Run a fetch cycle for `page` and store its ViewModel.

    On an unexpected failure the previous ViewModel stays on screen.
    """
    with ErrorContext(f"Loading {page} data"):
        view_model = asyncio.run(get_dashboard_service().run_cycle(page))
        st.session_state["view_models"] = {**st.session_state.get("view_models", {}), page: view_model}
    return get_view_model(page)


def load_view_model(page: str, force: bool = False) -> Optional[ViewModel]:
    """ViewModel for `page`, running a cycle on first visit or when forced (Retry Connection)."""
    init_state()
    if force or get_view_model(page) is None:
        return refresh_view_model(page)
    return get_view_model(page)
