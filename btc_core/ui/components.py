import streamlit as st

from btc_core.offline.connection_state import ConnectivityState, DataSource
from .theme import (SUCCESS_COLOR, WARNING_COLOR, TEXT_COLOR, SUBTLE_TEXT,
                    GRID_COLOR, CARD_BG_LIGHT)


def header(title: str, subtitle: str, icon: str = "🩸"):
    st.markdown(f"""
        <div class="main-header">
            <div style="display:flex;gap:1.2rem;align-items:center;">
                <div style="font-size:3rem;filter:drop-shadow(0 0 15px rgba(255,255,255,.5));">{icon}</div>
                <div>
                    <h1 style="margin:0; font-size:2.4rem; color:white;">{title}</h1>
                    <p style="margin:.35rem 0 0 0;color:rgba(255,255,255,.85);font-size:1.05rem">{subtitle}</p>
                </div>
            </div>
        </div>
    """, unsafe_allow_html=True)


def add_grid(fig):
    """Apply the dashboard's axis and background styling to a plotly figure."""
    fig.update_xaxes(showgrid=True, gridcolor=GRID_COLOR, zeroline=False,
                     showline=True, linecolor=GRID_COLOR,
                     tickfont=dict(color=SUBTLE_TEXT), title_font=dict(color=TEXT_COLOR))
    fig.update_yaxes(showgrid=True, gridcolor=GRID_COLOR, zeroline=False,
                     showline=True, linecolor=GRID_COLOR,
                     tickfont=dict(color=SUBTLE_TEXT), title_font=dict(color=TEXT_COLOR))
    fig.update_layout(plot_bgcolor=CARD_BG_LIGHT, paper_bgcolor=CARD_BG_LIGHT,
                      font=dict(family="Segoe UI, sans-serif", size=12, color=TEXT_COLOR),
                      title_font=dict(color=TEXT_COLOR))
    return fig


def kpi_card(label: str, value, caption: str = ""):
    st.markdown(f"""
        <div class="metric-card">
            <div class="metric-label">{label}</div>
            <div class="metric-value">{value}</div>
            <div style="color:{SUBTLE_TEXT};font-size:.8rem">{caption}</div>
        </div>
    """, unsafe_allow_html=True)


def status_badge(text: str, color: str) -> str:
    """Inline HTML badge, for use inside st.markdown(..., unsafe_allow_html=True)."""
    return f'<span class="status-badge" style="background:{color}">{text}</span>'


def connection_banner(connectivity: ConnectivityState, key: str = "retry_connection") -> bool:
    """
    Show the data-source badge and, when demo data is on screen, the
    warning banner with a Retry Connection button.

    Returns:
        True if the user clicked Retry Connection
    """
    color = SUCCESS_COLOR if connectivity.source is DataSource.LIVE else WARNING_COLOR
    st.markdown(status_badge(connectivity.badge_label, color), unsafe_allow_html=True)

    message = connectivity.status_message
    if message is None:
        return False

    col_msg, col_btn = st.columns([5, 1])
    with col_msg:
        if connectivity.source is DataSource.FALLBACK:
            st.error(message)
        else:
            st.warning(message)
    with col_btn:
        return st.button("Retry Connection", key=key, use_container_width=True)
