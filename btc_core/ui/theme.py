import streamlit as st

# === COLOR PALETTE ===
PRIMARY_COLOR    = "#b91c1c"
SECONDARY_COLOR  = "#7f1d1d"
SUCCESS_COLOR    = "#10b981"
WARNING_COLOR    = "#f59e0b"
DANGER_COLOR     = "#ef4444"
INFO_COLOR       = "#3b82f6"
TEXT_COLOR       = "#2c3e50"
SUBTLE_TEXT      = "#495057"
GRID_COLOR       = "#e5e7eb"
BACKGROUND_COLOR = "#f8f9fa"
CARD_BG_LIGHT    = "#ffffff"

# Stock health -> color
HEALTH_COLORS = {
    "critical": DANGER_COLOR,
    "low": WARNING_COLOR,
    "healthy": SUCCESS_COLOR,
    "normal": INFO_COLOR,
    "unknown": SUBTLE_TEXT,
}

# Center stock level badge -> color
LEVEL_COLORS = {
    "High": SUCCESS_COLOR,
    "Medium": WARNING_COLOR,
    "Low": DANGER_COLOR,
    "Normal": INFO_COLOR,
    "Unknown": SUBTLE_TEXT,
}

SEVERITY_ICONS = {"high": "🔴", "medium": "🟠", "low": "🟢"}


def apply_css():
    """Global page styling shared by every dashboard page."""
    st.markdown(f"""
        <style>
        .main {{
            background-color: {BACKGROUND_COLOR};
            color: {TEXT_COLOR};
            font-family: 'Segoe UI','Inter','SF Pro Display',sans-serif;
        }}
        .main-header {{
            background: linear-gradient(135deg, {PRIMARY_COLOR} 0%, {SECONDARY_COLOR} 100%);
            padding: 2rem; border-radius: 16px; margin-bottom: 2rem;
            border: 1px solid rgba(255,255,255,0.1); box-shadow: 0 8px 32px rgba(185,28,28,.3);
        }}
        .metric-card {{
            background: {CARD_BG_LIGHT}; padding: 20px; border-radius: 10px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.08); margin: 10px 0; border: 1px solid {GRID_COLOR};
        }}
        .metric-card .metric-label {{ color: {SUBTLE_TEXT}; font-size: .85rem; text-transform: uppercase; }}
        .metric-card .metric-value {{ color: {TEXT_COLOR}; font-size: 1.9rem; font-weight: 700; }}
        .status-badge {{
            display: inline-block; padding: 2px 10px; border-radius: 999px;
            color: white; font-size: .8rem; font-weight: 600;
        }}
        .stButton button {{
            background: linear-gradient(135deg, {PRIMARY_COLOR} 0%, {SECONDARY_COLOR} 100%);
            color: white; border: none; border-radius: 10px; padding: .48rem 1.2rem; font-weight: 600;
        }}
        h1,h2,h3,h4,h5,h6 {{ color: {TEXT_COLOR}; font-weight: 600; }}
        h3 {{ font-size: 1.3rem; margin-top: 1.5rem; margin-bottom: 0.8rem; color: {PRIMARY_COLOR}; }}
        </style>
    """, unsafe_allow_html=True)
