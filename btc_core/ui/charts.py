"""
Plotly figures for the dashboard pages.

Every builder takes view-model rows and returns a figure (or None when there
is nothing to plot), so pages decide where and whether to render.
"""

from dataclasses import asdict
from typing import Dict, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from btc_core.analytics.distributions import DistributionRow
from btc_core.analytics.donors import DonorWilayaStats
from btc_core.analytics.records import Number
from btc_core.analytics.regions import RegionPerformance
from btc_core.analytics.stock import StockRow
from .components import add_grid
from .theme import DANGER_COLOR, WARNING_COLOR, SUCCESS_COLOR, PRIMARY_COLOR, INFO_COLOR


def stock_bar_chart(rows: List[StockRow]) -> Optional[go.Figure]:
    """Stacked bars: available units per blood group split by health bucket."""
    if not rows:
        return None
    df = pd.DataFrame([asdict(row) for row in rows])
    fig = go.Figure()
    for column, name, color in (
        ("critical_units", "Critical", DANGER_COLOR),
        ("low_units", "Low", WARNING_COLOR),
        ("healthy_units", "Healthy", SUCCESS_COLOR),
    ):
        fig.add_trace(go.Bar(x=df["blood_group"], y=df[column], name=name, marker_color=color))
    fig.add_trace(go.Scatter(
        x=df["blood_group"], y=df["min_stock"], name="Minimum",
        mode="markers", marker=dict(symbol="line-ew-open", size=24, color=PRIMARY_COLOR),
    ))
    fig.update_layout(barmode="stack", height=380, margin=dict(l=20, r=20, t=30, b=20),
                      xaxis_title="Blood Group", yaxis_title="Units")
    return add_grid(fig)


def distribution_pie(rows: List[DistributionRow], title: str = "") -> Optional[go.Figure]:
    if not rows:
        return None
    df = pd.DataFrame([asdict(row) for row in rows])
    fig = px.pie(df, names="label", values="count", title=title, hole=0.45)
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(height=340, margin=dict(l=20, r=20, t=50, b=20), showlegend=False)
    return fig


def distribution_bar(rows: List[DistributionRow], title: str = "", color: str = PRIMARY_COLOR) -> Optional[go.Figure]:
    if not rows:
        return None
    df = pd.DataFrame([asdict(row) for row in rows])
    fig = px.bar(df, x="label", y="count", text="percentage", title=title)
    fig.update_traces(marker_color=color, texttemplate="%{text}%", textposition="outside")
    fig.update_layout(height=340, margin=dict(l=20, r=20, t=50, b=20), xaxis_title="", yaxis_title="Count")
    return add_grid(fig)


def region_performance_chart(rows: List[RegionPerformance]) -> Optional[go.Figure]:
    if not rows:
        return None
    df = pd.DataFrame([asdict(row) for row in rows])
    fig = px.bar(df, x="region", y="score", text="efficiency",
                 hover_data=["request_count", "center_count"], title="Wilaya Performance")
    fig.update_traces(marker_color=INFO_COLOR, texttemplate="eff. %{text}", textposition="outside")
    fig.update_layout(height=360, margin=dict(l=20, r=20, t=50, b=20), xaxis_title="", yaxis_title="Score")
    return add_grid(fig)


def donors_by_wilaya_chart(rows: List[DonorWilayaStats]) -> Optional[go.Figure]:
    if not rows:
        return None
    df = pd.DataFrame([asdict(row) for row in rows])
    fig = go.Figure([
        go.Bar(x=df["wilaya"], y=df["donors"], name="Donors", marker_color=PRIMARY_COLOR),
        go.Bar(x=df["wilaya"], y=df["new_this_month"], name="Donated this month", marker_color=SUCCESS_COLOR),
    ])
    fig.update_layout(barmode="group", height=340, margin=dict(l=20, r=20, t=30, b=20))
    return add_grid(fig)


def scope_stock_chart(totals: Dict[str, Number], title: str = "", color: str = PRIMARY_COLOR) -> Optional[go.Figure]:
    """Horizontal bars of total units per wilaya or per center, largest first."""
    if not totals:
        return None
    series = pd.Series(totals, dtype="float64").sort_values(kind="stable")
    fig = go.Figure(go.Bar(x=series.values, y=series.index, orientation="h", marker_color=color))
    fig.update_layout(title=title, height=max(240, 40 * len(series)),
                      margin=dict(l=20, r=20, t=50, b=20), xaxis_title="Units")
    return add_grid(fig)
