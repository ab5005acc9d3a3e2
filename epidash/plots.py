from __future__ import annotations

import plotly.graph_objects as go
import pandas as pd
from typing import Optional

from .columns import AGES, age_label

AGE_COLORS = {
    "infant": "#ef4444",
    "preschool": "#f59e0b",
    "child": "#10b981",
    "adult": "#3b82f6",
    "senior": "#8b5cf6",
}
BAND_FILL = "#94a3b8"


def _hex_rgba(color: str, alpha: float) -> str:
    c = color.lstrip("#")
    r, g, b = int(c[0:2], 16), int(c[2:4], 16), int(c[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


def age_timeseries_figure(ts: pd.DataFrame, title: str, y_max: Optional[int] = None) -> go.Figure:
    fig = go.Figure()
    for age in AGES:
        if age in ts.columns:
            fig.add_trace(go.Scatter(x=ts["day"], y=ts[age], name=age_label(age), mode="lines",
                                     line=dict(color=AGE_COLORS[age], width=2)))
    fig.update_layout(title=title, xaxis_title="Day", yaxis_title="Count", template="plotly_white")
    if y_max is not None:
        fig.update_yaxes(range=[0, y_max])
    return fig


def age_share_figure(shares: pd.DataFrame, title: str) -> go.Figure:
    fig = go.Figure()
    for age in AGES:
        if age in shares.columns:
            fig.add_trace(go.Scatter(x=shares["day"], y=shares[age], name=age_label(age), mode="lines",
                                     stackgroup="share", line=dict(color=AGE_COLORS[age], width=1)))
    fig.update_layout(title=title, xaxis_title="Day", yaxis_title="Share of Cases", template="plotly_white")
    fig.update_yaxes(range=[0, 1], tickformat=".0%")
    return fig


def band_figure(band: pd.DataFrame, title: str, color: str, x_col: str = "day", y_title: str = "People") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=band[x_col], y=band["upper"], name="Upper CI", mode="lines",
                             line=dict(width=0), showlegend=False))
    fig.add_trace(go.Scatter(x=band[x_col], y=band["lower"], name="95% CI", mode="lines",
                             line=dict(width=0), fill="tonexty", fillcolor=_hex_rgba(color, 0.3)))
    fig.add_trace(go.Scatter(x=band[x_col], y=band["mean"], name="Mean", mode="lines",
                             line=dict(color=color, width=2)))
    fig.update_layout(title=title, xaxis_title=x_col.capitalize(), yaxis_title=y_title, template="plotly_white")
    return fig


def latest_week_figure(latest: pd.DataFrame, title: str, color: str) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=latest["label"],
        y=latest["mean"],
        name="Mean",
        marker_color=color,
        error_y=dict(type="data", symmetric=False, array=latest["error_plus"],
                     arrayminus=latest["error_minus"], color="#475569"),
    ))
    fig.update_layout(title=title, xaxis_title="Age Group", yaxis_title="Hospitalizations", template="plotly_white")
    return fig


def comparison_figure(merged: pd.DataFrame, names: dict[str, str], colors: dict[str, str], title: str) -> go.Figure:
    fig = go.Figure()
    for key, label in names.items():
        if key in merged.columns:
            fig.add_trace(go.Scatter(x=merged["day"], y=merged[key], name=label, mode="lines",
                                     line=dict(color=colors.get(key), width=2)))
    fig.update_layout(title=title, xaxis_title="Day", yaxis_title="People", template="plotly_white")
    return fig


__all__ = [
    "AGE_COLORS",
    "age_timeseries_figure",
    "age_share_figure",
    "band_figure",
    "latest_week_figure",
    "comparison_figure",
]
