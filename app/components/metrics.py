from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    help: Optional[str] = None


def fmt_count(n: Optional[int]) -> str:
    return "—" if n is None else f"{n:,}"


def fmt_inr(amount: Optional[float]) -> str:
    return "—" if amount is None else f"₹{amount:,.0f}"


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            help_html = f'<div class="metric-help">{k.help}</div>' if k.help else ""
            st.markdown(
                f"""
<div class="metric-card">
  <div class="metric-label">{k.label}</div>
  <div class="metric-value">{k.value}</div>
  {help_html}
</div>
                """,
                unsafe_allow_html=True,
            )


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(color=THEME["text_primary"]),
        paper_bgcolor=THEME["bg_card"],
        plot_bgcolor=THEME["bg_card"],
        colorway=[THEME["accent_primary"], THEME["navy_800"], THEME["accent_secondary"], "#6B7280", "#9CA3AF"],
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        title_font=dict(color=THEME["navy_900"], size=16),
    )
    fig.update_xaxes(title_text=x_title, gridcolor=THEME["grid"], linecolor=THEME["border_color"])
    fig.update_yaxes(title_text=y_title, gridcolor=THEME["grid"], linecolor=THEME["border_color"])
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    title: str = "",
    y_format: Optional[str] = None,  # "currency" | None
) -> None:
    fig = px.bar(df, x=x, y=y, color=color, title=title)
    fig = apply_plotly_theme(fig, x_title=x.replace("_", " "), y_title=y.replace("_", " "))
    if y_format == "currency":
        fig.update_yaxes(tickprefix="₹", separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)
