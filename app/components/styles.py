from __future__ import annotations

import streamlit as st

from config import THEME


APP_TITLE = "Hospital Admin Dashboard"


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="🏥",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    # Centralized theme tokens (config.py) -> CSS variables
    radius = int(THEME["radius_px"])
    css = """
<style>
:root{
  --accent: __ACCENT__;
  --accent-hover: __ACCENT_HOVER__;
  --navy-900: __NAVY_900__;
  --navy-800: __NAVY_800__;

  --bg-primary: __BG_PRIMARY__;
  --bg-secondary: __BG_SECONDARY__;
  --card-bg: __CARD_BG__;
  --card-border: __CARD_BORDER__;

  --text-primary: __TEXT_PRIMARY__;
  --text-secondary: __TEXT_SECONDARY__;
  --shadow: __SHADOW__;
  --radius: __RADIUS_PX__px;
}

#MainMenu { visibility: hidden; }
footer { visibility: hidden; }

html, body, [data-testid="stAppViewContainer"]{
  background: var(--bg-primary) !important;
  color: var(--text-primary) !important;
}

[data-testid="stSidebar"]{
  background: var(--bg-secondary) !important;
  border-right: 1px solid var(--card-border) !important;
}

/* Sidebar nav as stacked buttons */
[data-testid="stSidebar"] div[role="radiogroup"] > label{
  background: var(--card-bg) !important;
  border: 1px solid var(--card-border) !important;
  border-radius: 10px !important;
  padding: 6px 10px !important;
  margin: 0 0 6px 0 !important;
}
[data-testid="stSidebar"] div[role="radiogroup"] > label:has(input:checked){
  border-color: var(--accent) !important;
}

.block-container{
  padding-top: 0.75rem !important;
  padding-bottom: 2rem !important;
}

/* Header */
.app-header{
  display:flex;
  align-items:center;
  justify-content:space-between;
  gap: 12px;
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 10px 14px;
  margin: 0 0 14px 0;
}
.app-header-left{ display:flex; align-items:center; gap: 10px; }
.app-mark{ font-size: 22px; }
.app-title{ font-size: 20px; font-weight: 700; color: var(--navy-900); line-height: 1.1; }
.app-subtitle{ font-size: 14px; font-weight: 500; color: var(--text-secondary); }
.pill{
  display:inline-flex;
  align-items:center;
  gap:6px;
  background: white;
  border: 1px solid var(--card-border);
  border-radius: 999px;
  padding: 6px 10px;
  font-size: 13px;
  font-weight: 600;
  color: var(--navy-800);
}
.pill .dot{ width:8px; height:8px; border-radius:999px; background: var(--accent); display:inline-block; }

/* Metric cards */
.metric-card{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
}
.metric-label{ font-size: 14px; font-weight: 500; color: var(--text-secondary); margin-bottom: 6px; }
.metric-value{ font-size: 24px; font-weight: 700; color: var(--text-primary); line-height: 1.2; }
.metric-help{ margin-top: 4px; font-size: 12px; color: var(--text-secondary); }

/* Page intro */
.page-intro{
  background: var(--bg-secondary);
  border: 1px solid var(--card-border);
  border-left: 4px solid var(--accent);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
  margin: 0 0 14px 0;
}
.page-intro-title{ font-size: 18px; font-weight: 700; color: var(--navy-900); margin-bottom: 4px; }
.page-intro-body{ font-size: 14px; color: var(--text-secondary); line-height: 1.5; }

div.stButton > button{
  border-radius: 10px !important;
  font-weight: 600 !important;
}

div[data-testid="stPlotlyChart"]{
  background: var(--card-bg);
  border: 1px solid var(--card-border);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 8px 10px;
}
</style>
"""

    tokens = {
        "__ACCENT__": str(THEME["accent_primary"]),
        "__ACCENT_HOVER__": str(THEME["accent_secondary"]),
        "__NAVY_900__": str(THEME["navy_900"]),
        "__NAVY_800__": str(THEME["navy_800"]),
        "__BG_PRIMARY__": str(THEME["bg_primary"]),
        "__BG_SECONDARY__": str(THEME["bg_secondary"]),
        "__CARD_BG__": str(THEME["bg_card"]),
        "__CARD_BORDER__": str(THEME["border_color"]),
        "__TEXT_PRIMARY__": str(THEME["text_primary"]),
        "__TEXT_SECONDARY__": str(THEME["text_secondary"]),
        "__SHADOW__": str(THEME["shadow"]),
        "__RADIUS_PX__": str(radius),
    }
    for k, v in tokens.items():
        css = css.replace(k, v)

    st.markdown(css, unsafe_allow_html=True)
