from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import streamlit as st

from config import AppConfig


class Section(str, Enum):
    OVERVIEW = "overview"
    PATIENTS = "patients"
    VISITS = "visits"
    BILLING = "billing"
    IPD = "ipd"
    DISCHARGES = "discharges"
    MEDICATIONS = "medications"
    RADIOLOGY = "radiology"
    LAB = "lab"
    COMPLICATIONS = "complications"
    SURGEONS = "surgeons"
    DOCUMENTS = "documents"
    TALLY = "tally"


@dataclass(frozen=True)
class SidebarState:
    view: Section
    use_mock: bool


NAV_ITEMS = [
    ("🏠 Overview", Section.OVERVIEW),
    ("🧑‍🤝‍🧑 Patients", Section.PATIENTS),
    ("🩺 OPD Visits", Section.VISITS),
    ("🧾 Billing", Section.BILLING),
    ("🛏️ IPD", Section.IPD),
    ("📤 Discharges", Section.DISCHARGES),
    ("💊 Medications", Section.MEDICATIONS),
    ("🩻 Radiology", Section.RADIOLOGY),
    ("🧪 Lab", Section.LAB),
    ("⚠️ Complications", Section.COMPLICATIONS),
    ("🔪 Surgeons", Section.SURGEONS),
    ("📝 Documents", Section.DOCUMENTS),
    ("📒 Tally", Section.TALLY),
]


def render_sidebar(cfg: AppConfig) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🏥 Hospital Admin")
        st.caption("Patients, admissions, billing and clinical masters")

        labels = [l for l, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(NAV_ITEMS)[label]

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use mock data",
                value=st.session_state.get("use_mock", cfg.default_use_mock),
                help="When off, pages read from Supabase. Failures are shown on the page, not hidden.",
            )
            st.session_state["use_mock"] = use_mock

            st.markdown("**Supabase project**")
            st.code(cfg.supabase_url or "not configured", language="text")
    use_mock = st.session_state.get("use_mock", cfg.default_use_mock)

    return SidebarState(view=view, use_mock=use_mock)
