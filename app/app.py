"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
REPO_ROOT = os.path.abspath(os.path.join(APP_DIR, ".."))
for p in [APP_DIR, REPO_ROOT]:
    if p not in sys.path:
        sys.path.insert(0, p)

import streamlit as st  # noqa: E402

from components.styles import APP_TITLE, apply_theme  # noqa: E402
from components.sidebar import Section, render_sidebar  # noqa: E402
from components.header import render_header  # noqa: E402
from config import configure_logging, get_config  # noqa: E402

from views import (  # noqa: E402
    billing,
    complications,
    discharges,
    documents,
    ipd,
    lab,
    medications,
    overview,
    patients,
    radiology,
    surgeons,
    tally,
    visits,
)


VIEWS = {
    Section.OVERVIEW: overview,
    Section.PATIENTS: patients,
    Section.VISITS: visits,
    Section.BILLING: billing,
    Section.IPD: ipd,
    Section.DISCHARGES: discharges,
    Section.MEDICATIONS: medications,
    Section.RADIOLOGY: radiology,
    Section.LAB: lab,
    Section.COMPLICATIONS: complications,
    Section.SURGEONS: surgeons,
    Section.DOCUMENTS: documents,
    Section.TALLY: tally,
}


def main() -> None:
    apply_theme()
    cfg = get_config()
    configure_logging(cfg)
    state = render_sidebar(cfg)

    render_header(
        app_name=APP_TITLE,
        subtitle="Patients, admissions, billing and clinical masters",
        right_pill=f"Data: {'Mock' if state.use_mock else 'Supabase'}",
    )

    # Routing only
    view = VIEWS.get(state.view)
    if view is None:
        st.error("Unknown view")
        return
    view.render(cfg, state.use_mock)


if __name__ == "__main__":
    main()
