from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.join import nested_value
from data.service import get_discharge_summaries


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Discharges")
    render_page_intro("Discharge summaries", "Discharge date and type per patient.")

    result = get_discharge_summaries(cfg, use_mock)
    if render_result_error(result):
        return

    render_records_table(
        result.records,
        [
            ("Date", "discharge_date"),
            ("Patient", lambda d: nested_value(d, "patient", "full_name", "N/A")),
            ("UHID", lambda d: nested_value(d, "patient", "patient_id", "—")),
            ("Type", "discharge_type"),
        ],
        empty_message="No discharge summaries found",
    )
