from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.service import get_surgeons


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Surgeons")
    render_page_intro("Surgeons list", "Doctors flagged as surgeons, by name.")

    result = get_surgeons(cfg, use_mock)
    if render_result_error(result):
        return

    render_records_table(
        result.records,
        [
            ("Name", "name"),
            ("Specialization", "specialization"),
            ("Department", "department"),
            ("Contact", lambda d: d.get("phone") or d.get("email") or "N/A"),
        ],
        empty_message="No surgeons found",
    )
