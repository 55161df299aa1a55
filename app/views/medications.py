from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.service import get_medications


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Medications")
    render_page_intro("Medication master", "Search runs against the store, matching anywhere in the name.")

    search = st.text_input("Search medications", placeholder="e.g. amox")
    result = get_medications(cfg, use_mock, search)
    if render_result_error(result):
        return

    render_records_table(
        result.records,
        [("Name", "name"), ("Code", "code"), ("Dosage", "dosage"), ("Route", "route")],
        empty_message=f'No medications match "{search.strip()}"' if search.strip() else "No medications found",
    )
