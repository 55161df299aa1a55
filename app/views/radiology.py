from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.search_select import filter_options
from components.tables import render_records_table
from config import AppConfig
from data.service import get_radiology_tests


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Radiology")
    render_page_intro("Radiology tests", "Imaging studies available for orders and complication protocols.")

    result = get_radiology_tests(cfg, use_mock)
    if render_result_error(result):
        return

    query = st.text_input("Filter", placeholder="e.g. ct brain")
    render_records_table(
        filter_options(result.records, query),
        [("Test", "name")],
        empty_message="No radiology tests found",
    )
