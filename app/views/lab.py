from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.search_select import render_search_select
from components.tables import render_records_table
from config import AppConfig
from data.service import get_lab_test_names, get_lab_tests, get_sub_tests


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Lab")
    render_page_intro("Laboratory", "Lab test master and the sub-tests configured for each report.")

    c1, c2 = st.columns([1, 2])

    with c1:
        st.subheader("Lab tests")
        tests = get_lab_tests(cfg, use_mock)
        if not render_result_error(tests):
            render_records_table(tests.records, [("Test", "name")], empty_message="No lab tests found")

    with c2:
        st.subheader("Test configuration")
        names = get_lab_test_names(cfg, use_mock)
        if render_result_error(names):
            return
        picked = render_search_select(
            "Find a configured test",
            names.records,
            key=f"lab_config_select_{names.source}",
            placeholder="Type to search tests...",
        )
        if picked is None:
            st.caption(f"{len(names.records)} configured tests. Pick one to see its sub-tests.")
            return

        sub_tests = get_sub_tests(cfg, use_mock, picked["name"])
        if render_result_error(sub_tests):
            return
        render_records_table(
            sub_tests.records,
            [
                ("Sub-test", "sub_test_name"),
                ("Unit", "unit"),
                ("Age range", lambda s: f"{s.get('min_age')}–{s.get('max_age')} {s.get('age_unit') or ''}".strip()),
            ],
            empty_message=f"No sub-tests configured for {picked['name']}",
        )
