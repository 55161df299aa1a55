from __future__ import annotations

import streamlit as st

from components.metrics import Kpi, fmt_count, render_kpi_row
from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.join import nested_value
from data.service import get_ipd_admissions


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("IPD")
    render_page_intro("Inpatient admissions", "Ward, room and bed for every admission, newest first.")

    result = get_ipd_admissions(cfg, use_mock)
    if render_result_error(result):
        return

    admissions = result.records
    admitted = sum(1 for a in admissions if not a.get("is_discharge"))
    render_kpi_row(
        [
            Kpi("Total admissions", fmt_count(len(admissions))),
            Kpi("Currently admitted", fmt_count(admitted)),
            Kpi("Discharged", fmt_count(len(admissions) - admitted)),
        ]
    )

    if st.toggle("Only currently admitted", value=False):
        admissions = [a for a in admissions if not a.get("is_discharge")]

    render_records_table(
        admissions,
        [
            ("Patient", lambda a: nested_value(a, "patient", "full_name", "N/A")),
            ("UHID", lambda a: nested_value(a, "patient", "patient_id", "—")),
            ("Ward", "ward_id"),
            ("Room", "room_id"),
            ("Bed", "bed_id"),
            ("Admitted", "in_date"),
            ("Discharged", "out_date"),
            ("Status", lambda a: "Discharged" if a.get("is_discharge") else "Admitted"),
        ],
        empty_message="No admissions found",
    )
