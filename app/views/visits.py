from __future__ import annotations

import streamlit as st

from components.metrics import Kpi, fmt_count, render_kpi_row
from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.join import nested_value
from data.service import get_visits


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("OPD Visits")
    render_page_intro("Outpatient appointments", "Every OPD appointment with the patient it belongs to.")

    result = get_visits(cfg, use_mock)
    if render_result_error(result):
        return

    visits = result.records
    render_kpi_row(
        [
            Kpi("Total appointments", fmt_count(len(visits))),
            Kpi("Doctors seen", fmt_count(len({v.get("doctor_id") for v in visits if v.get("doctor_id")}))),
        ]
    )

    statuses = sorted({v.get("status") for v in visits if v.get("status")})
    status = st.selectbox("Status", ["All"] + statuses)
    if status != "All":
        visits = [v for v in visits if v.get("status") == status]

    render_records_table(
        visits,
        [
            ("Date", "appointment_date"),
            ("Patient", lambda v: nested_value(v, "patient", "full_name", "N/A")),
            ("UHID", lambda v: nested_value(v, "patient", "patient_id", "—")),
            ("Doctor", "doctor_id"),
            ("Status", "status"),
            ("Notes", "notes"),
        ],
        empty_message="No visits found",
    )
