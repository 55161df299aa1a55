"""
Patient Detail
==============
One patient's record: demographics, ward admissions, bills and discharge
summaries, each newest first, with the total billed.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

import streamlit as st

from components.metrics import Kpi, fmt_count, fmt_inr, render_kpi_row
from components.narrative import render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.service import get_patient_detail


def age_from_dob(dob: Optional[str], today: Optional[date] = None) -> Optional[int]:
    if not dob:
        return None
    try:
        born = date.fromisoformat(str(dob)[:10])
    except ValueError:
        return None
    today = today or date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def render(cfg: AppConfig, use_mock: bool, legacy_id: str) -> None:
    result = get_patient_detail(cfg, use_mock, legacy_id)
    if render_result_error(result):
        return
    if not result.records:
        st.warning(f"Patient {legacy_id} not found")
        return

    patient = result.records[0]
    age = age_from_dob(patient.get("dob"))
    st.subheader(f"{patient.get('full_name') or 'Unnamed patient'}")
    st.caption(
        f"UHID {patient.get('patient_id') or 'N/A'} · {patient.get('sex') or 'N/A'} · "
        f"Age {'N/A' if age is None else age} · {patient.get('city') or 'N/A'}"
    )
    render_kpi_row(
        [
            Kpi("Admissions", fmt_count(len(patient["admissions"]))),
            Kpi("Bills", fmt_count(len(patient["billings"]))),
            Kpi("Total billed", fmt_inr(patient["total_billed"])),
            Kpi("Blood group", patient.get("blood_group") or "N/A"),
        ]
    )

    tab_ipd, tab_bills, tab_discharge = st.tabs(["🛏️ Admissions", "🧾 Bills", "📤 Discharge summaries"])
    with tab_ipd:
        render_records_table(
            patient["admissions"],
            [
                ("Admitted", "in_date"),
                ("Ward", "ward_id"),
                ("Room", "room_id"),
                ("Bed", "bed_id"),
                ("Discharged", "out_date"),
            ],
            empty_message="No admissions for this patient",
        )
    with tab_bills:
        render_records_table(
            patient["billings"],
            [
                ("Date", "billing_date"),
                ("Description", "description"),
                ("Amount (₹)", "amount"),
                ("Status", "payment_status"),
            ],
            empty_message="No bills for this patient",
        )
    with tab_discharge:
        render_records_table(
            patient["discharge_summaries"],
            [("Date", "discharge_date"), ("Type", "discharge_type")],
            empty_message="No discharge summaries for this patient",
        )
