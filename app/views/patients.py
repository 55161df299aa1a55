from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.search_select import render_search_select
from components.tables import render_records_table, text_matches
from config import AppConfig
from data.service import get_patients
from views import patient_detail
from views.patient_detail import age_from_dob


PAGE_SIZE = 20
SEARCH_FIELDS = ("full_name", "patient_id", "mobile_phone", "city")


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Patients")
    render_page_intro("Patient register", "Search by name, UHID, phone or city; narrow by admission type and sex.")

    result = get_patients(cfg, use_mock)
    if render_result_error(result):
        return

    c1, c2, c3 = st.columns([3, 1, 1])
    term = c1.text_input("Search patients", placeholder="Search patients...")
    admission_type = c2.selectbox("Type", ["All Types", "OPD", "IPD"])
    sex = c3.selectbox("Sex", ["All", "Male", "Female"])

    patients = [
        p
        for p in result.records
        if text_matches(p, term, SEARCH_FIELDS)
        and (admission_type == "All Types" or p.get("admission_type") == admission_type)
        and (sex == "All" or str(p.get("sex") or "").lower() == sex.lower())
    ]

    pages = max(1, (len(patients) - 1) // PAGE_SIZE + 1)
    page = st.number_input(f"Page (1-{pages})", min_value=1, max_value=pages, value=1) if pages > 1 else 1
    start = (page - 1) * PAGE_SIZE
    st.caption(f"Showing {min(start + 1, len(patients))}-{min(start + PAGE_SIZE, len(patients))} of {len(patients)} patients")

    render_records_table(
        patients[start : start + PAGE_SIZE],
        [
            ("UHID", "patient_id"),
            ("Name", "full_name"),
            ("Age", lambda p: age_from_dob(p.get("dob"))),
            ("Sex", "sex"),
            ("Phone", "mobile_phone"),
            ("City", "city"),
            ("Type", "admission_type"),
            ("Emergency", lambda p: "Yes" if p.get("is_emergency") else ""),
        ],
        empty_message="No patients found",
    )

    st.divider()
    picked = render_search_select(
        "Open patient record",
        [{"id": p["legacy_id"], "name": f"{p.get('full_name')} ({p.get('patient_id')})"} for p in patients],
        key=f"patient_detail_select_{result.source}",
        placeholder="Type a name or UHID...",
    )
    if picked is not None:
        patient_detail.render(cfg, use_mock, picked["id"])
