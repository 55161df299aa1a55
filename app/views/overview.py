from __future__ import annotations

import streamlit as st

from components.metrics import Kpi, bar_chart, fmt_count, render_kpi_row
from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.join import nested_value
from data.service import get_collection_counts, get_recent_admissions


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Overview")
    render_page_intro(
        "Hospital at a glance",
        "Record counts across the main registers and the latest ward admissions.",
    )

    counts = get_collection_counts(cfg, use_mock)
    st.caption(f"Data source: **{counts.source}**")
    if not render_result_error(counts):
        by_label = {r["collection"]: r["count"] for r in counts.records}
        render_kpi_row(
            [
                Kpi("Patients", fmt_count(by_label.get("Patients"))),
                Kpi("IPD admissions", fmt_count(by_label.get("IPD admissions"))),
                Kpi("OPD visits", fmt_count(by_label.get("OPD visits"))),
                Kpi("Bills", fmt_count(by_label.get("Bills"))),
            ]
        )
        for r in counts.records:
            if r["error"]:
                st.warning(f"{r['collection']}: {r['error']}")

        df = counts.df
        df = df[df["count"].notna()]
        if len(df):
            bar_chart(df, x="collection", y="count", title="Records per register")

    st.divider()
    st.subheader("Recent admissions")
    recent = get_recent_admissions(cfg, use_mock)
    if render_result_error(recent):
        return
    render_records_table(
        recent.records,
        [
            ("Patient", lambda r: nested_value(r, "patient", "full_name", "N/A")),
            ("UHID", lambda r: nested_value(r, "patient", "patient_id", "—")),
            ("Ward", lambda r: f"Ward {r.get('ward_id')}"),
            ("Admitted", "in_date"),
            ("Status", lambda r: "Discharged" if r.get("is_discharge") else "Admitted"),
        ],
        empty_message="No recent admissions found",
    )
