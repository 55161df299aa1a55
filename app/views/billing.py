from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import streamlit as st

from components.metrics import Kpi, bar_chart, fmt_count, fmt_inr, render_kpi_row
from components.narrative import render_page_intro, render_result_error
from components.tables import render_records_table
from config import AppConfig
from data.join import nested_value
from data.service import get_billings


@dataclass(frozen=True)
class BillingSummary:
    total_revenue: float
    total_bills: int
    paid: int
    pending: int


def summarize_billings(billings: Sequence[Mapping[str, Any]]) -> BillingSummary:
    """Anything not marked paid (pending, overdue, blank) counts as pending."""
    paid = sum(1 for b in billings if str(b.get("payment_status") or "").lower() == "paid")
    return BillingSummary(
        total_revenue=float(sum(b.get("amount") or 0 for b in billings)),
        total_bills=len(billings),
        paid=paid,
        pending=len(billings) - paid,
    )


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Billing")
    render_page_intro("Bills and collections", "Revenue billed and how much of it is still outstanding.")

    result = get_billings(cfg, use_mock)
    if render_result_error(result):
        return

    summary = summarize_billings(result.records)
    render_kpi_row(
        [
            Kpi("Total revenue", fmt_inr(summary.total_revenue)),
            Kpi("Total bills", fmt_count(summary.total_bills)),
            Kpi("Paid bills", fmt_count(summary.paid)),
            Kpi("Pending bills", fmt_count(summary.pending), help="Pending, overdue or unmarked"),
        ]
    )

    if result.records:
        df = result.df
        df["payment_status"] = df["payment_status"].fillna("Unknown")
        by_status = df.groupby("payment_status", as_index=False)["amount"].sum()
        bar_chart(by_status, x="payment_status", y="amount", title="Billed amount by status", y_format="currency")

    render_records_table(
        result.records,
        [
            ("Date", "billing_date"),
            ("Patient", lambda b: nested_value(b, "patient", "full_name", "N/A")),
            ("UHID", lambda b: nested_value(b, "patient", "patient_id", "—")),
            ("Description", "description"),
            ("Amount (₹)", "amount"),
            ("Status", "payment_status"),
        ],
        empty_message="No bills found",
    )
