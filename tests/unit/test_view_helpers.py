"""
Tests for the pure helpers behind the pages.
"""

from datetime import date

from components.metrics import fmt_count, fmt_inr
from components.sidebar import NAV_ITEMS, Section
from components.tables import text_matches, to_frame
from views.billing import summarize_billings
from views.patient_detail import age_from_dob


class TestSummarizeBillings:
    def test_paid_and_pending(self):
        bills = [
            {"amount": 1000, "payment_status": "Paid"},
            {"amount": 250.5, "payment_status": "paid"},
            {"amount": 400, "payment_status": "Pending"},
            {"amount": None, "payment_status": "Overdue"},
            {"amount": 50, "payment_status": None},
        ]

        summary = summarize_billings(bills)

        assert summary.total_bills == 5
        assert summary.paid == 2
        assert summary.pending == 3
        assert summary.total_revenue == 1700.5

    def test_empty(self):
        summary = summarize_billings([])

        assert (summary.total_bills, summary.paid, summary.pending, summary.total_revenue) == (0, 0, 0, 0.0)


class TestAgeFromDob:
    def test_before_birthday(self):
        assert age_from_dob("1990-12-31", today=date(2024, 6, 1)) == 33

    def test_on_birthday(self):
        assert age_from_dob("1990-06-01", today=date(2024, 6, 1)) == 34

    def test_timestamp_input(self):
        assert age_from_dob("1990-06-01T00:00:00Z", today=date(2024, 6, 1)) == 34

    def test_missing_or_bad(self):
        assert age_from_dob(None) is None
        assert age_from_dob("not a date") is None


class TestTables:
    def test_to_frame_with_computed_column(self):
        df = to_frame([{"a": 1, "b": 2}], [("A", "a"), ("Sum", lambda r: r["a"] + r["b"])])

        assert list(df.columns) == ["A", "Sum"]
        assert df.iloc[0]["Sum"] == 3

    def test_to_frame_empty_keeps_columns(self):
        assert list(to_frame([], [("A", "a")]).columns) == ["A"]

    def test_text_matches(self):
        record = {"full_name": "Asha Rao", "city": "Pune"}

        assert text_matches(record, "pune", ["full_name", "city"])
        assert text_matches(record, "", ["full_name"])
        assert not text_matches(record, "mumbai", ["full_name", "city"])


class TestFormatting:
    def test_counts_and_currency(self):
        assert fmt_count(1234) == "1,234"
        assert fmt_inr(1500.4) == "₹1,500"
        assert fmt_count(None) == fmt_inr(None)


class TestNavigation:
    def test_every_section_reachable_once(self):
        sections = [s for _, s in NAV_ITEMS]

        assert sorted(sections) == sorted(Section)
        assert len(set(sections)) == len(sections)
