"""
Tests for the data service: fetch, join and failure reporting.
"""

from dataclasses import replace

import pytest

from data import service
from data.connection import StoreError
from data.records import COUNTED_COLLECTIONS


@pytest.fixture
def use_store(monkeypatch, mock_store):
    """Route every service call to a fresh mock store"""
    monkeypatch.setattr(service, "get_store", lambda cfg, use_mock: mock_store)
    return mock_store


class BrokenStore:
    def fetch(self, query):
        raise StoreError(f'Reading {query.table} failed: relation "{query.table}" does not exist')

    def count(self, table):
        if table == "complication":
            raise StoreError("Counting complication failed: permission denied")
        return 3


class TestDataResult:
    def test_ok_and_frame(self):
        result = service.DataResult(records=[{"a": 1}, {"a": 2}])

        assert result.ok
        assert list(result.df["a"]) == [1, 2]

    def test_error_not_ok(self):
        assert not service.DataResult(error="boom").ok


class TestFetchSuccess:
    """Mock-backed reads"""

    def test_patients_newest_first(self, app_config, use_store):
        result = service.get_patients(app_config, True)

        assert result.ok
        assert result.source == "mock"
        created = [p["created_at"] for p in result.records]
        assert created == sorted(created, reverse=True)

    def test_admissions_joined_with_patients(self, app_config, use_store):
        result = service.get_ipd_admissions(app_config, True)

        assert result.ok
        assert len(result.records) == len(use_store.tables["ward_patients"])
        orphan = [r for r in result.records if r["legacy_patient_id"] == "L99999"]
        assert orphan and all(r["patient"] is None for r in orphan)
        linked = [r for r in result.records if r["legacy_patient_id"] != "L99999"]
        assert all(r["patient"]["legacy_id"] == r["legacy_patient_id"] for r in linked)

    def test_billings_joined(self, app_config, use_store):
        result = service.get_billings(app_config, True)

        assert result.ok
        assert all(set(r["patient"]) == {"legacy_id", "full_name", "patient_id"} for r in result.records)

    def test_recent_admissions_limited(self, app_config, use_store):
        result = service.get_recent_admissions(app_config, True, limit=5)

        assert len(result.records) == 5

    def test_medication_search(self, app_config, use_store):
        result = service.get_medications(app_config, True, search="  AMOX ")

        assert [m["name"] for m in result.records] == ["Amoxicillin"]

    def test_medication_blank_search_returns_all(self, app_config, use_store):
        result = service.get_medications(app_config, True, search="   ")

        assert len(result.records) == len(use_store.tables["medications"])
        names = [m["name"] for m in result.records]
        assert names == sorted(names)

    def test_surgeons_only(self, app_config, use_store):
        result = service.get_surgeons(app_config, True)

        assert result.records
        assert all(d["is_surgeon"] is True for d in result.records)

    def test_lab_test_names_distinct(self, app_config, use_store):
        result = service.get_lab_test_names(app_config, True)

        names = [o["name"] for o in result.records]
        assert names == sorted(set(names))
        assert all(o["id"] == o["name"] for o in result.records)

    def test_sub_tests_for_one_test(self, app_config, use_store):
        result = service.get_sub_tests(app_config, True, "Complete Blood Count")

        assert [s["sub_test_name"] for s in result.records] == ["Haemoglobin", "Platelet Count", "WBC Count"]

    def test_tally_config_empty(self, app_config, use_store):
        result = service.get_tally_config(app_config, True)

        assert result.ok
        assert result.records == []

    def test_collection_counts(self, app_config, use_store):
        result = service.get_collection_counts(app_config, True)

        assert [r["collection"] for r in result.records] == [label for label, _ in COUNTED_COLLECTIONS]
        patients = result.records[0]
        assert patients["count"] == len(use_store.tables["patients"])
        assert patients["error"] is None


class TestFetchFailure:
    """Failures come back as error results, never as mock data"""

    def test_missing_credentials(self, app_config):
        cfg = replace(app_config, supabase_url=None, supabase_key=None)

        result = service.get_patients(cfg, False)

        assert not result.ok
        assert result.source == "supabase"
        assert result.records == []
        assert result.error.startswith("Could not load patients:")

    def test_store_error(self, app_config, monkeypatch):
        monkeypatch.setattr(service, "get_store", lambda cfg, use_mock: BrokenStore())

        result = service.get_billings(app_config, False)

        assert not result.ok
        assert "billings" in result.error
        assert result.records == []

    def test_duplicate_patients_reported(self, app_config, monkeypatch, mock_store):
        mock_store.tables["patients"].append(dict(mock_store.tables["patients"][0]))
        first = mock_store.tables["patients"][0]["legacy_id"]
        mock_store.tables["billings"][0]["legacy_patient_id"] = first
        monkeypatch.setattr(service, "get_store", lambda cfg, use_mock: mock_store)

        result = service.get_billings(app_config, True)

        assert not result.ok
        assert "Duplicate" in result.error

    def test_count_failure_marks_only_its_row(self, app_config, monkeypatch):
        monkeypatch.setattr(service, "get_store", lambda cfg, use_mock: BrokenStore())

        result = service.get_collection_counts(app_config, False)

        assert result.ok
        failed = [r for r in result.records if r["error"]]
        assert [r["table"] for r in failed] == ["complication"]
        assert failed[0]["count"] is None
        assert all(r["count"] == 3 for r in result.records if not r["error"])


class TestGetStore:
    def test_mock_mode_uses_mock_store(self, app_config):
        from data.mock_data import MockStore

        assert isinstance(service.get_store(app_config, True), MockStore)


class TestJoinedFetches:
    """Visits and discharge summaries carry their patient"""

    def test_visits_joined(self, app_config, use_store):
        result = service.get_visits(app_config, True)

        assert result.ok
        assert len(result.records) == len(use_store.tables["appointments"])
        assert all(r["patient"]["legacy_id"] == r["legacy_patient_id"] for r in result.records)

    def test_discharge_summaries_joined(self, app_config, use_store):
        result = service.get_discharge_summaries(app_config, True)

        assert result.ok
        assert result.records
        for r in result.records:
            if r["legacy_patient_id"] == "L99999":
                assert r["patient"] is None
            else:
                assert r["patient"]["legacy_id"] == r["legacy_patient_id"]


class TestPatientDetail:
    """Test get_patient_detail"""

    def test_patient_with_history(self, app_config, use_store):
        legacy_id = use_store.tables["billings"][0]["legacy_patient_id"]

        result = service.get_patient_detail(app_config, True, legacy_id)

        assert result.ok
        [detail] = result.records
        assert detail["legacy_id"] == legacy_id
        expected_bills = [b for b in use_store.tables["billings"] if b["legacy_patient_id"] == legacy_id]
        assert len(detail["billings"]) == len(expected_bills)
        assert detail["total_billed"] == pytest.approx(sum(b["amount"] for b in expected_bills))
        dates = [b["billing_date"] for b in detail["billings"]]
        assert dates == sorted(dates, reverse=True)

    def test_history_belongs_to_patient(self, app_config, use_store):
        legacy_id = use_store.tables["ward_patients"][0]["legacy_patient_id"]

        [detail] = service.get_patient_detail(app_config, True, legacy_id).records

        assert detail["admissions"]
        for key in ("admissions", "billings", "discharge_summaries"):
            assert all(r["legacy_patient_id"] == legacy_id for r in detail[key])
        admitted = [a["in_date"] for a in detail["admissions"]]
        assert admitted == sorted(admitted, reverse=True)

    def test_patient_without_bills(self, app_config, use_store):
        billed = {b["legacy_patient_id"] for b in use_store.tables["billings"]}
        use_store.tables["patients"].append({"id": 999, "legacy_id": "L00999", "full_name": "New Patient"})

        [detail] = service.get_patient_detail(app_config, True, "L00999").records

        assert "L00999" not in billed
        assert detail["billings"] == []
        assert detail["total_billed"] == 0.0

    def test_missing_patient_is_empty_not_error(self, app_config, use_store):
        result = service.get_patient_detail(app_config, True, "L99999")

        assert result.ok
        assert result.records == []

    def test_blank_id_is_empty(self, app_config, use_store):
        assert service.get_patient_detail(app_config, True, "   ").records == []

    def test_duplicate_patient_reported(self, app_config, use_store):
        use_store.tables["patients"].append(dict(use_store.tables["patients"][0]))

        result = service.get_patient_detail(app_config, True, use_store.tables["patients"][0]["legacy_id"])

        assert not result.ok
        assert "Duplicate" in result.error

    def test_store_error(self, app_config, monkeypatch):
        monkeypatch.setattr(service, "get_store", lambda cfg, use_mock: BrokenStore())

        result = service.get_patient_detail(app_config, False, "L00001")

        assert not result.ok
        assert result.error.startswith("Could not load patient L00001:")
