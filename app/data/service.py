from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

import pandas as pd

from config import AppConfig
from data import queries
from data.connection import StoreError, SupabaseStore, get_supabase_store
from data.join import DuplicateIdentifierError, join_records
from data.mock_data import MockStore, get_mock_store
from data.records import COUNTED_COLLECTIONS


logger = logging.getLogger(__name__)

Store = Union[SupabaseStore, MockStore]


@dataclass(frozen=True)
class DataResult:
    records: list[dict[str, Any]] = field(default_factory=list)
    source: str = "mock"  # "mock" | "supabase"
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def df(self) -> pd.DataFrame:
        return pd.DataFrame(self.records)


def get_store(cfg: AppConfig, use_mock: bool) -> Store:
    if use_mock:
        return get_mock_store()
    return get_supabase_store(cfg)


def _fetch(cfg: AppConfig, use_mock: bool, what: str, fn: Callable[[Store], list[dict[str, Any]]]) -> DataResult:
    source = "mock" if use_mock else "supabase"
    try:
        records = fn(get_store(cfg, use_mock))
    except (StoreError, DuplicateIdentifierError) as e:
        logger.error("Failed to load %s: %s", what, e)
        return DataResult(records=[], source=source, error=f"Could not load {what}: {e}")
    if not records:
        logger.info("No %s found (%s)", what, source)
    return DataResult(records=records, source=source)


def _with_patients(store: Store, rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Attach `patient` ({legacy_id, full_name, patient_id} or None) via legacy_patient_id."""
    ids = sorted({r["legacy_patient_id"] for r in rows if r.get("legacy_patient_id") is not None})
    patients = store.fetch(queries.q_patients_by_legacy_ids(ids)) if ids else []
    return join_records(rows, patients, foreign_key="legacy_patient_id", as_field="patient", identifier="legacy_id")


def get_patients(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "patients", lambda s: s.fetch(queries.q_patients()))


def get_patient_detail(cfg: AppConfig, use_mock: bool, legacy_id: str) -> DataResult:
    """
    One patient by legacy_id with their admissions, bills and discharge
    summaries (each newest first) and the total billed. No records when the
    patient does not exist.
    """
    legacy_id = (legacy_id or "").strip()

    def detail(store: Store) -> list[dict[str, Any]]:
        if not legacy_id:
            return []
        found = store.fetch(queries.q_patient(legacy_id))
        if not found:
            return []
        if len(found) > 1:
            raise DuplicateIdentifierError(f"Duplicate legacy_id={legacy_id!r} in patients")
        billings = store.fetch(queries.q_patient_billings(legacy_id))
        return [
            {
                **found[0],
                "admissions": store.fetch(queries.q_patient_admissions(legacy_id)),
                "billings": billings,
                "discharge_summaries": store.fetch(queries.q_patient_discharge_summaries(legacy_id)),
                "total_billed": float(sum(b.get("amount") or 0 for b in billings)),
            }
        ]

    return _fetch(cfg, use_mock, f"patient {legacy_id}", detail)


def get_ipd_admissions(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "IPD admissions", lambda s: _with_patients(s, s.fetch(queries.q_ward_patients())))


def get_recent_admissions(cfg: AppConfig, use_mock: bool, limit: int = 10) -> DataResult:
    return _fetch(
        cfg,
        use_mock,
        "recent admissions",
        lambda s: _with_patients(s, s.fetch(queries.q_ward_patients(limit=limit))),
    )


def get_billings(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "billing records", lambda s: _with_patients(s, s.fetch(queries.q_billings())))


def get_visits(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "OPD visits", lambda s: _with_patients(s, s.fetch(queries.q_appointments())))


def get_discharge_summaries(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(
        cfg,
        use_mock,
        "discharge summaries",
        lambda s: _with_patients(s, s.fetch(queries.q_discharge_summaries())),
    )


def get_medications(cfg: AppConfig, use_mock: bool, search: str = "") -> DataResult:
    return _fetch(cfg, use_mock, "medications", lambda s: s.fetch(queries.q_medications(search)))


def get_radiology_tests(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "radiology tests", lambda s: s.fetch(queries.q_radiology_tests()))


def get_lab_tests(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "lab tests", lambda s: s.fetch(queries.q_lab_tests()))


def get_surgeons(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "surgeons", lambda s: s.fetch(queries.q_surgeons()))


def get_complications(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "complications", lambda s: s.fetch(queries.q_complications()))


def get_lab_test_names(cfg: AppConfig, use_mock: bool) -> DataResult:
    """Distinct configured test names as selector options ({id, name})."""

    def distinct_names(store: Store) -> list[dict[str, Any]]:
        seen: dict[str, None] = {}
        for row in store.fetch(queries.q_lab_test_names()):
            if row["test_name"]:
                seen.setdefault(row["test_name"], None)
        return [{"id": name, "name": name} for name in seen]

    return _fetch(cfg, use_mock, "lab test configuration", distinct_names)


def get_sub_tests(cfg: AppConfig, use_mock: bool, test_name: str) -> DataResult:
    return _fetch(cfg, use_mock, f"sub-tests for {test_name}", lambda s: s.fetch(queries.q_sub_tests(test_name)))


def get_tally_config(cfg: AppConfig, use_mock: bool) -> DataResult:
    return _fetch(cfg, use_mock, "Tally configuration", lambda s: s.fetch(queries.q_tally_config()))


def get_collection_counts(cfg: AppConfig, use_mock: bool) -> DataResult:
    """
    One record per overview collection: {collection, table, count, error}.
    A failing count only marks its own row; the result as a whole fails
    only when the store itself is unavailable.
    """

    def counts(store: Store) -> list[dict[str, Any]]:
        rows = []
        for label, schema in COUNTED_COLLECTIONS:
            try:
                rows.append({"collection": label, "table": schema.table, "count": store.count(schema.table), "error": None})
            except StoreError as e:
                logger.error("Failed to count %s: %s", schema.table, e)
                rows.append({"collection": label, "table": schema.table, "count": None, "error": str(e)})
        return rows

    return _fetch(cfg, use_mock, "collection counts", counts)
