from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional

from data import records
from data.records import CollectionSchema


@dataclass(frozen=True)
class Filter:
    op: str  # "eq" | "in" | "ilike"
    column: str
    value: Any


@dataclass(frozen=True)
class CollectionQuery:
    schema: CollectionSchema
    filters: tuple[Filter, ...] = ()
    order_by: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None

    @property
    def table(self) -> str:
        return self.schema.table


def _query(schema: CollectionSchema, *filters: Filter, limit: Optional[int] = None) -> CollectionQuery:
    return CollectionQuery(
        schema=schema,
        filters=tuple(filters),
        order_by=schema.order_by,
        descending=schema.descending,
        limit=limit,
    )


def contains_pattern(text: str) -> str:
    """`ilike` pattern matching `text` anywhere in the column."""
    return f"%{text}%"


def q_patients() -> CollectionQuery:
    return _query(records.PATIENTS)


def q_patients_by_legacy_ids(legacy_ids: Iterable[str]) -> CollectionQuery:
    return _query(records.PATIENT_NAMES, Filter("in", "legacy_id", tuple(legacy_ids)))


def q_ward_patients(limit: Optional[int] = None) -> CollectionQuery:
    return _query(records.WARD_PATIENTS, limit=limit)


def q_billings() -> CollectionQuery:
    return _query(records.BILLINGS)


def q_appointments() -> CollectionQuery:
    return _query(records.APPOINTMENTS)


def q_discharge_summaries() -> CollectionQuery:
    return _query(records.DISCHARGE_SUMMARIES)


def q_medications(search: str = "") -> CollectionQuery:
    """Medications by name, optionally narrowed with a case-insensitive substring match."""
    term = (search or "").strip()
    if term:
        return _query(records.MEDICATIONS, Filter("ilike", "name", contains_pattern(term)))
    return _query(records.MEDICATIONS)


def q_radiology_tests() -> CollectionQuery:
    return _query(records.RADIOLOGY)


def q_lab_tests() -> CollectionQuery:
    return _query(records.LAB)


def q_surgeons() -> CollectionQuery:
    return _query(records.DOCTORS, Filter("eq", "is_surgeon", True))


def q_complications() -> CollectionQuery:
    return _query(records.COMPLICATIONS)


def q_lab_test_names() -> CollectionQuery:
    schema = replace(records.LAB_TEST_CONFIG, columns=("test_name",), order_by="test_name")
    return _query(schema)


def q_sub_tests(test_name: str) -> CollectionQuery:
    return _query(records.LAB_TEST_CONFIG, Filter("eq", "test_name", test_name))


def q_tally_config() -> CollectionQuery:
    return _query(records.TALLY_CONFIG, limit=1)


def q_patient(legacy_id: str) -> CollectionQuery:
    return _query(records.PATIENTS, Filter("eq", "legacy_id", legacy_id))


def q_patient_admissions(legacy_id: str) -> CollectionQuery:
    return _query(records.WARD_PATIENTS, Filter("eq", "legacy_patient_id", legacy_id))


def q_patient_billings(legacy_id: str) -> CollectionQuery:
    return _query(records.BILLINGS, Filter("eq", "legacy_patient_id", legacy_id))


def q_patient_discharge_summaries(legacy_id: str) -> CollectionQuery:
    return _query(records.DISCHARGE_SUMMARIES, Filter("eq", "legacy_patient_id", legacy_id))
