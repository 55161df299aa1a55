from __future__ import annotations

import copy
import logging
import random
import re
import uuid
from datetime import date, timedelta
from functools import lru_cache
from typing import Any, Mapping

from faker import Faker

from data import reference_data
from data.connection import RecordNotFoundError, StoreError
from data.queries import CollectionQuery


logger = logging.getLogger(__name__)

fake = Faker("en_IN")


WARDS = ["General", "ICU", "Surgical", "Maternity", "Paediatric"]
DEPARTMENTS = ["General Surgery", "Orthopaedics", "Medicine", "ENT", "Urology", "Obstetrics"]
PAYMENT_STATUSES = ["Paid", "Pending", "Overdue"]
DISCHARGE_TYPES = ["Recovered", "DAMA", "Referred", "Death"]
APPOINTMENT_STATUSES = ["Completed", "Scheduled", "Cancelled"]
STATES = ["Maharashtra", "Karnataka", "Gujarat", "Madhya Pradesh", "Telangana"]


def _uid() -> str:
    return str(uuid.uuid4())


def _days_ago(n: int) -> str:
    return (date.today() - timedelta(days=n)).isoformat()


def patients_mock(n: int = 60) -> list[dict]:
    rows = []
    for i in range(1, n + 1):
        sex = random.choice(["Male", "Female"])
        name = fake.name_male() if sex == "Male" else fake.name_female()
        rows.append(
            {
                "id": i,
                "legacy_id": f"L{i:05d}",
                "patient_id": f"UHID{2400 + i}",
                "full_name": name,
                "sex": sex,
                "dob": fake.date_of_birth(minimum_age=1, maximum_age=90).isoformat(),
                "blood_group": random.choice(["A+", "B+", "O+", "AB+", "A-", "O-"]),
                "mobile_phone": fake.msisdn()[:10],
                "email": fake.email(),
                "city": fake.city(),
                "state": random.choice(STATES),
                "admission_type": random.choice(["IPD", "OPD"]),
                "is_emergency": random.random() < 0.15,
                "created_at": _days_ago(random.randint(0, 365)),
            }
        )
    return rows


def ward_patients_mock(patients: list[dict], n: int = 40) -> list[dict]:
    rows = []
    for i in range(1, n + 1):
        p = random.choice(patients)
        in_days = random.randint(0, 60)
        discharged = random.random() < 0.6
        rows.append(
            {
                "id": i,
                "legacy_id": f"W{i:05d}",
                "legacy_patient_id": p["legacy_id"],
                "ward_id": random.choice(WARDS),
                "room_id": f"R{random.randint(1, 30):02d}",
                "bed_id": f"B{random.randint(1, 4)}",
                "in_date": _days_ago(in_days),
                "out_date": _days_ago(max(0, in_days - random.randint(1, 10))) if discharged else None,
                "is_discharge": discharged,
                "created_at": _days_ago(in_days),
            }
        )
    # One admission pointing at a patient that no longer exists.
    rows.append({**rows[-1], "id": n + 1, "legacy_id": f"W{n + 1:05d}", "legacy_patient_id": "L99999"})
    return rows


def billings_mock(patients: list[dict], n: int = 80) -> list[dict]:
    rows = []
    for i in range(1, n + 1):
        p = random.choice(patients)
        d = random.randint(0, 120)
        rows.append(
            {
                "id": i,
                "legacy_id": f"B{i:05d}",
                "legacy_patient_id": p["legacy_id"],
                "amount": round(max(300.0, random.gauss(18000, 12000)), 2),
                "payment_status": random.choice(PAYMENT_STATUSES),
                "billing_date": _days_ago(d),
                "description": random.choice(["Room charges", "Surgery package", "Pharmacy", "Lab investigations"]),
                "created_at": _days_ago(d),
            }
        )
    return rows


def appointments_mock(patients: list[dict], doctors: list[dict], n: int = 60) -> list[dict]:
    rows = []
    for i in range(1, n + 1):
        p = random.choice(patients)
        d = random.randint(0, 90)
        rows.append(
            {
                "id": i,
                "legacy_id": f"A{i:05d}",
                "legacy_patient_id": p["legacy_id"],
                "doctor_id": random.choice(doctors)["id"],
                "appointment_date": _days_ago(d),
                "status": random.choice(APPOINTMENT_STATUSES),
                "notes": fake.sentence(nb_words=6),
                "created_at": _days_ago(d),
            }
        )
    return rows


def discharge_summaries_mock(ward_patients: list[dict]) -> list[dict]:
    rows = []
    for i, wp in enumerate([w for w in ward_patients if w["is_discharge"]], start=1):
        rows.append(
            {
                "id": i,
                "legacy_id": f"D{i:05d}",
                "legacy_patient_id": wp["legacy_patient_id"],
                "discharge_date": wp["out_date"],
                "discharge_type": random.choice(DISCHARGE_TYPES),
                "created_at": wp["out_date"],
            }
        )
    return rows


def doctors_mock(n: int = 12) -> list[dict]:
    rows = []
    for i in range(1, n + 1):
        rows.append(
            {
                "id": _uid(),
                "name": f"Dr. {fake.name()}",
                "specialization": random.choice(DEPARTMENTS),
                "is_surgeon": i % 2 == 1,
                "department": random.choice(DEPARTMENTS),
                "phone": fake.msisdn()[:10],
                "email": fake.email(),
                "created_at": _days_ago(random.randint(30, 900)),
            }
        )
    return rows


def lab_test_config_mock(labs: list[dict]) -> list[dict]:
    sub_tests = {
        "Complete Blood Count": [("Haemoglobin", "g/dL"), ("WBC Count", "cells/cumm"), ("Platelet Count", "lakh/cumm")],
        "Liver Function Test": [("SGOT", "U/L"), ("SGPT", "U/L"), ("Total Bilirubin", "mg/dL")],
        "Kidney Function Test": [("Serum Creatinine", "mg/dL"), ("Blood Urea", "mg/dL")],
    }
    by_name = {lab["name"]: lab["id"] for lab in labs}
    rows = []
    for test_name, subs in sub_tests.items():
        for sub_name, unit in subs:
            rows.append(
                {
                    "id": _uid(),
                    "lab_id": by_name.get(test_name),
                    "test_name": test_name,
                    "sub_test_name": sub_name,
                    "unit": unit,
                    "min_age": 0,
                    "max_age": 120,
                    "age_unit": "Years",
                }
            )
    return rows


def build_mock_tables(seed: int = 7) -> dict[str, list[dict]]:
    random.seed(seed)
    Faker.seed(seed)

    patients = patients_mock()
    doctors = doctors_mock()
    ward_patients = ward_patients_mock(patients)
    labs = [{"id": _uid(), **row} for row in reference_data.LAB_TESTS]
    return {
        "patients": patients,
        "ward_patients": ward_patients,
        "billings": billings_mock(patients),
        "appointments": appointments_mock(patients, doctors),
        "discharge_summaries": discharge_summaries_mock(ward_patients),
        "doctors": doctors,
        "lab": labs,
        "radiology": [{"id": _uid(), **row} for row in reference_data.RADIOLOGY_TESTS],
        "medications": [
            {"id": _uid(), "code": f"MED{i:03d}", **row}
            for i, row in enumerate(reference_data.MEDICATIONS, start=1)
        ],
        "complication": [{"id": _uid(), **row} for row in reference_data.COMPLICATIONS],
        "lab_test_config": lab_test_config_mock(labs),
        "tally_config": [],
    }


def _ilike(value: Any, pattern: str) -> bool:
    if value is None:
        return False
    regex = "".join(".*" if ch == "%" else "." if ch == "_" else re.escape(ch) for ch in pattern)
    return re.fullmatch(regex, str(value), flags=re.IGNORECASE | re.DOTALL) is not None


class MockStore:
    """
    In-memory stand-in for the Supabase store.
    Mirrors the server-side semantics the views rely on (ordering with
    Postgres null placement, eq / in / ilike filters, exact counts).
    """

    def __init__(self, tables: Mapping[str, list[dict]]):
        self.tables = {name: copy.deepcopy(rows) for name, rows in tables.items()}

    def _table(self, table: str) -> list[dict]:
        if table not in self.tables:
            raise StoreError(f'relation "{table}" does not exist')
        return self.tables[table]

    def fetch(self, query: CollectionQuery) -> list[dict[str, Any]]:
        rows = list(self._table(query.table))
        for f in query.filters:
            if f.op == "eq":
                rows = [r for r in rows if r.get(f.column) == f.value]
            elif f.op == "in":
                allowed = set(f.value)
                rows = [r for r in rows if r.get(f.column) in allowed]
            elif f.op == "ilike":
                rows = [r for r in rows if _ilike(r.get(f.column), f.value)]
            else:
                raise ValueError(f"Unsupported filter operator: {f.op}")
        if query.order_by:
            col = query.order_by
            # ASC puts nulls last, DESC puts them first (Postgres defaults).
            rows.sort(key=lambda r: (r.get(col) is None, "" if r.get(col) is None else r.get(col)), reverse=query.descending)
        if query.limit:
            rows = rows[: query.limit]
        return [query.schema.normalize(copy.deepcopy(r)) for r in rows]

    def count(self, table: str) -> int:
        return len(self._table(table))

    def insert(self, table: str, values: Mapping[str, Any]) -> dict[str, Any]:
        row = {"id": _uid(), **dict(values)}
        self._table(table).append(row)
        return dict(row)

    def insert_many(self, table: str, rows: list[Mapping[str, Any]]) -> int:
        for r in rows:
            self.insert(table, r)
        return len(rows)

    def _find(self, table: str, identifier: Any, id_field: str) -> dict:
        for row in self._table(table):
            if row.get(id_field) == identifier:
                return row
        raise RecordNotFoundError(f"No {table} record with {id_field}={identifier!r}")

    def update(self, table: str, identifier: Any, values: Mapping[str, Any], id_field: str = "id") -> dict[str, Any]:
        row = self._find(table, identifier, id_field)
        row.update(values)
        return dict(row)

    def delete(self, table: str, identifier: Any, id_field: str = "id") -> dict[str, Any]:
        row = self._find(table, identifier, id_field)
        self._table(table).remove(row)
        return dict(row)


@lru_cache(maxsize=1)
def get_mock_store() -> MockStore:
    logger.warning("Using in-memory mock data; nothing is read from or written to Supabase")
    return MockStore(build_mock_tables())
