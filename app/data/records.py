"""
Collection shapes.

Each collection's record shape is declared once here. Rows coming back from
the store are normalized against the declared columns, so optional fields a
row does not carry are present as None instead of being missing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class CollectionSchema:
    table: str
    columns: tuple[str, ...]
    identifier: str = "id"
    order_by: Optional[str] = None
    descending: bool = False

    @property
    def projection(self) -> str:
        return ", ".join(self.columns)

    def normalize(self, row: Mapping[str, Any]) -> dict[str, Any]:
        return {c: row.get(c) for c in self.columns}


class RiskLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"

    @classmethod
    def parse(cls, value: Any) -> "RiskLevel":
        if isinstance(value, cls):
            return value
        for level in cls:
            if str(value).strip().lower() == level.value.lower():
                return level
        raise ValueError(f"Unknown risk level {value!r}; expected one of {[l.value for l in cls]}")


PATIENTS = CollectionSchema(
    table="patients",
    columns=(
        "id", "legacy_id", "patient_id", "full_name", "sex", "dob", "blood_group",
        "mobile_phone", "email", "city", "state", "admission_type", "is_emergency", "created_at",
    ),
    order_by="created_at",
    descending=True,
)

# Narrow projection used when patients are only needed as join targets.
PATIENT_NAMES = CollectionSchema(
    table="patients",
    columns=("legacy_id", "full_name", "patient_id"),
    identifier="legacy_id",
)

WARD_PATIENTS = CollectionSchema(
    table="ward_patients",
    columns=(
        "id", "legacy_id", "legacy_patient_id", "ward_id", "room_id", "bed_id",
        "in_date", "out_date", "is_discharge", "created_at",
    ),
    order_by="in_date",
    descending=True,
)

BILLINGS = CollectionSchema(
    table="billings",
    columns=(
        "id", "legacy_id", "legacy_patient_id", "amount", "payment_status",
        "billing_date", "description", "created_at",
    ),
    order_by="billing_date",
    descending=True,
)

APPOINTMENTS = CollectionSchema(
    table="appointments",
    columns=(
        "id", "legacy_id", "legacy_patient_id", "doctor_id", "appointment_date",
        "status", "notes", "created_at",
    ),
    order_by="appointment_date",
    descending=True,
)

DISCHARGE_SUMMARIES = CollectionSchema(
    table="discharge_summaries",
    columns=("id", "legacy_id", "legacy_patient_id", "discharge_date", "discharge_type", "created_at"),
    order_by="discharge_date",
    descending=True,
)

MEDICATIONS = CollectionSchema(
    table="medications",
    columns=("id", "name", "code", "dosage", "route"),
    order_by="name",
)

RADIOLOGY = CollectionSchema(table="radiology", columns=("id", "name"), order_by="name")

LAB = CollectionSchema(table="lab", columns=("id", "name"), order_by="name")

COMPLICATION_REFERENCE_FIELDS = (
    "lab1_id", "lab2_id", "rad1_id", "rad2_id", "med1_id", "med2_id", "med3_id", "med4_id",
)

COMPLICATIONS = CollectionSchema(
    table="complication",
    columns=("id", "name", "risk_level", "description", "foreign_key") + COMPLICATION_REFERENCE_FIELDS,
    order_by="name",
)

LAB_TEST_CONFIG = CollectionSchema(
    table="lab_test_config",
    columns=("id", "lab_id", "test_name", "sub_test_name", "unit", "min_age", "max_age", "age_unit"),
    order_by="sub_test_name",
)

DOCTORS = CollectionSchema(
    table="doctors",
    columns=("id", "name", "specialization", "is_surgeon", "department", "phone", "email", "created_at"),
    order_by="name",
)

TALLY_CONFIG = CollectionSchema(
    table="tally_config",
    columns=("id", "server_url", "company_name", "created_at"),
    order_by="created_at",
    descending=True,
)

# Collections shown on the overview page, in display order.
COUNTED_COLLECTIONS = (
    ("Patients", PATIENTS),
    ("IPD admissions", WARD_PATIENTS),
    ("OPD visits", APPOINTMENTS),
    ("Bills", BILLINGS),
    ("Discharge summaries", DISCHARGE_SUMMARIES),
    ("Medications", MEDICATIONS),
    ("Radiology tests", RADIOLOGY),
    ("Lab tests", LAB),
    ("Complications", COMPLICATIONS),
)
