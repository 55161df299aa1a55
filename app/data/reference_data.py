"""Reference rows loaded by scripts/seed.py and reused by the mock store."""

from __future__ import annotations

LAB_TESTS = [
    {"name": "Blood Culture"},
    {"name": "Complete Blood Count"},
    {"name": "Liver Function Test"},
    {"name": "Kidney Function Test"},
    {"name": "Urine Analysis"},
]

RADIOLOGY_TESTS = [
    {"name": "X-Ray Chest"},
    {"name": "CT Scan Brain"},
    {"name": "MRI Spine"},
    {"name": "Ultrasound Abdomen"},
    {"name": "PET Scan"},
]

MEDICATIONS = [
    {"name": "Amoxicillin", "dosage": "500mg", "route": "Oral"},
    {"name": "Ibuprofen", "dosage": "400mg", "route": "Oral"},
    {"name": "Morphine", "dosage": "10mg", "route": "IV"},
    {"name": "Omeprazole", "dosage": "20mg", "route": "Oral"},
    {"name": "Metformin", "dosage": "1000mg", "route": "Oral"},
]

_NO_REFERENCES = {
    "lab1_id": None,
    "lab2_id": None,
    "rad1_id": None,
    "rad2_id": None,
    "med1_id": None,
    "med2_id": None,
    "med3_id": None,
    "med4_id": None,
}

COMPLICATIONS = [
    {
        "name": "Post-operative Infection",
        "description": "Infection occurring after surgery",
        "risk_level": "High",
        "foreign_key": "COMP_1",
        **_NO_REFERENCES,
    },
    {
        "name": "Bleeding",
        "description": "Excessive bleeding during or after surgery",
        "risk_level": "High",
        "foreign_key": "COMP_2",
        **_NO_REFERENCES,
    },
]

# (table, rows) in insertion order
SEED_TABLES = [
    ("lab", LAB_TESTS),
    ("radiology", RADIOLOGY_TESTS),
    ("medications", MEDICATIONS),
    ("complication", COMPLICATIONS),
]
