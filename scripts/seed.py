#!/usr/bin/env python3
"""
Seed the Supabase reference tables (lab, radiology, medications, complication).

Usage:
    python scripts/seed.py

Reads SUPABASE_URL / SUPABASE_KEY from the environment or `.env`.
Exits 0 when every table was seeded, 1 on the first error.
"""

from __future__ import annotations

import logging
import os
import sys

APP_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "app"))
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

from config import configure_logging, get_config  # noqa: E402
from data.connection import get_supabase_store  # noqa: E402
from data.reference_data import SEED_TABLES  # noqa: E402


logger = logging.getLogger("seed")


def seed(store) -> dict[str, int]:
    """Insert every reference table in order; returns rows inserted per table."""
    inserted = {}
    for table, rows in SEED_TABLES:
        inserted[table] = store.insert_many(table, rows)
        logger.info("Seeded %s: %d rows", table, inserted[table])
    return inserted


def main() -> int:
    cfg = get_config()
    configure_logging(cfg)
    try:
        store = get_supabase_store(cfg)
        inserted = seed(store)
    except Exception as e:
        logger.error("Error seeding data: %s", e)
        return 1
    logger.info("Seeding complete (%d rows)", sum(inserted.values()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
