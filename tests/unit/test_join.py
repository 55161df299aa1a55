"""
Tests for client-side joining of two result sets.
"""

import pytest

from data.join import DuplicateIdentifierError, index_by, join_records, nested_value


class TestJoinRecords:
    """Test join_records"""

    def test_attaches_matching_secondary(self, patients):
        """Each bill gets the patient whose legacy_id matches"""
        bills = [
            {"id": 1, "legacy_patient_id": "L002", "amount": 500},
            {"id": 2, "legacy_patient_id": "L001", "amount": 900},
        ]

        joined = join_records(bills, patients, "legacy_patient_id", "patient", identifier="legacy_id")

        assert joined[0]["patient"]["full_name"] == "Vikram Shah"
        assert joined[1]["patient"]["full_name"] == "Asha Rao"

    def test_missing_match_is_none(self, patients):
        """Dangling foreign keys become None, not an error"""
        joined = join_records(
            [{"id": 1, "legacy_patient_id": "L99999"}], patients, "legacy_patient_id", "patient", identifier="legacy_id"
        )

        assert joined == [{"id": 1, "legacy_patient_id": "L99999", "patient": None}]

    def test_missing_foreign_key_is_none(self, patients):
        joined = join_records([{"id": 1}], patients, "legacy_patient_id", "patient", identifier="legacy_id")

        assert joined[0]["patient"] is None

    def test_preserves_order_and_length(self, patients):
        primary = [{"id": i, "legacy_patient_id": "L001" if i % 2 else "L404"} for i in range(10)]

        joined = join_records(primary, patients, "legacy_patient_id", "patient", identifier="legacy_id")

        assert [r["id"] for r in joined] == list(range(10))
        assert len(joined) == len(primary)

    def test_primary_fields_unchanged(self, patients):
        primary = [{"id": 7, "legacy_patient_id": "L001", "amount": 12.5}]

        joined = join_records(primary, patients, "legacy_patient_id", "patient", identifier="legacy_id")

        assert {k: v for k, v in joined[0].items() if k != "patient"} == primary[0]

    def test_inputs_not_mutated(self, patients):
        primary = [{"id": 1, "legacy_patient_id": "L001"}]

        join_records(primary, patients, "legacy_patient_id", "patient", identifier="legacy_id")

        assert "patient" not in primary[0]

    def test_attached_record_is_a_copy(self, patients):
        joined = join_records([{"id": 1, "legacy_patient_id": "L001"}], patients, "legacy_patient_id", "patient", identifier="legacy_id")

        joined[0]["patient"]["full_name"] = "Changed"

        assert patients[0]["full_name"] == "Asha Rao"

    def test_empty_secondary_gives_all_none(self):
        joined = join_records([{"id": 1, "fk": 3}, {"id": 2, "fk": 4}], [], "fk", "other")

        assert [r["other"] for r in joined] == [None, None]

    def test_empty_primary(self, patients):
        assert join_records([], patients, "legacy_patient_id", "patient", identifier="legacy_id") == []

    def test_duplicate_secondary_identifier_rejected(self):
        """Ambiguous lookups are refused instead of picking one"""
        secondary = [{"id": 1, "name": "a"}, {"id": 1, "name": "b"}]

        with pytest.raises(DuplicateIdentifierError):
            join_records([{"fk": 1}], secondary, "fk", "other")


class TestIndexBy:
    """Test index_by"""

    def test_indexes_by_key(self):
        index = index_by([{"id": "a"}, {"id": "b"}])

        assert set(index) == {"a", "b"}

    def test_skips_records_without_key(self):
        index = index_by([{"id": None}, {"name": "no id"}, {"id": 3}])

        assert list(index) == [3]


class TestNestedValue:
    def test_reads_nested_field(self):
        assert nested_value({"patient": {"full_name": "Asha"}}, "patient", "full_name") == "Asha"

    def test_default_when_parent_missing(self):
        assert nested_value({"patient": None}, "patient", "full_name", "Unknown") == "Unknown"

    def test_default_when_value_none(self):
        assert nested_value({"patient": {"full_name": None}}, "patient", "full_name", "Unknown") == "Unknown"


class TestJoinProperties:
    """Documented join scenarios"""

    def test_scenario_match(self):
        joined = join_records([{"id": 1, "patient_fk": "P1"}], [{"id": "P1", "name": "Asha"}], "patient_fk", "patient")

        assert joined == [{"id": 1, "patient_fk": "P1", "patient": {"id": "P1", "name": "Asha"}}]

    def test_scenario_no_match(self):
        joined = join_records([{"id": 1, "patient_fk": "P9"}], [], "patient_fk", "patient")

        assert joined == [{"id": 1, "patient_fk": "P9", "patient": None}]

    def test_rejoin_against_empty_clears_nested(self, patients):
        primary = [{"id": i, "legacy_patient_id": lid} for i, lid in enumerate(["L001", "L002", "L404"])]

        once = join_records(primary, patients, "legacy_patient_id", "patient", identifier="legacy_id")
        again = join_records(once, [], "legacy_patient_id", "patient", identifier="legacy_id")

        assert all(r["patient"] is None for r in again)

    def test_rejoin_is_idempotent(self, patients):
        primary = [{"id": i, "legacy_patient_id": lid} for i, lid in enumerate(["L001", "L002", "L404"])]

        once = join_records(primary, patients, "legacy_patient_id", "patient", identifier="legacy_id")
        twice = join_records(once, patients, "legacy_patient_id", "patient", identifier="legacy_id")

        assert twice == once
