# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

from types import SimpleNamespace

import pytest

from config import AppConfig
from data.mock_data import MockStore, build_mock_tables


@pytest.fixture
def app_config():
    """Config with every optional collaborator configured"""
    return AppConfig(
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        document_api_url="https://docs.example.test/generate",
        tally_server_url="http://tally.example.test:9000",
        tally_company="Demo Hospital",
        default_use_mock=True,
        log_level="INFO",
    )


@pytest.fixture
def mock_store():
    """Freshly seeded in-memory store (independent of the cached app store)"""
    return MockStore(build_mock_tables())


@pytest.fixture
def patients():
    return [
        {"legacy_id": "L001", "full_name": "Asha Rao", "patient_id": "UHID1"},
        {"legacy_id": "L002", "full_name": "Vikram Shah", "patient_id": "UHID2"},
    ]


class FakeQuery:
    """
    Records the builder chain a SupabaseStore call makes and returns a canned
    response (or raises a canned error) from execute().
    """

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.calls = []

    def __getattr__(self, name):
        def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return record

    def execute(self):
        self.client.executed.append(self)
        if self.client.error is not None:
            raise self.client.error
        return self.client.response


class FakeSupabaseClient:
    def __init__(self, data=None, count=None, error=None):
        self.response = SimpleNamespace(data=data, count=count)
        self.error = error
        self.queries = []
        self.executed = []

    def table(self, name):
        query = FakeQuery(self, name)
        self.queries.append(query)
        return query


@pytest.fixture
def fake_client():
    return FakeSupabaseClient


@pytest.fixture
def sample_complication():
    return {
        "name": "Sepsis",
        "risk_level": "High",
        "description": "Systemic infection following surgery",
        "foreign_key": "COMP_3",
    }
