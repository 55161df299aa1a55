"""
Tests for the complication registry (create / update / delete).
"""

import pytest

from data.complications import ComplicationRegistry
from data.connection import RecordNotFoundError, StoreError


class FailingStore:
    """Store whose every write fails"""

    def insert(self, table, values):
        raise StoreError("Inserting into complication failed: permission denied")

    def update(self, table, identifier, values, id_field="id"):
        raise StoreError("Updating complication failed: permission denied")

    def delete(self, table, identifier, id_field="id"):
        raise StoreError("Deleting from complication failed: permission denied")


@pytest.fixture
def registry(mock_store):
    registry = ComplicationRegistry(mock_store)
    registry.load()
    return registry


class TestLoad:
    def test_loads_seeded_complications(self, registry):
        names = [c["name"] for c in registry.items]

        assert names == ["Bleeding", "Post-operative Infection"]

    def test_loaded_items_carry_every_reference_field(self, registry):
        assert all("med4_id" in c for c in registry.items)


class TestCreate:
    """Test ComplicationRegistry.create"""

    def test_create_appends_one(self, registry, sample_complication):
        before = len(registry.items)

        created = registry.create(sample_complication)

        assert len(registry.items) == before + 1
        assert created["name"] == "Sepsis"
        assert created["id"]
        assert registry.find(created["id"]) == created
        assert registry.items[-1]["name"] == "Sepsis"

    def test_created_record_is_persisted(self, registry, mock_store, sample_complication):
        created = registry.create(sample_complication)

        assert any(c["id"] == created["id"] for c in mock_store.tables["complication"])

    def test_risk_level_normalized(self, registry, sample_complication):
        created = registry.create({**sample_complication, "risk_level": "moderate"})

        assert created["risk_level"] == "Moderate"

    def test_invalid_risk_level_rejected(self, registry, sample_complication):
        before = list(registry.items)

        with pytest.raises(ValueError):
            registry.create({**sample_complication, "risk_level": "Extreme"})
        assert registry.items == before

    def test_client_supplied_id_ignored(self, registry, sample_complication):
        created = registry.create({**sample_complication, "id": "chosen-by-client"})

        assert created["id"] != "chosen-by-client"

    def test_store_failure_leaves_list_unchanged(self, sample_complication):
        registry = ComplicationRegistry(FailingStore(), items=[{"id": "c1", "name": "Bleeding"}])

        with pytest.raises(StoreError):
            registry.create(sample_complication)
        assert registry.items == [{"id": "c1", "name": "Bleeding"}]


class TestUpdate:
    def test_update_merges_fields(self, registry):
        target = registry.items[0]

        registry.update(target["id"], {"description": "Revised", "risk_level": "Low"})

        updated = registry.find(target["id"])
        assert updated["description"] == "Revised"
        assert updated["risk_level"] == "Low"
        assert updated["name"] == target["name"]

    def test_update_missing_raises(self, registry):
        before = list(registry.items)

        with pytest.raises(RecordNotFoundError):
            registry.update("does-not-exist", {"description": "x"})
        assert registry.items == before

    def test_store_failure_leaves_list_unchanged(self):
        registry = ComplicationRegistry(FailingStore(), items=[{"id": "c1", "name": "Bleeding"}])

        with pytest.raises(StoreError):
            registry.update("c1", {"name": "Haemorrhage"})
        assert registry.items == [{"id": "c1", "name": "Bleeding"}]


class TestDelete:
    def test_delete_removes_one(self, registry):
        target = registry.items[0]["id"]
        before = len(registry.items)

        assert registry.delete(target) is True
        assert len(registry.items) == before - 1
        assert registry.find(target) is None

    def test_delete_missing_raises_and_keeps_length(self, registry):
        before = len(registry.items)

        with pytest.raises(RecordNotFoundError):
            registry.delete("does-not-exist")
        assert len(registry.items) == before

    def test_store_failure_leaves_list_unchanged(self):
        registry = ComplicationRegistry(FailingStore(), items=[{"id": "c1", "name": "Bleeding"}])

        with pytest.raises(StoreError):
            registry.delete("c1")
        assert registry.items == [{"id": "c1", "name": "Bleeding"}]


def _complications_page():
    from config import get_config
    from views import complications

    complications.render(get_config(), True)


@pytest.fixture
def page(monkeypatch, mock_store):
    """Complications page backed by a fresh mock store"""
    from streamlit.testing.v1 import AppTest

    monkeypatch.setattr("data.service.get_store", lambda cfg, use_mock: mock_store)
    monkeypatch.setattr("views.complications.get_store", lambda cfg, use_mock: mock_store)
    at = AppTest.from_function(_complications_page, default_timeout=30)
    at.run()
    return at


def _pick(page, name):
    registry = page.session_state["complication_registry_mock"]
    cid = next(c["id"] for c in registry.items if c["name"] == name)
    page.selectbox(key="edit_comp_select_mock__pick").select(cid).run()
    return cid


def _click(page, label):
    next(b for b in page.button if b.label == label).click().run()


class TestComplicationsPage:
    """Edit / delete through the page"""

    def test_save_changes_keeps_selection(self, page, mock_store):
        cid = _pick(page, "Bleeding")

        page.text_area(key=f"edit_desc_{cid}").input("Revised after review").run()
        _click(page, "Save changes")

        assert not page.exception
        selected = page.session_state["edit_comp_select_mock"].value
        assert selected["id"] == cid
        assert selected["description"] == "Revised after review"
        stored = next(c for c in mock_store.tables["complication"] if c["id"] == cid)
        assert stored["description"] == "Revised after review"

    def test_second_save_after_first(self, page):
        cid = _pick(page, "Bleeding")
        page.text_area(key=f"edit_desc_{cid}").input("First").run()
        _click(page, "Save changes")

        page.text_area(key=f"edit_desc_{cid}").input("Second").run()
        _click(page, "Save changes")

        assert not page.exception
        assert page.session_state["edit_comp_select_mock"].value["description"] == "Second"

    def test_delete_clears_selection(self, page, mock_store):
        cid = _pick(page, "Post-operative Infection")

        _click(page, "Delete")

        assert not page.exception
        assert page.session_state["edit_comp_select_mock"].value is None
        assert all(c["id"] != cid for c in mock_store.tables["complication"])
        assert "Pick a complication to edit or delete it." in [c.value for c in page.caption]
