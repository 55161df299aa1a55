from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from data import queries
from data.records import COMPLICATIONS, RiskLevel


logger = logging.getLogger(__name__)


class ComplicationRegistry:
    """
    Create/update/delete over the `complication` collection with an
    in-memory list kept in step with the store.

    The store is written first; the list is only patched after the write
    succeeds, so a failed call leaves it exactly as it was. Store errors
    (StoreError and subclasses) are logged and re-raised unchanged.
    """

    def __init__(self, store: Any, items: Optional[list[dict[str, Any]]] = None):
        self.store = store
        self.items: list[dict[str, Any]] = list(items or [])

    @property
    def table(self) -> str:
        return COMPLICATIONS.table

    def load(self) -> list[dict[str, Any]]:
        self.items = self.store.fetch(queries.q_complications())
        return self.items

    def find(self, identifier: Any) -> Optional[dict[str, Any]]:
        for item in self.items:
            if item.get("id") == identifier:
                return item
        return None

    def _clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = {k: v for k, v in fields.items() if k != "id"}
        if "risk_level" in values:
            values["risk_level"] = RiskLevel.parse(values["risk_level"]).value
        return values

    def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = self._clean(fields)
        try:
            created = self.store.insert(self.table, values)
        except Exception as e:
            logger.error("Error creating complication %r: %s", values.get("name"), e)
            raise
        record = COMPLICATIONS.normalize(created)
        self.items = [*self.items, record]
        return record

    def update(self, identifier: Any, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = self._clean(fields)
        try:
            updated = self.store.update(self.table, identifier, values)
        except Exception as e:
            logger.error("Error updating complication %r: %s", identifier, e)
            raise
        self.items = [{**item, **updated} if item.get("id") == identifier else item for item in self.items]
        return updated

    def delete(self, identifier: Any) -> bool:
        try:
            self.store.delete(self.table, identifier)
        except Exception as e:
            logger.error("Error deleting complication %r: %s", identifier, e)
            raise
        self.items = [item for item in self.items if item.get("id") != identifier]
        return True
