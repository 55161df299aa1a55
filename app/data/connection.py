from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from config import AppConfig
from data.queries import CollectionQuery


logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    pass


class StoreConfigError(StoreError):
    pass


class RecordNotFoundError(StoreError):
    pass


def _message(e: Exception) -> str:
    return getattr(e, "message", None) or str(e) or type(e).__name__


@dataclass(frozen=True)
class SupabaseStore:
    client: Client

    def _execute(self, builder: Any, action: str) -> Any:
        try:
            return builder.execute()
        except (APIError, httpx.HTTPError) as e:
            raise StoreError(f"{action} failed: {_message(e)}") from e

    def fetch(self, query: CollectionQuery) -> list[dict[str, Any]]:
        """
        Runs a projected, filtered, ordered read and returns normalized rows.
        Filtering and pattern matching happen server-side.
        """
        builder = self.client.table(query.table).select(query.schema.projection)
        for f in query.filters:
            if f.op == "eq":
                builder = builder.eq(f.column, f.value)
            elif f.op == "in":
                builder = builder.in_(f.column, list(f.value))
            elif f.op == "ilike":
                builder = builder.ilike(f.column, f.value)
            else:
                raise ValueError(f"Unsupported filter operator: {f.op}")
        if query.order_by:
            builder = builder.order(query.order_by, desc=query.descending)
        if query.limit:
            builder = builder.limit(query.limit)

        response = self._execute(builder, f"Reading {query.table}")
        return [query.schema.normalize(row) for row in (response.data or [])]

    def count(self, table: str) -> int:
        builder = self.client.table(table).select("*", count="exact", head=True)
        response = self._execute(builder, f"Counting {table}")
        return int(response.count or 0)

    def insert(self, table: str, values: Mapping[str, Any]) -> dict[str, Any]:
        response = self._execute(self.client.table(table).insert(dict(values)), f"Inserting into {table}")
        if not response.data:
            raise StoreError(f"Inserting into {table} returned no row")
        return dict(response.data[0])

    def insert_many(self, table: str, rows: list[Mapping[str, Any]]) -> int:
        response = self._execute(self.client.table(table).insert([dict(r) for r in rows]), f"Inserting into {table}")
        return len(response.data or [])

    def update(self, table: str, identifier: Any, values: Mapping[str, Any], id_field: str = "id") -> dict[str, Any]:
        builder = self.client.table(table).update(dict(values)).eq(id_field, identifier)
        response = self._execute(builder, f"Updating {table}")
        if not response.data:
            raise RecordNotFoundError(f"No {table} record with {id_field}={identifier!r}")
        return dict(response.data[0])

    def delete(self, table: str, identifier: Any, id_field: str = "id") -> dict[str, Any]:
        builder = self.client.table(table).delete().eq(id_field, identifier)
        response = self._execute(builder, f"Deleting from {table}")
        if not response.data:
            raise RecordNotFoundError(f"No {table} record with {id_field}={identifier!r}")
        return dict(response.data[0])


@lru_cache(maxsize=4)
def _client_for(url: str, key: str) -> Client:
    return create_client(url, key)


def get_supabase_store(cfg: AppConfig) -> SupabaseStore:
    if not cfg.has_store_credentials:
        raise StoreConfigError(
            "Missing SUPABASE_URL / SUPABASE_KEY. "
            "Set both for live data, or enable mock data in the sidebar."
        )
    try:
        client = _client_for(cfg.supabase_url, cfg.supabase_key)
    except Exception as e:
        # create_client validates the URL/key format and raises its own error type.
        raise StoreConfigError(f"Could not create Supabase client: {_message(e)}") from e
    return SupabaseStore(client=client)
