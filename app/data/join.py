"""
Client-side correlation of two result sets.

Pages that show e.g. bills with patient names read both collections and
stitch them together here instead of relying on a server-side join.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional


class DuplicateIdentifierError(ValueError):
    pass


def index_by(records: Iterable[Mapping[str, Any]], key: str = "id") -> dict[Any, Mapping[str, Any]]:
    """
    Map each record's `key` value to the record.
    Records without a value for `key` are left out; a repeated value raises
    DuplicateIdentifierError since lookups assume at most one match.
    """
    index: dict[Any, Mapping[str, Any]] = {}
    for r in records:
        value = r.get(key)
        if value is None:
            continue
        if value in index:
            raise DuplicateIdentifierError(f"Duplicate {key}={value!r} in secondary records")
        index[value] = r
    return index


def join_records(
    primary: Iterable[Mapping[str, Any]],
    secondary: Iterable[Mapping[str, Any]],
    foreign_key: str,
    as_field: str,
    identifier: str = "id",
) -> list[dict[str, Any]]:
    """
    Return copies of `primary` records, each with `as_field` set to the
    secondary record whose `identifier` equals the primary's `foreign_key`,
    or None when there is no such record. Order and length follow `primary`.
    """
    index = index_by(secondary, identifier)
    joined = []
    for r in primary:
        match = index.get(r.get(foreign_key))
        joined.append({**r, as_field: dict(match) if match is not None else None})
    return joined


def nested_value(record: Mapping[str, Any], field: str, key: str, default: Optional[Any] = None) -> Any:
    nested = record.get(field)
    if not nested:
        return default
    value = nested.get(key)
    return default if value is None else value
