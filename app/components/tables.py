from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, Union

import pandas as pd
import streamlit as st


# A column is either a record key or a function of the whole record.
Column = tuple[str, Union[str, Callable[[Mapping[str, Any]], Any]]]


def to_frame(records: Sequence[Mapping[str, Any]], columns: Sequence[Column]) -> pd.DataFrame:
    rows = []
    for r in records:
        row = {}
        for label, source in columns:
            row[label] = source(r) if callable(source) else r.get(source)
        rows.append(row)
    return pd.DataFrame(rows, columns=[label for label, _ in columns])


def render_records_table(
    records: Sequence[Mapping[str, Any]],
    columns: Sequence[Column],
    empty_message: str,
    height: int | None = None,
) -> None:
    if not records:
        st.info(empty_message)
        return
    df = to_frame(records, columns)
    if height:
        st.dataframe(df, use_container_width=True, hide_index=True, height=height)
    else:
        st.dataframe(df, use_container_width=True, hide_index=True)


def text_matches(record: Mapping[str, Any], term: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match of `term` against any of `fields`."""
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return any(needle in str(record.get(f) or "").lower() for f in fields)
