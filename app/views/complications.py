from __future__ import annotations

from typing import Any, Mapping, Optional

import streamlit as st

from components.narrative import render_page_intro, render_result_error
from components.search_select import render_search_select
from components.tables import render_records_table
from config import AppConfig
from data.complications import ComplicationRegistry
from data.connection import StoreError
from data.records import COMPLICATION_REFERENCE_FIELDS, RiskLevel
from data.service import get_complications, get_lab_tests, get_medications, get_radiology_tests, get_store


REFERENCE_SOURCES = {
    "lab": ("Lab", get_lab_tests),
    "rad": ("Radiology", get_radiology_tests),
    "med": ("Medication", get_medications),
}


def _source(use_mock: bool) -> str:
    return "mock" if use_mock else "supabase"


def _registry(cfg: AppConfig, use_mock: bool) -> Optional[ComplicationRegistry]:
    key = f"complication_registry_{_source(use_mock)}"
    if key not in st.session_state or st.session_state.get(f"{key}_stale"):
        result = get_complications(cfg, use_mock)
        if render_result_error(result):
            return None
        st.session_state[key] = ComplicationRegistry(get_store(cfg, use_mock), result.records)
        st.session_state[f"{key}_stale"] = False
    if st.button("🔄 Reload from store"):
        st.session_state[f"{key}_stale"] = True
        st.rerun()
    return st.session_state[key]


def _reference_options(cfg: AppConfig, use_mock: bool) -> dict[str, list[dict]]:
    options = {}
    for prefix, (label, fetch) in REFERENCE_SOURCES.items():
        result = fetch(cfg, use_mock)
        if result.error:
            st.warning(f"{label} options unavailable: {result.error}")
        options[prefix] = result.records
    return options


def _reference_inputs(options: dict[str, list[dict]], key: str, current: Mapping[str, Any]) -> dict[str, Any]:
    """One selector per cross-reference column (lab1_id .. med4_id)."""
    values = {}
    cols = st.columns(4)
    for i, field in enumerate(COMPLICATION_REFERENCE_FIELDS):
        prefix = field[:3]
        label = f"{REFERENCE_SOURCES[prefix][0]} {field[3]}"
        with cols[i % 4]:
            picked = render_search_select(
                label,
                options[prefix],
                key=f"{key}_{field}",
                value_id=current.get(field),
            )
        values[field] = picked["id"] if picked else None
    return values


def _name_lookup(options: dict[str, list[dict]]) -> dict[Any, str]:
    return {o["id"]: o["name"] for rows in options.values() for o in rows}


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Complications")
    render_page_intro(
        "Complication master",
        "Risk-graded complications with the lab, radiology and medication protocol linked to each.",
    )

    registry = _registry(cfg, use_mock)
    if registry is None:
        return
    options = _reference_options(cfg, use_mock)
    names = _name_lookup(options)

    def refs(c: Mapping[str, Any]) -> str:
        return ", ".join(names.get(c.get(f), str(c.get(f))) for f in COMPLICATION_REFERENCE_FIELDS if c.get(f))

    render_records_table(
        registry.items,
        [
            ("Name", "name"),
            ("Risk", "risk_level"),
            ("Code", "foreign_key"),
            ("Description", "description"),
            ("Linked protocol", refs),
        ],
        empty_message="No complications found",
    )

    risk_levels = [r.value for r in RiskLevel]
    tab_add, tab_edit = st.tabs(["➕ Add complication", "✏️ Edit / delete"])

    with tab_add:
        c1, c2, c3 = st.columns([2, 1, 1])
        name = c1.text_input("Name", key="new_comp_name")
        risk = c2.selectbox("Risk level", risk_levels, key="new_comp_risk")
        code = c3.text_input("Code", key="new_comp_code", placeholder="COMP_3")
        description = st.text_area("Description", key="new_comp_description")
        with st.expander("Linked lab / radiology / medications"):
            references = _reference_inputs(options, "new_comp", {})
        if st.button("Create complication", type="primary"):
            if not name.strip():
                st.error("Name is required")
            else:
                try:
                    created = registry.create(
                        {"name": name.strip(), "risk_level": risk, "description": description, "foreign_key": code or None, **references}
                    )
                    st.success(f"Created {created['name']}")
                except (StoreError, ValueError) as e:
                    st.error(f"Could not create complication: {e}")

    with tab_edit:
        selected = render_search_select("Complication", registry.items, key=f"edit_comp_select_{_source(use_mock)}")
        if selected is None:
            st.caption("Pick a complication to edit or delete it.")
            return
        cid = selected["id"]
        c1, c2, c3 = st.columns([2, 1, 1])
        name = c1.text_input("Name", value=selected.get("name") or "", key=f"edit_name_{cid}")
        current_risk = selected.get("risk_level") if selected.get("risk_level") in risk_levels else risk_levels[0]
        risk = c2.selectbox("Risk level", risk_levels, index=risk_levels.index(current_risk), key=f"edit_risk_{cid}")
        code = c3.text_input("Code", value=selected.get("foreign_key") or "", key=f"edit_code_{cid}")
        description = st.text_area("Description", value=selected.get("description") or "", key=f"edit_desc_{cid}")
        with st.expander("Linked lab / radiology / medications"):
            references = _reference_inputs(options, f"edit_comp_{cid}", selected)

        b1, b2 = st.columns(2)
        if b1.button("Save changes", type="primary"):
            try:
                registry.update(
                    cid,
                    {"name": name.strip(), "risk_level": risk, "description": description, "foreign_key": code or None, **references},
                )
                st.success("Saved")
                st.rerun()
            except (StoreError, ValueError) as e:
                st.error(f"Could not update complication: {e}")
        if b2.button("Delete", help="Removes the complication from the store"):
            try:
                registry.delete(cid)
                st.success("Deleted")
                st.rerun()
            except StoreError as e:
                st.error(f"Could not delete complication: {e}")
