"""
Filterable selector: a text box that narrows a candidate list, plus a pick list.

Matching ignores case and all whitespace, so "Blood Culture" is found by
"bloodculture", "BLOOD" or " blood ".
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

import streamlit as st


LOADING_PLACEHOLDER = "Loading..."
DEFAULT_PLACEHOLDER = "Select an option..."

_WHITESPACE = re.compile(r"\s+")

Option = Mapping[str, Any]


class SelectorLoadingError(RuntimeError):
    pass


def normalize(text: Any) -> str:
    return _WHITESPACE.sub("", "" if text is None else str(text)).lower()


def filter_options(options: Sequence[Option], query: str, display_key: str = "name") -> list[Option]:
    needle = normalize(query)
    if not needle:
        return list(options)
    return [o for o in options if needle in normalize(o.get(display_key))]


@dataclass
class SearchSelect:
    options: list[Option] = field(default_factory=list)
    display_key: str = "name"
    placeholder: str = DEFAULT_PLACEHOLDER
    loading: bool = False
    query: str = ""
    value: Optional[Option] = None
    on_change: Optional[Callable[[Optional[Option]], None]] = None

    @property
    def visible(self) -> list[Option]:
        return filter_options(self.options, self.query, self.display_key)

    @property
    def current_placeholder(self) -> str:
        return LOADING_PLACEHOLDER if self.loading else self.placeholder

    @property
    def input_disabled(self) -> bool:
        return self.loading

    def set_query(self, query: str) -> list[Option]:
        self.query = query or ""
        return self.visible

    @property
    def value_id(self) -> Any:
        return None if self.value is None else self.value.get("id")

    def match(self, option: Option) -> Optional[Option]:
        """The current option with the same id as `option` (or equal to it when it has no id)."""
        identifier = option.get("id")
        if identifier is None:
            return option if option in self.options else None
        return next((o for o in self.options if o.get("id") == identifier), None)

    def set_options(self, options: Sequence[Option]) -> None:
        self.options = list(options)
        self.loading = False
        # Keep the selection when its row is still offered, with the fresh contents.
        if self.value is not None:
            self.value = self.match(self.value)

    def select(self, option: Optional[Option]) -> Optional[Option]:
        if self.loading:
            raise SelectorLoadingError("Options are still loading")
        if option is not None:
            current = self.match(option)
            if current is None:
                raise ValueError(f"{option!r} is not one of the available options")
            option = current
        self.value = option
        if self.on_change is not None:
            self.on_change(option)
        return option

    def select_by_id(self, identifier: Any) -> Optional[Option]:
        if identifier is None:
            return self.select(None)
        for o in self.options:
            if o.get("id") == identifier:
                return self.select(o)
        raise ValueError(f"No option with id {identifier!r}")


def render_search_select(
    label: str,
    options: Sequence[Option],
    key: str,
    display_key: str = "name",
    placeholder: str = DEFAULT_PLACEHOLDER,
    loading: bool = False,
    value_id: Any = None,
    on_change: Optional[Callable[[Optional[Option]], None]] = None,
) -> Optional[Option]:
    """
    Draws the selector and returns the chosen option (or None).
    Selector state lives in st.session_state[key] so the typed query and
    the selection survive reruns. The pick list carries option ids, so a
    row whose contents change between reruns stays selected.
    """
    state: Optional[SearchSelect] = st.session_state.get(key)
    first_render = state is None
    if state is None:
        state = SearchSelect(display_key=display_key, placeholder=placeholder)
    state.on_change = on_change
    if loading:
        state.loading = True
    else:
        state.set_options(options)
        if first_render and value_id is not None:
            state.value = next((o for o in state.options if o.get("id") == value_id), None)
    st.session_state[key] = state

    query = st.text_input(
        label,
        value=state.query,
        placeholder=state.current_placeholder,
        disabled=state.input_disabled,
        key=f"{key}__query",
    )
    if state.input_disabled:
        st.caption(LOADING_PLACEHOLDER)
        return None

    by_id = {o.get("id"): o for o in state.set_query(query)}
    choices: list[Any] = [None] + list(by_id)
    pick_key = f"{key}__pick"
    # The widget shows the selector's value; a selection hidden by the
    # current query stays selected and the box shows no pick.
    st.session_state[pick_key] = state.value_id if state.value_id in by_id else None
    st.selectbox(
        f"{label} ({len(by_id)} match{'es' if len(by_id) != 1 else ''})",
        choices,
        format_func=lambda i: "—" if i is None else str(by_id.get(i, {}).get(display_key) or ""),
        key=pick_key,
        on_change=_apply_pick,
        args=(key,),
        label_visibility="collapsed",
    )
    return state.value


def _apply_pick(key: str) -> None:
    """Widget callback: apply the picked id to the selector. Ids no longer offered are ignored."""
    state: SearchSelect = st.session_state[key]
    if state.loading:
        return
    picked = st.session_state[f"{key}__pick"]
    if picked is None:
        state.select(None)
        return
    option = next((o for o in state.options if o.get("id") == picked), None)
    if option is not None:
        state.select(option)
