from __future__ import annotations

import streamlit as st

from data.service import DataResult


def render_page_intro(title: str, body: str | None = None) -> None:
    st.markdown(
        f"""
<div class="page-intro">
  <div class="page-intro-title">{title}</div>
  {f'<div class="page-intro-body">{body}</div>' if body else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def render_result_error(result: DataResult) -> bool:
    """
    Inline error banner for a failed fetch. Returns True when the result
    failed so the caller can stop rendering that section.
    """
    if result.ok:
        return False
    st.error(result.error)
    if result.source == "supabase":
        st.caption("Check the Supabase URL/key in `.env`, or switch on mock data under ⚙️ Settings.")
    return True
