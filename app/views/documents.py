"""
Documents View
==============
Drafts clinical documents (discharge summary, DAMA, death summary, ...)
from free-text patient details via the document endpoint.
"""
from __future__ import annotations

import streamlit as st

from components.narrative import render_page_intro
from config import AppConfig
from data.document_client import PROMPT_TYPES, DocumentGenerationError, get_document_client


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Documents")
    render_page_intro(
        "Clinical documents",
        "Paste the patient details, pick a document type and generate a draft for review.",
    )

    client = get_document_client(cfg)
    if not client.is_configured():
        st.warning("Document endpoint is not configured. Set `DOCUMENT_API_URL` in `.env`.")

    prompt_type = st.selectbox("Document type", PROMPT_TYPES)
    details = st.text_area(
        "Patient details",
        height=220,
        placeholder="Name, age, diagnosis, course in hospital, medications on discharge...",
    )

    if st.button("Generate", type="primary", disabled=not client.is_configured()):
        with st.spinner(f"Generating {prompt_type}..."):
            try:
                doc = client.generate(details, prompt_type)
            except DocumentGenerationError as e:
                status = f" (HTTP {e.status})" if e.status else ""
                st.error(f"{e}{status}")
                return
        st.session_state["generated_document"] = doc

    doc = st.session_state.get("generated_document")
    if doc is not None:
        st.subheader(doc.prompt_type)
        st.text_area("Draft", value=doc.summary, height=360, key="generated_document_text")
        st.download_button(
            "⬇️ Download",
            data=doc.summary,
            file_name=f"{doc.prompt_type.lower().replace(' ', '_')}.txt",
            mime="text/plain",
        )
