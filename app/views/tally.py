from __future__ import annotations

import streamlit as st

from components.metrics import Kpi, render_kpi_row
from components.narrative import render_page_intro
from config import AppConfig
from data.service import get_tally_config
from data.tally_client import TallyError, get_tally_client


def render(cfg: AppConfig, use_mock: bool) -> None:
    st.title("Tally")
    render_page_intro("Accounting link", "Check the connection to the Tally server used for billing exports.")

    # Stored settings win over .env defaults.
    saved = get_tally_config(cfg, use_mock)
    if not saved.ok:
        st.warning(saved.error)
    row = saved.records[0] if saved.records else {}

    c1, c2 = st.columns([2, 1])
    server_url = c1.text_input("Server URL", value=row.get("server_url") or cfg.tally_server_url or "", placeholder="http://localhost:9000")
    company = c2.text_input("Company", value=row.get("company_name") or cfg.tally_company or "")

    if st.button("Test connection", type="primary"):
        client = get_tally_client(cfg, server_url=server_url)
        with st.spinner("Contacting Tally..."):
            try:
                conn = client.test_connection(company or None)
            except TallyError as e:
                st.error(f"{e} (HTTP {e.status})")
                return
        render_kpi_row(
            [
                Kpi("Status", "Connected" if conn.connected else "Offline"),
                Kpi("Version", conn.version),
                Kpi("Companies", str(len(conn.companies))),
            ]
        )
        if conn.companies:
            st.markdown("**Companies on server**")
            for name in conn.companies:
                st.markdown(f"- {name}")
