"""
Tally Client - XML-over-HTTP link to the Tally accounting server
================================================================
Posts raw XML envelopes to a Tally server and returns the response text.
Failures carry an HTTP-style status: 400 bad request, 502 unreachable,
504 timed out.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from config import AppConfig


logger = logging.getLogger(__name__)

SEND_TIMEOUT_SECONDS = 30
TEST_TIMEOUT_SECONDS = 15


class TallyError(RuntimeError):
    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


@dataclass
class TallyConnection:
    connected: bool
    companies: List[str] = field(default_factory=list)
    version: str = ""


def company_list_request(company: Optional[str] = None) -> str:
    current = f"<SVCURRENTCOMPANY>{company}</SVCURRENTCOMPANY>" if company else ""
    return f"""<ENVELOPE>
  <HEADER>
    <VERSION>1</VERSION>
    <TALLYREQUEST>Export</TALLYREQUEST>
    <TYPE>Data</TYPE>
    <ID>List of Companies</ID>
  </HEADER>
  <BODY>
    <DESC>
      <STATICVARIABLES>
        <SVEXPORTFORMAT>$$SysName:XML</SVEXPORTFORMAT>
        {current}
      </STATICVARIABLES>
    </DESC>
  </BODY>
</ENVELOPE>"""


def parse_companies(xml: str) -> TallyConnection:
    companies: List[str] = []
    for name in re.findall(r"<NAME[^>]*>([^<]+)</NAME>", xml, flags=re.IGNORECASE):
        name = name.strip()
        if name and name not in companies:
            companies.append(name)
    version = re.search(r"<VERSION[^>]*>([^<]+)</VERSION>", xml, flags=re.IGNORECASE)
    return TallyConnection(connected=True, companies=companies, version=version.group(1) if version else "Connected")


class TallyClient:
    def __init__(self, server_url: Optional[str]):
        self.server_url = (server_url or "").strip()

    def send(self, xml_body: str, timeout: int = SEND_TIMEOUT_SECONDS) -> str:
        if not self.server_url or not (xml_body or "").strip():
            raise TallyError("Missing serverUrl or xmlBody", status=400)
        try:
            resp = requests.post(
                self.server_url,
                data=xml_body.encode("utf-8"),
                headers={"Content-Type": "application/xml"},
                timeout=timeout,
            )
        except requests.Timeout as e:
            raise TallyError(f"Connection to Tally server timed out ({timeout}s)", status=504) from e
        except requests.RequestException as e:
            logger.error("Tally server %s unreachable: %s", self.server_url, e)
            raise TallyError(f"Cannot connect to Tally server at {self.server_url}: {e}", status=502) from e
        return resp.text

    def test_connection(self, company: Optional[str] = None) -> TallyConnection:
        return parse_companies(self.send(company_list_request(company), timeout=TEST_TIMEOUT_SECONDS))


def get_tally_client(cfg: AppConfig, server_url: Optional[str] = None) -> TallyClient:
    return TallyClient(server_url or cfg.tally_server_url)
