"""
Document Client - clinical document generation endpoint
========================================================
Sends patient details plus a document type (discharge summary, DAMA note,
death summary, ...) to the configured document endpoint and returns the
generated text.

Request:  POST {"details": str, "promptType": str}
Response: {"summary": str} or {"error": str, ...}
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from config import AppConfig


logger = logging.getLogger(__name__)

PROMPT_TYPES = [
    "Discharge Summary",
    "DAMA",
    "Death Summary",
    "Death Certificate",
    "Injury Report",
    "Physiotherapy Instructions",
]

TIMEOUT_SECONDS = 15


class DocumentGenerationError(RuntimeError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


@dataclass(frozen=True)
class GeneratedDocument:
    prompt_type: str
    summary: str


class DocumentClient:
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.url = cfg.document_api_url

    def is_configured(self) -> bool:
        return bool(self.url)

    def generate(self, details: str, prompt_type: str) -> GeneratedDocument:
        details = (details or "").strip()
        prompt_type = (prompt_type or "").strip()
        if not details or not prompt_type:
            raise DocumentGenerationError("Missing details or promptType", status=400)
        if not self.is_configured():
            raise DocumentGenerationError("Document endpoint is not configured (DOCUMENT_API_URL)")

        try:
            resp = requests.post(
                self.url,
                json={"details": details, "promptType": prompt_type},
                timeout=TIMEOUT_SECONDS,
            )
        except requests.Timeout as e:
            raise DocumentGenerationError(f"Document endpoint timed out ({TIMEOUT_SECONDS}s)", status=504) from e
        except requests.RequestException as e:
            raise DocumentGenerationError(f"Cannot reach document endpoint: {e}", status=502) from e

        try:
            data = resp.json()
        except ValueError:
            data = {}

        if resp.status_code >= 300 or not data.get("summary"):
            error = data.get("error") or f"No summary generated (HTTP {resp.status_code})"
            logger.error("Document generation failed for %s: %s", prompt_type, error)
            raise DocumentGenerationError(error, status=resp.status_code)

        return GeneratedDocument(prompt_type=prompt_type, summary=data["summary"])


def get_document_client(cfg: AppConfig) -> DocumentClient:
    return DocumentClient(cfg)
