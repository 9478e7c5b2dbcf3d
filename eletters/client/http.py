"""HTTP clients for the draft and import services.

Both clients turn every transport or payload problem into a value the
caller can branch on; nothing here raises for a bad remote.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path

import httpx

from eletters.document.models import Letter
from eletters.document.validation import LetterValidationError, parse_letter
from eletters.drafter.models import RemoteFailure, RemoteResult, RemoteSuccess
from eletters.importer.models import ImportResponse

logger = logging.getLogger(__name__)

DRAFT_PATH = "/api/eletters/ai-draft"
IMPORT_PATH = "/api/eletters/import"

_VALID_SOURCES = {"remote-primary", "remote-secondary", "heuristic"}


def error_message(response: httpx.Response) -> str:
    """JSON ``error`` field, else the body text, else ``HTTP <status>``."""
    text = response.text
    try:
        parsed = response.json()
    except ValueError:
        parsed = None
    if isinstance(parsed, dict) and parsed.get("error"):
        return str(parsed["error"])
    return text or f"HTTP {response.status_code}"


class _ServiceClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        )


class RemoteDraftClient(_ServiceClient):
    """Client for ``POST /api/eletters/ai-draft``."""

    async def draft(self, prompt: str, current: Letter | None = None) -> RemoteResult:
        body = {"prompt": prompt, "currentDraftJson": current.to_json() if current else None}
        try:
            async with self._client() as client:
                response = await client.post(DRAFT_PATH, json=body)
        except httpx.HTTPError as e:
            logger.info("draft service unreachable: %s", e)
            return RemoteFailure(reason=str(e) or type(e).__name__)

        if response.status_code >= 400:
            return RemoteFailure(reason=f"HTTP {response.status_code}")
        try:
            data = response.json()
            letter = parse_letter(data.get("draftJson") if isinstance(data, dict) else None)
        except ValueError as e:
            return RemoteFailure(reason=str(e))

        source = data.get("source")
        warning = data.get("warning")
        return RemoteSuccess(
            letter=letter,
            source=source if source in _VALID_SOURCES else "heuristic",
            warning=warning if isinstance(warning, str) else None,
        )


class RemoteImportClient(_ServiceClient):
    """Client for ``POST /api/eletters/import``."""

    async def import_file(
        self, file_name: str, content: bytes, mime_type: str | None = None
    ) -> ImportResponse:
        body = {
            "fileName": file_name,
            "mimeType": mime_type or "application/octet-stream",
            "data": base64.b64encode(content).decode("ascii"),
        }
        try:
            async with self._client() as client:
                response = await client.post(IMPORT_PATH, json=body)
        except httpx.HTTPError as e:
            return ImportResponse(error=str(e) or type(e).__name__)

        if response.status_code >= 400:
            return ImportResponse(error=error_message(response))
        try:
            return ImportResponse.model_validate(response.json())
        except ValueError as e:
            return ImportResponse(error=f"Invalid import response: {e}")

    async def import_path(self, path: Path, mime_type: str | None = None) -> ImportResponse:
        return await self.import_file(path.name, path.read_bytes(), mime_type)


def letter_from_import(response: ImportResponse) -> Letter | None:
    """The imported letter, or None when the import produced none."""
    if not response.draft_json:
        return None
    try:
        return parse_letter(response.draft_json)
    except LetterValidationError as e:
        logger.warning("discarding invalid imported draft: %s", e)
        return None
