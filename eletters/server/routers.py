"""HTTP routes: AI drafting and questionnaire import.

Failures are returned as ``{"error": "..."}`` bodies so the remote clients
can surface them verbatim.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from eletters.drafter import Drafter
from eletters.importer.models import ImportRequest
from eletters.importer.service import ImportService
from eletters.server.schemas import DraftRequest, DraftResponse

router = APIRouter(prefix="/api/eletters", tags=["eletters"])
logger = logging.getLogger(__name__)


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


@router.post("/ai-draft", response_model=DraftResponse, response_model_exclude_none=True)
async def ai_draft(request: Request, req: DraftRequest = Body(...)):
    """Draft or edit a letter from a prompt."""
    prompt = req.prompt.strip()
    if not prompt:
        return _error(400, "Missing prompt")

    drafter: Drafter = request.app.state.drafter
    try:
        logger.info(
            "ai-draft: prompt_chars=%s current=%s",
            len(prompt),
            "yes" if req.current_draft_json else "no",
        )
        result = await drafter.draft(prompt, req.current_draft_json)
    except Exception:
        logger.exception("ai-draft: unexpected error")
        return _error(500, "Failed to generate draft")

    logger.info("ai-draft: source=%s warning=%s", result.source, result.warning or "-")
    return DraftResponse(
        draft_json=result.letter.to_json(),
        source=result.source,
        warning=result.warning,
    )


@router.post("/import")
async def import_questionnaire(request: Request, req: ImportRequest = Body(...)):
    """Convert an uploaded questionnaire into draft JSON."""
    importer: ImportService = request.app.state.importer
    try:
        result = importer.import_payload(req.file_name, req.mime_type, req.data)
    except Exception:
        logger.exception("import: unexpected error for %s", req.file_name)
        return _error(500, "Failed to import file")

    if result.error:
        logger.info("import: rejected %s: %s", req.file_name, result.error)
        return _error(400, result.error)
    return result.to_wire()
