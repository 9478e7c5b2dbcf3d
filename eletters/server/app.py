"""FastAPI application factory for the eletters service.

Run with ``eletters serve`` or
``uvicorn eletters.server.app:create_app --factory``.
"""

from __future__ import annotations

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request

from eletters.config import ElettersConfig, load_config
from eletters.drafter import Drafter
from eletters.importer.service import ImportService
from eletters.log import setup_logging
from eletters.server.routers import router

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    config: ElettersConfig | None = None,
    drafter: Drafter | None = None,
    importer: ImportService | None = None,
) -> FastAPI:
    cfg = config or load_config()
    setup_logging(cfg.log_level, cfg.log_format)

    app = FastAPI(
        title="eletters",
        version="0.1.0",
        description="AI drafting and questionnaire import for interactive letters.",
    )
    app.state.config = cfg
    app.state.drafter = drafter or Drafter.from_config(cfg)
    app.state.importer = importer or ImportService(cfg.importer)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        req_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        start = time.perf_counter()
        try:
            logger.info("request start id=%s %s %s", req_id, request.method, request.url.path)
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start) * 1000)
            response.headers[REQUEST_ID_HEADER] = req_id
            logger.info(
                "request end   id=%s status=%s duration_ms=%s",
                req_id,
                response.status_code,
                duration_ms,
            )
            return response
        except Exception:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception("request error id=%s duration_ms=%s", req_id, duration_ms)
            raise

    app.include_router(router)
    return app
