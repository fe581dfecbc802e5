"""
Cross-origin policy: exactly one browser origin may call the API.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import settings

logger = logging.getLogger(__name__)


def origin_allowed(origin: str | None, allowed: str | None) -> bool:
    # Requests without an Origin header are not cross-origin (curl, server-to-server, tests).
    if origin is None:
        return True
    return allowed is not None and origin == allowed


def install_cors(app: FastAPI) -> None:
    allowed = settings.frontend_url()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[allowed] if allowed else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Registered after CORSMiddleware so it runs first and also rejects preflights.
    @app.middleware("http")
    async def reject_foreign_origins(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        origin = request.headers.get("origin")
        if not origin_allowed(origin, allowed):
            logger.warning("cors_rejected origin=%s path=%s", origin, request.url.path)
            return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"error": "CORS error"})
        return await call_next(request)
