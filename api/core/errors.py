"""
API error types and their JSON rendering.

Handlers raise these; `install_exception_handlers` turns them into responses
so every failure path has one documented body shape.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, payload: dict[str, Any]) -> None:
        super().__init__(payload)
        self.payload = payload


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str) -> None:
        super().__init__({"error": message})
        self.message = message


class ValidationFailedError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__({"errors": errors})
        self.errors = errors


class DatabaseUnavailableError(ApiError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: str = "Database unavailable") -> None:
        super().__init__({"error": message})


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
