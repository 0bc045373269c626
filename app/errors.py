"""Structured error helpers for API responses."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        self.payload = build_error_payload(code, message, details)


class ValidationError(AppError):
    """Malformed identifier, timestamp or numeric field. Raised before any mutation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, "validation_error", message, details)


class NotFoundError(AppError):
    """Referenced task or billing record is absent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_404_NOT_FOUND, "not_found", message, details)


class CollaboratorError(AppError):
    """A synchronous call to another service failed (transport, status or body)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_502_BAD_GATEWAY, "collaborator_error", message, details)


class AuthorizationError(AppError):
    """Caller could not be resolved, or resolved to a role that is not allowed."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        *,
        resolved: bool = True,
    ):
        if resolved:
            super().__init__(status.HTTP_403_FORBIDDEN, "forbidden", message, details)
        else:
            super().__init__(status.HTTP_401_UNAUTHORIZED, "unauthorized", message, details)


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)
