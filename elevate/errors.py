"""Centralized API error helpers and standard error schema.

Provides:
- api_error(...) -> HTTPException with JSON detail: {"error": {"code": str, "message": str, "details": ...}}
- make_validation_error_response(...) -> dict payload used by the validation handler
- error_payload(...) -> normalizes any HTTPException detail into the standard shape
- conflict_or_invalid(...) -> maps an IntegrityError to the right 400 error
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError


def api_error(status_code: int, code: str, message: str, details: Optional[Any] = None, headers: Optional[dict] = None) -> HTTPException:
    payload: dict = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return HTTPException(status_code=status_code, detail=payload, headers=headers)


def unauthorized() -> HTTPException:
    return api_error(status.HTTP_401_UNAUTHORIZED, "unauthorized", "Unauthorized")


def not_found(entity: str) -> HTTPException:
    return api_error(status.HTTP_404_NOT_FOUND, "not_found", f"{entity} not found")


def conflict(code: str, message: str) -> HTTPException:
    return api_error(status.HTTP_400_BAD_REQUEST, code, message)


def conflict_or_invalid(exc: IntegrityError, code: str, message: str) -> HTTPException:
    """Uniqueness violations become the domain conflict; anything else is a bad reference."""
    text = str(getattr(exc, "orig", exc)).lower()
    if "unique" in text or "duplicate" in text:
        return conflict(code, message)
    return api_error(status.HTTP_400_BAD_REQUEST, "invalid_reference", "Referência inválida")


def _field_message(error: dict) -> str:
    loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
    msg = error.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def make_validation_error_response(errors: Any) -> dict:
    messages = [_field_message(e) for e in errors if isinstance(e, dict)]
    message = ", ".join(messages) if messages else "Validation error"
    payload = {"error": {"code": "validation_error", "message": message, "details": errors}}
    # `ctx` may hold ValueError objects and `input` the raw body bytes of a non-JSON request
    return jsonable_encoder(payload, custom_encoder={Exception: str, bytes: lambda b: b.decode("utf-8", "replace")})


def error_payload(detail: Any) -> dict:
    if isinstance(detail, dict) and isinstance(detail.get("error"), dict):
        return detail
    return {"error": {"code": "http_error", "message": str(detail)}}


__all__ = [
    "api_error",
    "unauthorized",
    "not_found",
    "conflict",
    "conflict_or_invalid",
    "make_validation_error_response",
    "error_payload",
]
