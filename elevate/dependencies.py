"""Common FastAPI dependency helpers for the session check.

Provides:
- SESSION_COOKIE_NAME
- require_session (raises 401 when the session cookie is missing or invalid)

Routes declare `require_session` before `get_db`, so an unauthenticated
request never opens a database session.
"""

from __future__ import annotations

import logging
import os

from fastapi import Request

from elevate.auth import verify_token
from elevate.errors import unauthorized

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "token")


def require_session(request: Request) -> dict:
    """Dependency that returns the verified token payload or raises 401."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    payload = verify_token(token)
    if payload is None:
        logger.debug("require_session: denied (cookie present=%s)", token is not None)
        raise unauthorized()
    return payload


__all__ = ["SESSION_COOKIE_NAME", "require_session"]
