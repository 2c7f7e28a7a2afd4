"""User management routes: create, read and list users.

Endpoints implemented:
- POST /api/users
- GET  /api/users/{id}
- GET  /api/users          (paginated)

Passwords are stored hashed and never returned.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from elevate import repository, schemas
from elevate.auth import get_password_hash
from elevate.database import get_db
from elevate.dependencies import require_session
from elevate.entities import USER
from elevate.errors import conflict
from elevate.helpers.responses import create_payload, detail_payload, list_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])

USERNAME_CONFLICT = "Este nome de usuário já está cadastrado"


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(user_in: schemas.UserCreate, session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    """Create a new user. Usernames are stored trimmed and lowercased."""
    if repository.exists(db, USER, username=user_in.username):
        raise conflict("username_in_use", USERNAME_CONFLICT)

    values = {
        "username": user_in.username,
        "hashed_password": get_password_hash(user_in.password),
        "full_name": user_in.fullName,
        "funcao": user_in.funcao,
        "is_admin": user_in.isAdmin,
        "nivel_acesso": user_in.nivelAcesso.value,
    }
    body = create_payload(db, USER, values, "username_in_use", USERNAME_CONFLICT)
    logger.info("User %s created by %s", user_in.username, session.get("sub"))
    return body


@router.get("")
async def list_users(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None)) -> dict:
    return list_payload(db, USER, page)


@router.get("/{user_id}")
async def get_user(user_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    return detail_payload(db, USER, user_id)
