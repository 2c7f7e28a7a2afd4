"""Device model routes. A model name is unique per brand."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from elevate import repository, schemas
from elevate.database import get_db
from elevate.dependencies import require_session
from elevate.entities import MODELO
from elevate.errors import conflict
from elevate.helpers.responses import create_payload, detail_payload, list_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/modelos", tags=["Modelos"])

MODELO_CONFLICT = "Este modelo já existe para esta marca"


@router.get("")
async def list_modelos(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None), populate: Optional[str] = Query(None)) -> dict:
    """List models alphabetically with their brand expanded."""
    return list_payload(db, MODELO, page, populate)


@router.get("/{modelo_id}")
async def get_modelo(modelo_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db), populate: Optional[str] = Query(None)) -> dict:
    return detail_payload(db, MODELO, modelo_id, populate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_modelo(payload: schemas.ModeloCreate, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    logger.debug("Creating modelo nome=%s marca=%s", payload.nome, payload.marca)
    if repository.exists(db, MODELO, nome=payload.nome, marca_id=payload.marca):
        raise conflict("modelo_exists", MODELO_CONFLICT)

    values = {"nome": payload.nome, "marca_id": payload.marca}
    return create_payload(db, MODELO, values, "modelo_exists", MODELO_CONFLICT)
