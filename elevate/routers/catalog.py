"""Brand and device-type routes.

Both are plain named lookups referenced by models and printers, so they
share one module with two routers.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from elevate import repository, schemas
from elevate.database import get_db
from elevate.dependencies import require_session
from elevate.entities import MARCA, TIPO
from elevate.errors import conflict
from elevate.helpers.responses import create_payload, detail_payload, list_payload

marcas_router = APIRouter(prefix="/api/marcas", tags=["Marcas"])
tipos_router = APIRouter(prefix="/api/tipos", tags=["Tipos"])

MARCA_CONFLICT = "Esta marca já está cadastrada"
TIPO_CONFLICT = "Este tipo já está cadastrado"


@marcas_router.get("")
async def list_marcas(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None)) -> dict:
    return list_payload(db, MARCA, page)


@marcas_router.get("/{marca_id}")
async def get_marca(marca_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    return detail_payload(db, MARCA, marca_id)


@marcas_router.post("", status_code=status.HTTP_201_CREATED)
async def create_marca(payload: schemas.MarcaCreate, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    if repository.exists(db, MARCA, nome=payload.nome):
        raise conflict("marca_exists", MARCA_CONFLICT)
    return create_payload(db, MARCA, {"nome": payload.nome}, "marca_exists", MARCA_CONFLICT)


@tipos_router.get("")
async def list_tipos(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None)) -> dict:
    return list_payload(db, TIPO, page)


@tipos_router.get("/{tipo_id}")
async def get_tipo(tipo_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    return detail_payload(db, TIPO, tipo_id)


@tipos_router.post("", status_code=status.HTTP_201_CREATED)
async def create_tipo(payload: schemas.TipoCreate, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    if repository.exists(db, TIPO, nome=payload.nome):
        raise conflict("tipo_exists", TIPO_CONFLICT)
    return create_payload(db, TIPO, {"nome": payload.nome}, "tipo_exists", TIPO_CONFLICT)
