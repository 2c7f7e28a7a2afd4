"""Address range / VLAN routes."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from elevate import schemas
from elevate.database import get_db
from elevate.dependencies import require_session
from elevate.entities import FAIXA
from elevate.helpers.responses import create_payload, detail_payload, list_payload

router = APIRouter(prefix="/api/faixas", tags=["Faixas"])


@router.get("")
async def list_faixas(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None)) -> dict:
    return list_payload(db, FAIXA, page)


@router.get("/{faixa_id}")
async def get_faixa(faixa_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    return detail_payload(db, FAIXA, faixa_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_faixa(payload: schemas.FaixaCreate, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    values = {
        "tipo": payload.tipo,
        "nome": payload.nome,
        "faixa": payload.faixa,
        "vlan_nome": payload.vlanNome,
        "vlan_id": payload.vlanId,
    }
    return create_payload(db, FAIXA, values, "faixa_exists", "Esta faixa já está cadastrada")
