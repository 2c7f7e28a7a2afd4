"""Automation endpoint routes (IP + equipment, optionally bound to an address range)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from elevate import schemas
from elevate.database import get_db
from elevate.dependencies import require_session
from elevate.entities import AUTOMACAO
from elevate.helpers.responses import create_payload, detail_payload, list_payload

router = APIRouter(prefix="/api/automacoes", tags=["Automações"])


@router.get("")
async def list_automacoes(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None), populate: Optional[str] = Query(None)) -> dict:
    return list_payload(db, AUTOMACAO, page, populate)


@router.get("/{automacao_id}")
async def get_automacao(automacao_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db), populate: Optional[str] = Query(None)) -> dict:
    return detail_payload(db, AUTOMACAO, automacao_id, populate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_automacao(payload: schemas.AutomacaoCreate, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    values = {
        "ip": payload.ip,
        "equipamento": payload.equipamento,
        "porta": payload.porta,
        "categoria": payload.categoria,
        "faixa_id": payload.faixa,
    }
    return create_payload(db, AUTOMACAO, values, "automacao_exists", "Esta automação já está cadastrada")
