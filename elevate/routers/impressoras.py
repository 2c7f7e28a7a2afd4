"""Printer routes: paginated listing, detail and creation.

Endpoints implemented:
- GET  /api/impressoras        (page, populate)
- GET  /api/impressoras/{id}
- POST /api/impressoras
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from elevate import repository, schemas
from elevate.database import get_db
from elevate.dependencies import require_session
from elevate.entities import IMPRESSORA
from elevate.errors import conflict
from elevate.helpers.responses import create_payload, detail_payload, list_payload

router = APIRouter(prefix="/api/impressoras", tags=["Impressoras"])

SERIAL_CONFLICT = "Este número de série já está cadastrado"


@router.get("")
async def list_impressoras(_session: dict = Depends(require_session), db: Session = Depends(get_db), page: Optional[str] = Query(None), populate: Optional[str] = Query(None)) -> dict:
    """List printers, newest first, with tipo/modelo(+marca)/faixa expanded."""
    return list_payload(db, IMPRESSORA, page, populate)


@router.get("/{impressora_id}")
async def get_impressora(impressora_id: str, _session: dict = Depends(require_session), db: Session = Depends(get_db), populate: Optional[str] = Query(None)) -> dict:
    return detail_payload(db, IMPRESSORA, impressora_id, populate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_impressora(payload: schemas.ImpressoraCreate, _session: dict = Depends(require_session), db: Session = Depends(get_db)) -> dict:
    """Create a printer. The serial number must be unique."""
    if repository.exists(db, IMPRESSORA, numero_serie=payload.numeroSerie):
        raise conflict("serial_in_use", SERIAL_CONFLICT)

    values = {
        "setor": payload.setor,
        "numero_serie": payload.numeroSerie,
        "endereco_ip": payload.enderecoIP,
        "categoria": payload.categoria,
        "tipo_id": payload.tipo,
        "modelo_id": payload.modelo,
        "faixa_id": payload.faixa,
    }
    return create_payload(db, IMPRESSORA, values, "serial_in_use", SERIAL_CONFLICT)
