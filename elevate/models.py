"""SQLAlchemy models for the Elevate Control inventory.

Models implemented:
- FaixaModel (address range / VLAN)
- MarcaModel (brand)
- TipoModel (device type)
- ModeloModel (device model, belongs to one brand)
- ImpressoraModel (printer)
- AutomacaoModel (automation endpoint)
- UserModel

Relationships use ``lazy="raise"``: a reference is only resolved when the
data-access layer asks for it with an explicit loader option.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from elevate.database import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _uuid() -> str:
    return str(uuid.uuid4())


class NivelAcesso(str, PyEnum):
    ADMIN = "admin"
    ANALISTA = "analista"
    SUPORTE = "suporte"


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_now, onupdate=_now)


class FaixaModel(TimestampMixin, Base):
    __tablename__ = "faixas"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    tipo: Mapped[str] = mapped_column(String(32), default="faixa", nullable=False)
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    faixa: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    vlan_nome: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    vlan_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Faixa id={self.id} nome={self.nome}>"


class MarcaModel(TimestampMixin, Base):
    __tablename__ = "marcas"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    nome: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Marca id={self.id} nome={self.nome}>"


class TipoModel(TimestampMixin, Base):
    __tablename__ = "tipos"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    nome: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Tipo id={self.id} nome={self.nome}>"


class ModeloModel(TimestampMixin, Base):
    __tablename__ = "modelos"
    __table_args__ = (UniqueConstraint("nome", "marca_id", name="uq_modelos_nome_marca"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    nome: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    marca_id: Mapped[str] = mapped_column(String(64), ForeignKey("marcas.id"), nullable=False)

    marca = relationship("MarcaModel", foreign_keys=[marca_id], lazy="raise")

    def __repr__(self) -> str:
        return f"<Modelo id={self.id} nome={self.nome}>"


class ImpressoraModel(TimestampMixin, Base):
    __tablename__ = "impressoras"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    setor: Mapped[str] = mapped_column(String(255), nullable=False)
    numero_serie: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    endereco_ip: Mapped[str] = mapped_column(String(64), nullable=False)
    categoria: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    tipo_id: Mapped[Optional[str]] = mapped_column(String(64), ForeignKey("tipos.id"), nullable=True)
    modelo_id: Mapped[Optional[str]] = mapped_column(String(64), ForeignKey("modelos.id"), nullable=True)
    faixa_id: Mapped[Optional[str]] = mapped_column(String(64), ForeignKey("faixas.id"), nullable=True)

    tipo = relationship("TipoModel", foreign_keys=[tipo_id], lazy="raise")
    modelo = relationship("ModeloModel", foreign_keys=[modelo_id], lazy="raise")
    faixa = relationship("FaixaModel", foreign_keys=[faixa_id], lazy="raise")

    def __repr__(self) -> str:
        return f"<Impressora id={self.id} numero_serie={self.numero_serie}>"


class AutomacaoModel(TimestampMixin, Base):
    __tablename__ = "automacoes"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    ip: Mapped[str] = mapped_column(String(64), nullable=False)
    equipamento: Mapped[str] = mapped_column(String(255), nullable=False)
    porta: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    categoria: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    faixa_id: Mapped[Optional[str]] = mapped_column(String(64), ForeignKey("faixas.id"), nullable=True)

    faixa = relationship("FaixaModel", foreign_keys=[faixa_id], lazy="raise")

    def __repr__(self) -> str:
        return f"<Automacao id={self.id} equipamento={self.equipamento}>"


class UserModel(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_uuid)
    username: Mapped[str] = mapped_column(String(150), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    funcao: Mapped[str] = mapped_column(String(255), default="Consultor TI", nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    nivel_acesso: Mapped[str] = mapped_column(String(32), default=NivelAcesso.SUPORTE.value, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"<User id={self.id} username={self.username} nivel={self.nivel_acesso}>"


__all__ = [
    "NivelAcesso",
    "FaixaModel",
    "MarcaModel",
    "TipoModel",
    "ModeloModel",
    "ImpressoraModel",
    "AutomacaoModel",
    "UserModel",
]
