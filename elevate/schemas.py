"""Pydantic request schemas for the Elevate Control API.

Field names follow the JSON wire format (camelCase, Portuguese). Responses
are produced by `elevate.normalizer`, not by response models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from elevate.models import NivelAcesso


def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ----------------------------- Faixas --------------------------------
class FaixaCreate(BaseModel):
    tipo: str = Field(default="faixa", min_length=1, max_length=32)
    nome: str = Field(..., min_length=1, max_length=255)
    faixa: Optional[str] = Field(None, max_length=255)
    vlanNome: Optional[str] = Field(None, max_length=255)
    vlanId: Optional[int] = Field(None, ge=0, le=4095)

    @field_validator("nome", mode="before")
    def strip_nome(cls, v):
        return _strip(v)

    @field_validator("faixa", "vlanNome", "vlanId", mode="before")
    def blank_optional(cls, v):
        return _blank_to_none(v)


# ------------------------- Marcas / Tipos ----------------------------
class MarcaCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)

    @field_validator("nome", mode="before")
    def strip_nome(cls, v):
        return _strip(v)


class TipoCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)

    @field_validator("nome", mode="before")
    def strip_nome(cls, v):
        return _strip(v)


# ----------------------------- Modelos -------------------------------
class ModeloCreate(BaseModel):
    nome: str = Field(..., min_length=1, max_length=255)
    marca: str = Field(..., min_length=1, max_length=64)

    @field_validator("nome", mode="before")
    def strip_nome(cls, v):
        return _strip(v)


# --------------------------- Impressoras -----------------------------
class ImpressoraCreate(BaseModel):
    setor: str = Field(..., min_length=1, max_length=255)
    numeroSerie: str = Field(..., min_length=1, max_length=255)
    tipo: str = Field(..., min_length=1, max_length=64)
    enderecoIP: str = Field(..., min_length=1, max_length=64)
    categoria: Optional[str] = Field(None, max_length=255)
    faixa: Optional[str] = Field(None, max_length=64)
    modelo: Optional[str] = Field(None, max_length=64)

    @field_validator("setor", "numeroSerie", "enderecoIP", mode="before")
    def strip_required(cls, v):
        return _strip(v)

    @field_validator("categoria", "faixa", "modelo", mode="before")
    def blank_optional(cls, v):
        return _blank_to_none(v)


# --------------------------- Automações ------------------------------
class AutomacaoCreate(BaseModel):
    ip: str = Field(..., min_length=1, max_length=64)
    equipamento: str = Field(..., min_length=1, max_length=255)
    porta: Optional[int] = Field(None, ge=1, le=65535)
    categoria: Optional[str] = Field(None, max_length=255)
    faixa: Optional[str] = Field(None, max_length=64)

    @field_validator("ip", "equipamento", mode="before")
    def strip_required(cls, v):
        return _strip(v)

    @field_validator("porta", "categoria", "faixa", mode="before")
    def blank_optional(cls, v):
        return _blank_to_none(v)


# ----------------------------- Users ---------------------------------
class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=6)
    fullName: str = Field(..., min_length=1, max_length=255)
    funcao: str = Field(default="Consultor TI", min_length=1, max_length=255)
    isAdmin: bool = False
    nivelAcesso: NivelAcesso = NivelAcesso.SUPORTE

    @field_validator("username", mode="before")
    def normalize_username(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("fullName", "funcao", mode="before")
    def strip_names(cls, v):
        return _strip(v)


__all__ = [
    "NivelAcesso",
    "FaixaCreate",
    "MarcaCreate",
    "TipoCreate",
    "ModeloCreate",
    "ImpressoraCreate",
    "AutomacaoCreate",
    "UserCreate",
]
