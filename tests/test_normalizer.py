from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from elevate.entities import AUTOMACAO, IMPRESSORA, MODELO, USER
from elevate.normalizer import (
    NOT_AVAILABLE,
    NormalizationError,
    Resolved,
    Unresolved,
    classify_reference,
    format_timestamp,
    normalize,
    normalize_many,
    normalize_safe,
)


CREATED = datetime(2025, 3, 1, 12, 30, tzinfo=timezone.utc)


def _printer(**refs):
    raw = {
        "_id": "imp-1",
        "setor": "Financeiro",
        "numeroSerie": "BR123",
        "enderecoIP": "10.0.0.5",
        "categoria": None,
        "created_at": CREATED,
        "updated_at": CREATED,
        "tipo": None,
        "modelo": None,
        "faixa": None,
    }
    raw.update(refs)
    return raw


def _is_iso(value):
    datetime.fromisoformat(value)
    return True


def test_absent_references_are_null():
    out = normalize(_printer(), IMPRESSORA)
    assert out["_id"] == "imp-1"
    assert out["tipo"] is None and out["modelo"] is None and out["faixa"] is None
    assert out["categoria"] is None
    assert out["createdAt"] == CREATED.isoformat()


def test_bare_identifier_becomes_not_available_placeholder():
    out = normalize(_printer(tipo=Unresolved("t-1"), modelo="m-1", faixa=42), IMPRESSORA)
    assert out["tipo"] == {"_id": "t-1", "nome": NOT_AVAILABLE}
    assert out["modelo"] == {"_id": "m-1", "nome": NOT_AVAILABLE, "marca": None}
    assert out["faixa"]["_id"] == "42"
    assert out["faixa"]["nome"] == NOT_AVAILABLE
    assert set(out["faixa"]) == {"_id", "tipo", "nome", "faixa", "vlanNome", "vlanId"}


def test_expanded_references_recurse_into_brand():
    marca = {"_id": "b-1", "nome": "Brother"}
    modelo = Resolved({"_id": "m-1", "nome": "HL-L2350", "marca": Resolved(marca)})
    faixa = Resolved({"_id": "f-1", "tipo": "vlan", "nome": "Produção", "faixa": "10.1.0.0/16", "vlanNome": "PROD", "vlanId": 20})
    out = normalize(_printer(modelo=modelo, faixa=faixa), IMPRESSORA)

    assert out["modelo"] == {"_id": "m-1", "nome": "HL-L2350", "marca": {"_id": "b-1", "nome": "Brother"}}
    assert out["faixa"]["vlanId"] == 20
    assert out["faixa"]["nome"] == "Produção"
    assert "createdAt" not in out["modelo"]


def test_expanded_model_with_bare_brand_id():
    out = normalize(_printer(modelo={"_id": "m-2", "nome": "X", "marca": "b-9"}), IMPRESSORA)
    assert out["modelo"]["marca"] == {"_id": "b-9", "nome": NOT_AVAILABLE}


def test_expanded_reference_without_name_gets_not_available():
    out = normalize(_printer(tipo={"_id": "t-2"}), IMPRESSORA)
    assert out["tipo"] == {"_id": "t-2", "nome": NOT_AVAILABLE}


def test_missing_timestamps_fall_back_to_now():
    raw = _printer()
    del raw["created_at"]
    raw["updated_at"] = "not a date"
    before = datetime.now(timezone.utc)
    out = normalize(raw, IMPRESSORA)
    assert datetime.fromisoformat(out["createdAt"]) >= before
    assert _is_iso(out["updatedAt"])


def test_naive_timestamp_is_treated_as_utc():
    assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05+00:00"
    assert format_timestamp("2024-01-02T03:04:05.000Z") == "2024-01-02T03:04:05+00:00"


def test_normalize_is_idempotent():
    modelo = Resolved({"_id": "m-1", "nome": "HL", "marca": Resolved({"_id": "b-1", "nome": "Brother"})})
    first = normalize(_printer(modelo=modelo, tipo="t-1"), IMPRESSORA)
    second = normalize(first, IMPRESSORA)
    assert second == first


def test_attribute_style_records_are_supported():
    row = SimpleNamespace(
        id=7,
        ip="10.2.0.9",
        equipamento="CLP Linha 3",
        porta=None,
        categoria="Produção",
        faixa=None,
        created_at=CREATED,
        updated_at=None,
    )
    out = normalize(row, AUTOMACAO)
    assert out["_id"] == "7"
    assert out["porta"] is None
    assert out["faixa"] is None
    assert _is_iso(out["updatedAt"])


def test_classify_reference_shapes():
    assert classify_reference(None) is None
    assert classify_reference("") is None
    assert classify_reference({"nome": "no id"}) is None
    assert isinstance(classify_reference("abc"), Unresolved)
    assert isinstance(classify_reference({"_id": "x"}), Resolved)
    assert isinstance(classify_reference(SimpleNamespace(id="x", nome="y")), Resolved)


def test_strict_normalize_raises_on_malformed_expansion():
    with pytest.raises(NormalizationError):
        normalize(_printer(modelo=Resolved({"nome": "no id"})), IMPRESSORA)


def test_malformed_record_degrades_instead_of_failing_listing():
    good = _printer()
    bad = _printer(_id="imp-2", setor="", modelo=Resolved({"nome": "no id"}), tipo="t-1")
    out = normalize_many([good, bad, None], IMPRESSORA)

    assert len(out) == 2
    degraded = out[1]
    assert degraded["_id"] == "imp-2"
    assert degraded["setor"] == "N/A"
    assert degraded["numeroSerie"] == "BR123"
    assert degraded["tipo"] is None and degraded["modelo"] is None and degraded["faixa"] is None
    assert _is_iso(degraded["createdAt"])


class _Exploding:
    id = "imp-3"
    setor = "TI"
    created_at = None
    updated_at = None

    @property
    def numeroSerie(self):
        raise RuntimeError("corrupt row")


def test_normalize_safe_survives_attribute_errors():
    out = normalize_safe(_Exploding(), IMPRESSORA)
    assert out["_id"] == "imp-3"
    assert out["numeroSerie"] == "N/A"
    assert out["modelo"] is None


def test_model_with_absent_brand():
    out = normalize({"_id": "m-1", "nome": "X", "marca": None}, MODELO)
    assert out["marca"] is None


def test_user_output_has_no_password():
    out = normalize({"_id": "u-1", "username": "ana", "hashed_password": "x", "password": "y", "is_admin": False}, USER)
    assert "password" not in out and "hashed_password" not in out
    assert out["isAdmin"] is False
    assert out["nivelAcesso"] == "suporte"
    assert out["funcao"] == "Consultor TI"


def test_boolean_reference_is_malformed():
    with pytest.raises(NormalizationError):
        normalize(_printer(modelo=True), IMPRESSORA)

    out = normalize_safe(_printer(modelo=True), IMPRESSORA)
    assert out["modelo"] is None
    assert out["numeroSerie"] == "BR123"
