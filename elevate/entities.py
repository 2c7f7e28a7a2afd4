"""Entity descriptors: the field/reference schema of every inventory kind.

These are built once at import time and passed explicitly to the
data-access layer (`elevate.repository`) and the normalizer.
"""

from __future__ import annotations

from elevate import models
from elevate.normalizer import EntityDescriptor, FieldSpec, ReferenceSpec

FAIXA = EntityDescriptor(
    name="faixa",
    singular="faixa",
    plural="faixas",
    model=models.FaixaModel,
    fields=(
        FieldSpec("tipo", default="faixa", fallback="faixa"),
        FieldSpec("nome", default="", fallback="N/A"),
        FieldSpec("faixa"),
        FieldSpec("vlanNome", "vlan_nome"),
        FieldSpec("vlanId", "vlan_id"),
    ),
)

MARCA = EntityDescriptor(
    name="marca",
    singular="marca",
    plural="marcas",
    model=models.MarcaModel,
    fields=(FieldSpec("nome", default="", fallback="N/A"),),
    order_by=("nome",),
)

TIPO = EntityDescriptor(
    name="tipo",
    singular="tipo",
    plural="tipos",
    model=models.TipoModel,
    fields=(FieldSpec("nome", default="", fallback="N/A"),),
    order_by=("nome",),
)

MODELO = EntityDescriptor(
    name="modelo",
    singular="modelo",
    plural="modelos",
    model=models.ModeloModel,
    fields=(FieldSpec("nome", default="", fallback="N/A"),),
    references=(ReferenceSpec("marca", MARCA, fk="marca_id"),),
    order_by=("nome",),
)

IMPRESSORA = EntityDescriptor(
    name="impressora",
    singular="impressora",
    plural="impressoras",
    model=models.ImpressoraModel,
    fields=(
        FieldSpec("setor", fallback="N/A"),
        FieldSpec("numeroSerie", "numero_serie", fallback="N/A"),
        FieldSpec("enderecoIP", "endereco_ip", fallback="N/A"),
        FieldSpec("categoria"),
    ),
    references=(
        ReferenceSpec("tipo", TIPO, fk="tipo_id"),
        ReferenceSpec("modelo", MODELO, fk="modelo_id"),
        ReferenceSpec("faixa", FAIXA, fk="faixa_id"),
    ),
)

AUTOMACAO = EntityDescriptor(
    name="automacao",
    singular="automacao",
    plural="automacoes",
    model=models.AutomacaoModel,
    fields=(
        FieldSpec("ip", default="", fallback=""),
        FieldSpec("equipamento", default="", fallback=""),
        FieldSpec("porta"),
        FieldSpec("categoria"),
    ),
    references=(ReferenceSpec("faixa", FAIXA, fk="faixa_id"),),
)

# Password hashes are never part of the user output.
USER = EntityDescriptor(
    name="user",
    singular="user",
    plural="users",
    model=models.UserModel,
    display_key="username",
    fields=(
        FieldSpec("username", default="", fallback="N/A"),
        FieldSpec("fullName", "full_name", default="", fallback="N/A"),
        FieldSpec("funcao", default="Consultor TI", fallback="Consultor TI"),
        FieldSpec("isAdmin", "is_admin", default=False, fallback=False),
        FieldSpec("nivelAcesso", "nivel_acesso", default=models.NivelAcesso.SUPORTE.value, fallback=models.NivelAcesso.SUPORTE.value),
    ),
)

ALL = (FAIXA, MARCA, TIPO, MODELO, IMPRESSORA, AUTOMACAO, USER)

__all__ = ["FAIXA", "MARCA", "TIPO", "MODELO", "IMPRESSORA", "AUTOMACAO", "USER", "ALL"]
