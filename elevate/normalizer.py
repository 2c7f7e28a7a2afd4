"""Entity normalization: raw records in, stable API-facing mappings out.

A raw record is whatever the data-access layer hands back: a mapping or an
ORM-like object whose reference fields may be absent, a bare identifier, or
an expanded child record. Every entity kind is described by an
`EntityDescriptor` (see `elevate.entities`); a single set of functions here
shapes all of them.

Output contract for every record:
- ``_id`` is a string
- every declared scalar key is present (raw value or the field default)
- every reference key is present: ``None``, an N/A placeholder for a bare
  identifier, or the nested target mapping
- ``createdAt`` / ``updatedAt`` are ISO-8601 strings (current time when missing)

Normalizing an already-normalized record yields the same shape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
ID_KEY = "_id"
TIMESTAMP_KEYS: Tuple[Tuple[str, str], ...] = (("createdAt", "created_at"), ("updatedAt", "updated_at"))

# Levels of references expanded below the root record (Impressora -> Modelo -> Marca)
MAX_REFERENCE_DEPTH = 2

_MISSING = object()


@dataclass(frozen=True)
class FieldSpec:
    """A scalar field: API ``key``, source ``attr`` and the values used when it is missing."""

    key: str
    attr: Optional[str] = None
    default: Any = None
    fallback: Any = None

    @property
    def source(self) -> str:
        return self.attr or self.key


@dataclass(frozen=True)
class ReferenceSpec:
    """A reference to another entity kind.

    ``attr`` is the relationship attribute on the ORM row, ``fk`` the column
    holding the bare identifier.
    """

    key: str
    target: "EntityDescriptor"
    attr: Optional[str] = None
    fk: Optional[str] = None

    @property
    def source(self) -> str:
        return self.attr or self.key


@dataclass(frozen=True)
class EntityDescriptor:
    name: str
    singular: str
    plural: str
    fields: Tuple[FieldSpec, ...] = ()
    references: Tuple[ReferenceSpec, ...] = ()
    display_key: str = "nome"
    model: Any = field(default=None, compare=False)
    order_by: Tuple[str, ...] = ("-created_at",)


@dataclass(frozen=True)
class Unresolved:
    """A reference that was not expanded: only the identifier is known."""

    id: Any


@dataclass(frozen=True)
class Resolved:
    """A reference expanded into the target's raw record."""

    data: Any


Reference = Union[Unresolved, Resolved]


class NormalizationError(ValueError):
    pass


def _read(record: Any, *names: Optional[str]) -> Any:
    """Return the first present, non-None value among ``names`` on a mapping or object."""
    for name in names:
        if not name:
            continue
        if isinstance(record, Mapping):
            value = record.get(name, _MISSING)
        else:
            value = getattr(record, name, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return None


def _record_id(record: Any) -> Any:
    return _read(record, ID_KEY, "id")


def classify_reference(value: Any) -> Optional[Reference]:
    """Map a raw reference value onto ``None``, `Unresolved` or `Resolved`.

    Tagged values from the data-access layer pass through; duck-typed input
    (a previously normalized mapping, a bare id, an ORM row) is classified
    by shape. Booleans are not identifiers and raise `NormalizationError`.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (Unresolved, Resolved)):
        return value
    if isinstance(value, Mapping):
        if value.get(ID_KEY) is None and value.get("id") is None:
            return None
        return Resolved(value)
    if isinstance(value, bool):
        raise NormalizationError(f"malformed reference value {value!r}")
    if isinstance(value, (str, bytes, int)):
        return Unresolved(value)
    if getattr(value, "id", None) is not None:
        return Resolved(value)
    return Unresolved(value)


def format_timestamp(value: Any) -> str:
    """Render ``value`` as ISO-8601. Missing or unparsable values become *now* (UTC)."""
    if isinstance(value, str) and value:
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Unparsable timestamp %r, substituting current time", value)
            value = None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return datetime.now(timezone.utc).isoformat()


def _scalars(record: Any, descriptor: EntityDescriptor, degraded: bool = False) -> dict:
    out: dict = {}
    for spec in descriptor.fields:
        value = _read(record, spec.key, spec.source)
        if value is None or (degraded and value == ""):
            value = spec.fallback if degraded else spec.default
        out[spec.key] = value
    return out


def _placeholder(identifier: Any, target: EntityDescriptor) -> dict:
    out: dict = {ID_KEY: str(identifier)}
    for spec in target.fields:
        out[spec.key] = spec.default
    out[target.display_key] = NOT_AVAILABLE
    for ref in target.references:
        out[ref.key] = None
    return out


def _nested(data: Any, target: EntityDescriptor, depth: int) -> dict:
    identifier = _record_id(data)
    if identifier is None:
        raise NormalizationError(f"expanded {target.name} reference has no identifier")
    out: dict = {ID_KEY: str(identifier)}
    out.update(_scalars(data, target))
    if out.get(target.display_key) in (None, ""):
        out[target.display_key] = NOT_AVAILABLE
    for ref in target.references:
        out[ref.key] = normalize_reference(_read(data, ref.key, ref.source), ref.target, depth + 1)
    return out


def normalize_reference(value: Any, target: EntityDescriptor, depth: int = 1) -> Optional[dict]:
    """Shape one reference value for ``target``.

    Absent -> None; bare id -> placeholder with ``nome = "N/A"``; expanded ->
    nested mapping. Past `MAX_REFERENCE_DEPTH` expanded values collapse to
    placeholders.
    """
    ref = classify_reference(value)
    if ref is None:
        return None
    if isinstance(ref, Unresolved):
        return _placeholder(ref.id, target)
    if depth > MAX_REFERENCE_DEPTH:
        return _placeholder(_record_id(ref.data), target)
    return _nested(ref.data, target, depth)


def normalize(record: Any, descriptor: EntityDescriptor) -> dict:
    """Strictly normalize a single record. Raises on malformed input."""
    if record is None:
        raise NormalizationError(f"cannot normalize empty {descriptor.name} record")
    identifier = _record_id(record)
    if identifier is None:
        raise NormalizationError(f"{descriptor.name} record has no identifier")

    out: dict = {ID_KEY: str(identifier)}
    out.update(_scalars(record, descriptor))
    for ref in descriptor.references:
        out[ref.key] = normalize_reference(_read(record, ref.key, ref.source), ref.target)
    for key, attr in TIMESTAMP_KEYS:
        out[key] = format_timestamp(_read(record, key, attr))
    return out


def degraded(record: Any, descriptor: EntityDescriptor) -> dict:
    """Minimal record: identifier, top-level scalars with fallbacks, null references."""
    identifier = None
    try:
        identifier = _record_id(record)
    except Exception:  # pragma: no cover - exotic record objects
        logger.debug("Could not read identifier from %r", record)
    out: dict = {ID_KEY: "" if identifier is None else str(identifier)}
    try:
        out.update(_scalars(record, descriptor, degraded=True))
    except Exception:
        out.update({spec.key: spec.fallback for spec in descriptor.fields})
    for ref in descriptor.references:
        out[ref.key] = None
    for key, attr in TIMESTAMP_KEYS:
        try:
            out[key] = format_timestamp(_read(record, key, attr))
        except Exception:
            out[key] = format_timestamp(None)
    return out


def normalize_safe(record: Any, descriptor: EntityDescriptor) -> dict:
    try:
        return normalize(record, descriptor)
    except Exception:
        logger.exception("Failed to normalize %s record %r; returning degraded record", descriptor.name, _safe_id(record))
        return degraded(record, descriptor)


def normalize_many(records: Iterable[Any], descriptor: EntityDescriptor) -> List[dict]:
    """Normalize a listing page. One bad record never fails the page."""
    return [normalize_safe(r, descriptor) for r in records if r is not None]


def _safe_id(record: Any) -> Any:
    try:
        return _record_id(record)
    except Exception:  # pragma: no cover
        return None


__all__ = [
    "NOT_AVAILABLE",
    "FieldSpec",
    "ReferenceSpec",
    "EntityDescriptor",
    "Unresolved",
    "Resolved",
    "NormalizationError",
    "classify_reference",
    "format_timestamp",
    "normalize_reference",
    "normalize",
    "normalize_safe",
    "normalize_many",
    "degraded",
]
