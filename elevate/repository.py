"""Data-access helpers shared by every entity router.

Rows are returned as *raw records*: plain dicts keyed by API field names,
where each reference is tagged as `Resolved` (expanded with a loader option
and found), `Unresolved` (not expanded, or the referenced row is missing) or
``None`` (no reference stored).
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from elevate.normalizer import EntityDescriptor, Resolved, Unresolved

logger = logging.getLogger(__name__)


def _loader_options(descriptor: EntityDescriptor) -> list:
    """Chained `selectinload` options for every reference, recursively (Modelo -> Marca)."""
    options = []
    for ref in descriptor.references:
        loader = selectinload(getattr(descriptor.model, ref.source))
        nested = _loader_options(ref.target)
        if nested:
            loader = loader.options(*nested)
        options.append(loader)
    return options


def _ordering(descriptor: EntityDescriptor) -> list:
    clauses = []
    for name in descriptor.order_by:
        column = getattr(descriptor.model, name.lstrip("-"))
        clauses.append(column.desc() if name.startswith("-") else column.asc())
    # stable pages when the sort key ties
    clauses.append(descriptor.model.id.asc())
    return clauses


def to_raw(obj: Any, descriptor: EntityDescriptor) -> dict:
    """Convert an ORM row into a raw record without triggering any lazy load."""
    state = sa_inspect(obj)
    raw: dict = {
        "_id": obj.id,
        "created_at": getattr(obj, "created_at", None),
        "updated_at": getattr(obj, "updated_at", None),
    }
    for spec in descriptor.fields:
        raw[spec.key] = getattr(obj, spec.source, None)

    for ref in descriptor.references:
        fk_value = getattr(obj, ref.fk, None) if ref.fk else None
        if ref.source in state.unloaded:
            raw[ref.key] = Unresolved(fk_value) if fk_value is not None else None
            continue
        child = getattr(obj, ref.source)
        if child is not None:
            raw[ref.key] = Resolved(to_raw(child, ref.target))
        elif fk_value is not None:
            # foreign key points at a row that no longer exists
            raw[ref.key] = Unresolved(fk_value)
        else:
            raw[ref.key] = None
    return raw


def fetch_page(db: Session, descriptor: EntityDescriptor, page: int, limit: int, expand: bool = True) -> Tuple[List[dict], int]:
    """Return one page of raw records plus the total row count.

    Count and fetch are two independent reads; under concurrent writes the
    total may disagree with the page contents.
    """
    total = db.query(descriptor.model).count()

    offset = (page - 1) * limit
    if offset >= total:
        logger.debug("fetch_page %s page=%d past the end (total=%d)", descriptor.name, page, total)
        return [], total

    q = db.query(descriptor.model)
    if expand:
        q = q.options(*_loader_options(descriptor))
    rows = q.order_by(*_ordering(descriptor)).offset(offset).limit(limit).all()

    logger.debug("fetch_page %s page=%d limit=%d expand=%s -> %d/%d", descriptor.name, page, limit, expand, len(rows), total)
    return [to_raw(row, descriptor) for row in rows], total


def get_by_id(db: Session, descriptor: EntityDescriptor, record_id: str, expand: bool = True) -> Optional[dict]:
    q = db.query(descriptor.model).filter(descriptor.model.id == record_id)
    if expand:
        q = q.options(*_loader_options(descriptor)).execution_options(populate_existing=True)
    obj = q.first()
    if obj is None:
        return None
    return to_raw(obj, descriptor)


def exists(db: Session, descriptor: EntityDescriptor, **filters: Any) -> bool:
    return db.query(descriptor.model).filter_by(**filters).first() is not None


def create(db: Session, descriptor: EntityDescriptor, values: dict) -> Any:
    """Insert a row and return it. Integrity errors are rolled back and re-raised."""
    obj = descriptor.model(**values)
    db.add(obj)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Integrity error while creating %s", descriptor.name)
        raise
    db.refresh(obj)
    return obj


__all__ = ["to_raw", "fetch_page", "get_by_id", "exists", "create"]
