"""Response builders shared by the entity routers.

Each builder runs the data-access call, passes the raw records through the
normalizer and maps storage failures onto the standard error payload.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from elevate import repository
from elevate.errors import api_error, conflict_or_invalid, not_found
from elevate.helpers.pagination import PAGE_SIZE, pagination_payload, parse_flag, parse_page
from elevate.normalizer import EntityDescriptor, NormalizationError, normalize, normalize_many

logger = logging.getLogger(__name__)


def internal_error(exc: Exception):
    return api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", str(exc) or "Internal server error")


def list_payload(db: Session, descriptor: EntityDescriptor, page_raw: Optional[str], populate_raw: Optional[str] = None) -> dict:
    page = parse_page(page_raw)
    try:
        raws, total = repository.fetch_page(db, descriptor, page, PAGE_SIZE, expand=parse_flag(populate_raw))
    except SQLAlchemyError as exc:
        logger.exception("Error fetching %s", descriptor.plural)
        raise internal_error(exc)

    return {
        descriptor.plural: normalize_many(raws, descriptor),
        "pagination": pagination_payload(total, page, PAGE_SIZE),
    }


def detail_payload(db: Session, descriptor: EntityDescriptor, record_id: str, populate_raw: Optional[str] = None) -> dict:
    try:
        raw = repository.get_by_id(db, descriptor, record_id, expand=parse_flag(populate_raw))
    except SQLAlchemyError as exc:
        logger.exception("Error fetching %s %s", descriptor.name, record_id)
        raise internal_error(exc)
    if raw is None:
        raise not_found(descriptor.name.capitalize())
    return {descriptor.singular: normalize(raw, descriptor)}


def create_payload(db: Session, descriptor: EntityDescriptor, values: dict, conflict_code: str, conflict_message: str) -> dict:
    """Insert a row, re-read it with references expanded and normalize it strictly."""
    try:
        obj = repository.create(db, descriptor, values)
        raw = repository.get_by_id(db, descriptor, obj.id, expand=True)
        body = {descriptor.singular: normalize(raw, descriptor)}
    except IntegrityError as exc:
        raise conflict_or_invalid(exc, conflict_code, conflict_message)
    except (SQLAlchemyError, NormalizationError) as exc:
        logger.exception("Error creating %s", descriptor.name)
        raise internal_error(exc)

    logger.info("Created %s %s", descriptor.name, body[descriptor.singular]["_id"])
    return body


__all__ = ["internal_error", "list_payload", "detail_payload", "create_payload"]
