"""Pagination helpers shared by the listing routes."""
from __future__ import annotations

from typing import Optional

PAGE_SIZE = 10


def parse_page(raw: Optional[str]) -> int:
    """Return the requested page number; anything missing, non-numeric or < 1 is page 1."""
    if raw is None:
        return 1
    try:
        page = int(str(raw).strip())
    except ValueError:
        return 1
    return page if page >= 1 else 1


def parse_flag(raw: Optional[str], default: bool = True) -> bool:
    if raw is None or raw == "":
        return default
    return str(raw).strip().lower() not in ("0", "false", "no", "off")


def pagination_payload(total: int, page: int, limit: int = PAGE_SIZE) -> dict:
    return {
        "total": total,
        "page": page,
        "pages": (total + limit - 1) // limit,
    }
