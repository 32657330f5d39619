"""Windowing of fully materialized results and paging parameter parsing."""

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sheetquery.common import validation_error
from sheetquery.types import FilePage, Page


def parse_int_param(
    params: Mapping[str, Any],
    name: str,
    default: Optional[int] = None,
    minimum: int = 0,
) -> Optional[int]:
    """Read an integer request parameter.

    Absent or empty values give ``default``. Values below ``minimum`` are
    clamped to it.

    Raises:
        SheetQueryError: INVALID_ARGUMENT when the value is not an integer
    """
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return default
    if isinstance(value, bool):
        raise validation_error(f"{name} must be an integer", field=name, value=value)

    try:
        number = int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise validation_error(f"{name} must be an integer", field=name, value=value) from exc

    return max(number, minimum)


def paginate(items: Sequence[Dict[str, Any]], offset: int = 0, limit: Optional[int] = None) -> Page:
    """Slice ``items`` to ``[offset, offset + limit)``; ``limit=None`` keeps the rest."""
    total = len(items)
    offset = max(offset, 0)
    end = total if limit is None else offset + max(limit, 0)
    window = list(items[offset:end])
    return Page(
        items=window,
        total=total,
        offset=offset,
        limit=limit,
        has_more=offset + len(window) < total,
    )


def paginate_pages(items: Sequence[Dict[str, Any]], page: int = 1, page_size: int = 1000) -> FilePage:
    """Slice ``items`` to the 1-based ``page`` of ``page_size`` records."""
    total = len(items)
    page = max(page, 1)
    page_size = max(page_size, 0)
    start = (page - 1) * page_size
    window: List[Dict[str, Any]] = list(items[start:start + page_size])
    return FilePage(
        items=window,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size) if page_size else 0,
    )
