"""
Pagination helpers shared by every list endpoint.

Query strings arrive as untrusted text, so nothing here raises: bad or
missing values fall back to the defaults and out-of-range values are
clamped.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest value a signed 64-bit database column holds.
MAX_INT = 2 ** 63 - 1

_LEADING_INT = re.compile(r'\s*([+-]?)0*(\d+)')


@dataclass(frozen=True)
class PaginationParams:
    page: int
    limit: int
    offset: int
    search: Optional[str] = None
    status: Optional[str] = None


def _saturate(value: int) -> int:
    return max(-MAX_INT - 1, min(MAX_INT + 1, value))


def parse_int(raw: Any, default: int) -> int:
    """Parse the leading integer of ``raw``; ``"12abc"`` gives 12, ``"abc"`` the default.

    Magnitudes past the 64-bit range saturate at ``MAX_INT + 1`` so
    callers can tell an oversized value from a valid one.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return _saturate(raw)
    match = _LEADING_INT.match(str(raw))
    if not match:
        return default
    sign, digits = match.groups()
    value = int(digits) if len(digits) <= 19 else MAX_INT + 1
    return _saturate(-value if sign == '-' else value)


def get_pagination_params(params: Mapping[str, Any]) -> PaginationParams:
    limit = min(MAX_LIMIT, max(1, parse_int(params.get('limit'), DEFAULT_LIMIT)))
    last_page = MAX_INT // limit
    page = min(last_page, max(DEFAULT_PAGE, parse_int(params.get('page'), DEFAULT_PAGE)))
    return PaginationParams(
        page=page,
        limit=limit,
        offset=(page - 1) * limit,
        search=params.get('search') or None,
        status=params.get('status') or None,
    )


def page_metadata(total: int, pagination: PaginationParams) -> dict:
    return {
        'total': total,
        'page': pagination.page,
        'limit': pagination.limit,
        'totalPages': math.ceil(total / pagination.limit) if total else 0,
    }
