"""
Helpers shared by the API views: permissions, query parsing and the
list/detail plumbing every entity endpoint repeats.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from rest_framework.permissions import IsAuthenticated

from core.db import DatabaseClient
from core.exceptions import NotFoundError, ValidationError
from core.models import choice_values
from core.permissions import IsAdminRole
from core.responses import paginated
from core.utils import PaginationParams, parse_bool
from core.utils.pagination import MAX_INT, parse_int

ADMIN = [IsAuthenticated, IsAdminRole]


def status_filter(status: Optional[str], choices, key: str = 'status') -> dict:
    """``all`` or nothing means no filter; anything else must be a known status."""
    if not status or status.lower() == 'all':
        return {}
    if status not in choice_values(choices):
        raise ValidationError(f"Invalid status '{status}'")
    return {key: status}


def enum_param(params: Mapping[str, Any], name: str, choices) -> Optional[str]:
    raw = params.get(name)
    if not raw or raw.lower() == 'all':
        return None
    if raw not in choice_values(choices):
        raise ValidationError(f"Invalid {name} '{raw}'")
    return raw


def search_filter(search: Optional[str], fields: Iterable[str]) -> dict:
    """Case-insensitive substring match on any of ``fields`` (``a__b`` paths allowed)."""
    if not search:
        return {}
    return {'OR': [_nest(path.split('__'), {'contains': search, 'mode': 'insensitive'}) for path in fields]}


def _nest(parts: list[str], leaf: Any) -> dict:
    if len(parts) == 1:
        return {parts[0]: leaf}
    return {parts[0]: _nest(parts[1:], leaf)}


def id_param(params: Mapping[str, Any], name: str) -> Optional[int]:
    raw = params.get(name)
    if raw in (None, '', 'all'):
        return None
    value = parse_int(raw, 0)
    if not 1 <= value <= MAX_INT:
        raise ValidationError(f"Invalid {name} '{raw}'")
    return value


def has_filter(relation: str, raw: Any) -> dict:
    flag = parse_bool(raw)
    if flag is None:
        return {}
    return {relation: {'some': {}} if flag else {'none': {}}}


def validated(serializer_class, request, partial: bool = False, **context) -> dict:
    serializer = serializer_class(data=request.data, partial=partial, context={'request': request, **context})
    serializer.is_valid(raise_exception=True)
    return dict(serializer.validated_data)


def get_or_404(client: DatabaseClient, where: dict, label: str, select=None) -> dict:
    row = client.find_unique(where, select=select)
    if row is None:
        raise NotFoundError(f'{label} not found')
    return row


def page(client: DatabaseClient, where: dict, pagination: PaginationParams, order_by: dict, select=None):
    total = client.count(where)
    rows = client.find_many(
        where=where,
        skip=pagination.offset,
        take=pagination.limit,
        order_by=order_by,
        select=select,
    )
    return paginated(rows, total, pagination)
