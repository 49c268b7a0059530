from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Tuple, Union

DIRECTIONS = ('asc', 'desc')


def build_order_by(field: Optional[str], direction: Optional[str], fallback: Tuple[str, str]) -> dict:
    if field:
        return {field: direction or 'asc'}
    return {fallback[0]: fallback[1]}


def sort_params(
    params: Mapping[str, Any],
    allowed: Union[Mapping[str, str], Iterable[str]],
    fallback: Tuple[str, str],
) -> dict:
    """Read ``sortBy``/``sortOrder`` from a query mapping.

    ``allowed`` maps the public sort key to a column (or simply lists the
    columns).  Unknown keys fall back to ``fallback`` and unknown
    directions to ascending, so a client can never sort on an arbitrary
    column.
    """
    columns = allowed if isinstance(allowed, Mapping) else {name: name for name in allowed}
    field = columns.get(params.get('sortBy') or '')
    direction = (params.get('sortOrder') or '').lower() or None
    if direction not in DIRECTIONS:
        direction = None
    return build_order_by(field, direction, fallback)
