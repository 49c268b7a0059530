"""
Builders for optional filter fragments.

Each builder returns either an empty dict or a single-key dict so that
fragments can be merged into one where-mapping for the data-access layer.
"""
from __future__ import annotations

from datetime import datetime, time
from typing import Any, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime


def nullable_filter(key: str, value: Any) -> dict:
    if value is None:
        return {}
    return {key: value}


def range_filter(key: str, min: Any = None, max: Any = None) -> dict:  # noqa: A002
    """Build ``{key: {"gte": min, "lte": max}}`` keeping only present bounds.

    ``0`` is a present bound; only ``None`` means "no bound".
    """
    if min is None and max is None:
        return {}
    bounds = {}
    if min is not None:
        bounds['gte'] = min
    if max is not None:
        bounds['lte'] = max
    return {key: bounds}


def merge_filters(*fragments: dict) -> dict:
    merged: dict = {}
    for fragment in fragments:
        for key, value in fragment.items():
            if key in merged:
                raise ValueError(f"duplicate filter key: {key}")
            merged[key] = value
    return merged


def parse_bool(raw: Any) -> Optional[bool]:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return None
    lowered = str(raw).strip().lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    return None


def parse_float(raw: Any) -> Optional[float]:
    if raw is None or raw == '':
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def parse_datetime_param(raw: Any, end_of_day: bool = False) -> Optional[datetime]:
    """Parse an ISO date or datetime into an aware datetime.

    A bare date resolves to the start of that day, or its last instant
    when ``end_of_day`` is set, in the current time zone.
    """
    if not raw:
        return None
    text = str(raw).strip()
    try:
        value = parse_datetime(text)
    except ValueError:
        return None
    if value is None:
        try:
            day = parse_date(text)
        except ValueError:
            return None
        if day is None:
            return None
        value = datetime.combine(day, time.max if end_of_day else time.min)
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value
