"""
Compile nested where/order mappings into Django ORM lookups.

Where mappings look like::

    {
        "status": "ACTIVE",
        "industry": {"code": "FIN"},
        "name": {"contains": "acme", "mode": "insensitive"},
        "staff": {"some": {"status": "ACTIVE"}},
        "deleted_at": None,
        "OR": [{"email": {"contains": "x"}}, {"tax_id": "123"}],
    }

A bare value means equality and ``None`` means IS NULL.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from django.core.exceptions import FieldDoesNotExist
from django.db.models import Q

from ..exceptions import ValidationError

SCALAR_OPERATORS = {
    'equals': 'exact',
    'in': 'in',
    'lt': 'lt',
    'lte': 'lte',
    'gt': 'gt',
    'gte': 'gte',
    'contains': 'contains',
    'starts_with': 'startswith',
    'ends_with': 'endswith',
}
INSENSITIVE = {
    'exact': 'iexact',
    'contains': 'icontains',
    'startswith': 'istartswith',
    'endswith': 'iendswith',
}
COMBINATORS = ('AND', 'OR', 'NOT')


def get_field(model, name: str):
    try:
        return model._meta.get_field(name)
    except FieldDoesNotExist as exc:
        raise ValidationError(f"Unknown field '{name}' for {model.__name__}") from exc


def is_soft_deletable(model) -> bool:
    try:
        model._meta.get_field('deleted_at')
    except FieldDoesNotExist:
        return False
    return True


def live(queryset):
    """Drop soft-deleted rows from ``queryset`` when its model supports them."""
    if is_soft_deletable(queryset.model):
        return queryset.filter(deleted_at__isnull=True)
    return queryset


def _as_list(value: Any) -> list:
    if isinstance(value, Mapping):
        return [value]
    return list(value)


def compile_where(model, where: Mapping[str, Any] | None, prefix: str = '') -> Q:
    q = Q()
    if not where:
        return q
    for key, value in where.items():
        if key == 'AND':
            for sub in _as_list(value):
                q &= compile_where(model, sub, prefix)
        elif key == 'OR':
            branches = _as_list(value)
            if not branches:
                q &= Q(pk__in=[])
                continue
            any_of = Q()
            for sub in branches:
                any_of |= compile_where(model, sub, prefix)
            q &= any_of
        elif key == 'NOT':
            for sub in _as_list(value):
                q &= ~compile_where(model, sub, prefix)
        else:
            q &= _compile_field(model, key, value, prefix)
    return q


def _compile_field(model, key: str, value: Any, prefix: str) -> Q:
    field = get_field(model, key)
    path = f"{prefix}{key}"
    if field.is_relation and key != field.attname:
        if field.one_to_many or field.many_to_many:
            return _compile_to_many(field, path, value)
        if value is None:
            return Q(**{f"{path}__isnull": True})
        if not isinstance(value, Mapping):
            raise ValidationError(f"Filter on relation '{key}' must be a mapping")
        return compile_where(field.related_model, value, prefix=f"{path}__")
    return _compile_scalar(path, value)


def _compile_to_many(field, path: str, value: Any) -> Q:
    if not isinstance(value, Mapping) or not value:
        raise ValidationError(f"Filter on '{field.name}' needs 'some', 'none' or 'every'")
    if field.many_to_many:
        raise ValidationError(f"Filter on many-to-many '{field.name}' is not supported")
    related = field.related_model
    # Match owners through a subquery on the back-reference so rows never multiply.
    owner_pk = f"{path[:-len(field.name)]}pk__in"
    back_ref = field.field.attname
    q = Q()
    for op, sub in value.items():
        matching = live(related._default_manager.filter(**{f"{back_ref}__isnull": False}))
        if op == 'some':
            q &= Q(**{owner_pk: matching.filter(compile_where(related, sub)).values(back_ref)})
        elif op == 'none':
            q &= ~Q(**{owner_pk: matching.filter(compile_where(related, sub)).values(back_ref)})
        elif op == 'every':
            q &= ~Q(**{owner_pk: matching.exclude(compile_where(related, sub)).values(back_ref)})
        else:
            raise ValidationError(f"Unknown relation filter '{op}'")
    return q


def _compile_scalar(path: str, value: Any) -> Q:
    if value is None:
        return Q(**{f"{path}__isnull": True})
    if not isinstance(value, Mapping):
        return Q(**{path: value})
    insensitive = value.get('mode') == 'insensitive'
    q = Q()
    for op, operand in value.items():
        if op == 'mode':
            continue
        if op == 'not':
            if isinstance(operand, Mapping):
                q &= ~_compile_scalar(path, {**operand, **({'mode': 'insensitive'} if insensitive else {})})
            elif operand is None:
                q &= Q(**{f"{path}__isnull": False})
            else:
                q &= ~Q(**{path: operand})
        elif op == 'not_in':
            q &= ~Q(**{f"{path}__in": list(operand)})
        elif op in SCALAR_OPERATORS:
            lookup = SCALAR_OPERATORS[op]
            if insensitive:
                lookup = INSENSITIVE.get(lookup, lookup)
            if operand is None and lookup == 'exact':
                q &= Q(**{f"{path}__isnull": True})
            else:
                q &= Q(**{f"{path}__{lookup}": list(operand) if lookup == 'in' else operand})
        else:
            raise ValidationError(f"Unknown filter operator '{op}'")
    return q


def compile_order_by(model, order_by: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None) -> list[str]:
    """Turn ``{"name": "asc"}`` (or a list of such) into ``order_by()`` arguments.

    ``pk`` is appended as a tie-breaker so that paging is stable.
    """
    if not order_by:
        return []
    terms: list[str] = []
    for item in _as_list(order_by):
        terms.extend(_order_terms(model, item, ''))
    if not any(t.lstrip('-') in ('pk', 'id') for t in terms):
        terms.append('pk')
    return terms


def _order_terms(model, item: Mapping[str, Any], prefix: str) -> Iterable[str]:
    for key, direction in item.items():
        if '__' in key:
            resolve_path(model, key)
            nested: Any = direction
            for part in reversed(key.split('__')[1:]):
                nested = {part: nested}
            yield from _order_terms(model, {key.split('__')[0]: nested}, prefix)
            continue
        field = get_field(model, key)
        if isinstance(direction, Mapping):
            if not field.is_relation:
                raise ValidationError(f"Cannot order through scalar field '{key}'")
            yield from _order_terms(field.related_model, direction, f"{prefix}{key}__")
            continue
        if direction not in ('asc', 'desc'):
            raise ValidationError(f"Invalid sort direction '{direction}'")
        yield f"{'-' if direction == 'desc' else ''}{prefix}{key}"


def resolve_path(model, path: str) -> None:
    """Validate a ``a__b__c`` field path."""
    current = model
    parts = path.split('__')
    for i, part in enumerate(parts):
        field = get_field(current, part)
        if i < len(parts) - 1:
            if not field.is_relation:
                raise ValidationError(f"'{part}' is not a relation on {current.__name__}")
            current = field.related_model
