"""
Apply a field-selection tree to a queryset and render instances.

Forward relations whose subtree only reaches further forward relations
are joined with ``select_related``; everything else (to-many relations,
relations carrying their own counts or to-many children) is loaded with
a ``Prefetch`` whose queryset is built from the same tree.  Related-row
counts become ``Count`` annotations named ``_count_<relation>``.
"""
from __future__ import annotations

from typing import Any, Mapping

from django.db.models import Count, Prefetch, Q

from ..select_fields import COUNT_KEY
from .where import compile_order_by, compile_where, is_soft_deletable, live


def to_camel(name: str) -> str:
    if name.startswith('_'):
        return name
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def count_alias(relation: str) -> str:
    return f"_count_{relation}"


def _joinable(model, select: Mapping[str, Any]) -> bool:
    """True when ``select`` can be satisfied with joins alone."""
    for key, spec in select.items():
        if key == COUNT_KEY:
            return False
        if spec is True:
            continue
        field = model._meta.get_field(key)
        if field.one_to_many or field.many_to_many:
            return False
        if not _joinable(field.related_model, spec['select']):
            return False
    return True


def _select_related_paths(model, select: Mapping[str, Any], prefix: str = '') -> list[str]:
    paths = []
    for key, spec in select.items():
        if spec is True or key == COUNT_KEY:
            continue
        path = f"{prefix}{key}"
        paths.append(path)
        paths.extend(_select_related_paths(model._meta.get_field(key).related_model, spec['select'], f"{path}__"))
    return paths


def annotate_counts(queryset, select: Mapping[str, Any]):
    count_spec = select.get(COUNT_KEY)
    if not count_spec:
        return queryset
    model = queryset.model
    annotations = {}
    for rel in count_spec['select']:
        related = model._meta.get_field(rel).related_model
        condition = Q(**{f"{rel}__deleted_at__isnull": True}) if is_soft_deletable(related) else None
        annotations[count_alias(rel)] = Count(rel, filter=condition, distinct=True)
    return queryset.annotate(**annotations)


def apply_select(queryset, select: Mapping[str, Any]):
    """Attach the joins, prefetches and count annotations ``select`` needs."""
    model = queryset.model
    joins: list[str] = []
    prefetches: list[Prefetch] = []
    for key, spec in select.items():
        if spec is True or key == COUNT_KEY:
            continue
        field = model._meta.get_field(key)
        related = field.related_model
        sub = spec['select']
        to_many = field.one_to_many or field.many_to_many
        if not to_many and _joinable(related, sub):
            joins.append(key)
            joins.extend(_select_related_paths(related, sub, f"{key}__"))
            continue
        inner = related._default_manager.all()
        take = None
        if to_many:
            inner = live(inner)
            if spec.get('where'):
                inner = inner.filter(compile_where(related, spec['where']))
            ordering = compile_order_by(related, spec.get('order_by'))
            if ordering:
                inner = inner.order_by(*ordering)
            take = spec.get('take')
        inner = apply_select(inner, sub)
        if take is not None:
            inner = inner[:take]
        prefetches.append(Prefetch(key, queryset=inner))
    if joins:
        queryset = queryset.select_related(*joins)
    if prefetches:
        queryset = queryset.prefetch_related(*prefetches)
    return annotate_counts(queryset, select)


def render(instance, select: Mapping[str, Any]) -> dict:
    out: dict = {}
    model = type(instance)
    for key, spec in select.items():
        if key == COUNT_KEY:
            out[COUNT_KEY] = {
                to_camel(rel): getattr(instance, count_alias(rel), 0) for rel in spec['select']
            }
            continue
        if spec is True:
            out[to_camel(key)] = getattr(instance, key)
            continue
        field = model._meta.get_field(key)
        if field.one_to_many or field.many_to_many:
            out[to_camel(key)] = [render(item, spec['select']) for item in getattr(instance, key).all()]
        else:
            related = getattr(instance, key)
            out[to_camel(key)] = render(related, spec['select']) if related is not None else None
    return out
