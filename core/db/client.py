"""
Django ORM implementation of :class:`core.db.base.DatabaseClient`.

One ``ModelClient`` wraps one model.  It compiles where/order mappings,
applies the requested field-selection profile, hides soft-deleted rows
and translates storage failures into the application's typed errors.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Generic, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from django.core.exceptions import FieldError
from django.db import DataError, IntegrityError, InterfaceError, OperationalError, models, transaction
from django.db.models import Avg, Count, Max, Min, Sum
from django.utils import timezone
from django.utils.text import capfirst

from ..exceptions import ConflictError, NotFoundError, StorageUnavailableError, ValidationError
from ..select_fields import validate_profile
from .base import OrderBy, Row, Select, Where
from .projection import apply_select, render, to_camel
from .where import compile_order_by, compile_where, get_field, is_soft_deletable, resolve_path

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=models.Model)

_AGGREGATES = (('sum', Sum), ('avg', Avg), ('min', Min), ('max', Max))


class ModelClient(Generic[M]):
    def __init__(self, model: type[M], default_select: Select):
        validate_profile(model, default_select)
        self.model = model
        self.default_select = default_select
        self.soft_delete = is_soft_deletable(model)
        self.label = capfirst(model._meta.verbose_name)

    def __repr__(self) -> str:
        return f"<ModelClient {self.model.__name__}>"

    # -- helpers ------------------------------------------------------------
    @contextmanager
    def _storage(self, operation: str, writing: bool = False):
        try:
            yield
        except IntegrityError as exc:
            if not writing:
                raise
            logger.info("%s.%s violated a constraint: %s", self.model.__name__, operation, exc)
            raise ConflictError(f"{self.label} conflicts with an existing record") from exc
        except (DataError, OverflowError) as exc:
            logger.info("%s.%s got a value out of range: %s", self.model.__name__, operation, exc)
            raise ValidationError("Value out of range") from exc
        except (OperationalError, InterfaceError) as exc:
            logger.warning("%s.%s failed in the storage engine: %s", self.model.__name__, operation, exc)
            raise StorageUnavailableError() from exc
        except FieldError as exc:
            raise ValidationError(str(exc)) from exc

    def _queryset(self, where: Optional[Where]):
        qs = self.model._default_manager.all()
        if self.soft_delete and not (where and 'deleted_at' in where):
            qs = qs.filter(deleted_at__isnull=True)
        if where:
            qs = qs.filter(compile_where(self.model, where))
        return qs

    def _projection(self, select: Optional[Select], include: Optional[Select]) -> Select:
        if select and include:
            raise ValidationError("Use either select or include, not both")
        if select:
            validate_profile(self.model, select)
            return select
        if include:
            projection = {f.attname: True for f in self.model._meta.concrete_fields}
            projection.update(include)
            validate_profile(self.model, projection)
            return projection
        return self.default_select

    def _check_data(self, data: Mapping[str, Any]) -> None:
        for key in data:
            field = get_field(self.model, key)
            if not field.concrete or field.primary_key:
                raise ValidationError(f"Field '{key}' cannot be written")

    def _resolve(self, where: Where) -> M:
        rows = list(self._queryset(where)[:2])
        if not rows:
            raise NotFoundError(f"{self.label} not found")
        if len(rows) > 1:
            raise ValidationError(f"{self.label} filter matched more than one record")
        return rows[0]

    def _load(self, pk: Any, select: Select) -> Row:
        instance = apply_select(self.model._default_manager.filter(pk=pk), select).get()
        return render(instance, select)

    @staticmethod
    def _clean(instance: M, fields: Optional[Iterable[str]] = None) -> None:
        # Uniqueness is left to the database so duplicates surface as conflicts.
        exclude = None
        if fields is not None:
            written = set(fields)
            exclude = {f.name for f in instance._meta.concrete_fields if f.name not in written and f.attname not in written}
        instance.full_clean(exclude=exclude, validate_unique=False, validate_constraints=False)

    # -- reads --------------------------------------------------------------
    def find_many(
        self,
        where: Optional[Where] = None,
        take: Optional[int] = None,
        skip: Optional[int] = None,
        order_by: Optional[OrderBy] = None,
        select: Optional[Select] = None,
        include: Optional[Select] = None,
        distinct: bool = False,
    ) -> list[Row]:
        projection = self._projection(select, include)
        with self._storage('find_many'):
            qs = apply_select(self._queryset(where), projection)
            ordering = compile_order_by(self.model, order_by)
            if ordering:
                qs = qs.order_by(*ordering)
            if distinct:
                qs = qs.distinct()
            start = skip or 0
            if take is not None:
                qs = qs[start:start + take]
            elif start:
                qs = qs[start:]
            return [render(obj, projection) for obj in qs]

    def find_unique(
        self,
        where: Where,
        select: Optional[Select] = None,
        include: Optional[Select] = None,
        for_update: bool = False,
    ) -> Optional[Row]:
        """Return the single row matching ``where`` or ``None``.

        ``for_update`` locks the row until the surrounding transaction
        ends; it must be called inside ``transaction.atomic()``.
        """
        if not where:
            raise ValidationError("find_unique needs a filter")
        projection = self._projection(select, include)
        with self._storage('find_unique'):
            qs = self._queryset(where)
            if for_update:
                qs = qs.select_for_update(of=('self',))
            rows = list(apply_select(qs, projection)[:2])
        if len(rows) > 1:
            raise ValidationError(f"{self.label} filter matched more than one record")
        return render(rows[0], projection) if rows else None

    def find_first(
        self,
        where: Optional[Where] = None,
        order_by: Optional[OrderBy] = None,
        select: Optional[Select] = None,
        include: Optional[Select] = None,
    ) -> Optional[Row]:
        rows = self.find_many(where=where, order_by=order_by, take=1, select=select, include=include)
        return rows[0] if rows else None

    def exists(self, where: Optional[Where] = None) -> bool:
        with self._storage('exists'):
            return self._queryset(where).exists()

    def count(self, where: Optional[Where] = None) -> int:
        with self._storage('count'):
            return self._queryset(where).count()

    def aggregate(
        self,
        where: Optional[Where] = None,
        sum: Iterable[str] = (),  # noqa: A002
        avg: Iterable[str] = (),
        min: Iterable[str] = (),  # noqa: A002
        max: Iterable[str] = (),  # noqa: A002
        count: Union[bool, Iterable[str]] = (),
    ) -> dict:
        requested = {'sum': list(sum), 'avg': list(avg), 'min': list(min), 'max': list(max)}
        expressions = {}
        for name, func in _AGGREGATES:
            for field in requested[name]:
                get_field(self.model, field)
                expressions[f"{name}_{field}"] = func(field)
        count_fields: list[str] = []
        if count is True:
            expressions['count_all'] = Count('pk')
        elif count:
            count_fields = list(count)
            for field in count_fields:
                get_field(self.model, field)
                expressions[f"count_{field}"] = Count(field)
        with self._storage('aggregate'):
            values = self._queryset(where).aggregate(**expressions) if expressions else {}
        result: dict = {}
        for name, _ in _AGGREGATES:
            if requested[name]:
                result[f"_{name}"] = {to_camel(f): values[f"{name}_{f}"] for f in requested[name]}
        if count is True:
            result['_count'] = {'_all': values['count_all']}
        elif count_fields:
            result['_count'] = {to_camel(f): values[f"count_{f}"] for f in count_fields}
        return result

    def group_by(self, by: Sequence[str], where: Optional[Where] = None) -> list[Row]:
        if not by:
            raise ValidationError("group_by needs at least one field")
        for path in by:
            resolve_path(self.model, path)
        with self._storage('group_by'):
            rows = (
                self._queryset(where)
                .values(*by)
                .annotate(group_size=Count('pk'))
                .order_by(*by)
            )
            return [
                {**{to_camel(path): row[path] for path in by}, '_count': row['group_size']}
                for row in rows
            ]

    # -- writes -------------------------------------------------------------
    def create(
        self, data: Mapping[str, Any], select: Optional[Select] = None, include: Optional[Select] = None
    ) -> Row:
        projection = self._projection(select, include)
        self._check_data(data)
        instance = self.model(**data)
        self._clean(instance)
        with self._storage('create', writing=True), transaction.atomic():
            instance.save(force_insert=True)
            return self._load(instance.pk, projection)

    def update(
        self,
        where: Where,
        data: Mapping[str, Any],
        select: Optional[Select] = None,
        include: Optional[Select] = None,
    ) -> Row:
        projection = self._projection(select, include)
        self._check_data(data)
        with self._storage('update', writing=True), transaction.atomic():
            instance = self._resolve(where)
            for key, value in data.items():
                setattr(instance, key, value)
            self._clean(instance, data.keys())
            update_fields = list(data.keys())
            if data and any(f.name == 'updated_at' for f in self.model._meta.concrete_fields):
                update_fields.append('updated_at')
            if update_fields:
                instance.save(update_fields=update_fields)
            return self._load(instance.pk, projection)

    def delete(self, where: Where, hard: bool = False) -> Row:
        """Delete the single row matching ``where`` and return its last state.

        Soft-deletable models only get ``deleted_at`` stamped unless
        ``hard`` is set.
        """
        with self._storage('delete', writing=True), transaction.atomic():
            instance = self._resolve(where)
            snapshot = self._load(instance.pk, self.default_select)
            if self.soft_delete and not hard:
                instance.deleted_at = timezone.now()
                instance.save(update_fields=['deleted_at', 'updated_at'])
            else:
                instance.delete()
        return snapshot
