"""
The data-access contract every entity client satisfies.

Route handlers and services only depend on this protocol, so a test can
hand them any object with the same operations.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence, TypeVar, Union

Where = Mapping[str, Any]
OrderBy = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]
Select = Mapping[str, Any]
Row = dict

T_co = TypeVar('T_co', covariant=True)


class DatabaseClient(Protocol[T_co]):
    def find_many(
        self,
        where: Optional[Where] = None,
        take: Optional[int] = None,
        skip: Optional[int] = None,
        order_by: Optional[OrderBy] = None,
        select: Optional[Select] = None,
        include: Optional[Select] = None,
        distinct: bool = False,
    ) -> list[Row]: ...

    def find_unique(
        self,
        where: Where,
        select: Optional[Select] = None,
        include: Optional[Select] = None,
        for_update: bool = False,
    ) -> Optional[Row]: ...

    def find_first(
        self,
        where: Optional[Where] = None,
        order_by: Optional[OrderBy] = None,
        select: Optional[Select] = None,
        include: Optional[Select] = None,
    ) -> Optional[Row]: ...

    def create(
        self, data: Mapping[str, Any], select: Optional[Select] = None, include: Optional[Select] = None
    ) -> Row: ...

    def update(
        self,
        where: Where,
        data: Mapping[str, Any],
        select: Optional[Select] = None,
        include: Optional[Select] = None,
    ) -> Row: ...

    def delete(self, where: Where, hard: bool = False) -> Row: ...

    def exists(self, where: Optional[Where] = None) -> bool: ...

    def count(self, where: Optional[Where] = None) -> int: ...

    def aggregate(
        self,
        where: Optional[Where] = None,
        sum: Iterable[str] = (),  # noqa: A002
        avg: Iterable[str] = (),
        min: Iterable[str] = (),  # noqa: A002
        max: Iterable[str] = (),  # noqa: A002
        count: Union[bool, Iterable[str]] = (),
    ) -> dict: ...

    def group_by(self, by: Sequence[str], where: Optional[Where] = None) -> list[Row]: ...
