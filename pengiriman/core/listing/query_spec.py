from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FilterOp(str, Enum):
    CONTAINS = "contains"
    DATE_EQUALS = "date_equals"
    EQUALS = "equals"
    ANY_CHILD_CONTAINS = "any_child_contains"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Predicate:
    field: str
    op: FilterOp
    value: Any


@dataclass(frozen=True)
class SortDirective:
    field: str = "tanggalKeberangkatan"
    direction: SortDirection = SortDirection.DESC


@dataclass(frozen=True)
class QuerySpec:
    """
    Shape-independent listing request: which shipments match, in what order,
    and which window of them to return.

    `row_range` is True when the caller paginates by start/end row index and
    expects the compact `{totalData, data}` envelope.
    """

    predicates: tuple[Predicate, ...] = ()
    sort: SortDirective = field(default_factory=SortDirective)
    offset: int = 0
    limit: int = 10
    row_range: bool = False

    @property
    def page(self) -> int:
        if self.limit <= 0:
            return 1
        return self.offset // self.limit + 1
