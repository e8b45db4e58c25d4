from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta

from sqlalchemy import Select, asc, desc, func, select
from sqlalchemy.sql.elements import ColumnElement

from pengiriman.core.listing.listing_config import SHIPMENT_LISTING_CONFIG
from pengiriman.core.listing.query_spec import FilterOp, Predicate, QuerySpec, SortDirection
from pengiriman.models.catalog import CatalogItem
from pengiriman.models.shipment import LineItem, Shipment

# Largest value a LIMIT/OFFSET bind accepts (signed 64-bit).
MAX_SQL_INTEGER = 2**63 - 1


class ShipmentQueryBuilder:
    """
    Builds the statements behind the shipment grid from a QuerySpec.

    The data statement and the count statement take their WHERE criteria from
    the same `where_clauses` call, so the total always describes exactly the
    rows the data statement pages through. Line items are fetched by a third
    statement keyed on the page's shipment ids and grouped by the caller,
    which keeps the parent statement free of joins and duplicate rows.
    """

    def __init__(self, config: dict = SHIPMENT_LISTING_CONFIG):
        self.config = config
        self.base_model = config["base_model"]
        self._constructors = {
            FilterOp.CONTAINS: self._contains,
            FilterOp.DATE_EQUALS: self._date_equals,
            FilterOp.EQUALS: self._equals,
            FilterOp.ANY_CHILD_CONTAINS: self._any_child_contains,
        }

    def where_clauses(self, spec: QuerySpec) -> list[ColumnElement[bool]]:
        clauses = []
        for predicate in spec.predicates:
            field_def = self.config["fields"].get(predicate.field)
            if not field_def:
                continue
            constructor = self._constructors[predicate.op]
            clauses.append(constructor(field_def["path"], predicate))
        return clauses

    def build_count_query(self, spec: QuerySpec) -> Select:
        return (
            select(func.count())
            .select_from(self.base_model)
            .where(*self.where_clauses(spec))
        )

    @staticmethod
    def window_in_range(spec: QuerySpec) -> bool:
        """False when the window starts past any row a table can hold."""
        return spec.offset <= MAX_SQL_INTEGER - spec.limit

    def build_data_query(self, spec: QuerySpec, *, paginate: bool = True) -> Select:
        stmt = select(self.base_model).where(*self.where_clauses(spec))
        stmt = self._apply_sorting(stmt, spec)
        if paginate:
            stmt = stmt.offset(spec.offset).limit(spec.limit)
        return stmt

    def build_items_query(self, shipment_ids: Iterable[int]) -> Select:
        ids = sorted(set(shipment_ids))
        return (
            select(
                LineItem.id,
                LineItem.pengiriman_id,
                LineItem.barang_id,
                CatalogItem.nama_barang,
                LineItem.jumlah_barang,
                LineItem.harga,
            )
            .outerjoin(CatalogItem, CatalogItem.id == LineItem.barang_id)
            .where(LineItem.pengiriman_id.in_(ids))
            .order_by(LineItem.pengiriman_id.asc(), LineItem.id.asc())
        )

    def _apply_sorting(self, stmt: Select, spec: QuerySpec) -> Select:
        field_def = self.config["fields"].get(spec.sort.field)
        if not field_def or not field_def.get("sortable"):
            field_key, direction = self.config["default_sort"]
            field_def = self.config["fields"][field_key]
            is_desc = direction == SortDirection.DESC.value
        else:
            is_desc = spec.sort.direction == SortDirection.DESC
        order_func = desc if is_desc else asc
        # id breaks ties so offset windows never overlap or skip rows.
        return stmt.order_by(order_func(field_def["path"]), order_func(self.base_model.id))

    @staticmethod
    def _contains(column, predicate: Predicate) -> ColumnElement[bool]:
        # autoescape makes %, _ and the escape character itself match literally.
        return column.icontains(predicate.value, autoescape=True)

    @staticmethod
    def _date_equals(column, predicate: Predicate) -> ColumnElement[bool]:
        day: date = predicate.value
        start = datetime.combine(day, time.min)
        return (column >= start) & (column < start + timedelta(days=1))

    @staticmethod
    def _equals(column, predicate: Predicate) -> ColumnElement[bool]:
        return column == predicate.value

    def _any_child_contains(self, column, predicate: Predicate) -> ColumnElement[bool]:
        return (
            select(LineItem.id)
            .join(CatalogItem, CatalogItem.id == LineItem.barang_id)
            .where(
                LineItem.pengiriman_id == self.base_model.id,
                column.icontains(predicate.value, autoescape=True),
            )
            .correlate(self.base_model)
            .exists()
        )
