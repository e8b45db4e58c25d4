"""
Request shapes accepted by the shipment listing endpoints.

Three shapes reach the same listing pipeline:

- RequestShapeA: ``{filters: {...}, pagination: {page, limit}}`` sent by the
  paged grid.
- RequestShapeB: ``{startRow, endRow, filterModel, sortModel}`` sent by the
  infinite-scroll grid datasource.
- RequestShapeC: flat query-string parameters on ``GET``.

Values are kept loosely typed here (``Any``) because a non-numeric page or an
unparseable date must fall back to a default or drop the filter rather than
reject the request. Parsing happens in ``pengiriman.core.listing.normalizer``.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import Field

from .base import CamelSchema


class ListingFilters(CamelSchema):
    nama_pengirim: Any = None
    nama_penerima: Any = None
    tanggal_keberangkatan: Any = None
    total_harga: Any = None
    barang_filter: Any = None


class PaginationIn(CamelSchema):
    page: Any = None
    limit: Any = None


class RequestShapeA(CamelSchema):
    filters: Optional[ListingFilters] = None
    pagination: Optional[PaginationIn] = None


class FilterModelEntry(CamelSchema):
    filter: Any = None
    date_from: Any = None


class SortModelEntry(CamelSchema):
    col_id: str
    sort: Optional[str] = None


class RequestShapeB(CamelSchema):
    start_row: Any = None
    end_row: Any = None
    filter_model: dict[str, FilterModelEntry] = Field(default_factory=dict)
    sort_model: list[SortModelEntry] = Field(default_factory=list)


class RequestShapeC(CamelSchema):
    page: Optional[str] = None
    limit: Optional[str] = None
    nama_pengirim: Optional[str] = None
    nama_penerima: Optional[str] = None
    tanggal_keberangkatan: Optional[str] = None
    total_harga: Optional[str] = None
    barang_filter: Optional[str] = None


RequestShape = Union[RequestShapeA, RequestShapeB, RequestShapeC]

ROW_RANGE_KEYS = ("startRow", "endRow", "filterModel", "sortModel")
PAGED_BODY_KEYS = ("filters", "pagination")
