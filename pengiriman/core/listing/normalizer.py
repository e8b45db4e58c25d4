from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pengiriman.core.config import settings
from pengiriman.core.errors import ParseError
from pengiriman.core.listing.listing_config import SHIPMENT_LISTING_CONFIG
from pengiriman.core.listing.parsers import is_blank, parse_int
from pengiriman.core.listing.query_spec import (
    Predicate,
    QuerySpec,
    SortDirection,
    SortDirective,
)
from pengiriman.schemas.listing import (
    PAGED_BODY_KEYS,
    ROW_RANGE_KEYS,
    RequestShape,
    RequestShapeA,
    RequestShapeB,
    RequestShapeC,
)

logger = logging.getLogger(__name__)


def detect_request_shape(raw: Mapping[str, Any]) -> RequestShape:
    """
    Pick the request shape from its characteristic keys. Row-range keys win
    over the filters/pagination pair; anything else is read as flat
    query-string parameters.
    """
    if any(key in raw for key in ROW_RANGE_KEYS):
        return RequestShapeB.model_validate(raw)
    if any(key in raw for key in PAGED_BODY_KEYS):
        return RequestShapeA.model_validate(raw)
    return RequestShapeC.model_validate(raw)


class ListingNormalizer:
    def __init__(
        self,
        config: dict = SHIPMENT_LISTING_CONFIG,
        default_limit: int | None = None,
        max_limit: int | None = None,
    ):
        self.config = config
        self.default_limit = (
            default_limit if default_limit is not None else settings.LISTING_DEFAULT_LIMIT
        )
        self.max_limit = max_limit if max_limit is not None else settings.LISTING_MAX_LIMIT

    def normalize(self, request: RequestShape | Mapping[str, Any]) -> QuerySpec:
        if isinstance(request, Mapping):
            request = detect_request_shape(request)
        if isinstance(request, RequestShapeB):
            return self._from_row_range(request)
        if isinstance(request, RequestShapeA):
            return self._from_paged_body(request)
        return self._from_query_params(request)

    def _from_paged_body(self, request: RequestShapeA) -> QuerySpec:
        raw_filters = request.filters.model_dump(by_alias=True) if request.filters else {}
        pagination = request.pagination
        page = parse_int(pagination.page if pagination else None, 1)
        limit = parse_int(pagination.limit if pagination else None, self.default_limit)
        return self._paged_spec(raw_filters, page, limit)

    def _from_query_params(self, request: RequestShapeC) -> QuerySpec:
        raw = request.model_dump(by_alias=True, exclude={"page", "limit"})
        page = parse_int(request.page, 1)
        limit = parse_int(request.limit, self.default_limit)
        return self._paged_spec(raw, page, limit)

    def _paged_spec(self, raw_filters: Mapping[str, Any], page: int, limit: int) -> QuerySpec:
        page = max(page, 1)
        limit = self._clamp_limit(limit)
        return QuerySpec(
            predicates=self.build_predicates(raw_filters),
            sort=self.default_sort(),
            offset=(page - 1) * limit,
            limit=limit,
            row_range=False,
        )

    def _from_row_range(self, request: RequestShapeB) -> QuerySpec:
        start_row = max(parse_int(request.start_row, 0), 0)
        end_row = parse_int(request.end_row, start_row + self.default_limit)
        # An inverted range is an empty block.
        limit = min(max(end_row - start_row, 0), self.max_limit)

        raw_filters: dict[str, Any] = {}
        for col_id, entry in request.filter_model.items():
            key = self.config.get("aliases", {}).get(col_id, col_id)
            value = entry.filter if not is_blank(entry.filter) else entry.date_from
            raw_filters[key] = value

        sort = self.default_sort()
        if request.sort_model:
            sort = self.resolve_sort(request.sort_model[0].col_id, request.sort_model[0].sort)

        return QuerySpec(
            predicates=self.build_predicates(raw_filters),
            sort=sort,
            offset=start_row,
            limit=limit,
            row_range=request.start_row is not None or request.end_row is not None,
        )

    def build_predicates(self, raw_filters: Mapping[str, Any]) -> tuple[Predicate, ...]:
        predicates: list[Predicate] = []
        for key, field_def in self.config["fields"].items():
            filter_type = field_def.get("filter_type")
            if filter_type is None:
                continue
            value = raw_filters.get(key)
            if is_blank(value):
                continue
            try:
                parsed = field_def["parser"](value)
            except ParseError as exc:
                logger.debug("listing_filter_dropped field=%s reason=%s", key, exc)
                continue
            predicates.append(Predicate(field=key, op=filter_type, value=parsed))
        return tuple(predicates)

    def default_sort(self) -> SortDirective:
        field_key, direction = self.config["default_sort"]
        return SortDirective(field=field_key, direction=SortDirection(direction))

    def resolve_sort(self, col_id: str | None, direction: str | None) -> SortDirective:
        field_def = self.config["fields"].get(col_id or "")
        if not field_def or not field_def.get("sortable"):
            return self.default_sort()
        normalized = (direction or "").strip().lower()
        if normalized not in (SortDirection.ASC.value, SortDirection.DESC.value):
            normalized = SortDirection.ASC.value
        return SortDirective(field=col_id, direction=SortDirection(normalized))

    def _clamp_limit(self, limit: int) -> int:
        if limit < 0:
            return self.default_limit
        return min(limit, self.max_limit)
