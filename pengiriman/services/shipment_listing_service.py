from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pengiriman.core.errors import StoreError, ValidationError
from pengiriman.core.flow_logging import flow_info
from pengiriman.core.listing.normalizer import ListingNormalizer
from pengiriman.core.listing.query_builder import ShipmentQueryBuilder
from pengiriman.core.listing.query_spec import QuerySpec
from pengiriman.models.shipment import Shipment
from pengiriman.schemas.listing import RequestShape
from pengiriman.schemas.shipment import PageEnvelope, RowRangeEnvelope, ShipmentRow

logger = logging.getLogger(__name__)


def shipment_row(shipment: Shipment, items: list[dict]) -> ShipmentRow:
    return ShipmentRow.model_validate(
        {
            "id": shipment.id,
            "nama_pengirim": shipment.nama_pengirim,
            "alamat_pengirim": shipment.alamat_pengirim,
            "nohp_pengirim": shipment.nohp_pengirim,
            "nama_penerima": shipment.nama_penerima,
            "alamat_penerima": shipment.alamat_penerima,
            "nohp_penerima": shipment.nohp_penerima,
            "total_harga": float(shipment.total_harga),
            "tanggal_keberangkatan": shipment.tanggal_keberangkatan,
            "barang": items,
        }
    )


def total_pages(total: int, limit: int) -> int:
    if limit <= 0:
        return 0
    return math.ceil(total / limit)


class ShipmentListingService:
    """
    Serves the shipment grid: normalizes the request, runs the count and data
    statements, and assembles the response envelope.

    The two reads are not wrapped in a transaction. A write landing between
    them can make `totalData` differ from the rows returned by at most that
    write; the grid tolerates this.
    """

    def __init__(
        self,
        db: Session,
        normalizer: ListingNormalizer | None = None,
        builder: ShipmentQueryBuilder | None = None,
    ):
        self.db = db
        self.normalizer = normalizer or ListingNormalizer()
        self.builder = builder or ShipmentQueryBuilder()

    def normalize(self, raw_request: RequestShape | Mapping[str, Any]) -> QuerySpec:
        try:
            return self.normalizer.normalize(raw_request)
        except PydanticValidationError as exc:
            fields = sorted(
                {".".join(str(part) for part in err["loc"]) for err in exc.errors()}
            )
            raise ValidationError(
                f"Malformed listing request: {', '.join(fields)}", fields=fields
            ) from exc

    def list_shipments(self, raw_request: RequestShape | Mapping[str, Any]) -> dict:
        spec = self.normalize(raw_request)
        total, rows = self.fetch(spec)
        flow_info(
            logger,
            "shipment_listing predicates=%s offset=%s limit=%s total=%s returned=%s",
            [p.field for p in spec.predicates],
            spec.offset,
            spec.limit,
            total,
            len(rows),
            category="listing",
        )
        if spec.row_range:
            envelope = RowRangeEnvelope(total_data=total, data=rows)
        else:
            envelope = PageEnvelope(
                total_data=total,
                total_pages=total_pages(total, spec.limit),
                current_page=spec.page,
                data=rows,
            )
        return envelope.model_dump(by_alias=True, mode="json")

    def fetch(self, spec: QuerySpec) -> tuple[int, list[ShipmentRow]]:
        try:
            total = int(self.db.execute(self.builder.build_count_query(spec)).scalar_one())
            shipments: list[Shipment] = []
            if self.builder.window_in_range(spec):
                shipments = list(
                    self.db.execute(self.builder.build_data_query(spec)).scalars().all()
                )
            items_by_shipment = self._items_for(shipments)
        except SQLAlchemyError as exc:
            logger.exception(
                "shipment_listing_store_error offset=%s limit=%s error=%s",
                spec.offset,
                spec.limit,
                exc,
            )
            raise StoreError() from exc

        rows = [
            shipment_row(shipment, items_by_shipment.get(shipment.id, []))
            for shipment in shipments
        ]
        return total, rows

    def _items_for(self, shipments: list[Shipment]) -> dict[int, list[dict]]:
        if not shipments:
            return {}
        grouped: dict[int, list[dict]] = defaultdict(list)
        stmt = self.builder.build_items_query(s.id for s in shipments)
        for row in self.db.execute(stmt).all():
            grouped[row.pengiriman_id].append(
                {
                    "id": row.id,
                    "barang_id": row.barang_id,
                    "nama_barang": row.nama_barang,
                    "jumlah_barang": row.jumlah_barang,
                    "harga": float(row.harga) if row.harga is not None else None,
                }
            )
        return grouped
