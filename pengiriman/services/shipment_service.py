from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from pengiriman.core.errors import NotFoundError, StoreError, ValidationError
from pengiriman.core.flow_logging import flow_info
from pengiriman.crud.catalog import existing_catalog_ids
from pengiriman.models.shipment import LineItem, Shipment
from pengiriman.schemas.shipment import LineItemIn, ShipmentCreate, ShipmentRow, ShipmentUpdate
from pengiriman.services.shipment_listing_service import shipment_row

logger = logging.getLogger(__name__)


class ShipmentService:
    """
    Single-shipment reads and writes.

    Every write is one transaction: the shipment row and its full line-item
    set are committed together or not at all. `total_harga` is stored as the
    client computed it.
    """

    def __init__(self, db: Session):
        self.db = db

    def _load(self, shipment_id: int) -> Shipment:
        stmt = (
            select(Shipment)
            .options(selectinload(Shipment.items).selectinload(LineItem.catalog_item))
            .where(Shipment.id == shipment_id)
        )
        try:
            shipment = self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.exception("shipment_load_store_error id=%s error=%s", shipment_id, exc)
            raise StoreError() from exc
        if shipment is None:
            raise NotFoundError("Pengiriman not found")
        return shipment

    @staticmethod
    def to_row(shipment: Shipment) -> ShipmentRow:
        items = [
            {
                "id": item.id,
                "barang_id": item.barang_id,
                "nama_barang": item.catalog_item.nama_barang if item.catalog_item else None,
                "jumlah_barang": item.jumlah_barang,
                "harga": float(item.harga) if item.harga is not None else None,
            }
            for item in shipment.items
        ]
        return shipment_row(shipment, items)

    def _validate_catalog_refs(self, items: list[LineItemIn]) -> None:
        wanted = {item.barang_id for item in items}
        missing = sorted(wanted - existing_catalog_ids(self.db, wanted))
        if missing:
            raise ValidationError(
                f"Unknown barangId: {', '.join(str(i) for i in missing)}",
                fields=["barang"],
            )

    @staticmethod
    def _build_items(items: list[LineItemIn]) -> list[LineItem]:
        return [
            LineItem(
                barang_id=item.barang_id,
                jumlah_barang=item.jumlah_barang,
                harga=item.harga,
            )
            for item in items
        ]

    def _commit(self, event: str, shipment_id: int | None) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("%s_store_error id=%s error=%s", event, shipment_id, exc)
            raise StoreError() from exc

    def create(self, payload: ShipmentCreate) -> ShipmentRow:
        self._validate_catalog_refs(payload.barang)

        shipment = Shipment(
            nama_pengirim=payload.nama_pengirim,
            alamat_pengirim=payload.alamat_pengirim,
            nohp_pengirim=payload.nohp_pengirim,
            nama_penerima=payload.nama_penerima,
            alamat_penerima=payload.alamat_penerima,
            nohp_penerima=payload.nohp_penerima,
            tanggal_keberangkatan=payload.tanggal_keberangkatan,
            total_harga=payload.total_harga,
        )
        shipment.items = self._build_items(payload.barang)
        self.db.add(shipment)
        self._commit("shipment_create", None)
        shipment_id = shipment.id

        flow_info(
            logger,
            "shipment_created id=%s items=%s",
            shipment_id,
            len(payload.barang),
            category="writes",
        )
        return self.to_row(self._load(shipment_id))

    def get(self, shipment_id: int) -> ShipmentRow:
        return self.to_row(self._load(shipment_id))

    def update(self, shipment_id: int, payload: ShipmentUpdate) -> ShipmentRow:
        shipment = self._load(shipment_id)

        patch = payload.model_dump(exclude_unset=True, exclude={"barang"})
        nulls = sorted(
            ShipmentUpdate.model_fields[k].alias or k for k, v in patch.items() if v is None
        )
        if nulls:
            raise ValidationError(
                f"Fields cannot be null: {', '.join(nulls)}", fields=nulls
            )
        if payload.barang is not None:
            self._validate_catalog_refs(payload.barang)

        for key, value in patch.items():
            setattr(shipment, key, value)

        if payload.barang is not None:
            # Replace-all: orphaned line items are deleted on flush.
            shipment.items.clear()
            shipment.items.extend(self._build_items(payload.barang))

        self._commit("shipment_update", shipment_id)
        flow_info(
            logger,
            "shipment_updated id=%s fields=%s items_replaced=%s",
            shipment_id,
            sorted(patch),
            payload.barang is not None,
            category="writes",
        )
        self.db.expire_all()
        return self.to_row(self._load(shipment_id))

    def delete(self, shipment_id: int) -> None:
        shipment = self._load(shipment_id)
        self.db.delete(shipment)
        self._commit("shipment_delete", shipment_id)
        flow_info(logger, "shipment_deleted id=%s", shipment_id, category="writes")
