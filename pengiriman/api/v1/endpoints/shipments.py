from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from pengiriman.api.deps.request_identity import require_authorized
from pengiriman.db.session import get_db
from pengiriman.schemas.listing import RequestShapeC
from pengiriman.schemas.shipment import (
    MessageOut,
    ShipmentCreate,
    ShipmentRow,
    ShipmentUpdate,
)
from pengiriman.services.shipment_listing_service import ShipmentListingService
from pengiriman.services.shipment_service import ShipmentService

router = APIRouter(dependencies=[Depends(require_authorized)])


@router.post("/pengiriman")
def list_shipments_api(
    payload: Optional[dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    """
    Grid listing. Accepts either `{filters, pagination}` or the row-range
    `{startRow, endRow, filterModel, sortModel}` body.
    """
    return ShipmentListingService(db).list_shipments(payload or {})


@router.get("/pengiriman")
def list_shipments_query_api(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    nama_pengirim: Optional[str] = Query(None, alias="namaPengirim"),
    nama_penerima: Optional[str] = Query(None, alias="namaPenerima"),
    tanggal_keberangkatan: Optional[str] = Query(None, alias="tanggalKeberangkatan"),
    total_harga: Optional[str] = Query(None, alias="totalHarga"),
    barang_filter: Optional[str] = Query(None, alias="barangFilter"),
    db: Session = Depends(get_db),
):
    request = RequestShapeC(
        page=page,
        limit=limit,
        nama_pengirim=nama_pengirim,
        nama_penerima=nama_penerima,
        tanggal_keberangkatan=tanggal_keberangkatan,
        total_harga=total_harga,
        barang_filter=barang_filter,
    )
    return ShipmentListingService(db).list_shipments(request)


@router.post("/infinite-scroll")
def infinite_scroll_api(
    payload: Optional[dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    return ShipmentListingService(db).list_shipments(payload or {})


@router.post(
    "/kirim-barang",
    response_model=ShipmentRow,
    status_code=status.HTTP_201_CREATED,
)
def create_shipment_api(payload: ShipmentCreate, db: Session = Depends(get_db)):
    return ShipmentService(db).create(payload)


@router.get("/pengiriman/{shipment_id}", response_model=ShipmentRow)
def get_shipment_api(shipment_id: int, db: Session = Depends(get_db)):
    return ShipmentService(db).get(shipment_id)


@router.put("/pengiriman/{shipment_id}", response_model=ShipmentRow)
def update_shipment_api(
    shipment_id: int, payload: ShipmentUpdate, db: Session = Depends(get_db)
):
    return ShipmentService(db).update(shipment_id, payload)


@router.delete("/pengiriman/{shipment_id}", response_model=MessageOut)
def delete_shipment_api(shipment_id: int, db: Session = Depends(get_db)):
    ShipmentService(db).delete(shipment_id)
    return MessageOut(message="Pengiriman deleted successfully")
