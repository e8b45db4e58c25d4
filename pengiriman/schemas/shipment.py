from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from .base import CamelSchema


class LineItemIn(CamelSchema):
    barang_id: int = Field(ge=1)
    jumlah_barang: int = Field(ge=1)
    harga: Optional[Decimal] = Field(default=None, ge=0)


class ShipmentBase(CamelSchema):
    nama_pengirim: str = Field(min_length=1, max_length=255)
    alamat_pengirim: str = Field(min_length=1, max_length=255)
    nohp_pengirim: str = Field(min_length=1, max_length=50)
    nama_penerima: str = Field(min_length=1, max_length=255)
    alamat_penerima: str = Field(min_length=1, max_length=255)
    nohp_penerima: str = Field(min_length=1, max_length=50)
    tanggal_keberangkatan: datetime
    total_harga: Decimal = Field(ge=0)


class ShipmentCreate(ShipmentBase):
    barang: List[LineItemIn] = Field(min_length=1)


class ShipmentUpdate(CamelSchema):
    """Partial update. When `barang` is sent it replaces every line item."""

    nama_pengirim: Optional[str] = Field(default=None, min_length=1, max_length=255)
    alamat_pengirim: Optional[str] = Field(default=None, min_length=1, max_length=255)
    nohp_pengirim: Optional[str] = Field(default=None, min_length=1, max_length=50)
    nama_penerima: Optional[str] = Field(default=None, min_length=1, max_length=255)
    alamat_penerima: Optional[str] = Field(default=None, min_length=1, max_length=255)
    nohp_penerima: Optional[str] = Field(default=None, min_length=1, max_length=50)
    tanggal_keberangkatan: Optional[datetime] = None
    total_harga: Optional[Decimal] = Field(default=None, ge=0)
    barang: Optional[List[LineItemIn]] = Field(default=None, min_length=1)


class LineItemOut(CamelSchema):
    id: int
    barang_id: int
    nama_barang: Optional[str] = None
    jumlah_barang: int
    harga: Optional[float] = None


class ShipmentRow(CamelSchema):
    id: int
    nama_pengirim: str
    alamat_pengirim: str
    nohp_pengirim: str
    nama_penerima: str
    alamat_penerima: str
    nohp_penerima: str
    total_harga: float
    tanggal_keberangkatan: datetime
    barang: List[LineItemOut] = []


class PageEnvelope(CamelSchema):
    total_data: int
    total_pages: int
    current_page: int
    data: List[ShipmentRow]


class RowRangeEnvelope(CamelSchema):
    total_data: int
    data: List[ShipmentRow]


class MessageOut(CamelSchema):
    message: str
