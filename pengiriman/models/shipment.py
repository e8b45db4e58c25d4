from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pengiriman.db.base import Base
from pengiriman.models.catalog import CatalogItem


class Shipment(Base):
    """
    One consignment ("pengiriman") with sender and recipient details.
    `total_harga` is stored as submitted by the client.
    """
    __tablename__ = "pengiriman"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    nama_pengirim: Mapped[str] = mapped_column(String(255), nullable=False)
    alamat_pengirim: Mapped[str] = mapped_column(String(255), nullable=False)
    nohp_pengirim: Mapped[str] = mapped_column(String(50), nullable=False)

    nama_penerima: Mapped[str] = mapped_column(String(255), nullable=False)
    alamat_penerima: Mapped[str] = mapped_column(String(255), nullable=False)
    nohp_penerima: Mapped[str] = mapped_column(String(50), nullable=False)

    total_harga: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    tanggal_keberangkatan: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, index=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    items: Mapped[list["LineItem"]] = relationship(
        "LineItem",
        back_populates="shipment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LineItem.id",
    )

    def __repr__(self) -> str:
        return f"<Shipment(id={self.id}, pengirim={self.nama_pengirim!r})>"


class LineItem(Base):
    """A catalog item and quantity packed into one shipment ("barang")."""
    __tablename__ = "barang"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    pengiriman_id: Mapped[int] = mapped_column(
        ForeignKey("pengiriman.id", ondelete="CASCADE"), nullable=False, index=True
    )
    barang_id: Mapped[int] = mapped_column(
        ForeignKey("detail_barang.id"), nullable=False, index=True
    )
    jumlah_barang: Mapped[int] = mapped_column(Integer, nullable=False)
    # Unit price at the time the shipment was registered.
    harga: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)

    shipment: Mapped["Shipment"] = relationship("Shipment", back_populates="items")
    catalog_item: Mapped["CatalogItem"] = relationship("CatalogItem")

    def __repr__(self) -> str:
        return f"<LineItem(shipment={self.pengiriman_id}, barang={self.barang_id})>"
