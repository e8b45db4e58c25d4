from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pengiriman.db.base import Base


class CatalogItem(Base):
    __tablename__ = "detail_barang"

    __table_args__ = (
        UniqueConstraint("nama_barang", name="uq_detail_barang_nama_barang"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    nama_barang: Mapped[str] = mapped_column(String(255), nullable=False)
