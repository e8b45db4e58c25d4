from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pengiriman.models.catalog import CatalogItem
from pengiriman.schemas.catalog import CatalogItemCreate


class DuplicateError(Exception):
    """Raised when a catalog item with the same name already exists."""


def create_catalog_item(db: Session, data: CatalogItemCreate) -> CatalogItem:
    obj = CatalogItem(nama_barang=data.nama_barang)
    db.add(obj)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateError("Catalog item already exists (unique constraint hit).") from e
    db.refresh(obj)
    return obj


def list_catalog_items(
    db: Session,
    skip: int = 0,
    limit: int = 500,
    q: str | None = None,
) -> list[CatalogItem]:
    stmt = select(CatalogItem).order_by(CatalogItem.nama_barang.asc(), CatalogItem.id.asc())
    if q:
        stmt = stmt.where(CatalogItem.nama_barang.icontains(q, autoescape=True))
    stmt = stmt.offset(skip).limit(limit)
    return list(db.execute(stmt).scalars().all())


def existing_catalog_ids(db: Session, ids: Iterable[int]) -> set[int]:
    wanted = set(ids)
    if not wanted:
        return set()
    stmt = select(CatalogItem.id).where(CatalogItem.id.in_(sorted(wanted)))
    return set(db.execute(stmt).scalars().all())
