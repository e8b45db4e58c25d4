from pydantic import Field

from .base import CamelSchema


class CatalogItemCreate(CamelSchema):
    nama_barang: str = Field(min_length=1, max_length=255)


class CatalogItemOut(CamelSchema):
    id: int
    nama_barang: str
