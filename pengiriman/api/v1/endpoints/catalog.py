from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from pengiriman.api.deps.request_identity import require_authorized
from pengiriman.core.errors import ConflictError
from pengiriman.crud.catalog import DuplicateError, create_catalog_item, list_catalog_items
from pengiriman.db.session import get_db
from pengiriman.schemas.catalog import CatalogItemCreate, CatalogItemOut

router = APIRouter(dependencies=[Depends(require_authorized)])


@router.get("", response_model=list[CatalogItemOut])
def list_catalog_items_api(
    skip: int = Query(0, ge=0),
    limit: int = Query(500, ge=1, le=1000),
    q: str | None = Query(None),
    db: Session = Depends(get_db),
):
    return list_catalog_items(db, skip=skip, limit=limit, q=q)


@router.post("", response_model=CatalogItemOut, status_code=status.HTTP_201_CREATED)
def create_catalog_item_api(payload: CatalogItemCreate, db: Session = Depends(get_db)):
    try:
        return create_catalog_item(db, payload)
    except DuplicateError as e:
        raise ConflictError(str(e)) from e
