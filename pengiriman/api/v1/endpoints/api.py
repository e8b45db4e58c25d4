from fastapi import APIRouter

from pengiriman.api.v1.endpoints import auth, catalog, shipments

api_router = APIRouter()

api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(shipments.router, tags=["Pengiriman"])
api_router.include_router(catalog.router, prefix="/detail-barang", tags=["Catalog"])
