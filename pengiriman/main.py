from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pengiriman.api.errors import register_error_handlers
from pengiriman.api.v1.endpoints.api import api_router
from pengiriman.core.config import settings
from pengiriman.core.flow_logging import configure_logging
from pengiriman.db.session import init_models

configure_logging()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_models()
    yield


app = FastAPI(title="Pengiriman Barang API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS else [],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(api_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "up"}
