from __future__ import annotations

import os
import sys
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Settings are read at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_MODE"] = "disabled"
os.environ["FLOW_LOGS_ENABLED"] = "false"

import importlib

fastapi_app = importlib.import_module("pengiriman.main").app
from pengiriman.db.base import Base
from pengiriman.db.session import create_engine_from_url, get_db

# Ensure all models are registered with SQLAlchemy metadata
import pengiriman.models  # noqa: F401
from pengiriman.models.catalog import CatalogItem
from pengiriman.models.shipment import LineItem, Shipment


@pytest.fixture(scope="session")
def engine():
    engine = create_engine_from_url("sqlite://")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture(scope="function")
def db_session(engine):
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(engine, db_session):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
    )

    def _override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def catalog(db_session):
    """Catalog rows keyed by name; add more with catalog.add(name)."""

    class _Catalog(dict):
        def add(self, name: str) -> CatalogItem:
            item = CatalogItem(nama_barang=name)
            db_session.add(item)
            db_session.commit()
            self[name] = item
            return item

    items = _Catalog()
    for name in ("Phone", "Laptop", "Box A", "Box B", "Crate"):
        items.add(name)
    return items


@pytest.fixture
def make_shipment(db_session, catalog):
    counter = {"n": 0}

    def _make(
        nama_pengirim: str = "Sender",
        nama_penerima: str = "Receiver",
        tanggal: datetime | None = None,
        total_harga: str = "100000",
        items: tuple[str, ...] = ("Phone",),
    ) -> Shipment:
        counter["n"] += 1
        shipment = Shipment(
            nama_pengirim=nama_pengirim,
            alamat_pengirim="Jl. Merdeka 1",
            nohp_pengirim="0811000001",
            nama_penerima=nama_penerima,
            alamat_penerima="Jl. Sudirman 2",
            nohp_penerima="0811000002",
            total_harga=Decimal(total_harga),
            tanggal_keberangkatan=tanggal or datetime(2024, 5, 1, 8, counter["n"] % 60),
        )
        shipment.items = [
            LineItem(
                barang_id=(catalog.get(name) or catalog.add(name)).id,
                jumlah_barang=1,
                harga=Decimal("5000"),
            )
            for name in items
        ]
        db_session.add(shipment)
        db_session.commit()
        return shipment

    return _make
