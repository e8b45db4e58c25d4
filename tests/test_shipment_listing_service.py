from __future__ import annotations

import pytest
from sqlalchemy import text

from pengiriman.core.errors import StoreError, ValidationError
from pengiriman.core.listing.query_builder import ShipmentQueryBuilder
from pengiriman.services.shipment_listing_service import ShipmentListingService, total_pages


class _BrokenBuilder(ShipmentQueryBuilder):
    def build_count_query(self, spec):
        return text("SELECT COUNT(*) FROM no_such_table")


def test_total_pages():
    assert total_pages(0, 10) == 0
    assert total_pages(3, 10) == 1
    assert total_pages(10, 10) == 1
    assert total_pages(11, 10) == 2
    assert total_pages(5, 0) == 0


def test_fetch_total_and_rows_share_predicates(db_session, make_shipment):
    make_shipment(nama_penerima="Dewi")
    make_shipment(nama_penerima="Dewanto")
    make_shipment(nama_penerima="Budi")
    service = ShipmentListingService(db_session)

    spec = service.normalize({"filters": {"namaPenerima": "dew"}})

    total, rows = service.fetch(spec)

    assert total == 2
    assert sorted(row.nama_penerima for row in rows) == ["Dewanto", "Dewi"]


def test_store_failure_surfaces_generic_error(db_session):
    service = ShipmentListingService(db_session, builder=_BrokenBuilder())

    with pytest.raises(StoreError) as exc_info:
        service.list_shipments({})

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Something went wrong."
    assert "no_such_table" not in str(exc_info.value)


def test_malformed_request_is_a_validation_error(db_session):
    service = ShipmentListingService(db_session)

    with pytest.raises(ValidationError) as exc_info:
        service.list_shipments({"filterModel": ["namaPengirim"]})

    assert exc_info.value.status_code == 400
    assert exc_info.value.fields


def test_shipment_without_items_lists_empty_children(db_session, make_shipment):
    make_shipment(items=())

    envelope = ShipmentListingService(db_session).list_shipments({"startRow": 0, "endRow": 10})

    assert envelope["totalData"] == 1
    assert envelope["data"][0]["barang"] == []


def test_window_past_largest_offset_is_empty_page(db_session, make_shipment):
    make_shipment()
    make_shipment()

    envelope = ShipmentListingService(db_session).list_shipments(
        {"pagination": {"page": 10**19, "limit": 10}}
    )

    assert envelope["totalData"] == 2
    assert envelope["totalPages"] == 1
    assert envelope["currentPage"] == 10**19
    assert envelope["data"] == []
