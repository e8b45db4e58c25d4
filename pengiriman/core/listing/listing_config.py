from pengiriman.core.listing.parsers import parse_date, parse_decimal, parse_text
from pengiriman.core.listing.query_spec import FilterOp
from pengiriman.models.catalog import CatalogItem
from pengiriman.models.shipment import Shipment

# Known listing fields, in the order their predicates are applied.
# Keys are the logical (wire) names used by every request shape.
SHIPMENT_LISTING_CONFIG = {
    "listing_id": "pengiriman_grid",
    "base_model": Shipment,
    "fields": {
        "namaPengirim": {"path": Shipment.nama_pengirim, "filter_type": FilterOp.CONTAINS, "parser": parse_text, "sortable": True},
        "namaPenerima": {"path": Shipment.nama_penerima, "filter_type": FilterOp.CONTAINS, "parser": parse_text, "sortable": True},
        "tanggalKeberangkatan": {"path": Shipment.tanggal_keberangkatan, "filter_type": FilterOp.DATE_EQUALS, "parser": parse_date, "sortable": True},
        "totalHarga": {"path": Shipment.total_harga, "filter_type": FilterOp.EQUALS, "parser": parse_decimal, "sortable": True},
        "barangFilter": {"path": CatalogItem.nama_barang, "filter_type": FilterOp.ANY_CHILD_CONTAINS, "parser": parse_text, "sortable": False},
        "id": {"path": Shipment.id, "sortable": True},
    },
    # Grid column ids that carry a filter under a different logical name.
    "aliases": {"barang": "barangFilter"},
    "default_sort": ("tanggalKeberangkatan", "desc"),
}
