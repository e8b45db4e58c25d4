from __future__ import annotations

from datetime import date
from decimal import Decimal

from pengiriman.core.listing.normalizer import ListingNormalizer, detect_request_shape
from pengiriman.core.listing.query_spec import FilterOp, Predicate, SortDirection, SortDirective
from pengiriman.schemas.listing import RequestShapeA, RequestShapeB, RequestShapeC


def _normalizer(**kwargs) -> ListingNormalizer:
    kwargs.setdefault("default_limit", 10)
    kwargs.setdefault("max_limit", 1000)
    return ListingNormalizer(**kwargs)


def test_detect_request_shape_by_characteristic_keys():
    assert isinstance(detect_request_shape({"startRow": 0, "endRow": 5}), RequestShapeB)
    assert isinstance(detect_request_shape({"filterModel": {}}), RequestShapeB)
    assert isinstance(detect_request_shape({"filters": {}}), RequestShapeA)
    assert isinstance(detect_request_shape({"pagination": {"page": 2}}), RequestShapeA)
    assert isinstance(detect_request_shape({"page": "2"}), RequestShapeC)
    assert isinstance(detect_request_shape({}), RequestShapeC)


def test_paged_body_builds_offset_from_page_and_limit():
    spec = _normalizer().normalize(
        {"filters": {"namaPengirim": " Alice "}, "pagination": {"page": 3, "limit": 5}}
    )

    assert spec.predicates == (Predicate("namaPengirim", FilterOp.CONTAINS, "Alice"),)
    assert spec.offset == 10
    assert spec.limit == 5
    assert spec.page == 3
    assert spec.row_range is False
    assert spec.sort == SortDirective("tanggalKeberangkatan", SortDirection.DESC)


def test_empty_request_defaults_to_first_page_of_ten():
    spec = _normalizer().normalize({})

    assert spec.predicates == ()
    assert spec.offset == 0
    assert spec.limit == 10
    assert spec.page == 1


def test_non_numeric_pagination_falls_back_to_defaults():
    spec = _normalizer().normalize({"pagination": {"page": "abc", "limit": "x"}})

    assert spec.page == 1
    assert spec.offset == 0
    assert spec.limit == 10


def test_page_below_one_clamps_to_first_page():
    spec = _normalizer().normalize({"pagination": {"page": 0, "limit": 10}})
    assert spec.offset == 0
    assert spec.page == 1


def test_limit_is_capped_and_negative_limit_uses_default():
    capped = _normalizer(max_limit=50).normalize({"pagination": {"limit": 500}})
    negative = _normalizer().normalize({"pagination": {"limit": -4}})

    assert capped.limit == 50
    assert negative.limit == 10


def test_equivalent_intent_across_shapes_yields_identical_predicates():
    normalizer = _normalizer()
    from_body = normalizer.normalize(
        {
            "filters": {
                "namaPengirim": "Alice",
                "tanggalKeberangkatan": "2024-05-01",
                "barangFilter": "phone",
            },
            "pagination": {"page": 1, "limit": 10},
        }
    )
    from_rows = normalizer.normalize(
        {
            "startRow": 0,
            "endRow": 10,
            "filterModel": {
                "barang": {"filterType": "text", "type": "contains", "filter": "phone"},
                "tanggalKeberangkatan": {
                    "filterType": "date",
                    "type": "equals",
                    "dateFrom": "2024-05-01 00:00:00",
                },
                "namaPengirim": {"filterType": "text", "type": "contains", "filter": "Alice"},
            },
        }
    )
    from_query = normalizer.normalize(
        RequestShapeC(
            page="1",
            limit="10",
            nama_pengirim="Alice",
            tanggal_keberangkatan="2024-05-01T00:00:00Z",
            barang_filter="phone",
        )
    )

    expected = (
        Predicate("namaPengirim", FilterOp.CONTAINS, "Alice"),
        Predicate("tanggalKeberangkatan", FilterOp.DATE_EQUALS, date(2024, 5, 1)),
        Predicate("barangFilter", FilterOp.ANY_CHILD_CONTAINS, "phone"),
    )
    assert from_body.predicates == expected
    assert from_rows.predicates == expected
    assert from_query.predicates == expected
    assert from_body.offset == from_rows.offset == from_query.offset == 0
    assert from_body.limit == from_rows.limit == from_query.limit == 10


def test_unparseable_values_drop_only_their_predicate():
    spec = _normalizer().normalize(
        {
            "filters": {
                "namaPengirim": "Bob",
                "tanggalKeberangkatan": "not-a-date",
                "totalHarga": "abc",
            }
        }
    )
    assert spec.predicates == (Predicate("namaPengirim", FilterOp.CONTAINS, "Bob"),)


def test_non_finite_price_is_dropped():
    for raw in ("NaN", "Infinity", "-inf"):
        spec = _normalizer().normalize({"filters": {"totalHarga": raw}})
        assert spec.predicates == ()


def test_price_parses_to_decimal():
    spec = _normalizer().normalize({"filters": {"totalHarga": 150000.5}})
    assert spec.predicates == (
        Predicate("totalHarga", FilterOp.EQUALS, Decimal("150000.5")),
    )


def test_blank_and_structured_text_values_are_ignored():
    spec = _normalizer().normalize(
        {"filters": {"namaPengirim": "   ", "namaPenerima": {"nested": "x"}}}
    )
    assert spec.predicates == ()


def test_row_range_sets_offset_limit_and_mode():
    spec = _normalizer().normalize({"startRow": 20, "endRow": 45})

    assert spec.offset == 20
    assert spec.limit == 25
    assert spec.row_range is True


def test_row_range_negative_start_clamps_to_zero():
    spec = _normalizer().normalize({"startRow": -5, "endRow": 5})
    assert spec.offset == 0
    assert spec.limit == 5


def test_row_range_uses_first_sort_entry():
    spec = _normalizer().normalize(
        {
            "startRow": 0,
            "endRow": 10,
            "sortModel": [
                {"colId": "namaPengirim", "sort": "asc"},
                {"colId": "totalHarga", "sort": "desc"},
            ],
        }
    )
    assert spec.sort == SortDirective("namaPengirim", SortDirection.ASC)


def test_unknown_or_unsortable_sort_column_falls_back_to_default():
    normalizer = _normalizer()
    default = SortDirective("tanggalKeberangkatan", SortDirection.DESC)

    assert normalizer.resolve_sort("alamatPengirim", "asc") == default
    assert normalizer.resolve_sort("barangFilter", "asc") == default
    assert normalizer.resolve_sort(None, None) == default


def test_invalid_sort_direction_becomes_ascending():
    assert _normalizer().resolve_sort("totalHarga", "sideways") == SortDirective(
        "totalHarga", SortDirection.ASC
    )
    assert _normalizer().resolve_sort("id", "DESC") == SortDirective("id", SortDirection.DESC)


def test_normalization_is_deterministic():
    raw = {"filters": {"namaPenerima": "Dewi"}, "pagination": {"page": 2, "limit": 3}}
    assert _normalizer().normalize(raw) == _normalizer().normalize(raw)


def test_last_representable_day_is_dropped():
    normalizer = _normalizer()

    for raw in ("9999-12-31", "9999-12-31T10:00:00", date(9999, 12, 31)):
        spec = normalizer.normalize({"filters": {"tanggalKeberangkatan": raw}})
        assert spec.predicates == ()

    kept = normalizer.normalize({"filters": {"tanggalKeberangkatan": "9999-12-30"}})
    assert kept.predicates == (
        Predicate("tanggalKeberangkatan", FilterOp.DATE_EQUALS, date(9999, 12, 30)),
    )


def test_inverted_row_range_is_an_empty_block():
    spec = _normalizer().normalize({"startRow": 30, "endRow": 10})

    assert spec.offset == 30
    assert spec.limit == 0
    assert spec.row_range is True
