"""Unit tests for listing and upload helpers."""

import re

from sociaty.services.listings import (
    apply_update,
    build_listing,
    filter_listings,
    parse_price,
    remove_listing,
    unique_listing_id,
)
from sociaty.services.uploads import generate_filename


def _listing(id, title="Item", desc="", price=0, category="misc"):
    return {"id": id, "title": title, "desc": desc, "price": price, "category": category}


def test_filter_without_criteria_returns_everything():
    items = [_listing(1), _listing(2)]
    assert filter_listings(items) == items
    assert filter_listings(items, cat="", search="", price="") == items


def test_filter_price_buckets():
    items = [_listing(i, price=p) for i, p in enumerate([0, 49.99, 50, 50.01, 199, 200, 200.5])]
    assert [i["price"] for i in filter_listings(items, price="0-50")] == [0, 49.99, 50]
    assert [i["price"] for i in filter_listings(items, price="50-200")] == [50.01, 199, 200]
    assert [i["price"] for i in filter_listings(items, price="200+")] == [200.5]


def test_filter_search_handles_missing_description():
    items = [_listing(1, title="Lamp", desc=None), _listing(2, title="Chair", desc="with LAMP holder")]
    assert [i["id"] for i in filter_listings(items, search="lamp")] == [1, 2]


def test_parse_price():
    assert parse_price("12") == 12
    assert parse_price("12.5") == 12.5
    assert parse_price("") == 0
    assert parse_price(None) == 0
    assert parse_price("abc") == 0
    assert parse_price("nan") == 0
    assert parse_price("-3") == -3


def test_build_listing_defaults():
    item = build_listing("Mug", None, None, None, "S1", [], default_category="misc", listing_id=7)
    assert item["id"] == 7
    assert item["price"] == 0
    assert item["category"] == "misc"
    assert item["media"] == []


def test_apply_update_ignores_falsy():
    item = _listing(1, title="Old", desc="d", price=10, category="books")
    item["media"] = ["/uploads/a.jpg"]
    apply_update(item, title="", desc=None, price="0", category="", media=[])
    assert item == {
        "id": 1, "title": "Old", "desc": "d", "price": 10,
        "category": "books", "media": ["/uploads/a.jpg"],
    }

    apply_update(item, price="25", media=["/uploads/b.jpg"])
    assert item["price"] == 25
    assert item["media"] == ["/uploads/b.jpg"]


def test_remove_listing_matches_numeric_ids():
    items = [_listing(1), _listing("2"), _listing(3)]
    assert [i["id"] for i in remove_listing(items, 2)] == [1, 3]
    assert remove_listing(items, None) == items


def test_unique_listing_id_skips_taken_ids(monkeypatch):
    monkeypatch.setattr("sociaty.services.listings.now_ms", lambda: 1000)
    assert unique_listing_id([_listing(1000), _listing(1001)]) == 1002
    assert unique_listing_id([]) == 1000


def test_generate_filename_keeps_extension():
    name = generate_filename("holiday.photo.JPEG")
    assert re.fullmatch(r"\d{13}-[A-Za-z0-9_-]{6}\.JPEG", name)


def test_generate_filename_without_extension():
    assert re.fullmatch(r"\d{13}-[A-Za-z0-9_-]{6}", generate_filename("README"))
    assert generate_filename("a.png") != generate_filename("a.png")
