"""
Listing queries and mutations over the in-memory listings collection.

Records are plain dicts in the stored (camelCase) shape:
id, title, desc, price, category, studentId, media, createdAt.
"""
import math
from typing import Any, Callable, Dict, List, Optional

from sociaty.services.ids import now_ms, utc_timestamp

Listing = Dict[str, Any]

PRICE_BUCKETS: Dict[str, Callable[[float], bool]] = {
    "0-50": lambda p: p <= 50,
    "50-200": lambda p: 50 < p <= 200,
    "200+": lambda p: p > 200,
}


def _price_of(item: Listing) -> float:
    try:
        return float(item.get("price") or 0)
    except (TypeError, ValueError):
        return 0.0


def filter_listings(
    items: List[Listing],
    cat: Optional[str] = None,
    search: Optional[str] = None,
    price: Optional[str] = None,
) -> List[Listing]:
    """Apply the category, text and price-bucket filters. Each one is skipped when empty."""
    if cat:
        items = [i for i in items if i.get("category") == cat]

    if search:
        q = search.lower()
        items = [
            i for i in items
            if q in f"{i.get('title') or ''} {i.get('desc') or ''}".lower()
        ]

    # unknown bucket names leave the result untouched
    bucket = PRICE_BUCKETS.get(price) if price else None
    if bucket:
        items = [i for i in items if bucket(_price_of(i))]

    return items


def parse_price(value: Any) -> float:
    """Number-like input to a number; anything unparsable becomes 0."""
    if value is None or value == "":
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number) if number.is_integer() else number


def find_listing(items: List[Listing], listing_id: str) -> Optional[Listing]:
    return next((l for l in items if str(l.get("id")) == str(listing_id)), None)


def to_numeric_id(listing_id: str) -> Optional[int]:
    try:
        return int(listing_id)
    except (TypeError, ValueError):
        return None


def unique_listing_id(items: List[Listing]) -> int:
    """Millisecond timestamp, moved forward past any id already in the collection."""
    taken = {to_numeric_id(l.get("id")) for l in items}
    candidate = now_ms()
    while candidate in taken:
        candidate += 1
    return candidate


def build_listing(
    title: str,
    desc: Optional[str],
    price: Any,
    category: Optional[str],
    student_id: str,
    media: List[str],
    default_category: str = "misc",
    listing_id: Optional[int] = None,
) -> Listing:
    return {
        "id": listing_id if listing_id is not None else now_ms(),
        "title": title,
        "desc": desc,
        "price": parse_price(price),
        "category": category if category is not None else default_category,
        "studentId": student_id,
        "media": list(media),
        "createdAt": utc_timestamp(),
    }


def apply_update(
    listing: Listing,
    title: Optional[str] = None,
    desc: Optional[str] = None,
    price: Any = None,
    category: Optional[str] = None,
    media: Optional[List[str]] = None,
) -> Listing:
    """
    Partial in-place overwrite. Only truthy values are applied, so an empty
    string or a price of 0 leaves the stored value as it was. Media is
    replaced only when new files were uploaded.
    """
    if title:
        listing["title"] = title
    if desc:
        listing["desc"] = desc
    if price:
        new_price = parse_price(price)
        if new_price:
            listing["price"] = new_price
    if category:
        listing["category"] = category
    if media:
        listing["media"] = list(media)
    return listing


def remove_listing(items: List[Listing], listing_id: Optional[int]) -> List[Listing]:
    if listing_id is None:
        return list(items)
    return [l for l in items if to_numeric_id(l.get("id")) != listing_id]
