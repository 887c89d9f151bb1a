import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, status

from sociaty.core.config import Settings, get_settings
from sociaty.core.store import JsonStore, get_store
from sociaty.routers.deps import RequestBody, request_body
from sociaty.schemas.listing import ListingResponse, ListingsResponse, OkResponse
from sociaty.services.listings import (
    apply_update,
    build_listing,
    filter_listings,
    find_listing,
    parse_price,
    remove_listing,
    to_numeric_id,
    unique_listing_id,
)
from sociaty.services.uploads import save_uploads, selected_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/listings", tags=["listings"])


def _check_upload_count(files: List[UploadFile], settings: Settings) -> None:
    if len(files) > settings.max_upload_files:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Too many files")


def _check_price(price: Any) -> None:
    if price and parse_price(price) < 0:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid price")


@router.get("", response_model=ListingsResponse)
def list_listings(
    cat: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    price: Optional[str] = Query(None),
    store: JsonStore = Depends(get_store),
):
    data = store.read()
    items = filter_listings(data["listings"], cat=cat, search=search, price=price)
    return {"ok": True, "listings": items}


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: str, store: JsonStore = Depends(get_store)):
    data = store.read()
    item = find_listing(data["listings"], listing_id)
    if not item:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Not found")
    return {"ok": True, "listing": item}


# JSON, urlencoded or multipart/form-data; files under the "media" key
@router.post("", response_model=ListingResponse)
async def create_listing(
    body: RequestBody = Depends(request_body),
    store: JsonStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    title = body.text("title")
    desc = body.text("desc")
    price = body.fields.get("price")
    category = body.text("category")
    student_id = body.text("studentId")

    files = selected_files(body.getlist("media"))
    _check_upload_count(files, settings)

    if not title or not student_id:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Missing title or studentId")
    _check_price(price)

    media_urls = await save_uploads(files, settings)

    data = store.read()
    item = build_listing(
        title=title,
        desc=desc,
        price=price,
        category=category,
        student_id=student_id,
        media=media_urls,
        default_category=settings.default_category,
        listing_id=unique_listing_id(data["listings"]),
    )
    data["listings"].insert(0, item)
    store.write(data)
    logger.info("Created listing %s for student %s (%d files)", item["id"], student_id, len(media_urls))

    return {"ok": True, "listing": item}


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: str,
    body: RequestBody = Depends(request_body),
    store: JsonStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    title = body.text("title")
    desc = body.text("desc")
    price = body.fields.get("price")
    category = body.text("category")

    files = selected_files(body.getlist("media"))
    _check_upload_count(files, settings)

    data = store.read()
    numeric_id = to_numeric_id(listing_id)
    item = next(
        (l for l in data["listings"] if numeric_id is not None and to_numeric_id(l.get("id")) == numeric_id),
        None,
    )
    if not item:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Not found")
    _check_price(price)

    media_urls = await save_uploads(files, settings) if files else None

    apply_update(item, title=title, desc=desc, price=price, category=category, media=media_urls)
    store.write(data)
    logger.info("Updated listing %s", item["id"])

    return {"ok": True, "listing": item}


@router.delete("/{listing_id}", response_model=OkResponse)
def delete_listing(listing_id: str, store: JsonStore = Depends(get_store)):
    data = store.read()
    before = len(data["listings"])
    data["listings"] = remove_listing(data["listings"], to_numeric_id(listing_id))
    store.write(data)
    logger.info("Deleted listing %s (%d removed)", listing_id, before - len(data["listings"]))
    return {"ok": True}
