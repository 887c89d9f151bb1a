"""
Offline marketplace client.

Mirrors the account and listing behaviour of the HTTP API on top of a plain
key/value storage (string keys, JSON-encoded string values), the way the
legacy browser frontend used per-browser local storage. Useful for
demos and for seeding data without a running server.
"""
import base64
import json
import logging
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from sociaty.core.config import get_settings
from sociaty.services.listings import parse_price, unique_listing_id

logger = logging.getLogger(__name__)

USERS_KEY = "da_users"
LISTINGS_KEY = "da_listings"
CURRENT_KEY = "da_current"


class NotLoggedInError(Exception):
    """Publishing requires a current user."""


class JsonFileStorage(MutableMapping):
    """String-to-string mapping persisted as a single JSON object file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        return json.loads(raw) if raw.strip() else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def __getitem__(self, key: str) -> str:
        return self._load()[key]

    def __setitem__(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def __delitem__(self, key: str) -> None:
        data = self._load()
        del data[key]
        self._save(data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._load())

    def __len__(self) -> int:
        return len(self._load())


class LocalMarket:
    def __init__(self, storage: Optional[MutableMapping] = None):
        if storage is None:
            storage = JsonFileStorage(get_settings().local_store_file)
        self.storage = storage

    def _get(self, key: str, default: Any) -> Any:
        raw = self.storage.get(key)
        return json.loads(raw) if raw else default

    def _set(self, key: str, value: Any) -> None:
        self.storage[key] = json.dumps(value)

    # ---------------------------
    # Accounts
    # ---------------------------
    def register(self, name: str, student_id: str, password: str) -> Dict[str, Any]:
        if not name or not student_id or not password:
            return {"ok": False, "msg": "Please fill all fields"}

        users = self._get(USERS_KEY, [])
        if any(u.get("studentId") == student_id for u in users):
            return {"ok": False, "msg": "Student ID already used"}

        users.append({"name": name, "studentId": student_id, "password": password})
        self._set(USERS_KEY, users)
        self._set(CURRENT_KEY, {"name": name, "studentId": student_id})
        logger.info("Registered local student %s", student_id)
        return {"ok": True}

    def login(self, student_id: str, password: str) -> Dict[str, Any]:
        users = self._get(USERS_KEY, [])
        user = next(
            (u for u in users if u.get("studentId") == student_id and u.get("password") == password),
            None,
        )
        if not user:
            return {"ok": False, "msg": "Invalid credentials"}

        self._set(CURRENT_KEY, {"name": user["name"], "studentId": user["studentId"]})
        return {"ok": True}

    def current(self) -> Optional[Dict[str, Any]]:
        return self._get(CURRENT_KEY, None)

    def logout(self) -> None:
        self.storage.pop(CURRENT_KEY, None)

    # ---------------------------
    # Listings
    # ---------------------------
    def listings(self) -> List[Dict[str, Any]]:
        return self._get(LISTINGS_KEY, [])

    def add_listing(self, item: Dict[str, Any]) -> Dict[str, Any]:
        items = self.listings()
        item["id"] = unique_listing_id(items)
        items.insert(0, item)
        self._set(LISTINGS_KEY, items)
        return item

    def publish(
        self,
        title: str,
        desc: str = "",
        price: Any = 0,
        category: Optional[str] = None,
        image: Optional[bytes] = None,
        image_type: str = "application/octet-stream",
    ) -> Dict[str, Any]:
        """
        Publish a listing as the current user. An image is embedded inline as a
        base64 data URL so the listing stays self-contained in storage.
        """
        user = self.current()
        if not user:
            raise NotLoggedInError("Please log in to sell items.")

        img = ""
        if image:
            encoded = base64.b64encode(image).decode("ascii")
            img = f"data:{image_type};base64,{encoded}"

        return self.add_listing(
            {
                "title": (title or "").strip(),
                "desc": (desc or "").strip(),
                "price": parse_price(price),
                "category": category or "misc",
                "img": img,
                "studentId": user["studentId"],
            }
        )
