import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from fastapi import Depends

from sociaty.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "listings")


class StoreError(Exception):
    """The JSON document on disk could not be read or written."""


class JsonStore:
    """
    Whole-document JSON store.

    Every call to read() loads the entire file and every write() replaces it.
    There is no locking: concurrent writers race and the last write wins.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def init(self) -> None:
        """Create the file with empty collections if it is missing or partial."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.write(self.read())

    def read(self) -> Dict[str, Any]:
        if not self.path.exists():
            data: Dict[str, Any] = {}
        else:
            try:
                raw = self.path.read_text(encoding="utf-8")
                data = json.loads(raw) if raw.strip() else {}
            except (OSError, ValueError) as e:
                logger.error("Could not read store %s: %s", self.path, e)
                raise StoreError(str(e)) from e

        if not isinstance(data, dict):
            raise StoreError(f"{self.path} does not hold a JSON object")

        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def write(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Could not write store %s: %s", self.path, e)
            raise StoreError(str(e)) from e


def get_store(settings: Settings = Depends(get_settings)) -> JsonStore:
    return JsonStore(settings.data_file)
