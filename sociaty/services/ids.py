import secrets
import time
from datetime import datetime, timezone

# URL-safe alphabet, 64 symbols
ALPHABET = "ModuleSymbhasOwnPr-0123456789ABCDEFGHNRVfgctiUvz_KqYTJkLxpZXIjQW"


def random_id(size: int = 21) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(size))


def now_ms() -> int:
    return int(time.time() * 1000)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
