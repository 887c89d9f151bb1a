from fastapi import APIRouter

from sociaty.schemas.listing import PingResponse
from sociaty.services.ids import utc_timestamp

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/ping", response_model=PingResponse)
def ping():
    return {"ok": True, "time": utc_timestamp()}
