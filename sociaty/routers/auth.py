import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from sociaty.core.store import JsonStore, get_store
from sociaty.routers.deps import RequestBody, parse_fields, request_body
from sociaty.schemas.user import LoginRequest, RegisterRequest, UserResponse
from sociaty.services.ids import random_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in user.items() if k != "password"}


# Demo accounts: passwords are stored and compared in plaintext.
# Bodies may be JSON or form encoded.
@router.post("/register", response_model=UserResponse)
def register(raw: RequestBody = Depends(request_body), store: JsonStore = Depends(get_store)):
    body = parse_fields(RegisterRequest, raw)
    data = store.read()
    if not body.name or not body.student_id or not body.password:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Missing fields")

    if any(u.get("studentId") == body.student_id for u in data["users"]):
        raise HTTPException(status.HTTP_409_CONFLICT, "Student ID already used")

    user = {
        "id": random_id(),
        "name": body.name,
        "studentId": body.student_id,
        "password": body.password,
    }
    data["users"].append(user)
    store.write(data)
    logger.info("Registered student %s", body.student_id)

    return {"ok": True, "user": public_user(user)}


@router.post("/login", response_model=UserResponse)
def login(raw: RequestBody = Depends(request_body), store: JsonStore = Depends(get_store)):
    body = parse_fields(LoginRequest, raw)
    data = store.read()
    user = next(
        (
            u for u in data["users"]
            if u.get("studentId") == body.student_id and u.get("password") == body.password
        ),
        None,
    )
    # both must be present; a missing password never matches
    if not user or body.student_id is None or body.password is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

    return {"ok": True, "user": public_user(user)}
