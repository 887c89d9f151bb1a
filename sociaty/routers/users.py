from fastapi import APIRouter, Depends, HTTPException, status

from sociaty.core.store import JsonStore, get_store
from sociaty.routers.auth import public_user
from sociaty.schemas.user import UserResponse

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{student_id}", response_model=UserResponse)
def get_user(student_id: str, store: JsonStore = Depends(get_store)):
    data = store.read()
    user = next((u for u in data["users"] if u.get("studentId") == student_id), None)
    if not user:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Not found")
    return {"ok": True, "user": public_user(user)}
