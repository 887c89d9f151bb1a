from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    # optional so that missing fields surface as 400 "Missing fields"
    name: Optional[str] = None
    student_id: Optional[str] = Field(default=None, alias="studentId")
    password: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    student_id: Optional[str] = Field(default=None, alias="studentId")
    password: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class UserRead(BaseModel):
    id: str
    name: str
    student_id: str = Field(alias="studentId")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserResponse(BaseModel):
    ok: bool = True
    user: UserRead
