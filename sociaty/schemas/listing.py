from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ListingRead(BaseModel):
    id: int
    title: str
    desc: Optional[str] = None
    price: Union[int, float] = 0
    category: str = "misc"
    student_id: str = Field(alias="studentId")
    media: List[str] = []
    created_at: str = Field(alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)


class ListingResponse(BaseModel):
    ok: bool = True
    listing: ListingRead


class ListingsResponse(BaseModel):
    ok: bool = True
    listings: List[ListingRead]


class OkResponse(BaseModel):
    ok: bool = True


class PingResponse(BaseModel):
    ok: bool = True
    time: str
