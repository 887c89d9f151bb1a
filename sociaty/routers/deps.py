from dataclasses import dataclass, field
from typing import Any, Dict, List, Type, TypeVar

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class RequestBody:
    """Fields and uploaded files of a JSON, urlencoded or multipart body."""

    fields: Dict[str, Any] = field(default_factory=dict)
    files: Dict[str, List[UploadFile]] = field(default_factory=dict)

    def text(self, name: str) -> Any:
        """Field as a string; absent stays None."""
        value = self.fields.get(name)
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def getlist(self, name: str) -> List[UploadFile]:
        return self.files.get(name, [])


async def request_body(request: Request) -> RequestBody:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        raw = await request.body()
        if not raw.strip():
            return RequestBody()
        try:
            data = await request.json()
        except ValueError:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid JSON body")
        if not isinstance(data, dict):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid JSON body")
        return RequestBody(fields=data)

    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await request.form()
        body = RequestBody()
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                body.files.setdefault(key, []).append(value)
            else:
                # first value wins for repeated text fields
                body.fields.setdefault(key, value)
        return body

    return RequestBody()


def parse_fields(model: Type[ModelT], body: RequestBody) -> ModelT:
    try:
        return model.model_validate(body.fields)
    except ValidationError as e:
        raise RequestValidationError(e.errors())
