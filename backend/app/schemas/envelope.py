from __future__ import annotations

from typing import Annotated, Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

T = TypeVar("T")


class SuccessEnvelope(BaseModel, Generic[T]):
    status: Literal["success"] = "success"
    data: T
    message: str = ""


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Literal["error"] = "error"
    message: str
    status_code: int = Field(alias="statusCode")


Envelope = Annotated[Union[SuccessEnvelope[Any], ErrorEnvelope], Field(discriminator="status")]

_envelope_adapter: TypeAdapter = TypeAdapter(Envelope)


def success(data: T, message: str = "") -> SuccessEnvelope[T]:
    return SuccessEnvelope(data=data, message=message)


def error(message: str, status_code: int) -> ErrorEnvelope:
    return ErrorEnvelope(message=message, status_code=status_code)


def parse_envelope(payload: dict) -> SuccessEnvelope[Any] | ErrorEnvelope:
    """Decode a response body by its ``status`` tag."""
    return _envelope_adapter.validate_python(payload)
