from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError


class RequestModel(BaseModel):
    """Request body whose missing fields are reported with their own messages.

    Subclasses list ``required_messages`` by field name. A field counts as given
    when either its name or its alias is present and not null.
    """

    required_messages: ClassVar[dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _report_missing_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        missing: list[str] = []
        for name, message in cls.required_messages.items():
            alias = cls.model_fields[name].alias or name
            if data.get(name) is None and data.get(alias) is None:
                missing.append(message)
        if missing:
            raise PydanticCustomError("missing", "; ".join(missing))
        return data
