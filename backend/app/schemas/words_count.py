from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.requests import RequestModel


class WordsCountCreateRequest(RequestModel):
    model_config = ConfigDict(populate_by_name=True)
    required_messages: ClassVar[dict[str, str]] = {"client_words_count": "clientWordsCount不能为空"}

    client_words_count: int = Field(alias="clientWordsCount")
    server_words_count: Optional[int] = Field(default=None, alias="serverWordsCount")
    download_url: Optional[str] = Field(default=None, alias="downloadUrl")
    create_time: Optional[str] = Field(default=None, alias="createTime")
    order_id: Optional[str] = Field(default=None, alias="orderId")


class WordsCountResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    client_words_count: int = Field(alias="clientWordsCount")
    server_words_count: Optional[int] = Field(default=None, alias="serverWordsCount")
    download_url: Optional[str] = Field(default=None, alias="downloadUrl")
    create_time: Optional[str] = Field(default=None, alias="createTime")
    order_id: Optional[str] = Field(default=None, alias="orderId")
