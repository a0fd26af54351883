from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.requests import RequestModel


class AnnouncementCreateRequest(RequestModel):
    model_config = ConfigDict(populate_by_name=True)
    required_messages: ClassVar[dict[str, str]] = {
        "user_id": "用户ID不能为空",
        "title": "标题不能为空",
        "content": "内容不能为空",
        "wechat_url": "微信链接不能为空",
    }

    user_id: int = Field(alias="userId")
    title: str
    content: str
    wechat_url: str = Field(alias="wechatUrl")


class AnnouncementUpdateRequest(RequestModel):
    model_config = ConfigDict(populate_by_name=True)
    required_messages: ClassVar[dict[str, str]] = {
        "id": "公告ID不能为空",
        "title": "标题不能为空",
        "content": "内容不能为空",
        "wechat_url": "微信链接不能为空",
    }

    id: int
    title: str
    content: str
    wechat_url: str = Field(alias="wechatUrl")


class AnnouncementDeleteRequest(RequestModel):
    required_messages: ClassVar[dict[str, str]] = {"id": "公告ID不能为空"}

    id: int


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    user_id: int = Field(alias="userId")
    title: str
    content: str
    wechat_url: str = Field(alias="wechatUrl")
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")


class Pagination(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(alias="pageSize")
    total: int
    total_pages: int = Field(alias="totalPages")


class AnnouncementListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: list[AnnouncementResponse] = Field(default_factory=list, alias="list")
    pagination: Pagination
