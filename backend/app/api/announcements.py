import logging
import math

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.responses import fail, respond
from app.db.models import Announcement, now_ms
from app.db.session import get_session
from app.schemas.announcement import (
    AnnouncementCreateRequest,
    AnnouncementDeleteRequest,
    AnnouncementListResponse,
    AnnouncementResponse,
    AnnouncementUpdateRequest,
    Pagination,
)
from app.schemas.envelope import success

router = APIRouter(prefix="/api/announcement", tags=["announcement"])
logger = logging.getLogger(__name__)

_MAX_PAGE_SIZE = 100


def _serialize(announcement: Announcement) -> dict:
    return AnnouncementResponse.model_validate(announcement).model_dump(by_alias=True)


async def _get_announcement(db: AsyncSession, announcement_id: int) -> Announcement | None:
    result = await db.execute(select(Announcement).where(Announcement.id == announcement_id))
    return result.scalar_one_or_none()


async def _database_error(db: AsyncSession, exc: SQLAlchemyError, fallback: str) -> JSONResponse:
    await db.rollback()
    logger.exception("announcement query failed")
    return fail(str(exc) or fallback, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/create")
async def create_announcement(
    payload: AnnouncementCreateRequest, db: AsyncSession = Depends(get_session)
) -> JSONResponse:
    now = now_ms()
    announcement = Announcement(
        user_id=payload.user_id,
        title=payload.title,
        content=payload.content,
        wechat_url=payload.wechat_url,
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(announcement)
        await db.commit()
        await db.refresh(announcement)
    except SQLAlchemyError as exc:
        return await _database_error(db, exc, "公告创建失败")
    return respond(success(_serialize(announcement), "公告创建成功"))


@router.post("/update")
async def update_announcement(
    payload: AnnouncementUpdateRequest, db: AsyncSession = Depends(get_session)
) -> JSONResponse:
    try:
        announcement = await _get_announcement(db, payload.id)
        if announcement is None:
            return fail("公告不存在", status.HTTP_404_NOT_FOUND)
        announcement.title = payload.title
        announcement.content = payload.content
        announcement.wechat_url = payload.wechat_url
        announcement.updated_at = now_ms()
        await db.commit()
        await db.refresh(announcement)
    except SQLAlchemyError as exc:
        return await _database_error(db, exc, "公告更新失败")
    return respond(success(_serialize(announcement), "公告更新成功"))


@router.post("/delete")
async def delete_announcement(
    payload: AnnouncementDeleteRequest, db: AsyncSession = Depends(get_session)
) -> JSONResponse:
    try:
        announcement = await _get_announcement(db, payload.id)
        if announcement is None:
            return fail("公告不存在", status.HTTP_404_NOT_FOUND)
        await db.delete(announcement)
        await db.commit()
    except SQLAlchemyError as exc:
        return await _database_error(db, exc, "公告删除失败")
    return respond(success(None, "公告删除成功"))


@router.get("/list")
async def list_announcements(
    page: int = Query(1),
    page_size: int = Query(10, alias="pageSize"),
    db: AsyncSession = Depends(get_session),
) -> JSONResponse:
    if page < 1:
        return fail("页码必须大于0", status.HTTP_400_BAD_REQUEST)
    if page_size < 1 or page_size > _MAX_PAGE_SIZE:
        return fail("每页数量必须在1-100之间", status.HTTP_400_BAD_REQUEST)

    try:
        total_result = await db.execute(select(func.count()).select_from(Announcement))
        total = total_result.scalar() or 0
        rows_result = await db.execute(
            select(Announcement)
            .order_by(Announcement.created_at.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        rows = rows_result.scalars().all()
    except SQLAlchemyError as exc:
        return await _database_error(db, exc, "获取公告列表失败")

    body = AnnouncementListResponse(
        items=[AnnouncementResponse.model_validate(row) for row in rows],
        pagination=Pagination(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=math.ceil(total / page_size),
        ),
    )
    return respond(success(body.model_dump(by_alias=True), "公告列表获取成功"))
