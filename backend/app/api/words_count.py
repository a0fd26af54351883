import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.responses import fail, respond
from app.db.models import WordsCount
from app.db.session import get_session
from app.schemas.envelope import success
from app.schemas.words_count import WordsCountCreateRequest, WordsCountResponse

router = APIRouter(prefix="/api/words-count", tags=["words-count"])
logger = logging.getLogger(__name__)


def _serialize(record: WordsCount) -> dict:
    return WordsCountResponse.model_validate(record).model_dump(by_alias=True)


@router.post("/create")
async def create_words_count(
    payload: WordsCountCreateRequest, db: AsyncSession = Depends(get_session)
) -> JSONResponse:
    record = WordsCount(**payload.model_dump())
    try:
        db.add(record)
        await db.commit()
        await db.refresh(record)
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("words count insert failed")
        return fail(str(exc) or "字数统计记录创建失败", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return respond(success(_serialize(record), "字数统计记录创建成功"))


@router.get("/list")
async def list_words_count(db: AsyncSession = Depends(get_session)) -> JSONResponse:
    try:
        result = await db.execute(select(WordsCount).order_by(WordsCount.id))
        records = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("words count query failed")
        return fail(str(exc) or "获取字数统计记录失败", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return respond(success([_serialize(record) for record in records], "字数统计记录获取成功"))
