from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.api.responses import fail, respond
from app.errors import UpstreamError
from app.providers import telegram
from app.schemas.envelope import success

router = APIRouter(prefix="/telegram", tags=["telegram"])


@router.get("/info")
def telegram_info() -> JSONResponse:
    try:
        me = telegram.get_me()
    except UpstreamError as exc:
        code = exc.status_code if exc.status_code >= 400 else status.HTTP_500_INTERNAL_SERVER_ERROR
        return fail(exc.message, code)
    return respond(success(me, "Telegram Bot 信息获取成功"))
