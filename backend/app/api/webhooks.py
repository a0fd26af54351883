import logging
from typing import Any, Callable

from fastapi import APIRouter, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.api.responses import respond
from app.config.settings import settings
from app.jobs.queue import enqueue_telegram_message
from app.notify.messages import OutboundMessage, format_cex_alert
from app.schemas.envelope import error, success

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = logging.getLogger(__name__)


class InvalidWebhookBody(ValueError):
    pass


async def read_json_object(request: Request) -> dict[str, Any]:
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidWebhookBody("请求体不是有效的 JSON") from exc
    if not isinstance(payload, dict):
        raise InvalidWebhookBody("请求体必须是 JSON 对象")
    return payload


async def relay_signal(
    request: Request,
    render: Callable[[dict[str, Any]], OutboundMessage],
    task_name: str,
) -> JSONResponse:
    """Format an inbound signal and queue it for Telegram.

    Always answers HTTP 200, failures included; senders redeliver on any other
    status. The envelope still carries the real outcome.
    """
    try:
        payload = await read_json_object(request)
    except InvalidWebhookBody as exc:
        logger.warning("rejected %s webhook body: %s", task_name, exc)
        return respond(error(str(exc), status.HTTP_400_BAD_REQUEST), status.HTTP_200_OK)

    try:
        message = render(payload)
        job = await run_in_threadpool(
            enqueue_telegram_message, settings.telegram.channel_for(task_name), message
        )
    except Exception as exc:
        logger.exception("failed to relay %s webhook", task_name)
        return respond(error(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR), status.HTTP_200_OK)
    return respond(success({"jobId": job.id}, "received"))


@router.post("/signal/cex")
async def cex_signal_webhook(request: Request) -> JSONResponse:
    return await relay_signal(request, format_cex_alert, "signal:cex")
