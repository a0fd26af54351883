import datetime
import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse

from app.api.responses import fail, respond
from app.api.webhooks import relay_signal
from app.config.settings import settings
from app.errors import UpstreamError
from app.notify.messages import format_hubble_signal
from app.providers import hubble
from app.schemas.envelope import success
from app.schemas.hubble import (
    SignalCreateRequest,
    SignalStatus,
    SignalStatusRequest,
    SignalUpdateRequest,
)

router = APIRouter(prefix="/hubble", tags=["hubble"])
logger = logging.getLogger(__name__)


def _upstream_failure(exc: UpstreamError) -> JSONResponse:
    logger.warning("hubble request failed: %s", exc.message)
    return fail(exc.message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def build_signal_config(payload: SignalCreateRequest) -> dict[str, Any]:
    name = payload.name or f"CEX Monitor {datetime.datetime.now(datetime.timezone.utc).isoformat()}"
    config: dict[str, Any] = {
        "name": name,
        "callback_url": payload.callback_url,
        "chain": payload.chain,
        "activity": "CEX",
        "action": payload.action,
        "exchanges": payload.exchanges or ["All"],
        "token_addresses": payload.token_addresses,
        "wallet_addresses": payload.wallet_addresses,
    }
    if payload.min_amount is not None:
        config["min_amount"] = payload.min_amount
    if payload.max_amount is not None:
        config["max_amount"] = payload.max_amount
    return config


@router.get("/signals")
def list_signals(
    name: Optional[str] = Query(None),
    signal_status: Optional[SignalStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1),
) -> JSONResponse:
    try:
        result = hubble.list_signals(name=name, status=signal_status, page=page, size=size)
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(success(result, "获取信号列表成功"))


@router.post("/signals")
def create_signal(payload: SignalCreateRequest) -> JSONResponse:
    if not payload.callback_url:
        return fail("Missing callback_url", status.HTTP_400_BAD_REQUEST)
    try:
        result = hubble.create_signal(build_signal_config(payload))
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(success(result, "信号创建成功"))


@router.put("/signals/{webhook_id}")
def update_signal(webhook_id: str, payload: SignalUpdateRequest) -> JSONResponse:
    changes = payload.model_dump(exclude_none=True)
    if not changes:
        return fail("没有需要更新的字段", status.HTTP_400_BAD_REQUEST)
    try:
        result = hubble.update_signal(webhook_id, changes)
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(success(result, "信号更新成功"))


@router.patch("/signals/{webhook_id}/status")
def set_signal_status(webhook_id: str, payload: SignalStatusRequest) -> JSONResponse:
    try:
        result = hubble.set_signal_status(webhook_id, payload.status)
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(success(result, "信号状态更新成功"))


@router.delete("/signals/{webhook_id}")
def delete_signal(webhook_id: str) -> JSONResponse:
    try:
        result = hubble.delete_signal(webhook_id)
    except UpstreamError as exc:
        return _upstream_failure(exc)
    return respond(success(result, "信号删除成功"))


@router.post("/webhook")
async def hubble_webhook(request: Request) -> JSONResponse:
    return await relay_signal(
        request,
        lambda payload: format_hubble_signal(payload, settings.display_timezone),
        "signal:hubble",
    )
