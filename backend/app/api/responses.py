from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.schemas.envelope import ErrorEnvelope, SuccessEnvelope, error

logger = logging.getLogger(__name__)


def respond(envelope: SuccessEnvelope | ErrorEnvelope, http_status: int | None = None) -> JSONResponse:
    """Serialize an envelope; error envelopes carry their code as the HTTP status too."""
    if http_status is None:
        http_status = envelope.status_code if isinstance(envelope, ErrorEnvelope) else status.HTTP_200_OK
    return JSONResponse(
        status_code=http_status,
        content=envelope.model_dump(mode="json", by_alias=True),
    )


def fail(message: str, status_code: int) -> JSONResponse:
    return respond(error(message, status_code))


def _validation_message(exc: RequestValidationError) -> str:
    messages: list[str] = []
    for item in exc.errors():
        loc = tuple(item.get("loc", ()))
        # Drop the "body" / "query" prefix from the location.
        location = ".".join(str(part) for part in loc[1:])
        if item.get("type") == "missing" and loc[:1] == ("query",):
            messages.append(f"缺少必要参数 {location}")
            continue
        message = item.get("msg", "invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return fail(_validation_message(exc), status.HTTP_400_BAD_REQUEST)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return fail(str(exc) or "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
