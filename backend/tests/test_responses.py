import asyncio
import json
from unittest.mock import Mock

import pytest
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.api.responses import respond, unhandled_exception_handler, validation_exception_handler
from app.schemas.announcement import AnnouncementCreateRequest, AnnouncementDeleteRequest
from app.schemas.envelope import error, success
from app.schemas.words_count import WordsCountCreateRequest


def test_success_is_sent_with_200() -> None:
    response = respond(success({"total": 1}, "ok"))

    assert response.status_code == 200
    assert json.loads(response.body) == {"status": "success", "data": {"total": 1}, "message": "ok"}


def test_error_status_mirrors_envelope_code() -> None:
    response = respond(error("公告不存在", 404))

    assert response.status_code == 404
    assert json.loads(response.body) == {"status": "error", "message": "公告不存在", "statusCode": 404}


def test_http_status_override() -> None:
    response = respond(error("boom", 500), 200)

    assert response.status_code == 200
    assert json.loads(response.body)["statusCode"] == 500


def test_validation_errors_become_400_envelope() -> None:
    exc = RequestValidationError(
        [
            {"loc": ("query", "symbol"), "msg": "Field required", "type": "missing"},
            {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 500", "type": "less_than_equal"},
        ]
    )

    response = asyncio.run(validation_exception_handler(Mock(), exc))
    body = json.loads(response.body)

    assert response.status_code == 400
    assert body["status"] == "error"
    assert body["statusCode"] == 400
    assert body["message"] == "缺少必要参数 symbol; limit: Input should be less than or equal to 500"


def test_unhandled_errors_become_500_envelope() -> None:
    request = Mock()
    request.method = "GET"
    request.url.path = "/boom"

    response = asyncio.run(unhandled_exception_handler(request, RuntimeError("kaputt")))

    assert response.status_code == 500
    assert json.loads(response.body) == {"status": "error", "message": "kaputt", "statusCode": 500}


def _body_errors(model, payload: dict) -> list[dict]:
    with pytest.raises(ValidationError) as excinfo:
        model.model_validate(payload)
    # FastAPI reports body errors under a leading "body" location.
    return [{**item, "loc": ("body", *item["loc"])} for item in excinfo.value.errors()]


def test_missing_body_fields_use_their_own_messages() -> None:
    errors = _body_errors(AnnouncementCreateRequest, {"title": "维护通知", "wechatUrl": None})

    response = asyncio.run(validation_exception_handler(Mock(), RequestValidationError(errors)))

    assert response.status_code == 400
    assert json.loads(response.body)["message"] == "用户ID不能为空; 内容不能为空; 微信链接不能为空"


def test_missing_id_and_word_count_messages() -> None:
    delete_errors = _body_errors(AnnouncementDeleteRequest, {})
    words_errors = _body_errors(WordsCountCreateRequest, {"orderId": "A-1"})

    assert [item["msg"] for item in delete_errors] == ["公告ID不能为空"]
    assert [item["msg"] for item in words_errors] == ["clientWordsCount不能为空"]


def test_field_names_and_aliases_both_count_as_given() -> None:
    by_alias = AnnouncementCreateRequest.model_validate(
        {"userId": 1, "title": "t", "content": "c", "wechatUrl": "u"}
    )
    by_name = AnnouncementCreateRequest.model_validate(
        {"user_id": 1, "title": "t", "content": "c", "wechat_url": "u"}
    )

    assert by_alias == by_name
