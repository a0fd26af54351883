import asyncio
import json

from app.api.words_count import create_words_count, list_words_count
from app.db.models import WordsCount
from app.schemas.words_count import WordsCountCreateRequest


class FakeScalars:
    def __init__(self, rows: list) -> None:
        self.rows = rows

    def all(self) -> list:
        return self.rows


class FakeResult:
    def __init__(self, rows: list) -> None:
        self.rows = rows

    def scalars(self) -> FakeScalars:
        return FakeScalars(self.rows)


class FakeSession:
    def __init__(self, rows: list | None = None) -> None:
        self.rows = rows or []
        self.added: list = []

    def add(self, obj) -> None:
        self.added.append(obj)

    async def execute(self, stmt) -> FakeResult:
        return FakeResult(self.rows)

    async def commit(self) -> None:
        return None

    async def refresh(self, obj) -> None:
        obj.id = len(self.added)

    async def rollback(self) -> None:
        return None


def test_create_words_count_record() -> None:
    session = FakeSession()
    payload = WordsCountCreateRequest(clientWordsCount=1200, orderId="A-1")

    response = asyncio.run(create_words_count(payload, db=session))

    body = json.loads(response.body)
    assert body["message"] == "字数统计记录创建成功"
    assert body["data"] == {
        "id": 1,
        "clientWordsCount": 1200,
        "serverWordsCount": None,
        "downloadUrl": None,
        "createTime": None,
        "orderId": "A-1",
    }
    assert session.added[0].client_words_count == 1200


def test_list_words_count_records() -> None:
    rows = [
        WordsCount(id=1, client_words_count=10, server_words_count=12),
        WordsCount(id=2, client_words_count=20, download_url="https://example.test/a.docx"),
    ]

    response = asyncio.run(list_words_count(db=FakeSession(rows)))

    body = json.loads(response.body)
    assert body["message"] == "字数统计记录获取成功"
    assert [item["id"] for item in body["data"]] == [1, 2]
    assert body["data"][0]["serverWordsCount"] == 12
    assert body["data"][1]["downloadUrl"] == "https://example.test/a.docx"
