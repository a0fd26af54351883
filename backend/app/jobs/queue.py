from __future__ import annotations

from redis import Redis
from rq import Queue, Retry
from rq.job import Job

from app.config.settings import settings
from app.jobs.telegram_send import run_telegram_send
from app.notify.messages import OutboundMessage


def get_redis_connection() -> Redis:
    return Redis.from_url(settings.redis_url)


def get_queue(name: str | None = None) -> Queue:
    queue_name = name or settings.notify_queue_name
    return Queue(name=queue_name, connection=get_redis_connection())


def enqueue_telegram_message(chat_id: str, message: OutboundMessage) -> Job:
    queue = get_queue()
    return queue.enqueue(
        run_telegram_send,
        chat_id=chat_id,
        text=message.text,
        parse_mode=message.parse_mode,
        disable_link_preview=message.disable_link_preview,
        retry=Retry(max=3, interval=[10, 30, 60]),
    )
