from __future__ import annotations

import json
import logging
from typing import Any

from redis import Redis

from app.config.settings import settings

logger = logging.getLogger(__name__)


def _get_client() -> Redis:
    return Redis.from_url(settings.redis_url)


def get_cached(cache_key: str) -> Any | None:
    try:
        client = _get_client()
        raw = client.get(cache_key)
    except Exception as exc:
        logger.warning("cache read failed for %s: %s", cache_key, exc)
        return None

    if not raw:
        return None

    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None


def set_cached(cache_key: str, value: Any, ttl_seconds: int) -> None:
    if ttl_seconds <= 0:
        return
    try:
        client = _get_client()
        client.setex(cache_key, ttl_seconds, json.dumps(value))
    except Exception as exc:
        logger.warning("cache write failed for %s: %s", cache_key, exc)
