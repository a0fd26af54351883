from __future__ import annotations


class UpstreamError(Exception):
    """An outbound call to an exchange, Hubble or Telegram failed."""

    def __init__(self, message: str, status_code: int = 500, provider: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.provider = provider
