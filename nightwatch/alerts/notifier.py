"""Status notifications posted to a chat webhook."""

from __future__ import annotations

from urllib.parse import urlparse

import requests

from nightwatch.logging_config import get_logger


LOGGER = get_logger(__name__)

MESSAGE_LIMIT = 2000


class Notifier:
    """Post short status messages to a Discord-compatible webhook."""

    _noop_logged = False

    def __init__(self, webhook_url: str | None, *, timeout: float = 8.0) -> None:
        self._url = (webhook_url or "").strip()
        self._timeout = timeout
        if self._url:
            LOGGER.info("Notifier configured for webhook host=%s", webhook_host(self._url))
        elif not Notifier._noop_logged:
            LOGGER.warning("No webhook configured; notifications will be logged only")
            Notifier._noop_logged = True

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    def send(self, text: str) -> bool:
        """Post *text*; return whether the webhook accepted it.

        Never raises for transport problems.
        """

        if not self._url:
            LOGGER.debug("Notifier noop: %s", text)
            return False

        if len(text) > MESSAGE_LIMIT:
            text = f"{text[: MESSAGE_LIMIT - 3]}..."

        try:
            response = requests.post(self._url, json={"content": text}, timeout=self._timeout)
        except requests.RequestException as exc:
            LOGGER.error("Failed to send webhook notification: %s", exc)
            return False
        if not (200 <= response.status_code < 300):
            LOGGER.warning(
                "Webhook responded with %s: %s", response.status_code, response.text
            )
            return False
        return True


def webhook_host(url: str) -> str:
    """Host part of *url*, safe to log (webhook paths carry the token)."""

    parsed = urlparse(url)
    return parsed.netloc or "unknown"
