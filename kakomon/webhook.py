"""Delivery of payloads to an incoming-webhook endpoint."""

from __future__ import annotations

import logging
import urllib.error
import urllib.request
from typing import Any

from kakomon.formatter import payload_to_json
from kakomon.settings import DOWNLOAD_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


class WebhookError(RuntimeError):
    """Raised when a payload cannot be delivered.

    Attributes:
        status -- HTTP status code (0 if no response was received)
        body   -- response body returned with an error status, if any
    """

    def __init__(self, message: str, status: int = 0, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


def send_to_webhook(
    webhook_url: str,
    payload: dict[str, Any],
    *,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> int:
    """POST *payload* as JSON to *webhook_url* and return the HTTP status.

    Raises:
        WebhookError: On a non-2xx response or a network failure.
    """
    req = urllib.request.Request(
        webhook_url,
        data=payload_to_json(payload).encode("utf-8"),
        headers={
            "Content-type": "application/json",
            "User-Agent": USER_AGENT,
        },
        method="POST",
    )

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = int(resp.status)
    except urllib.error.HTTPError as exc:
        body = ""
        try:
            body = exc.read().decode("utf-8", errors="replace")
        except Exception:
            body = ""
        raise WebhookError(
            f"Webhook responded with HTTP {exc.code}: {exc.reason}",
            status=exc.code,
            body=body,
        ) from exc
    except urllib.error.URLError as exc:
        raise WebhookError(f"Webhook unreachable: {exc.reason}") from exc
    except OSError as exc:
        raise WebhookError(f"Network error posting to webhook: {exc}") from exc

    logger.debug("Webhook responded with HTTP %d", status)
    return status
