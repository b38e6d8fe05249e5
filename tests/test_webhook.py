"""Tests for kakomon.webhook - payload delivery (network mocked)."""

from __future__ import annotations

import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from kakomon.formatter import format_record
from kakomon.items import ItemRecord
from kakomon.webhook import WebhookError, send_to_webhook

WEBHOOK = "https://hooks.slack.com/services/T000/B000/XXXX"
PAYLOAD = format_record(ItemRecord(title="問31", text="https://example.com/q31\n本文\n"))


def _make_mock_response(status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status = status
    resp.__enter__ = lambda s: s
    resp.__exit__ = MagicMock(return_value=False)
    return resp


class TestSendToWebhook:
    def test_returns_status(self):
        with patch("urllib.request.urlopen", return_value=_make_mock_response(200)):
            assert send_to_webhook(WEBHOOK, PAYLOAD) == 200

    def test_posts_json(self):
        with patch("urllib.request.urlopen", return_value=_make_mock_response()) as mock_urlopen:
            send_to_webhook(WEBHOOK, PAYLOAD, timeout=7)
        req = mock_urlopen.call_args.args[0]
        assert req.full_url == WEBHOOK
        assert req.get_method() == "POST"
        assert req.get_header("Content-type") == "application/json"
        assert json.loads(req.data.decode("utf-8")) == PAYLOAD
        assert mock_urlopen.call_args.kwargs["timeout"] == 7

    def test_body_is_utf8_not_escaped(self):
        with patch("urllib.request.urlopen", return_value=_make_mock_response()) as mock_urlopen:
            send_to_webhook(WEBHOOK, PAYLOAD)
        req = mock_urlopen.call_args.args[0]
        assert "本文".encode() in req.data

    def test_http_error_raises_webhook_error(self):
        err = urllib.error.HTTPError(WEBHOOK, 400, "Bad Request", {}, io.BytesIO(b"invalid_payload"))
        with patch("urllib.request.urlopen", side_effect=err), \
             pytest.raises(WebhookError) as exc_info:
            send_to_webhook(WEBHOOK, PAYLOAD)
        assert exc_info.value.status == 400
        assert exc_info.value.body == "invalid_payload"

    def test_url_error_raises_webhook_error(self):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")), \
             pytest.raises(WebhookError) as exc_info:
            send_to_webhook(WEBHOOK, PAYLOAD)
        assert exc_info.value.status == 0

    def test_network_error_raises_webhook_error(self):
        with patch("urllib.request.urlopen", side_effect=ConnectionResetError("reset")), \
             pytest.raises(WebhookError):
            send_to_webhook(WEBHOOK, PAYLOAD)
