"""kakomon - post the daily past-exam question from a web page to Slack.

Quick single-URL usage::

    from kakomon import fetch

    record = fetch("https://www.ap-siken.com/")
    if record is not None:
        print(record.title)
        print(record.text)

Offline extraction and formatting::

    from kakomon import extract, format_record

    record = extract(html, url="https://www.ap-siken.com/")
    payload = format_record(record)

Full run over the pages listed in ``$CONFIG``::

    from kakomon import load_config, run

    summary = run(load_config())
"""

from kakomon.config import Config, ConfigError, load_config
from kakomon.formatter import format_record, parse_payload
from kakomon.items import ItemRecord, Page
from kakomon.query import FetchError, extract, fetch, fetch_html
from kakomon.runner import RunSummary, run
from kakomon.webhook import WebhookError, send_to_webhook

__version__ = "0.1.0"
__all__ = [
    "Config",
    "ConfigError",
    "FetchError",
    "ItemRecord",
    "Page",
    "RunSummary",
    "WebhookError",
    "extract",
    "fetch",
    "fetch_html",
    "format_record",
    "load_config",
    "parse_payload",
    "run",
    "send_to_webhook",
]
