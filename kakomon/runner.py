"""Fetch -> extract -> format -> send loop over the configured pages.

Pages are processed one at a time, in configuration order.  A page that
fails to fetch, extract or send is logged and counted, and the loop moves on
to the next page.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from kakomon.config import Config
from kakomon.formatter import format_record
from kakomon.query import FetchError, extract, fetch_html
from kakomon.settings import DEFAULT_MARKERS, DOWNLOAD_TIMEOUT, Markers
from kakomon.webhook import WebhookError, send_to_webhook

logger = logging.getLogger(__name__)

Fetcher = Callable[..., str]
Sender = Callable[..., Any]


@dataclass
class RunSummary:
    """Outcome of one :func:`run` over the configured pages."""

    sent: int = 0
    skipped: int = 0
    failed: int = 0
    payloads: list[dict[str, Any]] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.failed == 0


def process_url(
    url: str,
    config: Config,
    summary: RunSummary,
    *,
    fetcher: Fetcher | None = None,
    sender: Sender | None = None,
    dry_run: bool = False,
    timeout: float = DOWNLOAD_TIMEOUT,
    markers: Markers = DEFAULT_MARKERS,
) -> None:
    """Run one fetch-extract-send cycle for *url*, recording into *summary*.

    *fetcher* and *sender* default to :func:`~kakomon.query.fetch_html` and
    :func:`~kakomon.webhook.send_to_webhook`, looked up at call time.
    """
    fetcher = fetcher or fetch_html
    sender = sender or send_to_webhook
    try:
        html = fetcher(url, timeout=timeout)
    except FetchError as exc:
        logger.error("Fetch failed for %s: %s", url, exc)
        summary.failed += 1
        summary.errors[url] = str(exc)
        return

    record = extract(html, url, markers)
    if record is None:
        logger.info("No item found on %s", url)
        summary.skipped += 1
        return

    payload = format_record(record)
    summary.payloads.append(payload)
    if dry_run:
        logger.info("Dry run: not sending item %r from %s", record.title, url)
        return

    try:
        sender(config.webhook_url, payload, timeout=timeout)
    except WebhookError as exc:
        logger.error("Sending item from %s failed: %s", url, exc)
        summary.failed += 1
        summary.errors[url] = str(exc)
        return

    logger.info("Sent item %r from %s", record.title, url)
    summary.sent += 1


def run(
    config: Config,
    *,
    fetcher: Fetcher | None = None,
    sender: Sender | None = None,
    dry_run: bool = False,
    timeout: float = DOWNLOAD_TIMEOUT,
    markers: Markers = DEFAULT_MARKERS,
) -> RunSummary:
    """Process every URL in *config* and return a :class:`RunSummary`."""
    summary = RunSummary()
    for url in config.fetch_urls:
        try:
            process_url(
                url,
                config,
                summary,
                fetcher=fetcher,
                sender=sender,
                dry_run=dry_run,
                timeout=timeout,
                markers=markers,
            )
        except Exception as exc:
            logger.error("Unexpected error processing %s: %s", url, exc,
                         exc_info=logger.isEnabledFor(logging.DEBUG))
            summary.failed += 1
            summary.errors[url] = str(exc)

    logger.info(
        "Run finished: %d sent, %d without item, %d failed",
        summary.sent, summary.skipped, summary.failed,
    )
    return summary
