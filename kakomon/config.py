"""Runtime configuration read from the ``CONFIG`` environment variable.

The variable holds a JSON object::

    {
        "webhook_url": "https://hooks.slack.com/services/...",
        "fetch_urls": ["https://www.ap-siken.com/", "https://www.fe-siken.com/"]
    }
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ValidationError, field_validator

from kakomon.settings import CONFIG_ENV_VAR

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the configuration is missing or invalid."""


def _check_url(value: str) -> str:
    value = value.strip()
    try:
        parsed = urlsplit(value)
    except ValueError as exc:
        raise ValueError(f"invalid URL {value!r}: {exc}") from exc
    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"unsupported URL scheme in {value!r}")
    if not parsed.netloc:
        raise ValueError(f"URL has no host: {value!r}")
    return value


class Config(BaseModel):
    """Webhook destination and the pages to watch."""

    webhook_url: str
    fetch_urls: list[str]

    @field_validator("webhook_url")
    @classmethod
    def validate_webhook_url(cls, v: str) -> str:
        return _check_url(v)

    @field_validator("fetch_urls")
    @classmethod
    def validate_fetch_urls(cls, v: list[str]) -> list[str]:
        return [_check_url(url) for url in v]


def parse_config(raw: str | bytes) -> Config:
    """Parse and validate a JSON configuration document."""
    try:
        return Config.model_validate_json(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc


def load_config(environ: Mapping[str, Any] | None = None) -> Config:
    """Read :class:`Config` from *environ* (default: ``os.environ``).

    Raises:
        ConfigError: The variable is unset or its content does not validate.
    """
    env = os.environ if environ is None else environ
    raw = env.get(CONFIG_ENV_VAR)
    if not raw:
        raise ConfigError(f"environment variable {CONFIG_ENV_VAR} is not set")
    config = parse_config(raw)
    if not config.fetch_urls:
        logger.warning("Configuration lists no pages in fetch_urls; nothing will be sent")
    logger.debug(
        "Loaded configuration: %d URL(s), webhook host %s",
        len(config.fetch_urls),
        urlsplit(config.webhook_url).netloc,
    )
    return config
