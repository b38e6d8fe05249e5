"""Pydantic models for fetched pages and extracted item records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Page(BaseModel):
    """Raw HTML of one fetched page together with the URL it came from."""

    model_config = ConfigDict(frozen=True)

    url: str
    html: str

    @field_validator("url", mode="before")
    @classmethod
    def strip_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


class ItemRecord(BaseModel):
    """One quiz item extracted from a page.

    ``text`` is newline-terminated line by line: resolved links first, then
    the statement and the numbered choices, then resolved image URLs.
    ``title`` is the concatenated answer-link text.  Neither field is
    stripped; whitespace from the page is kept as found.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    text: str = ""

    @property
    def lines(self) -> list[str]:
        """Non-empty lines of :attr:`text`, in order."""
        return [line for line in self.text.split("\n") if line]
