"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def home_html() -> str:
    return _read_fixture("home.html")


@pytest.fixture
def no_item_html() -> str:
    return _read_fixture("no_item.html")
