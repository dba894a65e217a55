"""Test fixtures for ddg_search."""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from ddg_search.config import Settings  # noqa: E402
from ddg_search.services.search_api import SearchApi  # noqa: E402
from ddg_search.services.transport import HttpxTransport  # noqa: E402
from fakes import FakeBackend  # noqa: E402


@pytest.fixture()
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only."""
    return "asyncio"


@pytest.fixture()
def settings() -> Settings:
    """Settings with the inter-attempt pause disabled."""
    return Settings(retry_delay_seconds=0.0)


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def api(backend: FakeBackend, settings: Settings) -> SearchApi:
    """Search API wired to the fake backend through the real httpx transport."""
    transport = HttpxTransport(settings=settings, transport=httpx.MockTransport(backend))
    return SearchApi(settings=settings, transport=transport)
