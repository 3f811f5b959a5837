"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration, and automatic API test
skipping. All fixtures here are autouse unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os

import pytest

from cinesearch.models import CatalogItem, CatalogPayload, DetailRecord
from cinesearch.result import ErrorInfo, Failure, Result, Success

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class FakeRepository:
    """Repository test double answering from canned results.

    Unknown queries and ids answer with an upstream ``Failure`` so tests never
    touch the network.
    """

    searches: dict[str, Result[CatalogPayload]] = field(default_factory=dict)
    details: dict[str, Result[DetailRecord]] = field(default_factory=dict)
    calls: list[tuple[str, str, str]] = field(default_factory=list)

    async def search_catalog(
        self, api_key: str, query: str
    ) -> Result[CatalogPayload]:
        self.calls.append(("search", api_key, query))
        return self.searches.get(query, _not_found(query))

    async def fetch_detail(self, api_key: str, item_id: str) -> Result[DetailRecord]:
        self.calls.append(("detail", api_key, item_id))
        return self.details.get(item_id, _not_found(item_id))

    async def aclose(self) -> None:
        return None


def _not_found(arg: str) -> Failure:
    return Failure(ErrorInfo(message=f"no canned reply for {arg!r}", kind="upstream"))


def make_item(item_id: str, title: str | None = None, year: str = "2000") -> CatalogItem:
    return CatalogItem(id=item_id, title=title or item_id.upper(), year=year)


def make_payload(*items: CatalogItem) -> CatalogPayload:
    return CatalogPayload(items=items, total_results=len(items))


@pytest.fixture
def fake_repository() -> FakeRepository:
    """A FakeRepository with one search and one detail answer (not autouse)."""
    blade = make_item("tt0083658", "Blade Runner", "1982")
    return FakeRepository(
        searches={"blade": Success(make_payload(blade))},
        details={
            blade.id: Success(
                DetailRecord(id=blade.id, title=blade.title, plot="Replicants.")
            )
        },
    )


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_catalog_env(request, monkeypatch):
    """Ensure a clean environment for each test.

    Clears OMDB_* and CINESEARCH_* env vars to prevent test pollution.
    Opt-out: @pytest.mark.allow_env_pollution or @pytest.mark.api
    """
    if request.node.get_closest_marker("allow_env_pollution") or (
        "api" in request.node.keywords
    ):
        return

    for key in list(os.environ.keys()):
        if key.startswith(("OMDB_", "CINESEARCH_")):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Pytest Hooks
# =============================================================================

API_TESTS_REASON = "API tests require ENABLE_API_TESTS=1"


def _api_tests_enabled() -> bool:
    return bool(os.getenv("ENABLE_API_TESTS"))


def pytest_collection_modifyitems(items):
    """Automatically skip API tests when not explicitly enabled."""
    if _api_tests_enabled():
        return
    skip_api = pytest.mark.skip(reason=API_TESTS_REASON)
    for item in items:
        if "api" in item.keywords:
            item.add_marker(skip_api)


@pytest.fixture
def omdb_api_key():
    """Return OMDB_API_KEY or skip the test if unavailable."""
    key = os.getenv("OMDB_API_KEY")
    if not key:
        pytest.skip("OMDB_API_KEY not set")
    return key
