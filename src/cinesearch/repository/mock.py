"""Mock repository for demos and testing without network calls."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from cinesearch.models import CatalogItem, CatalogPayload, DetailRecord
from cinesearch.result import ErrorInfo, Failure, Result, Success

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

DEFAULT_CATALOG: tuple[CatalogItem, ...] = (
    CatalogItem(id="tt0083658", title="Blade Runner", year="1982"),
    CatalogItem(id="tt1856101", title="Blade Runner 2049", year="2017"),
    CatalogItem(id="tt0062622", title="2001: A Space Odyssey", year="1968"),
    CatalogItem(id="tt0245429", title="Spirited Away", year="2001"),
    CatalogItem(id="tt0096283", title="My Neighbor Totoro", year="1988"),
)


class MockRepository:
    """In-memory repository with deterministic answers.

    Search is a case-insensitive substring match over ``catalog``. Details
    come from ``details`` when present, otherwise they are synthesized from
    the matching catalog item. Unknown ids fail like the upstream does.
    """

    def __init__(
        self,
        catalog: Iterable[CatalogItem] = DEFAULT_CATALOG,
        details: Mapping[str, DetailRecord] | None = None,
        *,
        delay_s: float = 0.0,
    ) -> None:
        self.catalog = tuple(catalog)
        self.details = dict(details or {})
        self.delay_s = delay_s
        self.calls: list[tuple[str, str]] = []

    async def search_catalog(
        self, api_key: str, query: str
    ) -> Result[CatalogPayload]:
        """Return catalog items whose title contains *query*."""
        del api_key
        self.calls.append(("search", query))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        needle = query.strip().casefold()
        items = tuple(i for i in self.catalog if needle in i.title.casefold())
        return Success(CatalogPayload(items=items, total_results=len(items)))

    async def fetch_detail(self, api_key: str, item_id: str) -> Result[DetailRecord]:
        """Return the stored or synthesized record for *item_id*."""
        del api_key
        self.calls.append(("detail", item_id))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if item_id in self.details:
            return Success(self.details[item_id])
        for item in self.catalog:
            if item.id == item_id:
                return Success(
                    DetailRecord(
                        id=item.id,
                        title=item.title,
                        year=item.year,
                        poster_url=item.poster_url,
                        plot=f"echo: {item.title}",
                    )
                )
        return Failure(
            ErrorInfo(
                message=f"Details for {item_id!r} failed: Incorrect IMDb ID.",
                kind="upstream",
            )
        )

    async def aclose(self) -> None:
        """Nothing to release."""
