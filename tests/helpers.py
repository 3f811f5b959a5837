"""Test helpers (small, reusable doubles).

Keep this file tiny: it exists so coordinator tests can control exactly when
each fetch completes.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from tests.conftest import FakeRepository


@dataclass
class GatedRepository(FakeRepository):
    """FakeRepository whose answers are held until the test releases them.

    ``hold(kind, arg)`` returns a Future; the matching call blocks on it and
    returns whatever result the test sets.
    """

    gates: dict[tuple[str, str], asyncio.Future[Any]] = field(default_factory=dict)
    started: list[tuple[str, str]] = field(default_factory=list)

    def hold(self, kind: str, arg: str) -> asyncio.Future[Any]:
        fut: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self.gates[(kind, arg)] = fut
        return fut

    async def _gated(self, kind: str, arg: str) -> Any:
        self.started.append((kind, arg))
        return await self.gates[(kind, arg)]

    async def search_catalog(self, api_key: str, query: str) -> Any:
        if ("search", query) not in self.gates:
            return await super().search_catalog(api_key, query)
        self.calls.append(("search", api_key, query))
        return await self._gated("search", query)

    async def fetch_detail(self, api_key: str, item_id: str) -> Any:
        if ("detail", item_id) not in self.gates:
            return await super().fetch_detail(api_key, item_id)
        self.calls.append(("detail", api_key, item_id))
        return await self._gated("detail", item_id)
