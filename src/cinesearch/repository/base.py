"""Repository protocol: the boundary between network calls and presentation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cinesearch.models import CatalogPayload, DetailRecord
    from cinesearch.result import Result


@runtime_checkable
class CatalogRepository(Protocol):
    """Minimal repository protocol: one outbound call per method.

    Implementations never raise for request failures; every transport,
    upstream or decode problem is returned as ``Failure(ErrorInfo)``.
    Only ``asyncio.CancelledError`` propagates.
    """

    async def search_catalog(
        self, api_key: str, query: str
    ) -> Result[CatalogPayload]:
        """Search the catalog by title."""
        ...

    async def fetch_detail(self, api_key: str, item_id: str) -> Result[DetailRecord]:
        """Fetch the full record for a previously returned item id."""
        ...

    async def aclose(self) -> None:
        """Release network resources held by the repository."""
        ...
