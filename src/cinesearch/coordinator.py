"""Presentation coordinator: turns fetch results into observable state.

The coordinator is the only writer of its slots. Each fetch gets a per-slot
sequence number when it is issued; a result is published only if no newer
fetch has been issued for the same slot since. Older results are dropped on
arrival, so a slow response can never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any, TypeAlias

from cinesearch.errors import ClosedError
from cinesearch.observable import ReadOnlySlot, Slot
from cinesearch.result import ErrorInfo, Failure

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from cinesearch.models import CatalogPayload, DetailRecord
    from cinesearch.repository.base import CatalogRepository
    from cinesearch.result import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Pending:
    """A fetch has been issued for the slot and has not completed."""

    def __repr__(self) -> str:
        return "PENDING"


PENDING = Pending()

ListState: TypeAlias = "Result[CatalogPayload] | Pending"
DetailState: TypeAlias = "Result[DetailRecord] | Pending"


class _Lane:
    """Sequencing state for one slot."""

    __slots__ = ("issued", "slot", "task")

    def __init__(self, slot: Slot[Any]) -> None:
        self.slot = slot
        self.issued = 0
        self.task: asyncio.Task[None] | None = None


class CatalogCoordinator:
    """Owns the list, detail and error slots and issues fetches for them.

    All methods must be called from the event loop thread. Fetch methods
    return immediately with the scheduled task; awaiting it is optional.

    Example:
        coordinator = CatalogCoordinator(MockRepository())
        coordinator.list_state.subscribe(render)
        coordinator.fetch_movies(api_key, "blade runner")
        await coordinator.wait_idle()
    """

    def __init__(
        self, repository: CatalogRepository, *, cancel_superseded: bool = False
    ) -> None:
        """Initialize with an injected repository.

        With ``cancel_superseded`` a newer fetch also cancels the older
        in-flight call on the same slot. Published state is the same either way.
        """
        self._repository = repository
        self._cancel_superseded = cancel_superseded
        self._list: _Lane = _Lane(Slot[Any](PENDING, name="list"))
        self._detail: _Lane = _Lane(Slot[Any](PENDING, name="detail"))
        self._error: Slot[ErrorInfo | None] = Slot(None, name="error")
        self._tasks: set[asyncio.Task[None]] = set()
        self._closed = False

    @property
    def list_state(self) -> ReadOnlySlot[ListState]:
        return self._list.slot.read_only()

    @property
    def detail_state(self) -> ReadOnlySlot[DetailState]:
        return self._detail.slot.read_only()

    @property
    def error_state(self) -> ReadOnlySlot[ErrorInfo | None]:
        """Most recent failure published to either the list or detail slot."""
        return self._error.read_only()

    def fetch_movies(self, api_key: str, query: str) -> asyncio.Task[None] | None:
        """Search the catalog and publish the outcome to ``list_state``.

        A blank query is a no-op: nothing is issued and ``None`` is returned.
        """
        if not query or not query.strip():
            logger.debug("Ignoring blank search query")
            return None
        query = query.strip()
        return self._issue(
            self._list,
            lambda: self._repository.search_catalog(api_key, query),
            what=f"movies for {query!r}",
        )

    def fetch_details(self, api_key: str, item_id: str) -> asyncio.Task[None] | None:
        """Fetch one record and publish the outcome to ``detail_state``.

        A blank id is a no-op, like a blank search query.
        """
        if not item_id or not item_id.strip():
            logger.debug("Ignoring blank item id")
            return None
        item_id = item_id.strip()
        return self._issue(
            self._detail,
            lambda: self._repository.fetch_detail(api_key, item_id),
            what=f"details for {item_id!r}",
        )

    async def wait_idle(self) -> None:
        """Wait until every issued fetch has finished.

        Re-raises the first unexpected exception raised by a fetch task.
        """
        while self._tasks:
            batch = tuple(self._tasks)
            await asyncio.wait(batch)
            for task in batch:
                if task.cancelled():
                    continue
                exc = task.exception()
                if exc is not None:
                    raise exc

    def close(self) -> None:
        """Close every slot; results still in flight are discarded.

        Closed slots keep their last value but refuse new subscribers.
        """
        if self._closed:
            return
        self._closed = True
        for slot in (self._list.slot, self._detail.slot, self._error):
            slot.close()
        logger.debug("Coordinator closed with %d fetches in flight", len(self._tasks))

    def _issue(
        self,
        lane: _Lane,
        call: Callable[[], Awaitable[Result[Any]]],
        *,
        what: str,
    ) -> asyncio.Task[None]:
        if self._closed:
            raise ClosedError(
                f"Cannot fetch {what}: coordinator is closed",
                hint="Create a new CatalogCoordinator for a new screen.",
            )
        loop = asyncio.get_running_loop()

        # Subscribers may raise here; sequencing is untouched until they return.
        lane.slot.publish(PENDING)

        lane.issued += 1
        seq = lane.issued
        previous = lane.task
        if self._cancel_superseded and previous is not None and not previous.done():
            previous.cancel()

        task = loop.create_task(
            self._complete(lane, seq, call, what=what),
            name=f"cinesearch-{lane.slot.name}-{seq}",
        )
        lane.task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Issued fetch #%d of %s", seq, what)
        return task

    async def _complete(
        self,
        lane: _Lane,
        seq: int,
        call: Callable[[], Awaitable[Result[Any]]],
        *,
        what: str,
    ) -> None:
        result = await call()

        if self._closed:
            logger.debug("Discarding fetch #%d of %s: coordinator closed", seq, what)
            return
        if seq != lane.issued:
            logger.debug(
                "Discarding stale fetch #%d of %s (latest is #%d)",
                seq,
                what,
                lane.issued,
            )
            return

        try:
            lane.slot.publish(result)
        finally:
            if isinstance(result, Failure):
                logger.warning("Error fetching %s: %s", what, result.error.message)
                self._error.publish(result.error)
