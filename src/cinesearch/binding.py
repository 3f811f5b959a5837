"""Bind a list slot to a rendered list through incremental diffs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cinesearch.reconcile import apply, diff
from cinesearch.result import Success

if TYPE_CHECKING:
    from collections.abc import Callable

    from cinesearch.models import CatalogItem
    from cinesearch.observable import ReadOnlySlot
    from cinesearch.reconcile import Operation

logger = logging.getLogger(__name__)


class ListBinding:
    """Keep ``items`` in step with a coordinator's ``list_state``.

    Every published ``Success`` is diffed against the rendered items; the
    operations are applied locally and then handed to ``on_operations`` so a
    view can animate exactly those changes. ``Pending`` and ``Failure`` keep
    the current items on screen.
    """

    def __init__(
        self,
        state: ReadOnlySlot[Any],
        on_operations: Callable[[list[Operation]], None] | None = None,
    ) -> None:
        self._state = state
        self._on_operations = on_operations
        self.items: list[CatalogItem] = []
        self._attached = True
        state.subscribe(self._on_state)

    @property
    def attached(self) -> bool:
        """False after ``detach`` or once the coordinator closes the slot."""
        return self._attached and not self._state.closed

    def detach(self) -> None:
        if self._attached:
            self._state.unsubscribe(self._on_state)
            self._attached = False

    def _on_state(self, state: object) -> None:
        if not isinstance(state, Success):
            return
        incoming = list(state.value.items)
        operations = diff(self.items, incoming)
        if not operations:
            return
        self.items = apply(self.items, operations)
        logger.debug("Applied %d list operations", len(operations))
        if self._on_operations is not None:
            self._on_operations(operations)
