"""List reconciliation: minimal edit operations between two item sequences.

``diff(previous, next)`` returns operations that, applied in order to a copy
of ``previous``, produce ``next``. Items are matched by identity (``id``);
everything else is content.

Emission order and index semantics:

1. ``Remove(index)`` for items that disappeared, highest index first.
2. ``Move(from_index, to_index)`` for retained items whose relative order
   changed. The item is popped at ``from_index`` and re-inserted at
   ``to_index`` of the shortened list. Items on a longest increasing
   subsequence of previous positions stay put, so the number of moves is
   minimal.
3. ``Insert(index, item)`` for new items, lowest index first.
4. ``Update(index, item)`` for retained items whose content changed, indexed
   in the final list.

Every index refers to the working list at the moment the operation applies.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from operator import attrgetter
import os
from typing import TYPE_CHECKING, Any

from cinesearch.errors import InternalError

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Sequence


@dataclass(frozen=True, slots=True)
class Insert:
    index: int
    item: Any


@dataclass(frozen=True, slots=True)
class Remove:
    index: int


@dataclass(frozen=True, slots=True)
class Move:
    from_index: int
    to_index: int


@dataclass(frozen=True, slots=True)
class Update:
    index: int
    item: Any


Operation = Insert | Remove | Move | Update

_item_id: Callable[[Any], Hashable] = attrgetter("id")


def diff(
    previous: Sequence[Any],
    next: Sequence[Any],  # noqa: A002
    *,
    key: Callable[[Any], Hashable] = _item_id,
) -> list[Operation]:
    """Compute the operations that turn *previous* into *next*.

    Ids must be unique within each sequence. Set ``CINESEARCH_VALIDATE=1``
    to have duplicates rejected with ``InternalError``.
    """
    if _validate_enabled():
        _check_unique(previous, key, "previous")
        _check_unique(next, key, "next")

    next_keys = [key(item) for item in next]
    next_index = {k: i for i, k in enumerate(next_keys)}
    prev_by_key = {key(item): item for item in previous}

    ops: list[Operation] = []

    # 1. Removals, from the end so earlier indices stay valid.
    working: list[Hashable] = []
    for i in range(len(previous) - 1, -1, -1):
        k = key(previous[i])
        if k in next_index:
            working.append(k)
        else:
            ops.append(Remove(i))
    working.reverse()

    # 2. Moves. ``working`` holds retained ids in previous order.
    target = [k for k in next_keys if k in prev_by_key]
    stable = _longest_increasing_run(working, next_index)
    for t, k in enumerate(target):
        if k in stable:
            continue
        src = working.index(k)
        working.pop(src)
        dst = 0 if t == 0 else working.index(target[t - 1]) + 1
        working.insert(dst, k)
        ops.append(Move(src, dst))

    # 3. Inserts. Everything before each index already matches ``next``.
    for i, k in enumerate(next_keys):
        if k not in prev_by_key:
            ops.append(Insert(i, next[i]))

    # 4. Content updates, addressed in the final list.
    for i, k in enumerate(next_keys):
        old = prev_by_key.get(k)
        if old is not None and old != next[i]:
            ops.append(Update(i, next[i]))

    return ops


def apply(previous: Sequence[Any], operations: Sequence[Operation]) -> list[Any]:
    """Apply *operations* to a copy of *previous* and return the result."""
    items = list(previous)
    for op in operations:
        match op:
            case Remove(index=index):
                del items[index]
            case Move(from_index=src, to_index=dst):
                items.insert(dst, items.pop(src))
            case Insert(index=index, item=item):
                items.insert(index, item)
            case Update(index=index, item=item):
                items[index] = item
            case _:
                raise InternalError(f"Unknown list operation: {op!r}")
    return items


def _longest_increasing_run(
    working: Sequence[Hashable], next_index: dict[Hashable, int]
) -> set[Hashable]:
    """Ids in *working* whose target positions form a longest increasing subsequence."""
    positions = [next_index[k] for k in working]
    tails: list[int] = []  # smallest tail position per subsequence length
    tail_at: list[int] = []  # index into ``positions`` for each tail
    parent: list[int] = [-1] * len(positions)
    for i, pos in enumerate(positions):
        j = bisect_left(tails, pos)
        if j == len(tails):
            tails.append(pos)
            tail_at.append(i)
        else:
            tails[j] = pos
            tail_at[j] = i
        parent[i] = tail_at[j - 1] if j > 0 else -1

    keep: set[Hashable] = set()
    i = tail_at[-1] if tail_at else -1
    while i != -1:
        keep.add(working[i])
        i = parent[i]
    return keep


def _check_unique(
    items: Sequence[Any], key: Callable[[Any], Hashable], label: str
) -> None:
    seen: set[Hashable] = set()
    for item in items:
        k = key(item)
        if k in seen:
            raise InternalError(
                f"Duplicate id {k!r} in {label} list",
                hint="Catalog payloads must carry unique item ids.",
            )
        seen.add(k)


def _validate_enabled() -> bool:
    """Duplicate-id checks run only when ``CINESEARCH_VALIDATE=1``."""
    return os.getenv("CINESEARCH_VALIDATE") == "1"
