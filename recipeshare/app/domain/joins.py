"""In-memory join helpers for record sets fetched from separate tables."""
from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def distinct_keys(records: Iterable[T], key: Callable[[T], Optional[str]]) -> list[str]:
    """Distinct, non-empty keys in first-seen order."""
    seen: set[str] = set()
    keys: list[str] = []
    for record in records:
        value = key(record)
        if not value or value in seen:
            continue
        seen.add(value)
        keys.append(value)
    return keys


def index_by(records: Iterable[R], key: Callable[[R], Optional[str]]) -> dict[str, R]:
    index: dict[str, R] = {}
    for record in records:
        value = key(record)
        if value:
            index[value] = record
    return index


def attach(
    primary: Sequence[T],
    related: dict[str, R],
    key: Callable[[T], Optional[str]],
) -> list[tuple[T, Optional[R]]]:
    """Pair every primary record with its related record, or None when unmatched."""
    pairs: list[tuple[T, Optional[R]]] = []
    for record in primary:
        value = key(record)
        pairs.append((record, related.get(value) if value else None))
    return pairs


def reorder_by_ids(
    records: Iterable[T],
    ids: Sequence[str],
    key: Callable[[T], Optional[str]],
) -> list[T]:
    """
    Return records in the order given by ids.

    "in" filters give no ordering guarantee, so callers that need a stable
    order reapply it here. Ids with no fetched record are dropped.
    """
    lookup = index_by(records, key)
    return [lookup[record_id] for record_id in ids if record_id in lookup]
