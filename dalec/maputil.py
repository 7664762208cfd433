"""Small helpers for working with string-keyed mappings in a stable order."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

K = TypeVar("K")
V = TypeVar("V")


def sort_map_keys(mapping: Mapping[str, V] | None) -> list[str]:
    """Return the keys of ``mapping`` in sorted order."""
    if not mapping:
        return []
    return sorted(mapping)


def sorted_map_values(mapping: Mapping[str, V] | None) -> list[V]:
    """Return the values of ``mapping`` ordered by their keys."""
    if not mapping:
        return []
    return [mapping[key] for key in sorted(mapping)]


def duplicate_map(mapping: Mapping[K, V] | None) -> dict[K, V]:
    """Return a shallow copy of ``mapping`` as a new dict (empty for ``None``)."""
    if mapping is None:
        return {}
    return dict(mapping)