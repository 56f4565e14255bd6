"""Boundary with the canonical host registry.

The registry (an SSH config, an inventory file, ...) is owned elsewhere.
All the layout engine needs from it is an ordered list of unique names.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class HostRecord(Protocol):
    """Any registry entry exposing a ``name``."""

    name: str


CanonicalHosts = Iterable[HostRecord | str]


def host_names(records: CanonicalHosts) -> list[str]:
    """Normalize registry records (or bare names) to ordered, unique names."""
    names: list[str] = []
    seen: set[str] = set()
    for record in records:
        name = record if isinstance(record, str) else record.name
        if name in seen:
            continue
        seen.add(name)
        names.append(name)
    return names
