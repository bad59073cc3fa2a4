"""
Import ordering over parent relations.

resolve() walks the pending names from the top and schedules the first name
whose parents are already scheduled, then restarts the scan. Names without a
registry entry are dropped on sight. This is a greedy restart scan, not a
general topological sort: the cost is quadratic in the number of names, which
is fine for feeds with a few dozen files.

Rules
- A parent blocks a table only if the parent is itself an importable member of
  the resolution set. Missing or unknown parents never block.
- Self relations (a table referencing itself) are ignored.
- Seed names are front-loaded, scheduled first, and removed from the result.
- A full scan that neither schedules nor drops anything means the remaining
  names depend on each other: CyclicDependencyError.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .errors import CyclicDependencyError
from .grammar import TableDescriptor

__all__ = ["resolve"]


def resolve(
    candidates: Iterable[str],
    registry: Mapping[str, TableDescriptor],
    *,
    seeds: Iterable[str] = (),
) -> list[str]:
    """
    Order candidate table names so that parents precede children.

    Args:
        candidates (Iterable[str]): Names discovered in a source, in enumeration order.
        registry (Mapping[str, TableDescriptor]): Table metadata (usually a SchemaRegistry).
        seeds (Iterable[str]): Names to schedule ahead of every candidate and
            exclude from the returned order.

    Returns:
        list[str]: Importable candidate names in a valid dependency order.

    Raises:
        CyclicDependencyError: If the remaining names cannot be ordered.

    Examples:
        >>> from feedio.core.registry import default_registry
        >>> resolve(["stop_times.txt", "nope.txt", "trips.txt"], default_registry())
        ['trips.txt', 'stop_times.txt']
    """
    seed_names = list(dict.fromkeys(seeds))
    pending = list(dict.fromkeys([*seed_names, *candidates]))
    importable = {name for name in pending if name in registry}
    scheduled: list[str] = []
    done: set[str] = set()

    while pending:
        for name in pending:
            desc = registry.get(name)
            if desc is None:
                pending.remove(name)
                break
            if all(p in done or p == name or p not in importable for p in desc.parents):
                scheduled.append(name)
                done.add(name)
                pending.remove(name)
                break
        else:
            raise CyclicDependencyError(pending)

    return [name for name in scheduled if name not in seed_names]
