"""
Constrained reachability over the package graph.

A single breadth-first walker serves both traversals the analyzer needs:
the unconstrained platform walk and the barrier-limited user walk.
"""

from collections import deque
from typing import AbstractSet, Callable, Iterable, Mapping, Set

from ..models import Package


def is_real_package(name: str) -> bool:
    """Whether a requirement target names an installable ``vendor/package``.

    ``php``, ``ext-json``, ``composer-plugin-api`` and similar virtual
    requirements carry no namespace separator.
    """
    return "/" in name


def reachable(
    graph: Mapping[str, Package],
    roots: Iterable[str],
    barriers: AbstractSet[str] = frozenset(),
    follow: Callable[[str], bool] = is_real_package,
) -> Set[str]:
    """Return every name reachable from ``roots``.

    Args:
        graph: Package name to package mapping
        roots: Starting names, walked simultaneously. Names missing from the
            graph are visited but have nothing to expand.
        barriers: Names that are visited but whose requirements are not
            expanded during this walk
        follow: Predicate deciding whether a requirement edge is enqueued

    Returns:
        Set of visited names, roots included
    """
    visited: Set[str] = set()
    queue = deque(roots)

    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)

        if current in barriers:
            continue

        package = graph.get(current)
        if package is None:
            continue

        for link in package.get_requires():
            target = link.target
            if not follow(target):
                continue
            if target not in visited:
                queue.append(target)

    return visited
