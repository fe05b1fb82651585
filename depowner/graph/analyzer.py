"""
Dependency graph analyzer for ownership classification.

Walks the locked repository from two starting sets:
1. Platform roots (framework packages), unconstrained
2. User roots (direct requires minus platform roots), treating every
   platform root as a barrier that is visited but not expanded

The overlap of both walks is shared ownership; what only the platform walk
reaches is platform-only and its advisories do not block installation.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from ..models import DependencyOwnership
from .package_map import PackageGraph, Repository, build_package_map
from .walker import is_real_package, reachable


class DependencyGraphAnalyzer:
    """Classifies installed packages by who is responsible for them."""

    def __init__(self, follow: Optional[Callable[[str], bool]] = None):
        """
        Args:
            follow: Edge predicate for the walker. Defaults to accepting
                ``vendor/package`` names only.
        """
        self.follow = follow or is_real_package
        self.logger = logging.getLogger(self.__class__.__name__)

    def classify(
        self,
        repository: Repository,
        platform_roots: List[str],
        direct_requires: List[str],
    ) -> Dict[str, DependencyOwnership]:
        """Classify all installed packages by their ownership.

        Args:
            repository: Installed/locked package repository
            platform_roots: Package names identified as platform packages
            direct_requires: Package names the root project requires

        Returns:
            Package name to ownership. Packages reachable from neither root
            set are omitted.
        """
        return self.classify_graph(
            build_package_map(repository), platform_roots, direct_requires
        )

    def classify_graph(
        self,
        graph: PackageGraph,
        platform_roots: List[str],
        direct_requires: List[str],
    ) -> Dict[str, DependencyOwnership]:
        """Classify an already-built package map."""
        platform_root_set = set(platform_roots)
        direct_set = set(direct_requires)
        user_roots = [name for name in direct_requires if name not in platform_root_set]

        platform_reachable = reachable(graph, platform_roots, follow=self.follow)
        # A user library requiring a platform package must not pull the
        # platform's whole closure onto the user side.
        user_reachable = reachable(
            graph, user_roots, barriers=platform_root_set, follow=self.follow
        )

        result: Dict[str, DependencyOwnership] = {}
        for name in graph:
            in_platform = name in platform_reachable
            in_user = name in user_reachable

            if name in direct_set:
                result[name] = DependencyOwnership.DIRECT
            elif in_platform and in_user:
                result[name] = DependencyOwnership.SHARED
            elif in_platform:
                result[name] = DependencyOwnership.PLATFORM_ONLY
            elif in_user:
                result[name] = DependencyOwnership.USER_TRANSITIVE

        missing_roots = []
        for root in platform_roots:
            if root in graph:
                result[root] = DependencyOwnership.DIRECT
            else:
                missing_roots.append(root)

        if missing_roots:
            self.logger.debug(
                f"Platform roots not present in the lock: {', '.join(missing_roots)}"
            )

        self.logger.debug(
            f"Classified {len(result)} of {len(graph)} packages "
            f"({len(platform_reachable)} platform-reachable, {len(user_reachable)} user-reachable)"
        )
        return result

    def get_platform_only_packages(
        self,
        repository: Repository,
        platform_roots: List[str],
        direct_requires: List[str],
    ) -> List[str]:
        """Names whose advisories should not block installation."""
        classifications = self.classify(repository, platform_roots, direct_requires)
        return platform_only_names(classifications)


def platform_only_names(classifications: Dict[str, DependencyOwnership]) -> List[str]:
    return [
        name
        for name, ownership in classifications.items()
        if ownership is DependencyOwnership.PLATFORM_ONLY
    ]


def summarize(classifications: Dict[str, DependencyOwnership]) -> Dict[str, int]:
    """Count classified packages per ownership label."""
    counts = {ownership.value: 0 for ownership in DependencyOwnership}
    for ownership in classifications.values():
        counts[ownership.value] += 1
    return counts


def split_by_blocking(
    classifications: Dict[str, DependencyOwnership],
) -> Tuple[List[str], List[str]]:
    """Split classified names into ``(platform_only, user_owned)``."""
    platform_only: List[str] = []
    user_owned: List[str] = []
    for name, ownership in classifications.items():
        if ownership.should_block():
            user_owned.append(name)
        else:
            platform_only.append(name)
    return platform_only, user_owned
