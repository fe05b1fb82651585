"""Dependency graph traversal and ownership classification."""

from .analyzer import DependencyGraphAnalyzer, platform_only_names, split_by_blocking, summarize
from .package_map import build_package_map
from .walker import is_real_package, reachable

__all__ = [
    "DependencyGraphAnalyzer",
    "build_package_map",
    "is_real_package",
    "platform_only_names",
    "reachable",
    "split_by_blocking",
    "summarize",
]
