"""depowner: dependency ownership classification for responsibility-aware audits."""

from depowner.graph import DependencyGraphAnalyzer, reachable
from depowner.models import DependencyOwnership, LockedRepository, Package, RequireLink, should_block

__version__ = "0.1.0"

__all__ = [
    "DependencyGraphAnalyzer",
    "DependencyOwnership",
    "LockedRepository",
    "Package",
    "RequireLink",
    "reachable",
    "should_block",
]
