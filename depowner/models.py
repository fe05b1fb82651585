from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class DependencyOwnership(str, Enum):
    """Who is accountable for a package's security posture."""
    DIRECT = "direct"
    PLATFORM_ONLY = "platform-only"
    SHARED = "shared"
    USER_TRANSITIVE = "user-transitive"

    def should_block(self) -> bool:
        """Whether advisories for a package with this ownership halt the operation.

        Direct, shared and user-transitive packages all block because the user
        controls at least one dependency path to them.
        """
        return self is not DependencyOwnership.PLATFORM_ONLY


def should_block(ownership: DependencyOwnership) -> bool:
    return ownership.should_block()


@dataclass(frozen=True)
class RequireLink:
    """A requirement edge from one package to another."""
    target: str
    constraint: str = "*"


@dataclass(frozen=True)
class Package:
    """A resolved package from the lock file."""
    name: str
    version: str = ""
    requires: Tuple[RequireLink, ...] = ()

    def get_name(self) -> str:
        return self.name

    def get_requires(self) -> Tuple[RequireLink, ...]:
        return self.requires


@dataclass
class RootPackage:
    """The project being installed, as declared in ``composer.json``."""
    name: str = "__root__"
    type: str = "library"
    requires: List[RequireLink] = field(default_factory=list)
    dev_requires: List[RequireLink] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def require_names(self, include_dev: bool = False) -> List[str]:
        links = list(self.requires)
        if include_dev:
            links.extend(self.dev_requires)
        return [link.target for link in links]


class LockedRepository:
    """In-memory repository of locked packages."""

    def __init__(self, packages: Optional[Iterable[Package]] = None):
        self._packages: List[Package] = list(packages or [])

    def get_packages(self) -> List[Package]:
        return list(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __iter__(self):
        return iter(self._packages)
