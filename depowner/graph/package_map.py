"""Package map construction from a locked repository."""

from typing import Dict, Protocol, Iterable

from ..models import Package


class Repository(Protocol):
    """Anything exposing the packages of a resolved lock."""

    def get_packages(self) -> Iterable[Package]:
        ...


PackageGraph = Dict[str, Package]


def build_package_map(repository: Repository) -> PackageGraph:
    """Index the repository's packages by name.

    Later packages replace earlier ones carrying the same name.
    """
    package_map: PackageGraph = {}
    for package in repository.get_packages():
        package_map[package.get_name()] = package
    return package_map
