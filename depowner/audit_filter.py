"""
Audit response filtering.

Separates platform-owned from user-owned advisories so platform-only findings
are reported as informational instead of blocking.
"""

from typing import Any, Dict, List, Optional

Advisory = Dict[str, Any]
AdvisoryMap = Dict[str, List[Advisory]]


def advisory_id(advisory: Advisory) -> Optional[str]:
    """Identifier of an advisory: ``advisoryId``, falling back to ``cve``."""
    identifier = advisory.get("advisoryId")
    if identifier is None:
        identifier = advisory.get("cve")
    if isinstance(identifier, str) and identifier:
        return identifier
    return None


class AuditResponseFilter:
    """Splits advisories by package ownership."""

    def partition(
        self, advisories: AdvisoryMap, platform_only_packages: List[str]
    ) -> Dict[str, AdvisoryMap]:
        """Partition advisories into blocking and informational sets.

        Args:
            advisories: Package name to list of advisories
            platform_only_packages: Names classified as platform-only

        Returns:
            ``{"blocking": {...}, "informational": {...}}``
        """
        platform_set = set(platform_only_packages)
        blocking: AdvisoryMap = {}
        informational: AdvisoryMap = {}

        for package_name, package_advisories in advisories.items():
            if package_name in platform_set:
                informational[package_name] = package_advisories
            else:
                blocking[package_name] = package_advisories

        return {"blocking": blocking, "informational": informational}

    def get_ignorable_advisory_ids(
        self, advisories: AdvisoryMap, platform_only_packages: List[str]
    ) -> List[str]:
        """Advisory IDs that should not block, de-duplicated in first-seen order."""
        platform_set = set(platform_only_packages)
        ids: List[str] = []

        for package_name, package_advisories in advisories.items():
            if package_name not in platform_set:
                continue
            for advisory in package_advisories:
                identifier = advisory_id(advisory)
                if identifier and identifier not in ids:
                    ids.append(identifier)

        return ids
