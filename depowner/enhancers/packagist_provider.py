"""
Packagist security advisory provider.

Queries the Packagist Security Advisories API for a list of packages and
turns the answer into advisory ID -> reason mappings suitable for Composer's
``audit.ignore`` configuration.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..audit_filter import AdvisoryMap, advisory_id
from ..constraints import satisfies
from ..graph.package_map import Repository
from ..utils.api_error_handler import handle_external_api_errors
from ..utils.exceptions import ConstraintError
from .utils import create_http_session

DEFAULT_API_URL = "https://packagist.org/api/security-advisories/"


class PackagistAdvisoryProvider:
    """
    Fetches security advisories from Packagist.

    Network failures and malformed responses never raise: they are logged and
    treated as "no advisories known".
    """

    def __init__(self, config: Optional[Dict] = None, session: Optional[requests.Session] = None):
        config = config or {}
        advisories_config = config.get("advisories", {})
        self.logger = logging.getLogger(self.__class__.__name__)

        self.api_url = advisories_config.get("api_url", DEFAULT_API_URL)
        self.timeout = advisories_config.get("timeout_seconds", 10)
        self.session = session or create_http_session(
            user_agent=advisories_config.get("user_agent", "depowner/0.1"),
            max_retries=advisories_config.get("max_retries", 2),
        )
        self.stats = {"api_calls": 0, "errors": 0}

    def fetch_advisory_ids(
        self,
        package_names: List[str],
        repository: Repository,
        reason: str,
        filter_by_installed_version: bool = False,
    ) -> Dict[str, str]:
        """Fetch advisory IDs for the given packages.

        When ``filter_by_installed_version`` is set, only advisories whose
        ``affectedVersions`` constraint covers the locked version are kept.
        Otherwise all advisories are returned and Composer's own version
        matching does the filtering.

        Args:
            package_names: Package names to check
            repository: Locked repository with installed versions
            reason: Reason attached to every returned advisory
            filter_by_installed_version: Whether to filter by installed version

        Returns:
            Advisory ID to reason
        """
        if not package_names:
            return {}

        installed_versions: Dict[str, str] = {}
        if filter_by_installed_version:
            for package in repository.get_packages():
                installed_versions[package.get_name()] = package.version

        result: Dict[str, str] = {}
        for package_name, package_advisories in self.fetch_advisories(package_names).items():
            for advisory in package_advisories:
                identifier = advisory_id(advisory)
                if identifier is None:
                    continue

                if filter_by_installed_version and not self._affects_installed(
                    advisory, installed_versions.get(package_name)
                ):
                    continue

                result[identifier] = reason

        return result

    def fetch_advisories(self, package_names: List[str]) -> AdvisoryMap:
        """Fetch raw advisories grouped by package name.

        Entries that do not have the expected shape are dropped.
        """
        if not package_names:
            return {}

        data = self._query(package_names)
        if not isinstance(data, dict) or not isinstance(data.get("advisories"), dict):
            return {}

        advisories: AdvisoryMap = {}
        for package_name, package_advisories in data["advisories"].items():
            if not isinstance(package_name, str) or not isinstance(package_advisories, list):
                continue
            advisories[package_name] = [
                advisory for advisory in package_advisories if isinstance(advisory, dict)
            ]
        return advisories

    @handle_external_api_errors(service="Packagist", return_on_error=None)
    def _query(self, package_names: List[str]) -> Any:
        self.stats["api_calls"] += 1
        self.logger.debug(f"Querying advisories for {len(package_names)} packages")
        response = self.session.get(
            self.api_url,
            params={"packages[]": package_names},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def _affects_installed(self, advisory: Dict[str, Any], installed_version: Optional[str]) -> bool:
        affected_versions = advisory.get("affectedVersions")
        if not isinstance(affected_versions, str) or not installed_version:
            return True

        try:
            return satisfies(installed_version, affected_versions)
        except ConstraintError as e:
            # Unparseable ranges are kept
            self.logger.debug(f"Keeping advisory {advisory_id(advisory)}: {e}")
            return True
