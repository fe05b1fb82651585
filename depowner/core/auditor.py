"""
Responsibility-aware audit service.

After install/update the lock file exists, so the dependency graph can be
classified and only advisories on user-owned packages fail the run. For
``composer audit`` the same classification produces ignore rules for
platform-only advisories.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from depowner.ecosystems.composer import read_locked_repository, read_root_package
from depowner.enhancers.packagist_provider import PackagistAdvisoryProvider
from depowner.graph import DependencyGraphAnalyzer, build_package_map, split_by_blocking
from depowner.models import DependencyOwnership, LockedRepository, RootPackage
from depowner.platform_detector import PlatformDetector
from depowner.rich_utils.ui_helpers import get_console
from depowner.utils.exceptions import UserOwnedAdvisoriesError

TAG = f"[green]{escape('[audit-responsibility]')}[/green]"


@dataclass
class AuditResult:
    """Outcome of a responsibility-aware audit."""
    classifications: Dict[str, DependencyOwnership] = field(default_factory=dict)
    platform_roots: List[str] = field(default_factory=list)
    platform_advisories: Dict[str, str] = field(default_factory=dict)
    user_advisories: Dict[str, str] = field(default_factory=dict)
    skipped_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    @property
    def should_block(self) -> bool:
        return bool(self.user_advisories)


class ResponsibilityAuditor:
    """Runs ownership classification and advisory checks for a project."""

    def __init__(
        self,
        config: Optional[dict] = None,
        provider: Optional[PackagistAdvisoryProvider] = None,
        console: Optional[Console] = None,
    ):
        self.config = config or {}
        self.audit_config = self.config.get("audit", {})
        self.provider = provider or PackagistAdvisoryProvider(self.config)
        self.console = console or get_console()
        self.detector = PlatformDetector()
        self.analyzer = DependencyGraphAnalyzer()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def include_dev(self) -> bool:
        return bool(self.audit_config.get("include_dev", False))

    def platform_patterns(self, root_package: RootPackage) -> List[str]:
        """Configured upstream patterns, else those detected from composer.json."""
        configured = [entry for entry in self.audit_config.get("upstream") or [] if isinstance(entry, str)]
        if configured:
            return configured
        return self.detector.detect(root_package)

    def is_active(self, root_package: RootPackage) -> bool:
        """Whether advisories should be filtered by responsibility at all."""
        if not self.platform_patterns(root_package):
            self.logger.info(
                "No platform packages detected. Set extra.audit-responsibility.upstream "
                "in composer.json or use a framework-specific package type."
            )
            return False

        if self.audit_config.get("block_upstream") is True or self.detector.is_block_upstream(root_package):
            self.logger.info("block-upstream is enabled, not filtering advisories.")
            return False

        return True

    def classify_project(
        self, project_path: str = ".", platform_patterns: Optional[List[str]] = None
    ) -> Tuple[Dict[str, DependencyOwnership], List[str], Optional[LockedRepository]]:
        """Classify a project's locked packages.

        Returns:
            ``(classifications, platform_roots, repository)``; the repository
            is ``None`` when the project is not locked
        """
        return self._classify(read_root_package(project_path), project_path, platform_patterns)

    def _classify(
        self,
        root_package: RootPackage,
        project_path: str,
        platform_patterns: Optional[List[str]] = None,
    ) -> Tuple[Dict[str, DependencyOwnership], List[str], Optional[LockedRepository]]:
        repository = read_locked_repository(project_path, include_dev=self.include_dev)
        if repository is None:
            return {}, [], None

        patterns = platform_patterns or self.platform_patterns(root_package)
        platform_roots = self.detector.resolve_patterns(patterns, repository)
        direct_requires = root_package.require_names(include_dev=self.include_dev)

        classifications = self.analyzer.classify_graph(
            build_package_map(repository), platform_roots, direct_requires
        )
        return classifications, platform_roots, repository

    def run_post_install_audit(self, project_path: str = ".") -> AuditResult:
        """Fail on advisories for user-owned packages, report the rest.

        Raises:
            UserOwnedAdvisoriesError: when any user-owned package has an
                advisory affecting its installed version
        """
        root_package = read_root_package(project_path)
        if not self.is_active(root_package):
            return AuditResult(skipped_reason="responsibility propagation inactive")

        classifications, platform_roots, repository = self._classify(root_package, project_path)
        if repository is None:
            self.logger.info("No lock file found, skipping responsibility analysis.")
            return AuditResult(skipped_reason="no lock file")

        self.console.print()
        self.console.print(f"{TAG} Running post-install responsibility-aware security audit...")

        if not platform_roots:
            self.console.print(f"{TAG} No platform packages found in lock file.")
            return AuditResult(skipped_reason="no platform packages installed")

        platform_only, user_owned = split_by_blocking(classifications)
        platform_names = ", ".join(platform_roots)
        self.logger.info(
            f"Classified {len(classifications)} packages: "
            f"{len(platform_only)} platform-only, {len(user_owned)} user-owned."
        )

        user_advisories = self.provider.fetch_advisory_ids(
            user_owned, repository, "User-owned dependency", filter_by_installed_version=True
        )
        platform_advisories = self.provider.fetch_advisory_ids(
            platform_only,
            repository,
            f"Platform dependency via {platform_names}",
            filter_by_installed_version=True,
        )

        result = AuditResult(
            classifications=classifications,
            platform_roots=platform_roots,
            platform_advisories=platform_advisories,
            user_advisories=user_advisories,
        )

        if platform_advisories:
            self.console.print(
                f"{TAG} Suppressed {len(platform_advisories)} advisory/ies for platform-only "
                "dependencies (framework responsibility):"
            )
            for identifier, reason in platform_advisories.items():
                self.console.print(f"  - {escape(identifier)} ({escape(reason)})")

        if user_advisories:
            self.console.print()
            self.console.print(
                f"[red]{TAG} Found {len(user_advisories)} security advisory/ies in YOUR dependencies:[/red]"
            )
            for identifier in user_advisories:
                self.console.print(f"  [red]- {escape(identifier)}[/red]")
            self.console.print()
            self.console.print("[red]These are in packages you control. Update them to resolve.[/red]")
            raise UserOwnedAdvisoriesError(list(user_advisories))

        if platform_advisories:
            self.console.print()
            self.console.print(f"{TAG} No security advisories in YOUR dependencies. All clear.")
        else:
            self.console.print(f"{TAG} No security advisories found.")

        return result

    def build_ignore_rules(self, project_path: str = ".") -> Dict[str, str]:
        """Advisory ID -> reason for every platform-only advisory.

        Advisories are not filtered by installed version; Composer's own
        version matching applies when the rules are used.
        """
        root_package = read_root_package(project_path)
        if not self.is_active(root_package):
            return {}

        classifications, platform_roots, repository = self._classify(root_package, project_path)
        if repository is None:
            self.logger.info("No lock file found, skipping responsibility analysis.")
            return {}

        if not platform_roots:
            self.logger.info("No installed packages match platform patterns.")
            return {}

        platform_names = ", ".join(platform_roots)
        self.logger.info(f"Platform packages: {platform_names}")

        platform_only, _ = split_by_blocking(classifications)
        if not platform_only:
            self.logger.info("No platform-only transitive dependencies found.")
            return {}

        self.console.print(
            f"{TAG} Detected {len(platform_only)} platform-only transitive dependencies "
            f"via {escape(platform_names)}."
        )

        reason = f"Platform dependency via {platform_names} (responsibility propagation)"
        ignores = self.provider.fetch_advisory_ids(platform_only, repository, reason)

        if not ignores:
            self.logger.info("No active advisories for platform-only packages.")
            return {}

        self.console.print(
            f"{TAG} Generated {len(ignores)} advisory ignore rules: {escape(', '.join(ignores))}"
        )
        return ignores
