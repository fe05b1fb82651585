"""
Platform package detection.

Maps Composer package types to the framework packages they extend. An
explicit ``extra.audit-responsibility.upstream`` list in ``composer.json``
always takes precedence over the type mapping.
"""

import fnmatch
import logging
from typing import Any, Dict, List

from .graph.package_map import Repository
from .models import RootPackage

CONFIG_KEY = "audit-responsibility"

TYPE_MAP: Dict[str, List[str]] = {
    "typo3-cms-extension": ["typo3/cms-core"],
    "symfony-bundle": ["symfony/framework-bundle", "symfony/http-kernel"],
    "drupal-module": ["drupal/core"],
    "drupal-theme": ["drupal/core"],
    "drupal-profile": ["drupal/core"],
    "drupal-drush": ["drupal/core"],
    "wordpress-plugin": ["johnpbloch/wordpress-core", "roots/wordpress"],
    "wordpress-theme": ["johnpbloch/wordpress-core", "roots/wordpress"],
    "wordpress-muplugin": ["johnpbloch/wordpress-core", "roots/wordpress"],
    "magento2-module": ["magento/framework"],
    "magento2-theme": ["magento/framework"],
    "magento2-language": ["magento/framework"],
    "magento2-library": ["magento/framework"],
    "shopware-platform-plugin": ["shopware/core"],
    "contao-bundle": ["contao/core-bundle"],
    "laravel-package": ["laravel/framework"],
    "cakephp-plugin": ["cakephp/cakephp"],
    "yii2-extension": ["yiisoft/yii2"],
    "neos-plugin": ["neos/neos"],
    "neos-package": ["neos/flow"],
    "flow-package": ["neos/flow"],
    "oroplatform-bundle": ["oro/platform"],
    "silverstripe-vendormodule": ["silverstripe/framework"],
    "pimcore-bundle": ["pimcore/pimcore"],
}


def _responsibility_config(root_package: RootPackage) -> Dict[str, Any]:
    config = root_package.extra.get(CONFIG_KEY)
    return config if isinstance(config, dict) else {}


class PlatformDetector:
    """Detects platform/framework packages for a root project."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def detect(self, root_package: RootPackage) -> List[str]:
        """Platform package patterns for the root package.

        Returns:
            Explicitly configured upstream patterns when present, otherwise
            the patterns mapped from the package type
        """
        explicit = self.read_explicit_config(root_package)
        if explicit:
            return explicit
        return self.detect_from_type(root_package.type)

    def detect_from_type(self, package_type: str) -> List[str]:
        return list(TYPE_MAP.get(package_type, []))

    def read_explicit_config(self, root_package: RootPackage) -> List[str]:
        upstream = _responsibility_config(root_package).get("upstream")
        if not isinstance(upstream, list):
            return []
        return [entry for entry in upstream if isinstance(entry, str)]

    def is_block_upstream(self, root_package: RootPackage) -> bool:
        """Whether the project opted out of suppressing platform advisories."""
        return _responsibility_config(root_package).get("block-upstream") is True

    def resolve_patterns(self, patterns: List[str], repository: Repository) -> List[str]:
        """Resolve name patterns against installed packages.

        Glob patterns (``typo3/cms-*``) expand to every matching installed
        name. Plain names are kept only when installed.
        """
        installed = [package.get_name() for package in repository.get_packages()]

        resolved: List[str] = []
        seen = set()
        for pattern in patterns:
            needle = pattern.lower()
            matches = [name for name in installed if fnmatch.fnmatchcase(name.lower(), needle)]
            if not matches:
                self.logger.debug(f"Platform pattern '{pattern}' matches no installed package")
            for name in matches:
                if name not in seen:
                    seen.add(name)
                    resolved.append(name)
        return resolved

    @staticmethod
    def get_type_map() -> Dict[str, List[str]]:
        return {package_type: list(patterns) for package_type, patterns in TYPE_MAP.items()}
