"""Tests for platform package detection."""

import pytest

from depowner.models import LockedRepository, Package, RootPackage
from depowner.platform_detector import PlatformDetector


@pytest.fixture
def detector():
    return PlatformDetector()


@pytest.mark.parametrize(
    "package_type, expected",
    [
        ("typo3-cms-extension", ["typo3/cms-core"]),
        ("symfony-bundle", ["symfony/framework-bundle", "symfony/http-kernel"]),
        ("drupal-module", ["drupal/core"]),
        ("drupal-theme", ["drupal/core"]),
        ("wordpress-plugin", ["johnpbloch/wordpress-core", "roots/wordpress"]),
        ("magento2-module", ["magento/framework"]),
        ("shopware-platform-plugin", ["shopware/core"]),
        ("contao-bundle", ["contao/core-bundle"]),
        ("cakephp-plugin", ["cakephp/cakephp"]),
        ("neos-plugin", ["neos/neos"]),
        ("flow-package", ["neos/flow"]),
        ("oroplatform-bundle", ["oro/platform"]),
        ("silverstripe-vendormodule", ["silverstripe/framework"]),
        ("pimcore-bundle", ["pimcore/pimcore"]),
        ("library", []),
        ("some-custom-type", []),
        ("project", []),
    ],
)
def test_detect_from_type(detector, package_type, expected):
    assert detector.detect_from_type(package_type) == expected


class TestDetect:
    """Test explicit configuration versus type-based detection."""

    def test_explicit_config_wins_over_type(self, detector):
        root = RootPackage(
            type="typo3-cms-extension",
            extra={"audit-responsibility": {"upstream": ["custom/framework", "other/platform"]}},
        )

        assert detector.detect(root) == ["custom/framework", "other/platform"]

    def test_falls_back_to_type_without_explicit_config(self, detector):
        assert detector.detect(RootPackage(type="typo3-cms-extension")) == ["typo3/cms-core"]

    def test_library_without_config_detects_nothing(self, detector):
        assert detector.detect(RootPackage(type="library")) == []

    def test_non_string_upstream_entries_are_ignored(self, detector):
        root = RootPackage(
            type="library",
            extra={"audit-responsibility": {"upstream": ["valid/package", 123, None, True, "another/valid"]}},
        )

        assert detector.detect(root) == ["valid/package", "another/valid"]

    def test_non_list_upstream_falls_back_to_type(self, detector):
        root = RootPackage(
            type="typo3-cms-extension",
            extra={"audit-responsibility": {"upstream": "not-an-array"}},
        )

        assert detector.detect(root) == ["typo3/cms-core"]

    def test_block_upstream_flag(self, detector):
        assert detector.is_block_upstream(
            RootPackage(extra={"audit-responsibility": {"block-upstream": True}})
        )
        assert not detector.is_block_upstream(
            RootPackage(extra={"audit-responsibility": {"block-upstream": "yes"}})
        )
        assert not detector.is_block_upstream(RootPackage())


class TestResolvePatterns:
    """Test glob resolution against the installed packages."""

    repository = LockedRepository([
        Package("typo3/cms-core"),
        Package("typo3/cms-backend"),
        Package("typo3/cms-frontend"),
        Package("psr/log"),
    ])

    def test_glob_expands_to_installed_packages(self, detector):
        result = detector.resolve_patterns(["typo3/cms-*"], self.repository)

        assert result == ["typo3/cms-core", "typo3/cms-backend", "typo3/cms-frontend"]

    def test_exact_names_require_installation(self, detector):
        result = detector.resolve_patterns(["typo3/cms-core", "drupal/core"], self.repository)

        assert result == ["typo3/cms-core"]

    def test_matching_is_case_insensitive_and_deduplicated(self, detector):
        result = detector.resolve_patterns(["TYPO3/CMS-Core", "typo3/cms-c*"], self.repository)

        assert result == ["typo3/cms-core"]

    def test_no_patterns(self, detector):
        assert detector.resolve_patterns([], self.repository) == []


def test_get_type_map_returns_all_mappings():
    type_map = PlatformDetector.get_type_map()

    for package_type in ("typo3-cms-extension", "symfony-bundle", "drupal-module", "wordpress-plugin", "magento2-module"):
        assert package_type in type_map
    assert len(type_map) > 10
