"""Tests for ownership classification of the dependency graph."""

import logging

import pytest

from depowner.graph import (
    DependencyGraphAnalyzer,
    build_package_map,
    platform_only_names,
    split_by_blocking,
    summarize,
)
from depowner.models import DependencyOwnership, LockedRepository, Package, RequireLink, should_block


def create_repository(adjacency):
    """Create a locked repository from a package name -> required names mapping."""
    return LockedRepository(
        Package(name=name, version="1.0.0", requires=tuple(RequireLink(target) for target in requires))
        for name, requires in adjacency.items()
    )


class TestDependencyGraphAnalyzer:
    """Test the dual-walk ownership classifier."""

    def setup_method(self):
        self.analyzer = DependencyGraphAnalyzer()

    def test_identifies_platform_only_dependencies(self):
        repository = create_repository({
            "typo3/cms-core": ["firebase/php-jwt", "psr/log"],
            "firebase/php-jwt": [],
            "psr/log": [],
            "my/library": ["guzzlehttp/guzzle"],
            "guzzlehttp/guzzle": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core", "my/library"],
        )

        assert result == {
            "typo3/cms-core": DependencyOwnership.DIRECT,
            "my/library": DependencyOwnership.DIRECT,
            "firebase/php-jwt": DependencyOwnership.PLATFORM_ONLY,
            "psr/log": DependencyOwnership.PLATFORM_ONLY,
            "guzzlehttp/guzzle": DependencyOwnership.USER_TRANSITIVE,
        }

    def test_identifies_shared_dependencies(self):
        repository = create_repository({
            "typo3/cms-core": ["psr/log"],
            "my/library": ["psr/log"],
            "psr/log": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core", "my/library"],
        )

        assert result["psr/log"] is DependencyOwnership.SHARED

    def test_barrier_prevents_platform_closure_leaking_to_user(self):
        repository = create_repository({
            "platform/a": ["platform/b"],
            "platform/b": ["vendor/x"],
            "vendor/x": [],
            "my/lib": ["platform/a"],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["platform/a", "platform/b"],
            direct_requires=["platform/a", "my/lib"],
        )

        assert result["vendor/x"] is DependencyOwnership.PLATFORM_ONLY
        assert result["platform/a"] is DependencyOwnership.DIRECT
        assert result["platform/b"] is DependencyOwnership.DIRECT

    def test_user_library_requiring_platform_keeps_platform_deps_platform_only(self):
        repository = create_repository({
            "typo3/cms-core": ["symfony/mailer"],
            "symfony/mailer": [],
            "my/library": ["typo3/cms-core"],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core", "my/library"],
        )

        assert result["symfony/mailer"] is DependencyOwnership.PLATFORM_ONLY

    def test_handles_deep_transitive_chains(self):
        repository = create_repository({
            "typo3/cms-core": ["symfony/mailer"],
            "symfony/mailer": ["symfony/mime"],
            "symfony/mime": ["league/html-to-markdown"],
            "league/html-to-markdown": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core"],
        )

        for name in ("symfony/mailer", "symfony/mime", "league/html-to-markdown"):
            assert result[name] is DependencyOwnership.PLATFORM_ONLY

    @pytest.mark.parametrize(
        "platform_roots, direct_requires, expected",
        [
            (["typo3/cms-core"], ["typo3/cms-core"], DependencyOwnership.PLATFORM_ONLY),
            ([], ["my/library"], DependencyOwnership.USER_TRANSITIVE),
        ],
    )
    def test_cycles_get_a_single_label(self, platform_roots, direct_requires, expected):
        repository = create_repository({
            "typo3/cms-core": ["vendor/a"],
            "my/library": ["vendor/a"],
            "vendor/a": ["vendor/b"],
            "vendor/b": ["vendor/c"],
            "vendor/c": ["vendor/a"],
        })

        result = self.analyzer.classify(repository, platform_roots, direct_requires)

        assert {result["vendor/a"], result["vendor/b"], result["vendor/c"]} == {expected}

    def test_handles_empty_repository(self):
        result = self.analyzer.classify(
            create_repository({}),
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core"],
        )

        assert result == {}

    def test_handles_no_platform_roots(self):
        repository = create_repository({
            "my/library": ["guzzlehttp/guzzle"],
            "guzzlehttp/guzzle": [],
        })

        result = self.analyzer.classify(repository, platform_roots=[], direct_requires=["my/library"])

        assert result["my/library"] is DependencyOwnership.DIRECT
        assert result["guzzlehttp/guzzle"] is DependencyOwnership.USER_TRANSITIVE

    def test_orphans_are_omitted(self):
        repository = create_repository({
            "typo3/cms-core": [],
            "vendor/orphan": ["vendor/orphan-dep"],
            "vendor/orphan-dep": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core"],
        )

        assert "vendor/orphan" not in result
        assert "vendor/orphan-dep" not in result

    def test_platform_root_not_in_direct_requires_is_still_direct(self):
        repository = create_repository({
            "typo3/cms-backend": ["typo3/cms-core"],
            "typo3/cms-core": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core", "typo3/cms-backend"],
            direct_requires=["typo3/cms-backend"],
        )

        assert result["typo3/cms-core"] is DependencyOwnership.DIRECT

    def test_absent_platform_root_is_silently_omitted(self, caplog):
        repository = create_repository({"my/library": []})

        with caplog.at_level(logging.DEBUG):
            result = self.analyzer.classify(
                repository,
                platform_roots=["typo3/cms-core"],
                direct_requires=["typo3/cms-core", "my/library"],
            )

        assert result == {"my/library": DependencyOwnership.DIRECT}
        assert "typo3/cms-core" in caplog.text

    def test_skips_php_extensions(self):
        repository = create_repository({
            "typo3/cms-core": ["php", "ext-json", "firebase/php-jwt"],
            "firebase/php-jwt": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core"],
        )

        assert "php" not in result
        assert "ext-json" not in result
        assert result["firebase/php-jwt"] is DependencyOwnership.PLATFORM_ONLY

    def test_with_multiple_platform_roots(self):
        repository = create_repository({
            "typo3/cms-core": ["firebase/php-jwt"],
            "typo3/cms-backend": ["typo3/cms-core", "vendor/unique-backend-dep"],
            "firebase/php-jwt": [],
            "vendor/unique-backend-dep": [],
            "my/library": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core", "typo3/cms-backend"],
            direct_requires=["typo3/cms-core", "typo3/cms-backend", "my/library"],
        )

        assert result["typo3/cms-core"] is DependencyOwnership.DIRECT
        assert result["typo3/cms-backend"] is DependencyOwnership.DIRECT
        assert result["my/library"] is DependencyOwnership.DIRECT
        assert result["firebase/php-jwt"] is DependencyOwnership.PLATFORM_ONLY
        assert result["vendor/unique-backend-dep"] is DependencyOwnership.PLATFORM_ONLY

    def test_custom_edge_filter_supports_synthetic_graphs(self):
        analyzer = DependencyGraphAnalyzer(follow=lambda name: True)
        repository = create_repository({
            "platformRoot": ["A", "B"],
            "userLib": ["C"],
            "A": [],
            "B": [],
            "C": [],
        })

        result = analyzer.classify(
            repository,
            platform_roots=["platformRoot"],
            direct_requires=["platformRoot", "userLib"],
        )

        assert result == {
            "platformRoot": DependencyOwnership.DIRECT,
            "userLib": DependencyOwnership.DIRECT,
            "A": DependencyOwnership.PLATFORM_ONLY,
            "B": DependencyOwnership.PLATFORM_ONLY,
            "C": DependencyOwnership.USER_TRANSITIVE,
        }

    def test_reachable_packages_are_partitioned_exactly_once(self):
        repository = create_repository({
            "typo3/cms-core": ["psr/log", "symfony/console"],
            "symfony/console": ["psr/container"],
            "psr/log": [],
            "psr/container": [],
            "my/library": ["psr/log", "guzzlehttp/guzzle"],
            "guzzlehttp/guzzle": ["psr/http-message"],
            "psr/http-message": [],
            "vendor/orphan": [],
        })

        result = self.analyzer.classify(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core", "my/library"],
        )

        buckets = {ownership: set() for ownership in DependencyOwnership}
        for name, ownership in result.items():
            buckets[ownership].add(name)

        union = set().union(*buckets.values())
        assert union == set(build_package_map(repository)) - {"vendor/orphan"}
        assert sum(len(bucket) for bucket in buckets.values()) == len(union)

    def test_get_platform_only_packages_returns_correct_list(self):
        repository = create_repository({
            "typo3/cms-core": ["firebase/php-jwt", "psr/log"],
            "firebase/php-jwt": [],
            "psr/log": [],
            "my/library": ["guzzlehttp/guzzle"],
            "guzzlehttp/guzzle": [],
        })

        result = self.analyzer.get_platform_only_packages(
            repository,
            platform_roots=["typo3/cms-core"],
            direct_requires=["typo3/cms-core", "my/library"],
        )

        assert sorted(result) == ["firebase/php-jwt", "psr/log"]


class TestOwnershipPolicy:
    """Test the blocking decision attached to each ownership label."""

    def test_should_block_is_false_only_for_platform_only(self):
        assert DependencyOwnership.DIRECT.should_block()
        assert DependencyOwnership.SHARED.should_block()
        assert DependencyOwnership.USER_TRANSITIVE.should_block()
        assert not DependencyOwnership.PLATFORM_ONLY.should_block()

    def test_module_function_matches_method(self):
        for ownership in DependencyOwnership:
            assert should_block(ownership) == ownership.should_block()

    def test_exactly_one_label_does_not_block(self):
        assert [o for o in DependencyOwnership if not should_block(o)] == [DependencyOwnership.PLATFORM_ONLY]

    def test_values_are_stable_strings(self):
        assert DependencyOwnership("platform-only") is DependencyOwnership.PLATFORM_ONLY
        assert DependencyOwnership.USER_TRANSITIVE.value == "user-transitive"


class TestClassificationHelpers:
    """Test helpers operating on classification results."""

    classifications = {
        "a/direct": DependencyOwnership.DIRECT,
        "b/platform": DependencyOwnership.PLATFORM_ONLY,
        "c/shared": DependencyOwnership.SHARED,
        "d/user": DependencyOwnership.USER_TRANSITIVE,
        "e/platform": DependencyOwnership.PLATFORM_ONLY,
    }

    def test_platform_only_names(self):
        assert platform_only_names(self.classifications) == ["b/platform", "e/platform"]

    def test_split_by_blocking(self):
        platform_only, user_owned = split_by_blocking(self.classifications)

        assert platform_only == ["b/platform", "e/platform"]
        assert user_owned == ["a/direct", "c/shared", "d/user"]

    def test_summarize_counts_every_label(self):
        assert summarize(self.classifications) == {
            "direct": 1,
            "platform-only": 2,
            "shared": 1,
            "user-transitive": 1,
        }

    def test_summarize_empty(self):
        assert set(summarize({}).values()) == {0}
