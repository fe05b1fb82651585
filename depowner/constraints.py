"""Composer version constraint evaluation.

Advisories describe affected ranges with Composer constraint strings such as
``>=1.0.0,<1.4.2|>=2.0.0,<2.0.5``. Versions themselves are compared with
``packaging.version``.
"""

import operator
import re
from typing import Callable, List, Tuple

from packaging.version import InvalidVersion, Version

from .utils.exceptions import ConstraintError

Comparison = Tuple[Callable[[Version, Version], bool], Version]

_OPERATORS = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "=": operator.eq,
    "==": operator.eq,
    "!=": operator.ne,
    "<>": operator.ne,
}

_TERM_RE = re.compile(r"^(>=|<=|!=|<>|==|>|<|=|\^|~)?(.+)$")
_OPERATOR_SPACE_RE = re.compile(r"(>=|<=|!=|<>|==|>|<|=|\^|~)\s+")
_HYPHEN_RE = re.compile(r"^(\S+)\s+-\s+(\S+)$")
_WILDCARD_RE = re.compile(r"^v?(\d+(?:\.\d+)*)\.[*xX]$")
_PATCH_RE = re.compile(r"[-_.]?(?:patch|pl|p)\.?(\d*)$", re.IGNORECASE)


def parse_version(text: str) -> Version:
    """Parse a Composer version, dropping ``v`` prefixes and stability flags."""
    cleaned = text.strip().split("@", 1)[0]
    if cleaned[:1] in ("v", "V"):
        cleaned = cleaned[1:]
    # Composer patch releases (1.0.0-p1, 1.0.0-patch1) sort after the stable release
    cleaned = _PATCH_RE.sub(r".post\1", cleaned)
    try:
        return Version(cleaned)
    except InvalidVersion as e:
        raise ConstraintError(f"Invalid version: {text!r}") from e


def _lowest(version: Version) -> Version:
    """The earliest pre-release of a stable version, ``1.2.0`` -> ``1.2.0.dev0``.

    Composer reads a stable ``>=`` or ``<`` bound as ``X-dev``, so
    ``2.0.0-RC1`` satisfies ``>=2.0.0`` and not ``<2.0.0``.
    """
    if version.pre is not None or version.dev is not None or version.post is not None:
        return version
    return Version(f"{version.base_version}.dev0")


def _range(lower: Version, upper: Version) -> List[Comparison]:
    return [(operator.ge, _lowest(lower)), (operator.lt, _lowest(upper))]


def _bump(version: Version, index: int) -> Version:
    release = list(version.release[: index + 1])
    while len(release) <= index:
        release.append(0)
    release[index] += 1
    return Version(".".join(str(part) for part in release))


def _caret(version: Version) -> List[Comparison]:
    release = version.release
    index = len(release) - 1
    for position, part in enumerate(release):
        if part != 0:
            index = position
            break
    return _range(version, _bump(version, index))


def _tilde(version: Version) -> List[Comparison]:
    index = max(len(version.release) - 2, 0)
    return _range(version, _bump(version, index))


def _parse_term(term: str) -> List[Comparison]:
    if term in ("*", "x", "X"):
        return []

    wildcard = _WILDCARD_RE.match(term)
    if wildcard:
        lower = parse_version(wildcard.group(1))
        return _range(lower, _bump(lower, len(lower.release) - 1))

    match = _TERM_RE.match(term)
    if not match:
        raise ConstraintError(f"Invalid constraint term: {term!r}")

    op, version_text = match.groups()
    version = parse_version(version_text)

    if op == "^":
        return _caret(version)
    if op == "~":
        return _tilde(version)
    if op in (">=", "<"):
        version = _lowest(version)
    return [(_OPERATORS[op or "=="], version)]


def _parse_group(group: str) -> List[Comparison]:
    hyphen = _HYPHEN_RE.match(group)
    if hyphen:
        lower = parse_version(hyphen.group(1))
        upper = parse_version(hyphen.group(2))
        # A partial upper bound includes the whole series it names
        if len(upper.release) < 3:
            return _range(lower, _bump(upper, len(upper.release) - 1))
        return [(operator.ge, _lowest(lower)), (operator.le, upper)]

    group = _OPERATOR_SPACE_RE.sub(r"\1", group)
    comparisons: List[Comparison] = []
    for term in re.split(r"\s*,\s*|\s+", group):
        if term:
            comparisons.extend(_parse_term(term))
    return comparisons


def parse_constraint(constraint: str) -> List[List[Comparison]]:
    """Parse a constraint into a disjunction of conjunctions."""
    if not constraint or not constraint.strip():
        raise ConstraintError("Empty constraint")

    groups = []
    for group in re.split(r"\s*\|\|?\s*", constraint.strip()):
        if not group:
            raise ConstraintError(f"Invalid constraint: {constraint!r}")
        groups.append(_parse_group(group))
    return groups


def satisfies(version: str, constraint: str) -> bool:
    """Whether ``version`` lies within ``constraint``.

    Raises:
        ConstraintError: if either the version or the constraint is unparseable
    """
    installed = parse_version(version)
    for comparisons in parse_constraint(constraint):
        if all(compare(installed, bound) for compare, bound in comparisons):
            return True
    return False
