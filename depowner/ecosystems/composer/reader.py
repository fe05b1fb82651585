"""Utilities for reading Composer manifests and lock files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ...models import LockedRepository, Package, RequireLink, RootPackage
from ...utils.exceptions import ManifestNotFoundError, ManifestParseError
from .normalise import normalise_name

logger = logging.getLogger(__name__)

MANIFEST_FILE = "composer.json"
LOCK_FILE = "composer.lock"


def _load_json(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON ({e.msg} at line {e.lineno})", str(path)) from e

    if not isinstance(data, dict):
        raise ManifestParseError("Expected a JSON object", str(path))
    return data


def _links(section: Any) -> List[RequireLink]:
    if not isinstance(section, dict):
        return []
    return [
        RequireLink(normalise_name(target), str(constraint))
        for target, constraint in section.items()
        if isinstance(target, str)
    ]


def read_root_package(path: str = ".") -> RootPackage:
    """Read ``composer.json`` from a project directory.

    Parameters
    ----------
    path:
        Directory containing the ``composer.json`` file.

    Raises
    ------
    ManifestNotFoundError
        When the directory has no ``composer.json``.
    ManifestParseError
        When the file is not a JSON object.
    """

    manifest_path = Path(path) / MANIFEST_FILE
    if not manifest_path.exists():
        raise ManifestNotFoundError("No composer.json found", str(manifest_path))

    data = _load_json(manifest_path)
    extra = data.get("extra")
    return RootPackage(
        name=str(data.get("name", "__root__")),
        type=str(data.get("type", "library")),
        requires=_links(data.get("require")),
        dev_requires=_links(data.get("require-dev")),
        extra=extra if isinstance(extra, dict) else {},
    )


def read_locked_repository(path: str = ".", include_dev: bool = False) -> Optional[LockedRepository]:
    """Read the locked packages of a project.

    Parameters
    ----------
    path:
        Directory containing the ``composer.lock`` file.
    include_dev:
        Also load the ``packages-dev`` section.

    Returns
    -------
    LockedRepository or None
        ``None`` when the project is not locked.
    """

    lock_path = Path(path) / LOCK_FILE
    if not lock_path.exists():
        return None

    data = _load_json(lock_path)
    sections = ["packages", "packages-dev"] if include_dev else ["packages"]

    packages: List[Package] = []
    for section in sections:
        entries = data.get(section) or []
        if not isinstance(entries, list):
            raise ManifestParseError(f"'{section}' must be a list", str(lock_path))

        for entry in entries:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                logger.debug(f"Skipping malformed {section} entry in {lock_path}")
                continue
            packages.append(
                Package(
                    name=normalise_name(entry["name"]),
                    version=str(entry.get("version", "")),
                    requires=tuple(_links(entry.get("require"))),
                )
            )

    logger.debug(f"Loaded {len(packages)} locked packages from {lock_path}")
    return LockedRepository(packages)
