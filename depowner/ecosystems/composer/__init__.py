"""Composer ecosystem helpers."""

from .normalise import normalise_name
from .reader import read_locked_repository, read_root_package

__all__ = ["normalise_name", "read_locked_repository", "read_root_package"]
