"""
CLI module for depowner.

Provides the command-line interface on top of the auditor service.
"""
from depowner.cli.app import app as _app

# Export app function for pyproject.toml entry point
def app():
    """Entry point function for pyproject.toml scripts."""
    _app()

__all__ = ['app']
