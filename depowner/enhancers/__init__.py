"""
Advisory providers.
"""

from .packagist_provider import PackagistAdvisoryProvider
from .utils import create_http_session

__all__ = ["PackagistAdvisoryProvider", "create_http_session"]
