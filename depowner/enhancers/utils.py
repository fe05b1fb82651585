"""
Utility functions for advisory providers.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


def create_http_session(
    user_agent: str,
    max_retries: int = 2,
) -> requests.Session:
    """
    Create a configured HTTP session with retry logic and standard headers.

    Args:
        user_agent: User-Agent string for the session
        max_retries: Maximum number of retries on failed requests

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["HEAD", "GET"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})

    return session
