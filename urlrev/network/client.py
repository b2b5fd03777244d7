"""
HTTP client configuration for remote resource fetches.

Provides a session with keep-alive and a browser User-Agent.  Retries
are disabled: a single failed fetch fails the occurrence.
"""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import USER_AGENT


def build_session(verify_ssl: bool = True) -> requests.Session:
    """
    Return a requests.Session for streaming remote resources.

    Args:
        verify_ssl: Whether to verify SSL certificates

    Returns:
        Configured requests.Session instance
    """
    session = requests.Session()
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Connection": "keep-alive",
    })
    return session
