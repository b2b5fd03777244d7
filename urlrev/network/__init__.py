"""
Network operations for fetching remote resources.
"""

from urlrev.network.client import build_session

__all__ = ["build_session"]
