"""
urlrev.extract
==============
Finds the ``url(...)`` occurrences of a property value that should be
revised.

Public API
----------
    from urlrev.extract import extract_occurrences
"""

from __future__ import annotations

from ..logging_setup import log
from ..models import UrlOccurrence
from ..options import Options
from .classify import (
    is_data_uri, is_fragment, is_remote, is_site_absolute, is_protocol_relative,
    skip_reason,
)
from .scanner import scan_urls, match_url_at


def extract_occurrences(value: str, options: Options) -> list[UrlOccurrence]:
    """Return the eligible occurrences in *value*, left to right."""
    eligible: list[UrlOccurrence] = []
    for occ in scan_urls(value):
        reason = skip_reason(occ.raw_value, options)
        if reason:
            log.debug("Skipping %s (%s)", occ.source_text, reason)
            continue
        eligible.append(occ)
    return eligible


__all__ = [
    "extract_occurrences",
    "scan_urls",
    "match_url_at",
    "skip_reason",
    "is_data_uri",
    "is_fragment",
    "is_remote",
    "is_site_absolute",
    "is_protocol_relative",
]
