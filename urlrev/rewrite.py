"""
urlrev.rewrite
==============
Builds the revised URL for an occurrence once its digest is known.

The default strategy regenerates the query string with ``v`` set to the
truncated digest::

    images/test.png            → images/test.png?v=e19ac7dee6
    images/test.png?foo=bar    → images/test.png?foo=bar&v=e19ac7dee6
    images/test.png?v=1#icon   → images/test.png?v=e19ac7dee6#icon
"""

from __future__ import annotations

import urllib.parse

from .config import DEFAULT_HASH_LENGTH, QUERY_PARAM
from .errors import ReplacerFailure
from .models import UrlOccurrence
from .options import Replacer

# Characters encodeURIComponent leaves alone besides the RFC 3986 unreserved set
_QUERY_SAFE = "!'()*"


def default_replacer(hash_length: int | None = DEFAULT_HASH_LENGTH) -> Replacer:
    """Return a replacer setting ``v`` to the first *hash_length* digest chars."""
    if hash_length is None:
        hash_length = DEFAULT_HASH_LENGTH
    hash_length = max(0, hash_length)

    def replace(value: str, digest: str) -> str:
        parts = urllib.parse.urlsplit(value)
        token = digest[:min(hash_length, len(digest))]

        query: list[tuple[str, str]] = []
        placed = False
        for key, val in urllib.parse.parse_qsl(parts.query, keep_blank_values=True):
            if key == QUERY_PARAM:
                if not placed:
                    query.append((key, token))
                    placed = True
                continue
            query.append((key, val))
        if not placed:
            query.append((QUERY_PARAM, token))

        encoded = urllib.parse.urlencode(query, quote_via=urllib.parse.quote, safe=_QUERY_SAFE)
        return urllib.parse.urlunsplit(parts._replace(query=encoded))

    return replace


def rewrite_occurrence(occ: UrlOccurrence, digest: str, replacer: Replacer) -> str:
    """Run *replacer*, record the new value on *occ* and return the new token."""
    try:
        new_value = replacer(occ.raw_value, digest)
    except Exception as exc:
        raise ReplacerFailure(occ.raw_value, str(exc) or type(exc).__name__) from exc
    if not isinstance(new_value, str):
        raise ReplacerFailure(
            occ.raw_value, f"returned {type(new_value).__name__}, expected str"
        )
    occ.new_value = new_value
    return occ.rebuild()
