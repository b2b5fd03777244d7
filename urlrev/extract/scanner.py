"""
urlrev.extract.scanner
======================
Hand-written scanner for ``url(...)`` tokens in a property value.

A token is ``url(`` + whitespace + optional quote + reference + the same
quote + whitespace + ``)``.  The reference is the shortest non-empty
run of characters that closes the token and never crosses a line break.
Leading whitespace always belongs to the token, never to the reference,
so a blank ``url(  )`` is not a match at all.
Matches are found left to right and never overlap.
"""

from __future__ import annotations

from ..models import UrlOccurrence

_OPEN = "url("
_QUOTES = ("'", '"')
_LINE_BREAKS = frozenset("\n\r\u2028\u2029")


def _skip_ws(value: str, pos: int) -> int:
    while pos < len(value) and value[pos].isspace():
        pos += 1
    return pos


def _occurrence(value, start, before, quote, ref_start, ref_end, close) -> UrlOccurrence:
    ref_close = ref_end + len(quote)
    return UrlOccurrence(
        source_text=value[start:close + 1],
        before_ws=before,
        after_ws=value[ref_close:close],
        quote=quote,
        raw_value=value[ref_start:ref_end],
        start=start,
        end=close + 1,
    )


def _match_quoted(value: str, start: int, ref_open: int, before: str) -> UrlOccurrence | None:
    quote = value[ref_open]
    ref_start = ref_open + 1
    end_quote = value.find(quote, ref_start + 1)
    while end_quote >= 0:
        if any(c in _LINE_BREAKS for c in value[ref_start:end_quote]):
            return None
        close = _skip_ws(value, end_quote + 1)
        if close < len(value) and value[close] == ")":
            return _occurrence(value, start, before, quote, ref_start, end_quote, close)
        end_quote = value.find(quote, end_quote + 1)
    return None


def _match_unquoted(value: str, start: int, ref_start: int, before: str) -> UrlOccurrence | None:
    pos = ref_start
    while pos < len(value):
        if value[pos] in _LINE_BREAKS:
            return None
        pos += 1
        close = _skip_ws(value, pos)
        if close < len(value) and value[close] == ")":
            return _occurrence(value, start, before, "", ref_start, pos, close)
    return None


def match_url_at(value: str, start: int) -> UrlOccurrence | None:
    """Match a ``url(...)`` token beginning exactly at *start*, or ``None``."""
    if not value.startswith(_OPEN, start):
        return None
    ws_start = start + len(_OPEN)
    ref_open = _skip_ws(value, ws_start)
    before = value[ws_start:ref_open]
    if ref_open >= len(value):
        return None

    if value[ref_open] in _QUOTES:
        found = _match_quoted(value, start, ref_open, before)
        if found is not None:
            return found
    return _match_unquoted(value, start, ref_open, before)


def scan_urls(value: str) -> list[UrlOccurrence]:
    """Return every ``url(...)`` token in *value*, in order of appearance."""
    found: list[UrlOccurrence] = []
    pos = 0
    while True:
        start = value.find(_OPEN, pos)
        if start < 0:
            break
        occ = match_url_at(value, start)
        if occ is None:
            pos = start + 1
            continue
        found.append(occ)
        pos = occ.end
    return found
