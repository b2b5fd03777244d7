"""Pure predicates classifying a raw ``url()`` reference by its lexical form."""

from __future__ import annotations

from ..config import REMOTE_RE
from ..options import Options


def is_data_uri(raw: str) -> bool:
    return raw[:5].lower() == "data:"


def is_fragment(raw: str) -> bool:
    return raw.startswith("#")


def is_protocol_relative(raw: str) -> bool:
    return raw.startswith("//")


def is_remote(raw: str) -> bool:
    """``http://``, ``https://`` or protocol-relative ``//``."""
    return REMOTE_RE.match(raw) is not None


def is_site_absolute(raw: str) -> bool:
    """A single leading slash: ``/img/a.png`` but not ``//cdn/a.png``."""
    return raw.startswith("/") and not is_protocol_relative(raw)


def skip_reason(raw: str, options: Options) -> str | None:
    """
    Return why *raw* must be left untouched, or ``None`` if it is eligible.
    """
    if is_data_uri(raw):
        return "data URI"
    if is_fragment(raw):
        return "fragment"
    if is_site_absolute(raw) and options.absolute_path is None:
        return "site-absolute path without absolute_path"
    if is_remote(raw) and not options.include_remote:
        return "remote URL without include_remote"
    return None
