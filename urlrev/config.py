"""Configuration constants for css-urlrev."""

import os
import re

PLUGIN_NAME = "urlrev"

# Query-string key carrying the revision token: ``a.png?v=e19ac7dee6``
QUERY_PARAM = "v"
DEFAULT_HASH_LENGTH = 10
HASH_ALGORITHM = "md5"

# Only declarations whose value contains this substring are scheduled
URL_TRIGGER = "url("

CHUNK_SIZE      = 64 * 1024   # bytes per streamed chunk of a remote fetch
REQUEST_TIMEOUT = None        # remote fetches wait on the transport itself

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# CLI defaults can also be supplied via the environment
DEFAULT_ABSOLUTE_PATH = os.environ.get("URLREV_ABSOLUTE_PATH") or None
DEFAULT_INCLUDE_REMOTE = os.environ.get("URLREV_INCLUDE_REMOTE", "").lower() in ("1", "true", "yes")
DEFAULT_HASH_LENGTH_ENV = os.environ.get("URLREV_HASH_LENGTH", "")

# http:, https: or protocol-relative //
REMOTE_RE = re.compile(r"^(?:https?:)?//", re.IGNORECASE)

# At-rules whose block holds rules rather than declarations
NESTED_RULE_AT_KEYWORDS: frozenset[str] = frozenset(
    ["media", "supports", "document", "-moz-document", "layer", "container", "scope"]
)
