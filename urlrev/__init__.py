"""
urlrev
======
Cache-busting for style sheets: every ``url()`` in a property value gets
a ``v=`` query parameter derived from the referenced file's content, so
assets can be cached forever and still refresh when their bytes change.

Package structure
-----------------
urlrev/
├── __init__.py       – package init and public API
├── config.py         – configuration constants
├── errors.py         – exception hierarchy
├── logging_setup.py  – package logger
├── models.py         – occurrences, locators, outcomes, warnings
├── options.py        – immutable per-pass Options
├── extract/          – url() scanner and eligibility predicates
├── resolve.py        – reference → LocalFile / SiteAbsolute / Remote
├── hashing.py        – local read or streamed remote fetch → digest
├── network/          – requests.Session factory
├── rewrite.py        – default v= replacer, token rebuild
├── processor.py      – all-or-nothing rewrite of one declaration
├── scheduler.py      – stylesheet-wide pass (transform / revise)
├── stylesheet.py     – tinycss2-backed CSS adapter (revise_css)
└── cli.py            – argparse CLI (``python -m urlrev``)

Quick start
-----------
    from urlrev import revise_css

    css, warnings = revise_css(
        "a { background: url(images/test.png) }",
        source_path="static/site.css",
    )
    # a { background: url(images/test.png?v=e19ac7dee6) }
"""

from .errors import (
    UrlrevError, UnreadableLocalFile, RemoteFetchFailure,
    CustomHashFunctionFailure, ReplacerFailure, OptionsError,
)
from .models import DeclarationWarning, WarningSink, UrlOccurrence
from .options import Options
from .rewrite import default_replacer
from .scheduler import BatchScheduler, transform, revise
from .stylesheet import Declaration, Stylesheet, revise_css

__version__ = "1.0.0"

__all__ = [
    "transform",
    "revise",
    "revise_css",
    "BatchScheduler",
    "Options",
    "default_replacer",
    "Stylesheet",
    "Declaration",
    "DeclarationWarning",
    "WarningSink",
    "UrlOccurrence",
    "UrlrevError",
    "UnreadableLocalFile",
    "RemoteFetchFailure",
    "CustomHashFunctionFailure",
    "ReplacerFailure",
    "OptionsError",
]
