"""
urlrev.models
=============
Plain data types shared by every stage of a revision pass.

* :class:`UrlOccurrence` – one ``url(...)`` token inside a property value
* :class:`LocalFile` / :class:`SiteAbsolute` / :class:`Remote` – where
  an occurrence's bytes live (see :data:`ResourceLocator`)
* :class:`DeclarationOutcome` – result of processing one declaration
* :class:`DeclarationWarning` / :class:`WarningSink` – non-fatal failures
  reported back to the host pipeline
"""

from __future__ import annotations

import os
import urllib.parse
from dataclasses import dataclass, field
from typing import Iterator, Protocol, Union, runtime_checkable

from .config import PLUGIN_NAME
from .errors import UrlrevError
from .logging_setup import log


@runtime_checkable
class DeclarationNode(Protocol):
    """What the core needs from a host declaration node."""

    value: str
    source_file: str | None


@dataclass
class UrlOccurrence:
    source_text: str
    before_ws: str
    after_ws: str
    quote: str
    raw_value: str
    start: int
    end: int
    new_value: str | None = None

    def rebuild(self, value: str | None = None) -> str:
        """Reassemble the token around *value*, keeping quoting and whitespace."""
        if value is None:
            value = self.new_value if self.new_value is not None else self.raw_value
        return (
            "url("
            + self.before_ws
            + self.quote
            + value
            + self.quote
            + self.after_ws
            + ")"
        )


# ---------------------------------------------------------------------------
# Resource locators
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LocalFile:
    path: str

    @property
    def basename(self) -> str:
        return os.path.basename(self.path)


@dataclass(frozen=True)
class SiteAbsolute:
    path: str

    @property
    def basename(self) -> str:
        return os.path.basename(self.path)


@dataclass(frozen=True)
class Remote:
    url: str

    @property
    def path(self) -> str:
        return self.url

    @property
    def basename(self) -> str:
        return os.path.basename(urllib.parse.urlsplit(self.url).path)


ResourceLocator = Union[LocalFile, SiteAbsolute, Remote]


# ---------------------------------------------------------------------------
# Outcomes and warnings
# ---------------------------------------------------------------------------

@dataclass
class DeclarationOutcome:
    declaration: DeclarationNode
    error: UrlrevError | None = None
    rewritten: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DeclarationWarning:
    text: str
    node: object = None
    plugin: str = PLUGIN_NAME

    def __str__(self) -> str:
        return f"{self.plugin}: {self.text}"


@dataclass
class WarningSink:
    """Collects :class:`DeclarationWarning` records and logs each one."""

    warnings: list[DeclarationWarning] = field(default_factory=list)

    def warn(self, text: str, node: object = None) -> DeclarationWarning:
        warning = DeclarationWarning(text=text, node=node)
        self.warnings.append(warning)
        where = getattr(node, "source_file", None)
        if where:
            log.warning("%s (%s)", text, where)
        else:
            log.warning("%s", text)
        return warning

    def __iter__(self) -> Iterator[DeclarationWarning]:
        return iter(self.warnings)

    def __len__(self) -> int:
        return len(self.warnings)
