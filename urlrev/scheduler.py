"""
urlrev.scheduler
================
Stylesheet-level pass: one :class:`~urlrev.processor.DeclarationProcessor`
task per declaration whose value contains ``url(``, all awaited
together.  Failed declarations become warnings; the pass itself only
raises for malformed options or programming errors.
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Iterable

import requests

from .config import URL_TRIGGER
from .errors import OptionsError
from .hashing import ContentHasher
from .logging_setup import log
from .models import DeclarationNode, DeclarationOutcome, DeclarationWarning, WarningSink
from .options import Options
from .processor import DeclarationProcessor


def coerce_options(options: Options | dict[str, Any] | None) -> Options:
    if options is None:
        return Options()
    if isinstance(options, Options):
        return options
    if isinstance(options, dict):
        return Options.from_mapping(options)
    raise OptionsError(f"options must be an Options or a dict, got {type(options).__name__}")


class BatchScheduler:

    def __init__(
        self,
        options: Options | dict[str, Any] | None = None,
        source_path: str | os.PathLike | None = None,
        session: requests.Session | None = None,
        verify_ssl: bool = True,
    ) -> None:
        self.options = coerce_options(options)
        self.source_path = os.fspath(source_path) if source_path else None
        self.session = session
        self.verify_ssl = verify_ssl

    @staticmethod
    def candidates(stylesheet: Iterable[DeclarationNode]) -> list[DeclarationNode]:
        """Declarations whose value mentions ``url(``."""
        return [
            decl for decl in stylesheet
            if decl.value and URL_TRIGGER in decl.value
        ]

    async def run(
        self,
        stylesheet: Iterable[DeclarationNode],
        warnings: Any = None,
    ) -> list[DeclarationOutcome]:
        if warnings is None:
            warnings = WarningSink()
        decls = self.candidates(stylesheet)
        log.debug("Scheduling %d declaration(s) containing url()", len(decls))

        hasher = ContentHasher(self.options, session=self.session, verify_ssl=self.verify_ssl)
        processor = DeclarationProcessor(self.options, hasher, self.source_path)
        try:
            # Let every declaration settle before the sessions are closed
            results = await asyncio.gather(
                *(processor.process(d) for d in decls),
                return_exceptions=True,
            )
        finally:
            hasher.close()

        for result in results:
            if isinstance(result, BaseException):
                raise result

        outcomes: list[DeclarationOutcome] = results
        for outcome in outcomes:
            if outcome.error is not None:
                warnings.warn(str(outcome.error), node=outcome.declaration)
        return outcomes


async def transform(
    stylesheet: Iterable[DeclarationNode],
    warnings: Any = None,
    options: Options | dict[str, Any] | None = None,
    source_path: str | os.PathLike | None = None,
) -> None:
    """
    Revise every ``url()`` in *stylesheet* in place.

    *warnings* is any object with a ``warn(text, node=None)`` method; a
    :class:`~urlrev.models.WarningSink` is used when omitted.
    """
    await BatchScheduler(options, source_path).run(stylesheet, warnings)


def revise(
    stylesheet: Iterable[DeclarationNode],
    options: Options | dict[str, Any] | None = None,
    source_path: str | os.PathLike | None = None,
) -> list[DeclarationWarning]:
    """Synchronous :func:`transform`; returns the warnings raised by the pass."""
    sink = WarningSink()
    asyncio.run(transform(stylesheet, sink, options, source_path))
    return sink.warnings
