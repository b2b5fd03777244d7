"""
urlrev.processor
================
Revises every eligible ``url()`` of one declaration as a single
all-or-nothing unit.

All occurrences are resolved, hashed and rewritten concurrently.  The
declaration's value is replaced once, and only if every occurrence
succeeded; otherwise it is left exactly as it was and the first failure
is returned in the :class:`~urlrev.models.DeclarationOutcome`.

New tokens are spliced in by offset rather than by searching for the
old text, so two identical ``url()`` tokens in one value are each
rewritten in place.
"""

from __future__ import annotations

import asyncio

from .errors import UrlrevError
from .extract import extract_occurrences
from .hashing import ContentHasher
from .models import DeclarationNode, DeclarationOutcome, UrlOccurrence
from .options import Options
from .resolve import resolve_locator
from .rewrite import rewrite_occurrence


def splice(value: str, occurrences: list[UrlOccurrence], tokens: list[str]) -> str:
    """Replace each occurrence's span of *value* with the matching token."""
    pieces: list[str] = []
    pos = 0
    for occ, token in zip(occurrences, tokens):
        pieces.append(value[pos:occ.start])
        pieces.append(token)
        pos = occ.end
    pieces.append(value[pos:])
    return "".join(pieces)


class DeclarationProcessor:

    def __init__(
        self,
        options: Options,
        hasher: ContentHasher,
        source_path: str | None = None,
    ) -> None:
        self.options = options
        self.hasher = hasher
        self.source_path = source_path

    async def revise(self, occ: UrlOccurrence, declaration_file: str | None = None) -> str:
        """Resolve, hash and rewrite one occurrence; return its new token."""
        locator = resolve_locator(
            occ.raw_value, self.options, declaration_file, self.source_path
        )
        digest = await self.hasher.digest(locator)
        return rewrite_occurrence(occ, digest, self.options.replacer)

    async def process(self, decl: DeclarationNode) -> DeclarationOutcome:
        value = decl.value
        occurrences = extract_occurrences(value, self.options)
        if not occurrences:
            return DeclarationOutcome(decl)

        declaration_file = getattr(decl, "source_file", None)
        results = await asyncio.gather(
            *(self.revise(occ, declaration_file) for occ in occurrences),
            return_exceptions=True,
        )

        # Anything that is not a revision failure is a bug: let it surface
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, UrlrevError):
                raise result
        for result in results:
            if isinstance(result, UrlrevError):
                return DeclarationOutcome(decl, error=result)

        decl.value = splice(value, occurrences, results)
        return DeclarationOutcome(decl, rewritten=len(occurrences))
