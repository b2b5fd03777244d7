"""
urlrev.stylesheet
=================
Minimal style-sheet adapter built on ``tinycss2``.

The revision pass only needs declarations with a mutable text ``value``;
this module finds them in real CSS and writes the sheet back out with
everything but the revised values kept as tokenised.

Supported structure
-------------------
* qualified rules (``a { ... }``) and nested rules inside them
* block at-rules holding declarations (``@font-face``, ``@page``)
* block at-rules holding rules (``@media``, ``@supports``, ...)
* inline declaration lists (HTML ``style`` attributes)

Quick start
-----------
    from urlrev.stylesheet import revise_css

    css, warnings = revise_css(text, source_path="css/site.css")
"""

from __future__ import annotations

import os
from typing import Any, Iterator

import tinycss2
from tinycss2.serializer import serialize_identifier

from .config import NESTED_RULE_AT_KEYWORDS
from .models import DeclarationWarning
from .options import Options


class Declaration:
    """
    One ``name: value`` pair.

    ``prefix`` is the original text up to and including the colon; it is
    written back untouched so only ``value`` can change.
    """

    __slots__ = ("name", "prefix", "value", "source_file", "line", "column")

    def __init__(
        self,
        name: str,
        prefix: str,
        value: str,
        source_file: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.name = name
        self.prefix = prefix
        self.value = value
        self.source_file = source_file
        self.line = line
        self.column = column

    def serialize(self) -> str:
        return self.prefix + self.value

    def __repr__(self) -> str:
        return f"<Declaration {self.name}: {self.value.strip()!r}>"


def _normalize(text: str) -> str:
    """Apply tinycss2's input preprocessing so token positions index into *text*."""
    return (text.replace("\0", "\uFFFD")
            .replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n"))


class _Source:
    """Maps token ``(line, column)`` back to offsets in the preprocessed text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.line_starts = [0]
        for i, c in enumerate(text):
            if c == "\n":
                self.line_starts.append(i + 1)

    def offset(self, token) -> int:
        return self.line_starts[token.source_line - 1] + token.source_column - 1

    def original(self, token) -> str:
        """Source text of a string or url token, exactly as written."""
        text = self.text
        start = self.offset(token)
        if token.type == "string":
            stop = (text[start],)
            pos = start + 1
        else:
            stop = (")",)
            pos = start + 4
        while pos < len(text):
            c = text[pos]
            if c == "\\":
                pos += 2
                continue
            pos += 1
            if c in stop:
                break
            if c == "\n" and token.type == "string":
                pos -= 1
                break
        return text[start:pos]

    def restore(self, nodes) -> None:
        """
        Put back the original quoting of string and url tokens.

        tinycss2 re-serialises strings with double quotes and drops the
        padding inside unquoted ``url( ... )``.
        """
        for node in nodes:
            if node.type in ("string", "url"):
                node.representation = self.original(node)
            for attr in ("prelude", "content", "arguments"):
                children = getattr(node, attr, None)
                if isinstance(children, list):
                    self.restore(children)


def _is_skippable(token) -> bool:
    return token.type in ("whitespace", "comment")


def _is_literal(token, value: str) -> bool:
    return token.type == "literal" and token.value == value


def _emit_segment(segment: list, out: list, source_file: str | None) -> None:
    i = 0
    while i < len(segment) and _is_skippable(segment[i]):
        i += 1
    if i < len(segment) and segment[i].type == "ident":
        j = i + 1
        while j < len(segment) and _is_skippable(segment[j]):
            j += 1
        if j < len(segment) and _is_literal(segment[j], ":"):
            name_token = segment[i]
            out.append(Declaration(
                name=name_token.value,
                prefix=tinycss2.serialize(segment[:j + 1]),
                value=tinycss2.serialize(segment[j + 1:]),
                source_file=source_file,
                line=name_token.source_line,
                column=name_token.source_column,
            ))
            return
    out.append(tinycss2.serialize(segment))


def _emit_block(tokens: list, out: list, source_file: str | None) -> None:
    """Split block contents on top-level ``;`` into declarations and raw text."""
    segment: list = []
    for token in tokens:
        if _is_literal(token, ";"):
            _emit_segment(segment, out, source_file)
            out.append(";")
            segment = []
        elif token.type == "{} block":
            # Nested rule: the segment so far is its prelude
            out.append(tinycss2.serialize(segment) + "{")
            _emit_block(token.content, out, source_file)
            out.append("}")
            segment = []
        else:
            segment.append(token)
    if segment:
        _emit_segment(segment, out, source_file)


def _emit_rules(nodes: list, out: list, source_file: str | None) -> None:
    for node in nodes:
        if node.type == "qualified-rule":
            out.append(tinycss2.serialize(node.prelude) + "{")
            _emit_block(node.content, out, source_file)
            out.append("}")
        elif node.type == "at-rule":
            head = "@" + serialize_identifier(node.at_keyword) + tinycss2.serialize(node.prelude)
            if node.content is None:
                out.append(head + ";")
                continue
            out.append(head + "{")
            if node.lower_at_keyword in NESTED_RULE_AT_KEYWORDS:
                _emit_rules(tinycss2.parse_rule_list(node.content), out, source_file)
            else:
                _emit_block(node.content, out, source_file)
            out.append("}")
        else:
            out.append(tinycss2.serialize([node]))


class Stylesheet:
    """Parsed CSS as a flat list of raw text chunks and :class:`Declaration`\\ s."""

    def __init__(self, chunks: list, source_file: str | None = None) -> None:
        self.chunks = chunks
        self.source_file = source_file

    @classmethod
    def parse(cls, text: str, source_file: str | os.PathLike | None = None) -> "Stylesheet":
        source = os.fspath(source_file) if source_file else None
        text = _normalize(text)
        nodes = tinycss2.parse_stylesheet(text)
        _Source(text).restore(nodes)
        chunks: list = []
        _emit_rules(nodes, chunks, source)
        return cls(chunks, source)

    @classmethod
    def parse_inline(cls, text: str, source_file: str | os.PathLike | None = None) -> "Stylesheet":
        """Parse a bare declaration list such as an HTML ``style`` attribute."""
        source = os.fspath(source_file) if source_file else None
        text = _normalize(text)
        tokens = tinycss2.parse_component_value_list(text)
        _Source(text).restore(tokens)
        chunks: list = []
        _emit_block(tokens, chunks, source)
        return cls(chunks, source)

    def declarations(self) -> list[Declaration]:
        return [c for c in self.chunks if isinstance(c, Declaration)]

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.declarations())

    def serialize(self) -> str:
        return "".join(
            c.serialize() if isinstance(c, Declaration) else c
            for c in self.chunks
        )

    __str__ = serialize


def revise_css(
    text: str,
    options: Options | dict[str, Any] | None = None,
    source_path: str | os.PathLike | None = None,
) -> tuple[str, list[DeclarationWarning]]:
    """Parse *text*, revise its ``url()``\\ s and return ``(css, warnings)``."""
    from .scheduler import revise

    sheet = Stylesheet.parse(text, source_path)
    warnings = revise(sheet, options, source_path)
    return sheet.serialize(), warnings
