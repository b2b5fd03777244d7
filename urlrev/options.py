"""Options for a single revision pass."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

from .config import DEFAULT_HASH_LENGTH
from .errors import OptionsError

Replacer = Callable[[str, str], str]
HashFunction = Callable[[str, str], Union[str, Awaitable[str]]]


@dataclass(frozen=True)
class Options:
    """
    Immutable settings shared read-only by every task of one pass.

    include_remote : also revise ``http(s)://`` and ``//`` references
    absolute_path  : base directory for ``/...`` references; ``None`` skips them
    hash_length    : characters of the digest kept in ``v`` (negative → 0)
    replacer       : ``(raw_value, digest) -> new_value``; defaults to the
                     ``v`` query-parameter strategy
    hash_function  : ``(path, basename) -> digest`` replacing the built-in
                     MD5 hashing; may return an awaitable
    """

    include_remote: bool = False
    absolute_path: str | None = None
    hash_length: int = DEFAULT_HASH_LENGTH
    replacer: Replacer | None = field(default=None, compare=False)
    hash_function: HashFunction | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.include_remote, bool):
            raise OptionsError(f"include_remote must be a bool, got {self.include_remote!r}")

        if self.absolute_path is not None:
            if not isinstance(self.absolute_path, (str, os.PathLike)):
                raise OptionsError(f"absolute_path must be a path, got {self.absolute_path!r}")
            object.__setattr__(self, "absolute_path", os.fspath(self.absolute_path))

        hash_length = self.hash_length
        if hash_length is None:
            hash_length = DEFAULT_HASH_LENGTH
        if isinstance(hash_length, bool) or not isinstance(hash_length, int):
            raise OptionsError(f"hash_length must be an int, got {hash_length!r}")
        object.__setattr__(self, "hash_length", max(0, hash_length))

        if self.hash_function is not None and not callable(self.hash_function):
            raise OptionsError("hash_function must be callable")

        if self.replacer is None:
            from .rewrite import default_replacer
            object.__setattr__(self, "replacer", default_replacer(self.hash_length))
        elif not callable(self.replacer):
            raise OptionsError("replacer must be callable")

    @classmethod
    def from_mapping(cls, opts: dict[str, Any] | None) -> "Options":
        """Build from a plain dict, accepting camelCase keys as well."""
        aliases = {
            "includeRemote": "include_remote",
            "absolutePath":  "absolute_path",
            "hashLength":    "hash_length",
            "hashFunction":  "hash_function",
        }
        kwargs: dict[str, Any] = {}
        for key, value in (opts or {}).items():
            name = aliases.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise OptionsError(f"Unknown option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)
