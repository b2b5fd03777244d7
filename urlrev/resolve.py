"""
urlrev.resolve
==============
Turns the raw reference of a ``url()`` occurrence into a
:data:`~urlrev.models.ResourceLocator`.

Classification is lexical only; nothing here touches the filesystem or
the network, so resolution cannot fail.  A malformed reference simply
resolves to a path the hashing stage will fail to read.

    ``http://h/a.png``   → Remote("http://h/a.png")
    ``//cdn/a.png``      → Remote("http://cdn/a.png")
    ``/img/a.png``       → SiteAbsolute(<absolute_path>/img/a.png)
    ``img/a.png?x=1#f``  → LocalFile(<declaration dir>/img/a.png)
"""

from __future__ import annotations

import os
import re
import urllib.parse

from .extract.classify import is_protocol_relative, is_remote, is_site_absolute
from .models import LocalFile, Remote, ResourceLocator, SiteAbsolute
from .options import Options


def base_dir(declaration_file: str | None, source_path: str | None) -> str:
    """
    Directory that relative references resolve against.

    The declaration's own source file wins, then the file the pass was
    started from, then the current working directory.
    """
    for candidate in (declaration_file, source_path):
        if candidate:
            return os.path.dirname(os.path.abspath(candidate))
    return os.getcwd()


def _path_part(raw: str) -> str:
    """Path component of *raw*, without query or fragment, percent-decoded."""
    try:
        path = urllib.parse.urlsplit(raw).path
    except ValueError:
        # Unparseable netloc such as "foo://[x/a.png"
        path = re.split(r"[?#]", raw, maxsplit=1)[0]
    return urllib.parse.unquote(path)


def resolve_locator(
    raw: str,
    options: Options,
    declaration_file: str | None = None,
    source_path: str | None = None,
) -> ResourceLocator:
    if is_remote(raw):
        if is_protocol_relative(raw):
            return Remote("http:" + raw)
        return Remote(raw)

    if is_site_absolute(raw):
        root = options.absolute_path or os.getcwd()
        rel = _path_part(raw).lstrip("/")
        return SiteAbsolute(os.path.normpath(os.path.join(os.path.abspath(root), rel)))

    directory = base_dir(declaration_file, source_path)
    return LocalFile(os.path.normpath(os.path.join(directory, _path_part(raw))))
