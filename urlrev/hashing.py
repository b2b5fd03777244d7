"""
urlrev.hashing
==============
Content digests for resource locators.

* a configured ``hash_function`` takes over completely;
* local and site-absolute files are read in one go and hashed;
* remote URLs are streamed through an incremental digest.

Blocking I/O runs in a worker thread via :func:`asyncio.to_thread`, so
every read or fetch is a single suspension point for the event loop.
"""

from __future__ import annotations

import asyncio
import hashlib
import inspect
import threading
from pathlib import Path

import requests

from .config import CHUNK_SIZE, HASH_ALGORITHM, REQUEST_TIMEOUT
from .errors import CustomHashFunctionFailure, RemoteFetchFailure, UnreadableLocalFile
from .logging_setup import log
from .models import Remote, ResourceLocator
from .network import build_session
from .options import Options


def new_digest():
    return hashlib.new(HASH_ALGORITHM, usedforsecurity=False)


def content_digest(data: bytes) -> str:
    """Return the lowercase hex digest of *data*."""
    md5 = new_digest()
    md5.update(data)
    return md5.hexdigest()


def fetch_digest(session: requests.Session, url: str) -> str:
    """
    GET *url* and feed the body, chunk by chunk, into a digest.

    Blocking; meant to run in a worker thread.
    """
    md5 = new_digest()
    try:
        with session.get(url, stream=True, timeout=REQUEST_TIMEOUT) as resp:
            if not resp.ok:
                raise RemoteFetchFailure(url, resp.reason or "", resp.status_code)
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    md5.update(chunk)
    except requests.RequestException as exc:
        raise RemoteFetchFailure(url, str(exc)) from exc
    return md5.hexdigest()


class ContentHasher:
    """
    Computes digests for one pass.

    Remote fetches run in worker threads, and ``requests.Session`` is not
    thread-safe, so each worker thread lazily builds its own session.  A
    session passed in by the caller is used as-is for every fetch.  Call
    :meth:`close` when the pass is over.
    """

    def __init__(
        self,
        options: Options,
        session: requests.Session | None = None,
        verify_ssl: bool = True,
    ) -> None:
        self.options = options
        self.verify_ssl = verify_ssl
        self._session = session
        self._local = threading.local()
        self._owned: list[requests.Session] = []
        self._lock = threading.Lock()

    def worker_session(self) -> requests.Session:
        """Session for the calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = build_session(verify_ssl=self.verify_ssl)
            self._local.session = session
            with self._lock:
                self._owned.append(session)
        return session

    def close(self) -> None:
        """Close every session this hasher built; a caller's session is left open."""
        with self._lock:
            owned, self._owned = self._owned, []
        self._local = threading.local()
        for session in owned:
            session.close()

    def _fetch(self, url: str) -> str:
        return fetch_digest(self.worker_session(), url)

    async def digest(self, locator: ResourceLocator) -> str:
        if self.options.hash_function is not None:
            digest = await self._custom_digest(locator)
        elif isinstance(locator, Remote):
            digest = await asyncio.to_thread(self._fetch, locator.url)
        else:
            digest = await self._local_digest(locator.path)
        log.debug("%s → %s", locator.path, digest)
        return digest

    async def _local_digest(self, path: str) -> str:
        try:
            data = await asyncio.to_thread(Path(path).read_bytes)
        except OSError as exc:
            raise UnreadableLocalFile(path, exc.strerror or str(exc)) from exc
        except ValueError as exc:
            # e.g. a reference that decodes to a NUL byte
            raise UnreadableLocalFile(path, str(exc)) from exc
        return content_digest(data)

    async def _custom_digest(self, locator: ResourceLocator) -> str:
        path = locator.path
        try:
            result = self.options.hash_function(path, locator.basename)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            raise CustomHashFunctionFailure(path, str(exc) or type(exc).__name__) from exc
        if not isinstance(result, str):
            raise CustomHashFunctionFailure(
                path, f"returned {type(result).__name__}, expected str"
            )
        return result
