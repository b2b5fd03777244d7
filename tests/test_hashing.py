"""
Tests for content hashing: local files, streamed remote fetches and
user-supplied hash functions.
"""

import hashlib
import tempfile
import threading
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from urlrev.errors import CustomHashFunctionFailure, RemoteFetchFailure, UnreadableLocalFile
from urlrev.hashing import ContentHasher, content_digest, fetch_digest
from urlrev.models import LocalFile, Remote, SiteAbsolute
from urlrev.options import Options


def _mock_session(chunks=(b"",), ok=True, status=200, reason="OK"):
    session = MagicMock()
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status
    resp.reason = reason
    resp.iter_content.return_value = list(chunks)
    session.get.return_value.__enter__.return_value = resp
    return session


class TestContentDigest(unittest.TestCase):
    def test_md5_hex(self):
        self.assertEqual(content_digest(b"hello"), hashlib.md5(b"hello").hexdigest())

    def test_deterministic(self):
        self.assertEqual(content_digest(b"abc"), content_digest(b"abc"))


class TestFetchDigest(unittest.TestCase):
    def test_chunks_are_hashed_incrementally(self):
        session = _mock_session(chunks=[b"ab", b"", b"cd"])
        digest = fetch_digest(session, "http://example.com/a.png")
        self.assertEqual(digest, hashlib.md5(b"abcd").hexdigest())
        _, kwargs = session.get.call_args
        self.assertTrue(kwargs["stream"])

    def test_http_error_status(self):
        session = _mock_session(ok=False, status=404, reason="Not Found")
        with self.assertRaises(RemoteFetchFailure) as ctx:
            fetch_digest(session, "http://example.com/missing.png")
        self.assertEqual(ctx.exception.status, 404)
        self.assertIn("404", str(ctx.exception))

    def test_connection_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(RemoteFetchFailure) as ctx:
            fetch_digest(session, "http://example.com/a.png")
        self.assertIn("refused", str(ctx.exception))


class TestContentHasher(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.data = b"\x89PNG\r\n\x1a\nnot really a png"
        self.file = self.root / "test.png"
        self.file.write_bytes(self.data)

    async def test_local_file(self):
        hasher = ContentHasher(Options())
        digest = await hasher.digest(LocalFile(str(self.file)))
        self.assertEqual(digest, hashlib.md5(self.data).hexdigest())

    async def test_site_absolute_file(self):
        hasher = ContentHasher(Options())
        digest = await hasher.digest(SiteAbsolute(str(self.file)))
        self.assertEqual(digest, hashlib.md5(self.data).hexdigest())

    async def test_missing_local_file(self):
        hasher = ContentHasher(Options())
        missing = str(self.root / "nope.png")
        with self.assertRaises(UnreadableLocalFile) as ctx:
            await hasher.digest(LocalFile(missing))
        self.assertEqual(ctx.exception.path, missing)
        self.assertIn("nope.png", str(ctx.exception))

    async def test_directory_is_unreadable(self):
        hasher = ContentHasher(Options())
        with self.assertRaises(UnreadableLocalFile):
            await hasher.digest(LocalFile(str(self.root)))

    async def test_nul_byte_path_is_unreadable(self):
        hasher = ContentHasher(Options())
        with self.assertRaises(UnreadableLocalFile) as ctx:
            await hasher.digest(LocalFile(str(self.root / "a\x00b.png")))
        self.assertIn("null byte", str(ctx.exception))

    async def test_remote_uses_given_session(self):
        session = _mock_session(chunks=[self.data])
        hasher = ContentHasher(Options(include_remote=True), session=session)
        digest = await hasher.digest(Remote("http://example.com/test.png"))
        self.assertEqual(digest, hashlib.md5(self.data).hexdigest())
        session.get.assert_called_once()
        hasher.close()
        session.close.assert_not_called()

    async def test_owned_session_created_lazily_and_closed(self):
        session = _mock_session(chunks=[b"x"])
        with patch("urlrev.hashing.build_session", return_value=session) as mock_build:
            hasher = ContentHasher(Options(include_remote=True), verify_ssl=False)
            mock_build.assert_not_called()
            await hasher.digest(Remote("https://example.com/x"))
            mock_build.assert_called_once_with(verify_ssl=False)
            hasher.close()
        session.close.assert_called_once()

    async def test_custom_hash_function(self):
        calls = []

        def fake_hash(path, basename):
            calls.append((path, basename))
            return "cafebabe" + basename

        hasher = ContentHasher(Options(hash_function=fake_hash))
        digest = await hasher.digest(LocalFile(str(self.file)))
        self.assertEqual(digest, "cafebabetest.png")
        self.assertEqual(calls, [(str(self.file), "test.png")])

    async def test_custom_hash_function_for_missing_file_is_trusted(self):
        hasher = ContentHasher(Options(hash_function=lambda p, b: "0123456789abcdef"))
        digest = await hasher.digest(LocalFile(str(self.root / "nope.png")))
        self.assertEqual(digest, "0123456789abcdef")

    async def test_async_custom_hash_function(self):
        async def fake_hash(path, basename):
            return "feedface"

        hasher = ContentHasher(Options(hash_function=fake_hash))
        self.assertEqual(await hasher.digest(Remote("http://h/a.png")), "feedface")

    async def test_custom_hash_function_failure(self):
        def broken(path, basename):
            raise ValueError("bad hash")

        hasher = ContentHasher(Options(hash_function=broken))
        with self.assertRaises(CustomHashFunctionFailure) as ctx:
            await hasher.digest(LocalFile(str(self.file)))
        self.assertIn("bad hash", str(ctx.exception))

    async def test_custom_hash_function_must_return_str(self):
        hasher = ContentHasher(Options(hash_function=lambda p, b: 42))
        with self.assertRaises(CustomHashFunctionFailure):
            await hasher.digest(LocalFile(str(self.file)))


class TestWorkerSessions(unittest.TestCase):
    def test_each_thread_builds_its_own_session(self):
        with patch("urlrev.hashing.build_session", side_effect=lambda verify_ssl: MagicMock()):
            hasher = ContentHasher(Options(include_remote=True))
            main_session = hasher.worker_session()
            self.assertIs(hasher.worker_session(), main_session)

            seen = []
            worker = threading.Thread(target=lambda: seen.append(hasher.worker_session()))
            worker.start()
            worker.join()
            self.assertIsNot(seen[0], main_session)

            hasher.close()
        main_session.close.assert_called_once()
        seen[0].close.assert_called_once()

    def test_given_session_shared_by_all_threads(self):
        session = _mock_session()
        hasher = ContentHasher(Options(include_remote=True), session=session)
        seen = []
        worker = threading.Thread(target=lambda: seen.append(hasher.worker_session()))
        worker.start()
        worker.join()
        self.assertIs(seen[0], session)
        self.assertIs(hasher.worker_session(), session)


if __name__ == "__main__":
    unittest.main()
