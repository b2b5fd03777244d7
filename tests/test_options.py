"""
Tests for Options validation and defaults.
"""

import unittest
from pathlib import Path

from urlrev.errors import OptionsError
from urlrev.options import Options


class TestOptions(unittest.TestCase):
    def test_defaults(self):
        opts = Options()
        self.assertFalse(opts.include_remote)
        self.assertIsNone(opts.absolute_path)
        self.assertEqual(opts.hash_length, 10)
        self.assertIsNone(opts.hash_function)
        self.assertTrue(callable(opts.replacer))

    def test_default_replacer_uses_hash_length(self):
        opts = Options(hash_length=4)
        self.assertEqual(opts.replacer("a.png", "0123456789"), "a.png?v=0123")

    def test_negative_hash_length_clamped(self):
        self.assertEqual(Options(hash_length=-5).hash_length, 0)

    def test_none_hash_length_means_default(self):
        self.assertEqual(Options(hash_length=None).hash_length, 10)

    def test_path_like_absolute_path(self):
        self.assertEqual(Options(absolute_path=Path("/srv/www")).absolute_path, "/srv/www")

    def test_immutable(self):
        opts = Options()
        with self.assertRaises(AttributeError):
            opts.hash_length = 3

    def test_invalid_values(self):
        with self.assertRaises(OptionsError):
            Options(hash_length="10")
        with self.assertRaises(OptionsError):
            Options(hash_length=True)
        with self.assertRaises(OptionsError):
            Options(include_remote="yes")
        with self.assertRaises(OptionsError):
            Options(replacer="not callable")
        with self.assertRaises(OptionsError):
            Options(hash_function=42)
        with self.assertRaises(OptionsError):
            Options(absolute_path=3)

    def test_options_error_is_value_error(self):
        self.assertTrue(issubclass(OptionsError, ValueError))

    def test_from_mapping_camel_case(self):
        opts = Options.from_mapping({"includeRemote": True, "absolutePath": "/srv", "hashLength": 8})
        self.assertTrue(opts.include_remote)
        self.assertEqual(opts.absolute_path, "/srv")
        self.assertEqual(opts.hash_length, 8)

    def test_from_mapping_unknown_key(self):
        with self.assertRaises(OptionsError):
            Options.from_mapping({"cache": True})

    def test_from_mapping_none(self):
        self.assertEqual(Options.from_mapping(None), Options())


if __name__ == "__main__":
    unittest.main()
