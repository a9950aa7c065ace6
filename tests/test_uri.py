"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

import unittest

from pngmeta.environment import InvalidDataURIError
from pngmeta.uri import from_png_data_uri, to_data_uri, to_png_data_uri
from tests.utility import GIF_DATA_URI, TypedTestCase, sample_png


class TestDataURI(TypedTestCase):
    def test_to_data_uri(self) -> None:
        self.assertEqual(to_data_uri("text/plain", b"hello"), "data:text/plain;base64,aGVsbG8=")

    def test_png_data_uri(self) -> None:
        data = sample_png()
        data_uri = to_png_data_uri(data)
        self.assertStartsWith(data_uri, "data:image/png;base64,")
        self.assertEqual(from_png_data_uri(data_uri), data)

    def test_wrong_mime_type(self) -> None:
        with self.assertRaises(InvalidDataURIError):
            from_png_data_uri(GIF_DATA_URI)

    def test_prefix_case_sensitive(self) -> None:
        with self.assertRaises(InvalidDataURIError):
            from_png_data_uri("DATA:image/png;base64,iVBORw0KGgo=")

    def test_malformed_base64(self) -> None:
        with self.assertRaises(InvalidDataURIError) as context:
            from_png_data_uri("data:image/png;base64,not*base64")
        self.assertIn("Base64", str(context.exception))

    def test_not_a_string(self) -> None:
        with self.assertRaises(InvalidDataURIError):
            from_png_data_uri(None)


if __name__ == "__main__":
    unittest.main()
