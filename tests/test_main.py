"""
Read and write textual metadata in PNG images.

Copyright 2022-2026, Levente Hunyadi
"""

import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path
from unittest import mock

from pngmeta.__main__ import main
from pngmeta.metadata import get_metadata
from pngmeta.png import iter_chunks
from tests.utility import JPEG_DATA, TypedTestCase, png_chunk, sample_png


class TestCommandLine(TypedTestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.png_path = Path(self.temp_dir.name) / "image.png"
        self.png_path.write_bytes(sample_png())

    def run_main(self, *args: str) -> str:
        with redirect_stdout(StringIO()) as out:
            main(list(args))
        return out.getvalue()

    def test_add_in_place(self) -> None:
        self.run_main("add", str(self.png_path), "foo=bar", "equation=a=b")
        data = self.png_path.read_bytes()
        self.assertEqual(get_metadata(data, "foo"), "bar")
        self.assertEqual(get_metadata(data, "equation"), "a=b")

    def test_add_output(self) -> None:
        output = Path(self.temp_dir.name) / "output.png"
        self.run_main("add", str(self.png_path), "foo=bar", "-o", str(output))
        self.assertIsNone(get_metadata(self.png_path.read_bytes(), "foo"))
        self.assertEqual(get_metadata(output.read_bytes(), "foo"), "bar")

    @mock.patch.dict(os.environ, {"PNGMETA_CHECKSUM": "zero"})
    def test_add_placeholder_checksum(self) -> None:
        self.run_main("add", str(self.png_path), "foo=bar")
        _, chunk = list(iter_chunks(self.png_path.read_bytes()))[1]
        self.assertEqual(chunk.crc, b"\x00\x00\x00\x00")

    def test_add_malformed_entry(self) -> None:
        with redirect_stderr(StringIO()), self.assertRaises(SystemExit) as context:
            main(["add", str(self.png_path), "foo"])
        self.assertEqual(context.exception.code, 2)

    def test_add_invalid_key(self) -> None:
        with self.assertRaises(SystemExit) as context:
            self.run_main("add", str(self.png_path), f"{'a' * 80}=bar")
        self.assertEqual(context.exception.code, 1)

    def test_get(self) -> None:
        self.run_main("add", str(self.png_path), "foo=bar")
        self.assertEqual(self.run_main("get", str(self.png_path), "foo"), "bar\n")

    def test_get_missing(self) -> None:
        with self.assertRaises(SystemExit) as context:
            self.run_main("get", str(self.png_path), "foo")
        self.assertEqual(context.exception.code, 1)

    def test_get_invalid_png(self) -> None:
        self.png_path.write_bytes(JPEG_DATA)
        with self.assertRaises(SystemExit) as context:
            self.run_main("get", str(self.png_path), "foo")
        self.assertEqual(context.exception.code, 1)

    def test_get_latin1_value(self) -> None:
        self.png_path.write_bytes(sample_png(extra=[png_chunk(b"tEXt", b"Author\x00M\xfcller")]))
        self.assertEqual(self.run_main("get", str(self.png_path), "Author"), "Müller\n")

    def test_list(self) -> None:
        self.run_main("add", str(self.png_path), "foo=bar", "baz=qux")
        self.assertEqual(self.run_main("list", str(self.png_path)), "baz=qux\nfoo=bar\n")

    def test_list_json(self) -> None:
        self.run_main("add", str(self.png_path), "foo=bar")
        output = self.run_main("list", str(self.png_path), "--json")
        self.assertEqual(json.loads(output), [{"key": "foo", "value": "bar"}])


if __name__ == "__main__":
    unittest.main()
