"""
Tests for file export sinks.
"""

import tempfile
import unittest
from pathlib import Path

from puffybooth.core.exceptions import ExportError
from puffybooth.io.export import FileExportSink, write_file


class TestFileExportSink(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_writes_named_file(self):
        sink = FileExportSink(self.tmp)
        path = sink.save(b"png bytes", "photo-strip.png")
        self.assertEqual(Path(path), self.tmp / "photo-strip.png")
        self.assertEqual((self.tmp / "photo-strip.png").read_bytes(), b"png bytes")

    def test_creates_missing_directory(self):
        sink = FileExportSink(self.tmp / "strips" / "today")
        path = sink.save(b"data", "photo-strip.png")
        self.assertTrue(Path(path).exists())

    def test_overwrites_existing_file(self):
        sink = FileExportSink(self.tmp)
        sink.save(b"first", "photo-strip.png")
        sink.save(b"second", "photo-strip.png")
        self.assertEqual((self.tmp / "photo-strip.png").read_bytes(), b"second")

    def test_default_directory(self):
        self.assertEqual(FileExportSink().directory, Path.home() / "Downloads")

    def test_unwritable_target(self):
        blocker = self.tmp / "blocker"
        blocker.write_bytes(b"")
        with self.assertRaises(ExportError) as ctx:
            write_file(b"data", blocker / "photo-strip.png")
        self.assertIn("photo-strip.png", ctx.exception.message)


if __name__ == '__main__':
    unittest.main()
