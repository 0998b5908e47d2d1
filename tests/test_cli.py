"""Tests for ReadOptions and the dbiread command-line interface."""

from __future__ import annotations

import contextlib
import io
import json
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dbiread import BlockId, ReadOptions
from dbiread._cli import main
from dbiread._constants import MAX_DATA_SIZE
from streamutil import StreamWriter, block, settings_stream


# ── ReadOptions ───────────────────────────────────────────────

class TestReadOptions(unittest.TestCase):
    def test_defaults(self):
        opts = ReadOptions.from_env({})
        self.assertEqual(opts.max_data_size, MAX_DATA_SIZE)
        self.assertFalse(opts.store_build)

    def test_env_overrides(self):
        opts = ReadOptions.from_env({
            "DBIREAD_MAX_DATA_SIZE": "1024",
            "DBIREAD_STORE_BUILD": "yes",
        })
        self.assertEqual(opts.max_data_size, 1024)
        self.assertTrue(opts.store_build)

    def test_invalid_size_falls_back(self):
        with self.assertLogs("dbiread._config", level="WARNING"):
            opts = ReadOptions.from_env({"DBIREAD_MAX_DATA_SIZE": "lots"})
        self.assertEqual(opts.max_data_size, MAX_DATA_SIZE)

    def test_non_positive_size_falls_back(self):
        with self.assertLogs("dbiread._config", level="WARNING"):
            opts = ReadOptions.from_env({"DBIREAD_MAX_DATA_SIZE": "-3"})
        self.assertEqual(opts.max_data_size, MAX_DATA_SIZE)

    def test_frozen(self):
        with self.assertRaises(Exception):
            ReadOptions().store_build = True


# ── CLI ───────────────────────────────────────────────────────

class TestCli(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".bin")
        os.close(fd)

    def tearDown(self):
        os.unlink(self.path)

    def _write(self, data: bytes) -> None:
        with open(self.path, "wb") as f:
            f.write(data)

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        code = 0
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            try:
                main(argv)
            except SystemExit as e:
                code = e.code
        return code, out.getvalue(), err.getvalue()

    def test_version(self):
        code, out, _ = self._run(["version"])
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("dbiread "))

    def test_no_command(self):
        code, _, _ = self._run([])
        self.assertEqual(code, 1)

    def test_decode(self):
        self._write(settings_stream(8006, [
            block(BlockId.dbiAutoStart, StreamWriter().int32(1).getvalue()),
            block(BlockId.dbiDialogLastPath, StreamWriter().string("/tmp/x").getvalue()),
        ]))
        code, out, _ = self._run(["decode", "--input", self.path])
        self.assertEqual(code, 0)
        doc = json.loads(out)
        self.assertEqual(doc["version"], 8006)
        self.assertTrue(doc["globals"]["auto_start"])
        self.assertEqual(doc["globals"]["dialog_last_path"], "/tmp/x")

    def test_decode_auto_download_keys(self):
        self._write(settings_stream(8006, [
            block(BlockId.dbiAutoDownloadOld, StreamWriter().int32(1).int32(0).int32(0).getvalue()),
        ]))
        code, out, _ = self._run(["-q", "decode", "-i", self.path])
        self.assertEqual(code, 0)
        limits = json.loads(out)["context"]["session_settings"]["auto_download"]["limits"]
        self.assertEqual(limits, {"user:photo": 0})

    def test_decode_error_exit_code(self):
        self._write(settings_stream(8006, [block(0x10)]))
        code, out, err = self._run(["-q", "decode", "--input", self.path])
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("[ERR_UNKNOWN_BLOCK]", err)

    def test_missing_file(self):
        code, _, err = self._run(["decode", "--input", self.path + ".missing"])
        self.assertEqual(code, 2)
        self.assertIn("cannot read input", err)

    def test_blocks(self):
        self._write(settings_stream(8006, [
            block(BlockId.dbiAutoStart, StreamWriter().int32(1).getvalue()),
        ]))
        code, out, _ = self._run(["blocks", "--input", self.path])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertIn("dbiAutoStart", lines[0])
        self.assertEqual(lines[-1], "version 8006")


if __name__ == "__main__":
    unittest.main()
