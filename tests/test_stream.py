"""Unit tests for the QDataStream cursor."""

from __future__ import annotations

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dbiread import ERR_CORRUPT_DATA, ERR_READ_PAST_END, Cursor, DecodeError
from streamutil import StreamWriter


# ── Fixed-width integers ──────────────────────────────────────

class TestIntegers(unittest.TestCase):
    def test_int32_big_endian(self):
        c = Cursor(b"\x00\x00\x1f\x46")
        self.assertEqual(c.read_int32(), 8006)
        self.assertTrue(c.at_end)

    def test_int32_negative(self):
        self.assertEqual(Cursor(b"\xff\xff\xff\xfe").read_int32(), -2)

    def test_uint32_no_sign(self):
        self.assertEqual(Cursor(b"\xff\xff\xff\xfe").read_uint32(), 0xFFFFFFFE)

    def test_int64_and_uint64(self):
        data = StreamWriter().int64(-1).uint64(2**64 - 1).getvalue()
        c = Cursor(data)
        self.assertEqual(c.read_int64(), -1)
        self.assertEqual(c.read_uint64(), 2**64 - 1)

    def test_uint16(self):
        self.assertEqual(Cursor(b"\x01\x02").read_uint16(), 0x0102)

    def test_position_and_remaining(self):
        c = Cursor(b"\x00" * 10)
        c.read_int32()
        self.assertEqual(c.position, 4)
        self.assertEqual(c.remaining, 6)
        self.assertFalse(c.at_end)


# ── Failure latch ─────────────────────────────────────────────

class TestLatch(unittest.TestCase):
    def test_short_read_fails(self):
        c = Cursor(b"\x00\x00")
        with self.assertRaises(DecodeError) as ctx:
            c.read_int32()
        self.assertEqual(ctx.exception.code, ERR_READ_PAST_END)
        self.assertFalse(c.ok)

    def test_short_read_does_not_advance(self):
        c = Cursor(b"\x00\x00")
        with self.assertRaises(DecodeError):
            c.read_int32()
        self.assertEqual(c.position, 0)

    def test_latched_cursor_refuses_further_reads(self):
        """Two bytes would satisfy a uint16, but the cursor is already bad."""
        c = Cursor(b"\x00\x01")
        with self.assertRaises(DecodeError):
            c.read_int32()
        with self.assertRaises(DecodeError) as ctx:
            c.read_uint16()
        self.assertEqual(ctx.exception.code, ERR_READ_PAST_END)
        self.assertEqual(c.position, 0)

    def test_fresh_cursor_is_ok(self):
        self.assertTrue(Cursor(b"").ok)
        self.assertTrue(Cursor(b"").at_end)


# ── Strings and byte arrays ───────────────────────────────────

class TestStrings(unittest.TestCase):
    def test_utf16_string(self):
        data = StreamWriter().string("héllo").getvalue()
        c = Cursor(data)
        self.assertEqual(c.read_string(), "héllo")
        self.assertTrue(c.at_end)

    def test_astral_string(self):
        data = StreamWriter().string("\U0001F600").getvalue()
        self.assertEqual(Cursor(data).read_string(), "\U0001F600")

    def test_null_string_is_empty(self):
        self.assertEqual(Cursor(b"\xff\xff\xff\xff").read_string(), "")

    def test_empty_string(self):
        self.assertEqual(Cursor(b"\x00\x00\x00\x00").read_string(), "")

    def test_odd_length_is_corrupt(self):
        c = Cursor(b"\x00\x00\x00\x03abc")
        with self.assertRaises(DecodeError) as ctx:
            c.read_string()
        self.assertEqual(ctx.exception.code, ERR_CORRUPT_DATA)
        self.assertFalse(c.ok)

    def test_string_longer_than_payload(self):
        with self.assertRaises(DecodeError) as ctx:
            Cursor(b"\x00\x00\x00\x10ab").read_string()
        self.assertEqual(ctx.exception.code, ERR_READ_PAST_END)

    def test_bytes(self):
        data = StreamWriter().bytes_(b"\x00\x01\x02").getvalue()
        self.assertEqual(Cursor(data).read_bytes(), b"\x00\x01\x02")

    def test_null_bytes_is_empty(self):
        self.assertEqual(Cursor(b"\xff\xff\xff\xff").read_bytes(), b"")

    def test_raw(self):
        c = Cursor(b"abcdef")
        self.assertEqual(c.read_raw(4), b"abcd")
        self.assertEqual(c.remaining, 2)


# ── Containers ────────────────────────────────────────────────

class TestContainers(unittest.TestCase):
    def test_vector(self):
        data = StreamWriter().uint32(2).uint64(7).uint64(9).getvalue()
        c = Cursor(data)
        self.assertEqual(c.read_vector(c.read_uint64), [7, 9])

    def test_pairs_keep_order_and_duplicates(self):
        w = StreamWriter().uint32(3)
        w.string("b").uint16(1).string("a").uint16(2).string("b").uint16(3)
        c = Cursor(w.getvalue())
        self.assertEqual(c.read_pairs(c.read_string, c.read_uint16),
                         [("b", 1), ("a", 2), ("b", 3)])

    def test_map_last_value_wins(self):
        w = StreamWriter().uint32(2).uint32(5).int32(1).uint32(5).int32(2)
        c = Cursor(w.getvalue())
        self.assertEqual(c.read_map(c.read_uint32, c.read_int32), {5: 2})

    def test_count_exceeding_payload_fails_early(self):
        c = Cursor(b"\xff\xff\xff\xf0" + b"\x00" * 8)
        with self.assertRaises(DecodeError) as ctx:
            c.read_vector(c.read_uint64)
        self.assertEqual(ctx.exception.code, ERR_READ_PAST_END)

    def test_truncated_element(self):
        data = StreamWriter().uint32(2).uint64(7).getvalue() + b"\x00\x00"
        c = Cursor(data)
        with self.assertRaises(DecodeError) as ctx:
            c.read_vector(c.read_uint64)
        self.assertEqual(ctx.exception.code, ERR_READ_PAST_END)


if __name__ == "__main__":
    unittest.main()
