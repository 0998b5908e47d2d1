"""Cursor — forward-only reader over a QDataStream-encoded byte buffer.

Wire format is Qt 5.1 QDataStream with default (big-endian) byte order:

    int32/uint32/int64/uint64/uint16  fixed width, big-endian
    string      uint32 byte length + UTF-16BE code units
    byte array  uint32 length + raw bytes
    vector<T>   uint32 count + elements
    map<K, V>   uint32 count + (key, value) pairs

A length of 0xFFFFFFFF marks a null string / byte array; we decode it as
empty, which is what every caller treats it as anyway.

Failure model: the first bad read latches `ok` to False and raises
DecodeError.  Every read after that raises again without touching the
buffer, so a caller that swallows one error still can't make progress on a
desynchronized stream.
"""

from __future__ import annotations

import struct
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

from ._constants import NULL_LENGTH
from ._errors import ERR_CORRUPT_DATA, ERR_READ_PAST_END, DecodeError

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")

_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_INT64 = struct.Struct(">q")
_UINT64 = struct.Struct(">Q")
_UINT16 = struct.Struct(">H")


class Cursor:
    """Sequential reader with a one-way failure latch."""

    def __init__(self, data: bytes) -> None:
        self._buf = bytes(data)
        self._pos = 0
        self._error: Optional[DecodeError] = None

    # ── State ─────────────────────────────────────────────────

    @property
    def ok(self) -> bool:
        return self._error is None

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._buf)

    def _fail(self, code: str, msg: str) -> DecodeError:
        err = DecodeError(code, "{} at offset {}".format(msg, self._pos))
        self._error = err
        return err

    def _take(self, n: int, what: str) -> bytes:
        if self._error is not None:
            raise DecodeError(self._error.code, str(self._error))
        if n < 0 or self._pos + n > len(self._buf):
            raise self._fail(ERR_READ_PAST_END, "truncated " + what)
        chunk = self._buf[self._pos:self._pos + n]
        self._pos += n
        return chunk

    # ── Fixed-width integers ──────────────────────────────────

    def read_int32(self) -> int:
        return _INT32.unpack(self._take(4, "int32"))[0]

    def read_uint32(self) -> int:
        return _UINT32.unpack(self._take(4, "uint32"))[0]

    def read_int64(self) -> int:
        return _INT64.unpack(self._take(8, "int64"))[0]

    def read_uint64(self) -> int:
        return _UINT64.unpack(self._take(8, "uint64"))[0]

    def read_uint16(self) -> int:
        return _UINT16.unpack(self._take(2, "uint16"))[0]

    # ── Length-prefixed values ────────────────────────────────

    def read_raw(self, n: int) -> bytes:
        """Read exactly n bytes with no length prefix."""
        return self._take(n, "raw data")

    def read_bytes(self) -> bytes:
        n = self.read_uint32()
        if n == NULL_LENGTH:
            return b""
        return self._take(n, "byte array payload")

    def read_string(self) -> str:
        n = self.read_uint32()
        if n == NULL_LENGTH:
            return ""
        if n & 0x1:
            raise self._fail(ERR_CORRUPT_DATA, "odd UTF-16 string length")
        raw = self._take(n, "string payload")
        # Lone surrogates were legal in the writer; keep them.
        return raw.decode("utf-16-be", errors="surrogatepass")

    # ── Containers ────────────────────────────────────────────

    def _read_count(self) -> int:
        count = self.read_uint32()
        # Every element takes at least one byte.
        if count > self.remaining:
            raise self._fail(ERR_READ_PAST_END, "container count {} exceeds payload".format(count))
        return count

    def read_vector(self, read_item: Callable[[], T]) -> List[T]:
        count = self._read_count()
        return [read_item() for _ in range(count)]

    def read_pairs(self, read_first: Callable[[], K],
                   read_second: Callable[[], V]) -> List[Tuple[K, V]]:
        """vector<pair<K, V>> — order preserved, duplicates kept."""
        count = self._read_count()
        out: List[Tuple[K, V]] = []
        for _ in range(count):
            first = read_first()
            out.append((first, read_second()))
        return out

    def read_map(self, read_key: Callable[[], K],
                 read_value: Callable[[], V]) -> Dict[K, V]:
        """map<K, V> — a repeated key keeps the last value."""
        return dict(self.read_pairs(read_key, read_value))
