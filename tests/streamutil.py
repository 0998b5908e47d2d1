"""Test-only QDataStream writer for building settings stream fixtures.

The package itself never writes settings; fixtures need the exact byte
layout the old writers produced, so it lives here.
"""

from __future__ import annotations

import os
import struct
import sys
from typing import Iterable, List, Optional, Tuple

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dbiread import Collaborators, Cursor, LegacyContext, ReadOptions, read_setting


class StreamWriter:
    def __init__(self) -> None:
        self._parts: List[bytes] = []

    def int32(self, v: int) -> "StreamWriter":
        self._parts.append(struct.pack(">i", v))
        return self

    def uint32(self, v: int) -> "StreamWriter":
        self._parts.append(struct.pack(">I", v))
        return self

    def int64(self, v: int) -> "StreamWriter":
        self._parts.append(struct.pack(">q", v))
        return self

    def uint64(self, v: int) -> "StreamWriter":
        self._parts.append(struct.pack(">Q", v))
        return self

    def uint16(self, v: int) -> "StreamWriter":
        self._parts.append(struct.pack(">H", v))
        return self

    def raw(self, b: bytes) -> "StreamWriter":
        self._parts.append(bytes(b))
        return self

    def bytes_(self, b: bytes) -> "StreamWriter":
        return self.uint32(len(b)).raw(b)

    def string(self, s: str) -> "StreamWriter":
        data = s.encode("utf-16-be", errors="surrogatepass")
        return self.uint32(len(data)).raw(data)

    def proxy(self, stored_type: int, host: str, port: int,
              user: str = "", password: str = "") -> "StreamWriter":
        return (self.int32(stored_type).string(host).int32(port)
                .string(user).string(password))

    def getvalue(self) -> bytes:
        return b"".join(self._parts)


def block(block_id: int, payload: bytes = b"") -> bytes:
    return struct.pack(">I", block_id) + payload


def settings_stream(version: int, blocks: Iterable[bytes]) -> bytes:
    return struct.pack(">i", version) + b"".join(blocks)


def run_block(block_id: int, payload: bytes, version: int = 8006,
              collab: Optional[Collaborators] = None,
              context: Optional[LegacyContext] = None,
              options: Optional[ReadOptions] = None,
              ) -> Tuple[Collaborators, LegacyContext, Cursor]:
    """Decode a single block payload against fresh (or given) state."""
    collab = collab if collab is not None else Collaborators()
    context = context if context is not None else LegacyContext()
    cursor = Cursor(payload)
    read_setting(block_id, cursor, version, context, collab, options)
    return collab, context, cursor
