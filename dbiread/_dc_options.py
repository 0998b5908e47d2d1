"""Endpoint (DC option) table built from legacy blocks.

Two legacy sources feed it: single-entry blocks (dbiDcOptionOldOld,
dbiDcOptionOld) and a serialized table (dbiDcOptionsOld).  The serialized
layout is:

    int32 minus_version        < 0: version = -value, int32 count follows
                               >= 0: version 0, the value is the count
    count x {
        int32 id, int32 flags, int32 port, int32 ip_size (1..45)
        raw ip
        version > 0: int32 secret_size (0..32), raw secret
    }
    version > 1, if data remains:
        int32 key_count
        key_count x { int32 dc_id, bytes n, bytes e }   CDN public keys

A malformed table is logged and abandoned; whatever was read before the
bad entry stays.  It never fails the outer block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from ._constants import DC_OPTIONS_MAX_IP_SIZE, DC_OPTIONS_MAX_SECRET_SIZE
from ._errors import DecodeError
from ._stream import Cursor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DcOption:
    dc_id: int
    flags: int
    ip: str
    port: int
    secret: bytes = b""


@dataclass(frozen=True)
class CdnPublicKey:
    dc_id: int
    n: bytes
    e: bytes


class _BadTable(Exception):
    pass


@dataclass
class DcOptions:
    options: List[DcOption] = field(default_factory=list)
    cdn_public_keys: List[CdnPublicKey] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.options)

    def _add(self, option: DcOption) -> None:
        if option not in self.options:
            self.options.append(option)

    def construct_add_one(self, dc_id: int, flags: int, ip: str, port: int,
                          secret: bytes = b"") -> None:
        self._add(DcOption(dc_id, flags, ip, port, bytes(secret)))

    def add_from_other(self, other: "DcOptions") -> None:
        """Merge another table in; options already present are skipped."""
        for option in other.options:
            self._add(option)
        for key in other.cdn_public_keys:
            if key not in self.cdn_public_keys:
                self.cdn_public_keys.append(key)

    def construct_from_serialized(self, serialized: bytes) -> None:
        cursor = Cursor(serialized)
        try:
            self._read_serialized(cursor)
        except (DecodeError, _BadTable) as e:
            logger.warning("bad data in serialized dc options: %s", e)

    def _read_serialized(self, cursor: Cursor) -> None:
        minus_version = cursor.read_int32()
        version = -minus_version if minus_version < 0 else 0
        count = cursor.read_int32() if version > 0 else minus_version
        if count < 0:
            raise _BadTable("option count {}".format(count))

        for _ in range(count):
            dc_id = cursor.read_int32()
            flags = cursor.read_int32()
            port = cursor.read_int32()
            ip_size = cursor.read_int32()
            if ip_size <= 0 or ip_size > DC_OPTIONS_MAX_IP_SIZE:
                raise _BadTable("ip size {}".format(ip_size))
            ip = cursor.read_raw(ip_size).decode("latin-1")
            secret = b""
            if version > 0:
                secret_size = cursor.read_int32()
                if secret_size < 0 or secret_size > DC_OPTIONS_MAX_SECRET_SIZE:
                    raise _BadTable("secret size {}".format(secret_size))
                if secret_size > 0:
                    secret = cursor.read_raw(secret_size)
            self.construct_add_one(dc_id, flags, ip, port, secret)

        if cursor.at_end or version <= 1:
            return
        key_count = cursor.read_int32()
        if key_count < 0:
            raise _BadTable("cdn key count {}".format(key_count))
        for _ in range(key_count):
            dc_id = cursor.read_int32()
            n = cursor.read_bytes()
            e = cursor.read_bytes()
            key = CdnPublicKey(dc_id, n, e)
            if key not in self.cdn_public_keys:
                self.cdn_public_keys.append(key)

    def snapshot(self) -> List[Tuple[int, int, str, int, str]]:
        return [(o.dc_id, o.flags, o.ip, o.port, o.secret.hex()) for o in self.options]
