"""Proxy entries as stored by the connection-type blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass

from ._constants import (
    CONNECTION_HTTP_PROXY,
    CONNECTION_TCP_PROXY,
    PROXY_TYPE_HTTP,
    PROXY_TYPE_MTPROTO,
    PROXY_TYPE_NONE,
    PROXY_TYPE_SHIFT,
    PROXY_TYPE_SOCKS5,
)
from ._stream import Cursor

# MTProto secrets: plain, "dd"-prefixed (random padding) or "ee"-prefixed
# (fake TLS, followed by the hex-encoded domain).
_SECRET_PLAIN = re.compile(r"^[a-fA-F0-9]{32}$")
_SECRET_PADDED = re.compile(r"^(dd|DD)[a-fA-F0-9]{32}$")
_SECRET_FAKE_TLS = re.compile(r"^(ee|EE)[a-fA-F0-9]{32}(?:[a-fA-F0-9]{2})+$")

# Stored type -> proxy type.  Anything else decodes as PROXY_TYPE_NONE.
_STORED_TYPES = {
    CONNECTION_TCP_PROXY: PROXY_TYPE_SOCKS5,
    CONNECTION_HTTP_PROXY: PROXY_TYPE_HTTP,
    PROXY_TYPE_SHIFT + PROXY_TYPE_SOCKS5: PROXY_TYPE_SOCKS5,
    PROXY_TYPE_SHIFT + PROXY_TYPE_HTTP: PROXY_TYPE_HTTP,
    PROXY_TYPE_SHIFT + PROXY_TYPE_MTPROTO: PROXY_TYPE_MTPROTO,
}


def valid_mtproto_secret(password: str) -> bool:
    return bool(
        _SECRET_PLAIN.match(password)
        or _SECRET_PADDED.match(password)
        or _SECRET_FAKE_TLS.match(password)
    )


@dataclass(frozen=True)
class ProxyData:
    type: int = PROXY_TYPE_NONE
    host: str = ""
    port: int = 0
    user: str = ""
    password: str = ""

    @property
    def valid(self) -> bool:
        if self.type == PROXY_TYPE_NONE or not self.host or not self.port:
            return False
        if self.type == PROXY_TYPE_MTPROTO:
            return valid_mtproto_secret(self.password)
        return True

    def __bool__(self) -> bool:
        return self.valid


def proxy_type_from_stored(stored: int) -> int:
    return _STORED_TYPES.get(stored, PROXY_TYPE_NONE)


def read_proxy(cursor: Cursor) -> ProxyData:
    """Read one list-format entry: type, host, port, user, password."""
    stored_type = cursor.read_int32()
    host = cursor.read_string()
    port = cursor.read_int32()
    user = cursor.read_string()
    password = cursor.read_string()
    return ProxyData(
        type=proxy_type_from_stored(stored_type),
        host=host,
        port=port & 0xFFFFFFFF,
        user=user,
        password=password,
    )
