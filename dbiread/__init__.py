"""dbiread — decoder for legacy local-settings streams.

Reads the block-tagged settings stream older desktop builds wrote, applies
each block to live configuration objects, and reconciles the pieces that
only make sense once the whole stream is known.

Quick start:
    >>> from dbiread import Collaborators, load_settings
    >>> collab = Collaborators()
    >>> result = load_settings(raw_stream, collab)
    >>> result.ok, result.version
    (True, 8006)

A stream that fails anywhere leaves `collab` as it was before the call:
    >>> load_settings(b"\\x00\\x00\\x1f\\x40\\x00\\x00\\x0f\\xff", collab).ok
    False
"""

from __future__ import annotations

from ._collaborators import (
    AppSettings,
    Collaborators,
    EmojiCatalog,
    FallbackConfig,
    GlobalSettings,
    ProxyRegistry,
    ThemeRegistry,
    UpdateChecker,
    WindowPosition,
)
from ._config import ReadOptions
from ._constants import BlockId
from ._context import AutoDownloadSettings, LegacyContext, SessionSettings
from ._dc_options import CdnPublicKey, DcOption, DcOptions
from ._dispatch import block_name, read_setting
from ._errors import (
    ERR_BAD_VALUE,
    ERR_CORRUPT_DATA,
    ERR_READ_PAST_END,
    ERR_UNKNOWN_BLOCK,
    DecodeError,
)
from ._loader import LoadResult, decode_settings, load_settings
from ._proxy import ProxyData
from ._reconcile import apply_fallback_config
from ._stream import Cursor

__version__ = "1.0.0"

__all__ = [
    # Public API functions
    "decode_settings",
    "load_settings",
    "read_setting",
    "apply_fallback_config",
    "block_name",
    # Types
    "AppSettings",
    "AutoDownloadSettings",
    "BlockId",
    "CdnPublicKey",
    "Collaborators",
    "Cursor",
    "DcOption",
    "DcOptions",
    "EmojiCatalog",
    "FallbackConfig",
    "GlobalSettings",
    "LegacyContext",
    "LoadResult",
    "ProxyData",
    "ProxyRegistry",
    "ReadOptions",
    "SessionSettings",
    "ThemeRegistry",
    "UpdateChecker",
    "WindowPosition",
    # Exception
    "DecodeError",
    # Error codes
    "ERR_READ_PAST_END",
    "ERR_CORRUPT_DATA",
    "ERR_UNKNOWN_BLOCK",
    "ERR_BAD_VALUE",
]
