"""Legacy Context — values decoded now, applied after the pass.

A context lives for exactly one load attempt.  Fields are last-write-wins
except `fallback_config_legacy_dc_options` (additive) and the key lists.
Integer limits use 0 for "not present"; the reconciler only applies
positive values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ._constants import (
    SOURCE_CHANNEL,
    SOURCE_GROUP,
    SOURCE_USER,
    TYPE_AUDIO_FILE,
    TYPE_AUTOPLAY_GIF,
    TYPE_AUTOPLAY_VIDEO,
    TYPE_AUTOPLAY_VIDEO_MESSAGE,
    TYPE_FILE,
    TYPE_PHOTO,
    TYPE_VIDEO,
    TYPE_VIDEO_MESSAGE,
    TYPE_VOICE_MESSAGE,
)
from ._dc_options import DcOptions

SOURCES = (SOURCE_USER, SOURCE_GROUP, SOURCE_CHANNEL)
TYPES = (
    TYPE_PHOTO,
    TYPE_AUDIO_FILE,
    TYPE_VOICE_MESSAGE,
    TYPE_VIDEO_MESSAGE,
    TYPE_VIDEO,
    TYPE_FILE,
    TYPE_AUTOPLAY_VIDEO,
    TYPE_AUTOPLAY_VIDEO_MESSAGE,
    TYPE_AUTOPLAY_GIF,
)

# Byte limit assumed for a (source, type) pair nobody has set.
DEFAULT_BYTES_LIMIT = 8 * 1024 * 1024


@dataclass
class AutoDownloadSettings:
    """Per-(source, type) byte limits; only explicitly set pairs are stored."""

    limits: Dict[Tuple[str, str], int] = field(default_factory=dict)

    def set_bytes_limit(self, source: str, type_: str, limit: int) -> None:
        if source not in SOURCES:
            raise ValueError("unknown auto-download source: {}".format(source))
        if type_ not in TYPES:
            raise ValueError("unknown auto-download type: {}".format(type_))
        self.limits[(source, type_)] = limit

    def bytes_limit(self, source: str, type_: str) -> int:
        return self.limits.get((source, type_), DEFAULT_BYTES_LIMIT)


@dataclass
class SessionSettings:
    """Account-scoped settings that old streams stored alongside app ones."""

    auto_download: AutoDownloadSettings = field(default_factory=AutoDownloadSettings)
    dialogs_filters_enabled: bool = False
    hidden_pinned_messages: Dict[int, int] = field(default_factory=dict)
    serialized: List[bytes] = field(default_factory=list)

    def set_hidden_pinned_message_id(self, peer_id: int, msg_id: int) -> None:
        self.hidden_pinned_messages[peer_id] = msg_id

    def add_from_serialized(self, blob: bytes) -> None:
        self.serialized.append(bytes(blob))


@dataclass
class LegacyContext:
    # Format version from the stream header.
    version: int = 0
    # Supplied by the host before the pass (read from the map file).
    legacy_has_custom_day_background: bool = False

    # ── Fallback config pieces ────────────────────────────────
    fallback_config_legacy_dc_options: DcOptions = field(default_factory=DcOptions)
    fallback_config_legacy_chat_size_max: int = 0
    fallback_config_legacy_saved_gifs_limit: int = 0
    fallback_config_legacy_stickers_recent_limit: int = 0
    fallback_config_legacy_stickers_faved_limit: int = 0
    fallback_config_legacy_megagroup_size_max: int = 0
    fallback_config_legacy_txt_domain_string: str = ""
    fallback_config: bytes = b""

    # ── Authorization ─────────────────────────────────────────
    mtp_legacy_main_dc_id: int = 0
    mtp_legacy_user_id: int = 0
    mtp_legacy_keys: List[Tuple[int, bytes]] = field(default_factory=list)
    mtp_authorization: bytes = b""

    # ── Cache database ────────────────────────────────────────
    cache_total_size_limit: Optional[int] = None
    cache_total_time_limit: Optional[int] = None
    cache_big_file_total_size_limit: Optional[int] = None
    cache_big_file_total_time_limit: Optional[int] = None

    # ── Themes and backgrounds ────────────────────────────────
    theme_key_legacy: int = 0
    theme_key_day: int = 0
    theme_key_night: int = 0
    background_key_day: int = 0
    background_key_night: int = 0
    background_keys_read: bool = False
    tile_day: bool = False
    tile_night: bool = True
    tile_read: bool = False

    # ── Languages ─────────────────────────────────────────────
    lang_pack_key: int = 0
    languages_key: int = 0

    session_settings: SessionSettings = field(default_factory=SessionSettings)
