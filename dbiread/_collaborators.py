"""External configuration objects the decoder writes into.

The application owns the real objects; the classes here are in-memory
stand-ins with the same attribute surface.  The CLI decodes into them and
the tests inject them.  Hosts with their own objects only need to match
the attributes and methods the dispatcher touches.

Every stand-in supports `reset()`, which restores defaults, and `restore()`,
which copies fields back from a snapshot.  A failed load restores the
snapshot taken before the pass, so nothing from a half-read stream
survives and nothing the host set beforehand is lost.
"""

from __future__ import annotations

import copy
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, Callable, Dict, List, Optional, Tuple

from ._constants import (
    NOTIFY_VIEW_SHOW_PREVIEW,
    PROXY_SETTINGS_SYSTEM,
    SCALE_AUTO,
    SCREEN_CORNER_BOTTOM_RIGHT,
    SEND_FILES_ALBUM,
    SUBMIT_ENTER,
    WORK_MODE_WINDOW_AND_TRAY,
)
from ._dc_options import DcOptions
from ._proxy import ProxyData


class _Resettable:
    def reset(self) -> None:
        for f in fields(self):
            if f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())
            else:
                setattr(self, f.name, f.default)

    def restore(self, saved: Any) -> None:
        for f in fields(self):
            setattr(self, f.name, getattr(saved, f.name))


@dataclass
class AppSettings(_Resettable):
    """Application-wide settings store."""

    sound_notify: bool = True
    flash_bounce_notify: bool = True
    desktop_notify: bool = True
    native_notifications: bool = False
    notifications_count: int = 3
    notifications_corner: int = SCREEN_CORNER_BOTTOM_RIGHT
    notify_view: int = NOTIFY_VIEW_SHOW_PREVIEW
    include_muted_counter: bool = True
    moderate_mode_enabled: bool = False
    last_seen_warning_seen: bool = False
    dialogs_width_ratio: float = 5.0 / 14
    send_submit_way: int = SUBMIT_ENTER
    adaptive_for_wide: bool = True
    auto_lock: int = 3600
    replace_emoji: bool = True
    suggest_emoji: bool = True
    suggest_stickers_by_emoji: bool = True
    ask_download_path: bool = False
    download_path: str = ""
    download_path_bookmark: bytes = b""
    send_files_way: str = SEND_FILES_ALBUM
    song_volume: float = 0.9
    video_volume: float = 0.9
    voice_msg_playback_doubled: bool = False
    call_output_device_id: str = "default"
    call_input_device_id: str = "default"
    call_output_volume: int = 100
    call_input_volume: int = 100
    call_audio_ducking_enabled: bool = True
    serialized: List[bytes] = field(default_factory=list)

    def add_from_serialized(self, blob: bytes) -> None:
        # Current-format settings are parsed by the settings store itself.
        self.serialized.append(bytes(blob))


@dataclass(frozen=True)
class WindowPosition:
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    moncrc: int = 0
    maximized: int = 0


@dataclass
class GlobalSettings(_Resettable):
    """Process-wide flags that lived outside the settings store."""

    auto_start: bool = False
    start_minimized: bool = False
    send_to_menu: bool = False
    use_external_video_player: bool = False
    animations_disabled: bool = False
    work_mode: int = WORK_MODE_WINDOW_AND_TRAY
    try_ipv6: bool = False
    seen_tray_tooltip: bool = False
    auto_update: bool = True
    last_update_check: int = 0
    # Non-auto means the scale came from the command line.
    config_scale: int = SCALE_AUTO
    window_position: WindowPosition = field(default_factory=WindowPosition)
    dialog_last_path: str = ""
    recent_emoji_preload: List[Tuple[str, int]] = field(default_factory=list)
    recent_stickers_preload: List[Tuple[int, int]] = field(default_factory=list)
    emoji_variants: Dict[str, int] = field(default_factory=dict)
    local_passcode_changes: int = 0

    def notify_local_passcode_changed(self) -> None:
        self.local_passcode_changes += 1


@dataclass
class ProxyRegistry(_Resettable):
    proxies: List[ProxyData] = field(default_factory=list)
    selected: ProxyData = field(default_factory=ProxyData)
    settings: int = PROXY_SETTINGS_SYSTEM
    use_for_calls: bool = False
    refreshes: int = 0

    def set_list(self, proxies: List[ProxyData]) -> None:
        self.proxies = list(proxies)

    def set_selected(self, proxy: ProxyData) -> None:
        self.selected = proxy

    def set_settings(self, settings: int) -> None:
        self.settings = settings

    def set_use_for_calls(self, enabled: bool) -> None:
        self.use_for_calls = enabled

    def refresh(self) -> None:
        """Re-apply the selected proxy to live connections."""
        self.refreshes += 1


@dataclass
class ThemeRegistry(_Resettable):
    night_mode: bool = False


@dataclass
class UpdateChecker(_Resettable):
    disabled: bool = False
    running: bool = True

    def stop(self) -> None:
        self.running = False


class EmojiCatalog:
    """Resolves emoji text to the id the emoji panel uses.

    With no `known` set every well-formed text resolves to itself, which
    is what a complete emoji table does for every key old streams wrote.
    """

    def __init__(self, known: Optional[Dict[str, str]] = None) -> None:
        self._known = known

    def find(self, text: str) -> Optional[str]:
        if not text:
            return None
        if self._known is None:
            return text
        return self._known.get(text)

    def reset(self) -> None:
        pass


@dataclass
class FallbackConfig(_Resettable):
    """Endpoints and limits used before the server config arrives."""

    dc_options: DcOptions = field(default_factory=DcOptions)
    chat_size_max: int = 200
    megagroup_size_max: int = 10000
    saved_gifs_limit: int = 200
    stickers_recent_limit: int = 30
    stickers_faved_limit: int = 5
    txt_domain_string: str = ""
    serialized: bytes = b""

    @classmethod
    def from_serialized(cls, blob: bytes) -> "FallbackConfig":
        # The transport layer parses the blob when it first needs it.
        return cls(serialized=bytes(blob))


@dataclass
class Collaborators:
    """Handle bundle passed through one decode pass."""

    app: AppSettings = field(default_factory=AppSettings)
    globals: GlobalSettings = field(default_factory=GlobalSettings)
    proxy: ProxyRegistry = field(default_factory=ProxyRegistry)
    theme: ThemeRegistry = field(default_factory=ThemeRegistry)
    updater: UpdateChecker = field(default_factory=UpdateChecker)
    emoji: EmojiCatalog = field(default_factory=EmojiCatalog)
    fallback_config: FallbackConfig = field(default_factory=FallbackConfig)
    construct_fallback_config: Callable[[bytes], FallbackConfig] = FallbackConfig.from_serialized

    def _targets(self) -> Tuple[Any, ...]:
        return (self.app, self.globals, self.proxy, self.theme,
                self.updater, self.fallback_config)

    def reset(self) -> None:
        for target in self._targets():
            target.reset()
        self.emoji.reset()

    def snapshot(self) -> Tuple[Any, ...]:
        """Deep copy of every object a pass can write to."""
        return tuple(copy.deepcopy(target) for target in self._targets())

    def restore(self, saved: Tuple[Any, ...]) -> None:
        """Put back a `snapshot()` in place; held references stay valid."""
        for target, state in zip(self._targets(), saved):
            target.restore(state)
