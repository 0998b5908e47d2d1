"""Block dispatcher — one decode routine per historical block id.

`read_setting()` decodes a single block from the cursor and applies it,
either to a collaborator (settings that take effect immediately) or to the
LegacyContext (values that need the rest of the stream first).

Block payloads carry no length of their own, so the table below is closed:
an id we don't know means we can't find the next block, and the whole pass
fails.  Routines raise DecodeError on the first bad read or invalid value;
nothing is written by a routine before all of its fields are read.

Two routines are deliberately softer than the rest:
  - dbiCallSettingsOld wraps a second stream; if that inner stream is bad
    the block is a no-op, not a failure.
  - collection blocks (proxy lists, recent emoji) drop individual entries
    that don't resolve and keep the rest.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from ._collaborators import Collaborators, WindowPosition
from ._config import ReadOptions
from ._constants import (
    AUTH_KEY_SIZE,
    AUTO_DOWNLOAD_NO_GROUPS,
    AUTO_DOWNLOAD_NO_PRIVATE,
    CONNECTION_HTTP_PROXY,
    CONNECTION_PROXIES_LIST,
    CONNECTION_PROXIES_LIST_OLD,
    CONNECTION_TCP_PROXY,
    DEFAULT_NOTIFICATIONS_COUNT,
    INT32_MAX,
    INT64_MAX,
    NOTIFY_VIEW_SHOW_NAME,
    NOTIFY_VIEW_SHOW_NOTHING,
    NOTIFY_VIEW_SHOW_PREVIEW,
    PROXY_SETTINGS_DISABLED,
    PROXY_SETTINGS_ENABLED,
    PROXY_SETTINGS_SYSTEM,
    PROXY_TYPE_HTTP,
    PROXY_TYPE_SOCKS5,
    SCALE_AUTO,
    SCALE_MAX,
    SCALE_MIN,
    SCALE_OLD_VALUES,
    SCREEN_CORNER_BOTTOM_RIGHT,
    SEND_FILES_ALBUM,
    SEND_FILES_FILES,
    SOURCE_CHANNEL,
    SOURCE_GROUP,
    SOURCE_USER,
    SUBMIT_CTRL_ENTER,
    SUBMIT_ENTER,
    TILE_BACKGROUND_VERSION,
    TYPE_AUTOPLAY_GIF,
    TYPE_AUTOPLAY_VIDEO,
    TYPE_AUTOPLAY_VIDEO_MESSAGE,
    TYPE_PHOTO,
    TYPE_VOICE_MESSAGE,
    WORK_MODE_TRAY_ONLY,
    WORK_MODE_WINDOW_AND_TRAY,
    WORK_MODE_WINDOW_ONLY,
    BlockId,
)
from ._context import SOURCES, LegacyContext
from ._emoji import color_index_from_old_key, remap_legacy_key, text_from_old_key
from ._errors import ERR_BAD_VALUE, ERR_UNKNOWN_BLOCK, DecodeError
from ._proxy import ProxyData, read_proxy
from ._stream import Cursor

logger = logging.getLogger(__name__)


class _Pass(NamedTuple):
    cursor: Cursor
    version: int
    context: LegacyContext
    collab: Collaborators
    options: ReadOptions


Routine = Callable[[_Pass], None]


# ── Shared helpers ────────────────────────────────────────────

def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


# The cache time limit was once written through an int64 -> int32 cast,
# so "unlimited" reached disk in three shapes.
_NO_TIME_LIMIT_VALUES = (0, INT32_MAX, _to_int32(INT64_MAX))


def no_time_limit(stored: int) -> bool:
    return stored in _NO_TIME_LIMIT_VALUES


def normalize_time_limit(stored: int) -> int:
    """Map every stored "unlimited" to 0; reject other negatives."""
    if no_time_limit(stored):
        return 0
    if stored < 0:
        raise DecodeError(ERR_BAD_VALUE, "negative cache time limit {}".format(stored))
    return stored


def _check_cache_size(p: _Pass, size: int) -> int:
    if size <= p.options.max_data_size:
        raise DecodeError(ERR_BAD_VALUE, "cache size limit {} too small".format(size))
    return size


def check_scale(scale: int) -> int:
    if scale == SCALE_AUTO:
        return SCALE_AUTO
    return max(SCALE_MIN, min(scale, SCALE_MAX))


def _normalize_download_path(path: str) -> str:
    if path and path != "tmp" and not path.endswith("/"):
        return path + "/"
    return path


def _resolve_old_key(p: _Pass, key: int) -> Optional[str]:
    text = text_from_old_key(key)
    if text is None:
        return None
    return p.collab.emoji.find(text)


def _resolve_recent(p: _Pass, items: List[Tuple[int, int]],
                    remap: bool) -> List[Tuple[str, int]]:
    out: List[Tuple[str, int]] = []
    for key, count in items:
        if remap:
            key = remap_legacy_key(key)
        emoji_id = _resolve_old_key(p, key)
        if emoji_id:
            out.append((emoji_id, count))
    return out


# ── Routine factories for the one-field blocks ────────────────

def _skip(*readers: Callable[[Cursor], object]) -> Routine:
    """Deprecated block: read and drop its fields."""
    def routine(p: _Pass) -> None:
        for read in readers:
            read(p.cursor)
    return routine


def _app_flag(name: str) -> Routine:
    def routine(p: _Pass) -> None:
        v = p.cursor.read_int32()
        setattr(p.collab.app, name, v == 1)
    return routine


def _global_flag(name: str) -> Routine:
    def routine(p: _Pass) -> None:
        v = p.cursor.read_int32()
        setattr(p.collab.globals, name, v == 1)
    return routine


def _context_value(name: str, read: Callable[[Cursor], object]) -> Routine:
    def routine(p: _Pass) -> None:
        setattr(p.context, name, read(p.cursor))
    return routine


def _volume(name: str) -> Routine:
    def routine(p: _Pass) -> None:
        v = p.cursor.read_int32()
        setattr(p.collab.app, name, min(max(v / 1e6, 0.0), 1.0))
    return routine


_int32 = Cursor.read_int32
_uint32 = Cursor.read_uint32
_uint64 = Cursor.read_uint64
_string = Cursor.read_string
_bytes = Cursor.read_bytes


# ── Endpoints and authorization ───────────────────────────────

def _dc_option_old_old(p: _Pass) -> None:
    c = p.cursor
    dc_id = c.read_uint32()
    c.read_string()  # host, never used
    ip = c.read_string()
    port = c.read_uint32()
    p.context.fallback_config_legacy_dc_options.construct_add_one(dc_id, 0, ip, port)


def _dc_option_old(p: _Pass) -> None:
    c = p.cursor
    dc_id_with_shift = c.read_uint32()
    flags = c.read_int32()
    ip = c.read_string()
    port = c.read_uint32()
    p.context.fallback_config_legacy_dc_options.construct_add_one(
        dc_id_with_shift, flags, ip, port)


def _dc_options_old(p: _Pass) -> None:
    serialized = p.cursor.read_bytes()
    p.context.fallback_config_legacy_dc_options.construct_from_serialized(serialized)


def _user(p: _Pass) -> None:
    user_id = p.cursor.read_int32()
    dc_id = p.cursor.read_uint32()
    logger.debug("user found, dc %d, uid %d", dc_id, user_id)
    p.context.mtp_legacy_main_dc_id = dc_id
    p.context.mtp_legacy_user_id = user_id


def _key(p: _Pass) -> None:
    dc_id = p.cursor.read_int32()
    key = p.cursor.read_raw(AUTH_KEY_SIZE)
    p.context.mtp_legacy_keys.append((dc_id, key))


# ── Serialized sub-settings ───────────────────────────────────

def _application_settings(p: _Pass) -> None:
    p.collab.app.add_from_serialized(p.cursor.read_bytes())


def _session_settings(p: _Pass) -> None:
    p.context.session_settings.add_from_serialized(p.cursor.read_bytes())


def _call_settings_old(p: _Pass) -> None:
    blob = p.cursor.read_bytes()
    inner = Cursor(blob)
    try:
        output_device_id = inner.read_string()
        output_volume = inner.read_int32()
        input_device_id = inner.read_string()
        input_volume = inner.read_int32()
        ducking_enabled = inner.read_int32()
    except DecodeError as e:
        # Outer block is fine; the call settings are just not applied.
        logger.warning("ignoring unreadable legacy call settings: %s", e)
        return
    app = p.collab.app
    app.call_output_device_id = output_device_id
    app.call_output_volume = output_volume
    app.call_input_device_id = input_device_id
    app.call_input_volume = input_volume
    app.call_audio_ducking_enabled = bool(ducking_enabled)


# ── Cache ─────────────────────────────────────────────────────

def _cache_settings_old(p: _Pass) -> None:
    size = p.cursor.read_int64()
    time = p.cursor.read_int32()
    _check_cache_size(p, size)
    time = normalize_time_limit(time)

    ctx = p.context
    ctx.cache_total_size_limit = size
    ctx.cache_total_time_limit = time
    ctx.cache_big_file_total_size_limit = size
    ctx.cache_big_file_total_time_limit = time


def _cache_settings(p: _Pass) -> None:
    c = p.cursor
    size = c.read_int64()
    time = c.read_int32()
    size_big = c.read_int64()
    time_big = c.read_int32()
    _check_cache_size(p, size)
    _check_cache_size(p, size_big)
    time = normalize_time_limit(time)
    time_big = normalize_time_limit(time_big)

    ctx = p.context
    ctx.cache_total_size_limit = size
    ctx.cache_total_time_limit = time
    ctx.cache_big_file_total_size_limit = size_big
    ctx.cache_big_file_total_time_limit = time_big


# ── Notifications ─────────────────────────────────────────────

def _sound_flash_bounce_notify_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    p.collab.app.sound_notify = (v & 0x01) == 0x01
    p.collab.app.flash_bounce_notify = (v & 0x02) == 0x00


def _notifications_count_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    p.collab.app.notifications_count = v if v > 0 else DEFAULT_NOTIFICATIONS_COUNT


def _notifications_corner_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    p.collab.app.notifications_corner = v if 0 <= v < 4 else SCREEN_CORNER_BOTTOM_RIGHT


def _notify_view_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    if v not in (NOTIFY_VIEW_SHOW_NOTHING, NOTIFY_VIEW_SHOW_NAME):
        v = NOTIFY_VIEW_SHOW_PREVIEW
    p.collab.app.notify_view = v


# ── Auto-download ─────────────────────────────────────────────

def _auto_download_old(p: _Pass) -> None:
    photo = p.cursor.read_int32()
    audio = p.cursor.read_int32()
    gif = p.cursor.read_int32()

    settings = p.context.session_settings.auto_download

    def apply(type_: str, value: int) -> None:
        if value & AUTO_DOWNLOAD_NO_PRIVATE:
            settings.set_bytes_limit(SOURCE_USER, type_, 0)
        if value & AUTO_DOWNLOAD_NO_GROUPS:
            settings.set_bytes_limit(SOURCE_GROUP, type_, 0)
            settings.set_bytes_limit(SOURCE_CHANNEL, type_, 0)

    apply(TYPE_PHOTO, photo)
    apply(TYPE_VOICE_MESSAGE, audio)
    apply(TYPE_AUTOPLAY_GIF, gif)
    apply(TYPE_AUTOPLAY_VIDEO_MESSAGE, gif)


def _auto_play_old(p: _Pass) -> None:
    gif = p.cursor.read_int32()
    if gif:
        return
    settings = p.context.session_settings.auto_download
    for source in SOURCES:
        for type_ in (TYPE_AUTOPLAY_GIF, TYPE_AUTOPLAY_VIDEO, TYPE_AUTOPLAY_VIDEO_MESSAGE):
            settings.set_bytes_limit(source, type_, 0)


# ── Session-scoped ────────────────────────────────────────────

def _dialogs_filters_old(p: _Pass) -> None:
    enabled = p.cursor.read_int32()
    p.context.session_settings.dialogs_filters_enabled = enabled == 1


def _hidden_pinned_messages_old(p: _Pass) -> None:
    pinned = p.cursor.read_map(p.cursor.read_uint64, p.cursor.read_int32)
    for peer_id, msg_id in pinned.items():
        p.context.session_settings.set_hidden_pinned_message_id(peer_id, msg_id)


# ── Window and process ────────────────────────────────────────

def _work_mode(p: _Pass) -> None:
    v = p.cursor.read_int32()
    if v not in (WORK_MODE_TRAY_ONLY, WORK_MODE_WINDOW_ONLY):
        v = WORK_MODE_WINDOW_AND_TRAY
    p.collab.globals.work_mode = v


def _auto_update(p: _Pass) -> None:
    v = p.cursor.read_int32()
    p.collab.globals.auto_update = v == 1
    if not p.collab.updater.disabled and not p.collab.globals.auto_update:
        p.collab.updater.stop()


def _last_update_check(p: _Pass) -> None:
    p.collab.globals.last_update_check = p.cursor.read_int32()


def _scale_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    g = p.collab.globals
    g.config_scale = check_scale(SCALE_OLD_VALUES.get(v, g.config_scale))


def _scale_percent(p: _Pass) -> None:
    v = p.cursor.read_int32()
    # A non-auto scale at this point was given on the command line.
    if p.collab.globals.config_scale == SCALE_AUTO:
        p.collab.globals.config_scale = check_scale(v)


def _window_position(p: _Pass) -> None:
    c = p.cursor
    position = WindowPosition(
        x=c.read_int32(),
        y=c.read_int32(),
        w=c.read_int32(),
        h=c.read_int32(),
        moncrc=c.read_int32(),
        maximized=c.read_int32(),
    )
    logger.debug("window position read from storage %d, %d, %d, %d (maximized %s)",
                 position.x, position.y, position.w, position.h, bool(position.maximized))
    p.collab.globals.window_position = position


def _dialog_last_path(p: _Pass) -> None:
    p.collab.globals.dialog_last_path = p.cursor.read_string()


# ── Proxy ─────────────────────────────────────────────────────

def _connection_type_old(p: _Pass) -> None:
    c = p.cursor
    v = c.read_int32()
    proxy = ProxyData()
    if v in (CONNECTION_HTTP_PROXY, CONNECTION_TCP_PROXY):
        host = c.read_string()
        port = c.read_int32()
        user = c.read_string()
        password = c.read_string()
        proxy = ProxyData(
            type=PROXY_TYPE_SOCKS5 if v == CONNECTION_TCP_PROXY else PROXY_TYPE_HTTP,
            host=host,
            port=port & 0xFFFFFFFF,
            user=user,
            password=password,
        )

    registry = p.collab.proxy
    registry.set_selected(proxy if proxy else ProxyData())
    registry.set_settings(PROXY_SETTINGS_ENABLED if proxy else PROXY_SETTINGS_SYSTEM)
    registry.set_list([proxy] if proxy else [])
    registry.refresh()


def _read_proxies_list(p: _Pass, connection_type: int) -> None:
    c = p.cursor
    count = c.read_int32()
    index = c.read_int32()
    settings = 0
    calls = 0
    if connection_type == CONNECTION_PROXIES_LIST:
        settings = c.read_int32()
        calls = c.read_int32()
    elif abs(index) > count:
        # Old lists folded "use for calls" into the index magnitude.
        calls = 1
        index -= count if index > 0 else -count

    proxies: List[ProxyData] = []
    for _ in range(count):
        proxy = read_proxy(c)
        if proxy:
            proxies.append(proxy)
        elif index < -len(proxies):
            index += 1
        elif index > len(proxies):
            index -= 1

    registry = p.collab.proxy
    registry.set_list(proxies)
    if connection_type == CONNECTION_PROXIES_LIST_OLD:
        settings = (PROXY_SETTINGS_ENABLED if 0 < index <= len(proxies)
                    else PROXY_SETTINGS_SYSTEM)
        index = abs(index)
    selected = proxies[index - 1] if 0 < index <= len(proxies) else ProxyData()
    registry.set_selected(selected)

    if settings == PROXY_SETTINGS_ENABLED:
        registry.set_settings(PROXY_SETTINGS_ENABLED if selected
                              else PROXY_SETTINGS_SYSTEM)
    elif settings in (PROXY_SETTINGS_DISABLED, PROXY_SETTINGS_SYSTEM):
        registry.set_settings(settings)
    else:
        registry.set_settings(PROXY_SETTINGS_SYSTEM)
    registry.set_use_for_calls(calls == 1)


def _connection_type(p: _Pass) -> None:
    connection_type = p.cursor.read_int32()
    if connection_type in (CONNECTION_PROXIES_LIST_OLD, CONNECTION_PROXIES_LIST):
        _read_proxies_list(p, connection_type)
    else:
        proxy = read_proxy(p.cursor)
        registry = p.collab.proxy
        if proxy:
            registry.set_list([proxy])
            registry.set_selected(proxy)
            if connection_type in (CONNECTION_TCP_PROXY, CONNECTION_HTTP_PROXY):
                registry.set_settings(PROXY_SETTINGS_ENABLED)
            else:
                registry.set_settings(PROXY_SETTINGS_SYSTEM)
        else:
            registry.set_list([])
            registry.set_selected(ProxyData())
            registry.set_settings(PROXY_SETTINGS_SYSTEM)
    p.collab.proxy.refresh()


# ── Themes and backgrounds ────────────────────────────────────

def _theme_key(p: _Pass) -> None:
    key_day = p.cursor.read_uint64()
    key_night = p.cursor.read_uint64()
    night_mode = p.cursor.read_uint32()
    p.context.theme_key_day = key_day
    p.context.theme_key_night = key_night
    p.collab.theme.night_mode = night_mode == 1


def _background_key(p: _Pass) -> None:
    key_day = p.cursor.read_uint64()
    key_night = p.cursor.read_uint64()
    p.context.background_key_day = key_day
    p.context.background_key_night = key_night
    p.context.background_keys_read = True


def _tile_background_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    ctx = p.context
    if p.version < TILE_BACKGROUND_VERSION and not ctx.legacy_has_custom_day_background:
        tile = False
    else:
        tile = v == 1
    # Historical assignment: the flag lands on the mode that is *not* current.
    if p.collab.theme.night_mode:
        ctx.tile_day = tile
    else:
        ctx.tile_night = tile
    ctx.tile_read = True


def _tile_background(p: _Pass) -> None:
    tile_day = p.cursor.read_int32()
    tile_night = p.cursor.read_int32()
    p.context.tile_day = bool(tile_day)
    p.context.tile_night = bool(tile_night)
    p.context.tile_read = True


# ── Input and files ───────────────────────────────────────────

def _send_key_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    if v not in (SUBMIT_ENTER, SUBMIT_CTRL_ENTER):
        raise DecodeError(ERR_BAD_VALUE, "bad send key {}".format(v))
    p.collab.app.send_submit_way = v


def _auto_lock_old(p: _Pass) -> None:
    p.collab.app.auto_lock = p.cursor.read_int32()
    p.collab.globals.notify_local_passcode_changed()


def _apply_download_path(p: _Pass, path: str, bookmark: bytes) -> None:
    if p.options.store_build:
        return
    p.collab.app.download_path_bookmark = bookmark
    p.collab.app.download_path = _normalize_download_path(path)


def _download_path_old_old(p: _Pass) -> None:
    path = p.cursor.read_string()
    _apply_download_path(p, path, b"")


def _download_path_old(p: _Pass) -> None:
    path = p.cursor.read_string()
    bookmark = p.cursor.read_bytes()
    _apply_download_path(p, path, bookmark)


def _compress_pasted_image_old(p: _Pass) -> None:
    v = p.cursor.read_int32()
    p.collab.app.send_files_way = SEND_FILES_ALBUM if v == 1 else SEND_FILES_FILES


def _dialogs_width_ratio_old(p: _Pass) -> None:
    p.collab.app.dialogs_width_ratio = p.cursor.read_int32() / 1000000.0


def _playback_speed_old(p: _Pass) -> None:
    p.collab.app.voice_msg_playback_doubled = p.cursor.read_int32() == 2


# ── Emoji and stickers ────────────────────────────────────────

def _recent_emoji_old_old(p: _Pass) -> None:
    items = p.cursor.read_pairs(p.cursor.read_uint32, p.cursor.read_uint16)
    if items:
        p.collab.globals.recent_emoji_preload = _resolve_recent(p, items, remap=True)


def _recent_emoji_old(p: _Pass) -> None:
    items = p.cursor.read_pairs(p.cursor.read_uint64, p.cursor.read_uint16)
    if items:
        p.collab.globals.recent_emoji_preload = _resolve_recent(p, items, remap=False)


def _recent_emoji(p: _Pass) -> None:
    items = p.cursor.read_pairs(p.cursor.read_string, p.cursor.read_uint16)
    p.collab.globals.recent_emoji_preload = items


def _recent_stickers(p: _Pass) -> None:
    items = p.cursor.read_pairs(p.cursor.read_uint64, p.cursor.read_uint16)
    p.collab.globals.recent_stickers_preload = items


def _emoji_variants_old(p: _Pass) -> None:
    stored = p.cursor.read_map(p.cursor.read_uint32, p.cursor.read_uint64)
    variants: Dict[str, int] = {}
    for key, value in stored.items():
        emoji_id = _resolve_old_key(p, key)
        if not emoji_id:
            continue
        index = color_index_from_old_key(value)
        if index >= 0:
            variants[emoji_id] = index
    p.collab.globals.emoji_variants = variants


def _emoji_variants(p: _Pass) -> None:
    variants = p.cursor.read_map(p.cursor.read_string, p.cursor.read_int32)
    p.collab.globals.emoji_variants = variants


# ── Dispatch table ────────────────────────────────────────────

_ROUTINES: Dict[int, Routine] = {
    BlockId.dbiDcOptionOldOld: _dc_option_old_old,
    BlockId.dbiDcOptionOld: _dc_option_old,
    BlockId.dbiDcOptionsOld: _dc_options_old,
    BlockId.dbiApplicationSettings: _application_settings,
    BlockId.dbiChatSizeMaxOld: _context_value("fallback_config_legacy_chat_size_max", _int32),
    BlockId.dbiSavedGifsLimitOld: _context_value("fallback_config_legacy_saved_gifs_limit", _int32),
    BlockId.dbiStickersRecentLimitOld: _context_value("fallback_config_legacy_stickers_recent_limit", _int32),
    BlockId.dbiStickersFavedLimitOld: _context_value("fallback_config_legacy_stickers_faved_limit", _int32),
    BlockId.dbiMegagroupSizeMaxOld: _context_value("fallback_config_legacy_megagroup_size_max", _int32),
    BlockId.dbiUser: _user,
    BlockId.dbiKey: _key,
    BlockId.dbiMtpAuthorization: _context_value("mtp_authorization", _bytes),
    BlockId.dbiAutoStart: _global_flag("auto_start"),
    BlockId.dbiStartMinimized: _global_flag("start_minimized"),
    BlockId.dbiSendToMenu: _global_flag("send_to_menu"),
    BlockId.dbiUseExternalVideoPlayer: _global_flag("use_external_video_player"),
    BlockId.dbiCacheSettingsOld: _cache_settings_old,
    BlockId.dbiCacheSettings: _cache_settings,
    BlockId.dbiAnimationsDisabled: _global_flag("animations_disabled"),
    BlockId.dbiSoundFlashBounceNotifyOld: _sound_flash_bounce_notify_old,
    BlockId.dbiAutoDownloadOld: _auto_download_old,
    BlockId.dbiAutoPlayOld: _auto_play_old,
    BlockId.dbiDialogsModeOld: _skip(_int32, _int32),
    BlockId.dbiDialogsFiltersOld: _dialogs_filters_old,
    BlockId.dbiModerateModeOld: _app_flag("moderate_mode_enabled"),
    BlockId.dbiIncludeMutedOld: _app_flag("include_muted_counter"),
    BlockId.dbiShowingSavedGifsOld: _skip(_int32),
    BlockId.dbiDesktopNotifyOld: _app_flag("desktop_notify"),
    BlockId.dbiWindowsNotificationsOld: _skip(_int32),
    BlockId.dbiNativeNotificationsOld: _app_flag("native_notifications"),
    BlockId.dbiNotificationsCountOld: _notifications_count_old,
    BlockId.dbiNotificationsCornerOld: _notifications_corner_old,
    BlockId.dbiDialogsWidthRatioOld: _dialogs_width_ratio_old,
    BlockId.dbiLastSeenWarningSeenOld: _app_flag("last_seen_warning_seen"),
    BlockId.dbiSessionSettings: _session_settings,
    BlockId.dbiWorkMode: _work_mode,
    BlockId.dbiTxtDomainStringOldOld: _skip(_string),
    BlockId.dbiTxtDomainStringOld: _context_value("fallback_config_legacy_txt_domain_string", _string),
    BlockId.dbiConnectionTypeOld: _connection_type_old,
    BlockId.dbiConnectionType: _connection_type,
    BlockId.dbiThemeKeyOld: _context_value("theme_key_legacy", _uint64),
    BlockId.dbiThemeKey: _theme_key,
    BlockId.dbiBackgroundKey: _background_key,
    BlockId.dbiLangPackKey: _context_value("lang_pack_key", _uint64),
    BlockId.dbiLanguagesKey: _context_value("languages_key", _uint64),
    BlockId.dbiTryIPv6: _global_flag("try_ipv6"),
    BlockId.dbiSeenTrayTooltip: _global_flag("seen_tray_tooltip"),
    BlockId.dbiAutoUpdate: _auto_update,
    BlockId.dbiLastUpdateCheck: _last_update_check,
    BlockId.dbiScaleOld: _scale_old,
    BlockId.dbiScalePercent: _scale_percent,
    BlockId.dbiLangOld: _skip(_int32),
    BlockId.dbiLangFileOld: _skip(_string),
    BlockId.dbiWindowPosition: _window_position,
    BlockId.dbiLoggedPhoneNumberOld: _skip(_string),
    BlockId.dbiMutePeerOld: _skip(_uint64),
    BlockId.dbiMutedPeersOld: _skip(lambda c: c.read_vector(c.read_uint64)),
    BlockId.dbiSendKeyOld: _send_key_old,
    BlockId.dbiCatsAndDogs: _skip(_int32),
    BlockId.dbiTileBackgroundOld: _tile_background_old,
    BlockId.dbiTileBackground: _tile_background,
    BlockId.dbiAdaptiveForWideOld: _app_flag("adaptive_for_wide"),
    BlockId.dbiAutoLockOld: _auto_lock_old,
    BlockId.dbiReplaceEmojiOld: _app_flag("replace_emoji"),
    BlockId.dbiSuggestEmojiOld: _app_flag("suggest_emoji"),
    BlockId.dbiSuggestStickersByEmojiOld: _app_flag("suggest_stickers_by_emoji"),
    BlockId.dbiDefaultAttach: _skip(_int32),
    BlockId.dbiNotifyViewOld: _notify_view_old,
    BlockId.dbiAskDownloadPathOld: _app_flag("ask_download_path"),
    BlockId.dbiDownloadPathOldOld: _download_path_old_old,
    BlockId.dbiDownloadPathOld: _download_path_old,
    BlockId.dbiCompressPastedImageOld: _compress_pasted_image_old,
    BlockId.dbiEmojiTabOld: _skip(_int32),
    BlockId.dbiRecentEmojiOldOld: _recent_emoji_old_old,
    BlockId.dbiRecentEmojiOld: _recent_emoji_old,
    BlockId.dbiRecentEmoji: _recent_emoji,
    BlockId.dbiRecentStickers: _recent_stickers,
    BlockId.dbiEmojiVariantsOld: _emoji_variants_old,
    BlockId.dbiEmojiVariants: _emoji_variants,
    BlockId.dbiHiddenPinnedMessagesOld: _hidden_pinned_messages_old,
    BlockId.dbiDialogLastPath: _dialog_last_path,
    BlockId.dbiSongVolumeOld: _volume("song_volume"),
    BlockId.dbiVideoVolumeOld: _volume("video_volume"),
    BlockId.dbiPlaybackSpeedOld: _playback_speed_old,
    BlockId.dbiCallSettingsOld: _call_settings_old,
    BlockId.dbiFallbackProductionConfig: _context_value("fallback_config", _bytes),
}


def block_name(block_id: int) -> str:
    try:
        return BlockId(block_id).name
    except ValueError:
        return "0x{:x}".format(block_id)


def read_setting(block_id: int, cursor: Cursor, version: int,
                 context: LegacyContext, collaborators: Collaborators,
                 options: Optional[ReadOptions] = None) -> None:
    """Decode one block and apply it.  Raises DecodeError on failure."""
    routine = _ROUTINES.get(block_id)
    if routine is None:
        logger.error("unknown block id in settings stream: %d", block_id)
        raise DecodeError(ERR_UNKNOWN_BLOCK, "unknown block id {}".format(block_id))
    routine(_Pass(cursor, version, context, collaborators, options or ReadOptions()))
