"""Legacy settings stream constants — block ids, enum values, limits.

Every value here is fixed by data already written to disk by older
application versions.  None of them may change.
"""

from __future__ import annotations

import enum


class BlockId(enum.IntEnum):
    """Closed set of historical block identifiers.

    Gaps (0x10, 0x1b, 0x2a-0x2f, 0x3c-0x3f) were never written.
    """

    dbiKey = 0x00
    dbiUser = 0x01
    dbiDcOptionOldOld = 0x02
    dbiChatSizeMaxOld = 0x03
    dbiMutePeerOld = 0x04
    dbiSendKeyOld = 0x05
    dbiAutoStart = 0x06
    dbiStartMinimized = 0x07
    dbiSoundFlashBounceNotifyOld = 0x08
    dbiWorkMode = 0x09
    dbiSeenTrayTooltip = 0x0A
    dbiDesktopNotifyOld = 0x0B
    dbiAutoUpdate = 0x0C
    dbiLastUpdateCheck = 0x0D
    dbiWindowPosition = 0x0E
    dbiConnectionTypeOld = 0x0F
    dbiDefaultAttach = 0x11
    dbiCatsAndDogs = 0x12
    dbiReplaceEmojiOld = 0x13
    dbiAskDownloadPathOld = 0x14
    dbiDownloadPathOldOld = 0x15
    dbiScaleOld = 0x16
    dbiEmojiTabOld = 0x17
    dbiRecentEmojiOldOld = 0x18
    dbiLoggedPhoneNumberOld = 0x19
    dbiMutedPeersOld = 0x1A
    dbiNotifyViewOld = 0x1C
    dbiSendToMenu = 0x1D
    dbiCompressPastedImageOld = 0x1E
    dbiLangOld = 0x1F
    dbiLangFileOld = 0x20
    dbiTileBackgroundOld = 0x21
    dbiAutoLockOld = 0x22
    dbiDialogLastPath = 0x23
    dbiRecentEmojiOld = 0x24
    dbiEmojiVariantsOld = 0x25
    dbiRecentStickers = 0x26
    dbiDcOptionOld = 0x27
    dbiTryIPv6 = 0x28
    dbiSongVolumeOld = 0x29
    dbiWindowsNotificationsOld = 0x30
    dbiIncludeMutedOld = 0x31
    dbiMegagroupSizeMaxOld = 0x32
    dbiDownloadPathOld = 0x33
    dbiAutoDownloadOld = 0x34
    dbiSavedGifsLimitOld = 0x35
    dbiShowingSavedGifsOld = 0x36
    dbiAutoPlayOld = 0x37
    dbiAdaptiveForWideOld = 0x38
    dbiHiddenPinnedMessagesOld = 0x39
    dbiRecentEmoji = 0x3A
    dbiEmojiVariants = 0x3B
    dbiDialogsModeOld = 0x40
    dbiModerateModeOld = 0x41
    dbiVideoVolumeOld = 0x42
    dbiStickersRecentLimitOld = 0x43
    dbiNativeNotificationsOld = 0x44
    dbiNotificationsCountOld = 0x45
    dbiNotificationsCornerOld = 0x46
    dbiThemeKeyOld = 0x47
    dbiDialogsWidthRatioOld = 0x48
    dbiUseExternalVideoPlayer = 0x49
    dbiDcOptionsOld = 0x4A
    dbiMtpAuthorization = 0x4B
    dbiLastSeenWarningSeenOld = 0x4C
    dbiSessionSettings = 0x4D
    dbiLangPackKey = 0x4E
    dbiConnectionType = 0x4F
    dbiStickersFavedLimitOld = 0x50
    dbiSuggestStickersByEmojiOld = 0x51
    dbiSuggestEmojiOld = 0x52
    dbiTxtDomainStringOldOld = 0x53
    dbiThemeKey = 0x54
    dbiTileBackground = 0x55
    dbiCacheSettingsOld = 0x56
    dbiAnimationsDisabled = 0x57
    dbiScalePercent = 0x58
    dbiPlaybackSpeedOld = 0x59
    dbiLanguagesKey = 0x5A
    dbiCallSettingsOld = 0x5B
    dbiCacheSettings = 0x5C
    dbiTxtDomainStringOld = 0x5D
    dbiApplicationSettings = 0x5E
    dbiDialogsFiltersOld = 0x5F
    dbiFallbackProductionConfig = 0x60
    dbiBackgroundKey = 0x61


# ── Integer ranges ────────────────────────────────────────────
INT32_MAX: int = 2**31 - 1
INT64_MAX: int = 2**63 - 1

# Raw string / byte-array length marking a null value.
NULL_LENGTH: int = 0xFFFFFFFF

# Size of a legacy auth key payload (dbiKey).
AUTH_KEY_SIZE: int = 256

# ── Cache limits ──────────────────────────────────────────────
# A stored total size at or below the per-entry maximum can't be real.
MAX_DATA_SIZE: int = 10 * 1024 * 1024

# The tile flag in dbiTileBackgroundOld is trusted from this version on.
TILE_BACKGROUND_VERSION: int = 8005

# ── Work mode (dbiWorkMode) ───────────────────────────────────
WORK_MODE_WINDOW_AND_TRAY: int = 0
WORK_MODE_TRAY_ONLY: int = 1
WORK_MODE_WINDOW_ONLY: int = 2

# ── Connection types (dbiConnectionType*) ─────────────────────
CONNECTION_AUTO: int = 0
CONNECTION_HTTP_AUTO: int = 1
CONNECTION_HTTP_PROXY: int = 2
CONNECTION_TCP_PROXY: int = 3
CONNECTION_PROXIES_LIST_OLD: int = 4
CONNECTION_PROXIES_LIST: int = 5

# Proxy entries written after the list format store type + this shift.
PROXY_TYPE_SHIFT: int = 1024

PROXY_TYPE_NONE: int = 0
PROXY_TYPE_SOCKS5: int = 1
PROXY_TYPE_HTTP: int = 2
PROXY_TYPE_MTPROTO: int = 3

PROXY_SETTINGS_SYSTEM: int = 0
PROXY_SETTINGS_ENABLED: int = 1
PROXY_SETTINGS_DISABLED: int = 2

# ── Notifications ─────────────────────────────────────────────
NOTIFY_VIEW_SHOW_PREVIEW: int = 0
NOTIFY_VIEW_SHOW_NAME: int = 1
NOTIFY_VIEW_SHOW_NOTHING: int = 2

SCREEN_CORNER_TOP_LEFT: int = 0
SCREEN_CORNER_TOP_RIGHT: int = 1
SCREEN_CORNER_BOTTOM_RIGHT: int = 2
SCREEN_CORNER_BOTTOM_LEFT: int = 3

DEFAULT_NOTIFICATIONS_COUNT: int = 3

# ── Input ─────────────────────────────────────────────────────
SUBMIT_ENTER: int = 0
SUBMIT_CTRL_ENTER: int = 1

SEND_FILES_ALBUM: str = "album"
SEND_FILES_FILES: str = "files"

# ── Interface scale ───────────────────────────────────────────
SCALE_AUTO: int = 0
SCALE_MIN: int = 50
SCALE_MAX: int = 300

# dbiScaleOld stored an enum index instead of a percentage.
SCALE_OLD_VALUES = {
    0: SCALE_AUTO,
    1: 100,
    2: 125,
    3: 150,
    4: 200,
}

# ── Auto-download sources and types ───────────────────────────
SOURCE_USER: str = "user"
SOURCE_GROUP: str = "group"
SOURCE_CHANNEL: str = "channel"

TYPE_PHOTO: str = "photo"
TYPE_AUDIO_FILE: str = "audio_file"
TYPE_VOICE_MESSAGE: str = "voice_message"
TYPE_VIDEO_MESSAGE: str = "video_message"
TYPE_VIDEO: str = "video"
TYPE_FILE: str = "file"
TYPE_AUTOPLAY_VIDEO: str = "autoplay_video"
TYPE_AUTOPLAY_VIDEO_MESSAGE: str = "autoplay_video_message"
TYPE_AUTOPLAY_GIF: str = "autoplay_gif"

# dbiAutoDownloadOld bits.
AUTO_DOWNLOAD_NO_PRIVATE: int = 0x01
AUTO_DOWNLOAD_NO_GROUPS: int = 0x02

# ── DC option flags ───────────────────────────────────────────
DC_FLAG_IPV6: int = 0x01
DC_FLAG_MEDIA_ONLY: int = 0x02
DC_FLAG_TCPO_ONLY: int = 0x04
DC_FLAG_CDN: int = 0x08
DC_FLAG_STATIC: int = 0x10

# Serialized DC options limits.
DC_OPTIONS_MAX_IP_SIZE: int = 45
DC_OPTIONS_MAX_SECRET_SIZE: int = 32
