"""Legacy emoji keys — flag remap, key-to-text, skin-tone index.

Old settings identified an emoji by a 64-bit key holding up to four UTF-16
code units: two 32-bit halves, each half holding a high and a low unit.
A half of 0xFFFFxxxx marked an index into a long-gone table of ZWJ
sequences; those keys no longer resolve and are dropped by callers.
"""

from __future__ import annotations

import struct
from typing import List, Optional

# Flag emoji were first stored with only the first regional indicator of
# the pair.  Only the recent-emoji "old old" format ever wrote these.
LEGACY_FLAG_KEYS = {
    0xD83CDDEF: 0xD83CDDEFD83CDDF5,  # JP
    0xD83CDDF0: 0xD83CDDF0D83CDDF7,  # KR
    0xD83CDDE9: 0xD83CDDE9D83CDDEA,  # DE
    0xD83CDDE8: 0xD83CDDE8D83CDDF3,  # CN
    0xD83CDDFA: 0xD83CDDFAD83CDDF8,  # US
    0xD83CDDEB: 0xD83CDDEBD83CDDF7,  # FR
    0xD83CDDEA: 0xD83CDDEAD83CDDF8,  # ES
    0xD83CDDEE: 0xD83CDDEED83CDDF9,  # IT
    0xD83CDDF7: 0xD83CDDF7D83CDDFA,  # RU
    0xD83CDDEC: 0xD83CDDECD83CDDE7,  # GB
}

# Skin-tone modifiers U+1F3FB..U+1F3FF as surrogate pairs.
_COLOR_INDEX = {
    0xD83CDFFB: 1,
    0xD83CDFFC: 2,
    0xD83CDFFD: 3,
    0xD83CDFFE: 4,
    0xD83CDFFF: 5,
}

_SEQUENCE_MARK = 0xFFFF0000


def remap_legacy_key(key: int) -> int:
    """Fix a single-indicator flag key; other keys pass through."""
    return LEGACY_FLAG_KEYS.get(key, key)


def text_from_old_key(key: int) -> Optional[str]:
    """Unpack an old 64-bit emoji key into its text, or None."""
    code = (key >> 32) & 0xFFFFFFFF
    code2 = key & 0xFFFFFFFF
    if not code and code2:
        code, code2 = code2, 0
    if not code:
        return None
    if (code & _SEQUENCE_MARK) == _SEQUENCE_MARK:
        return None

    units: List[int] = []
    for half in (code, code2):
        if not half:
            continue
        high = half >> 16
        if high:
            units.append(high)
        units.append(half & 0xFFFF)
    try:
        return struct.pack(">{}H".format(len(units)), *units).decode("utf-16-be")
    except UnicodeDecodeError:
        # Unpaired surrogate, never a real emoji.
        return None


def color_index_from_old_key(key: int) -> int:
    """Skin-tone index 1..5 for an old variant key, -1 if unknown."""
    return _COLOR_INDEX.get(key, -1)
