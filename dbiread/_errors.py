"""dbiread error codes and exception class.

A decode error always aborts the whole settings pass.  Soft, per-item
problems (a bad proxy entry, an emoji key that no longer resolves) never
reach this module — they are dropped where they're found.
"""

from __future__ import annotations

# ── Error codes ──────────────────────────────────────────────
# Grep-friendly; the CLI prints them verbatim.

ERR_READ_PAST_END: str = "ERR_READ_PAST_END"  # payload shorter than its id requires
ERR_CORRUPT_DATA: str = "ERR_CORRUPT_DATA"    # malformed primitive (odd UTF-16 length)
ERR_UNKNOWN_BLOCK: str = "ERR_UNKNOWN_BLOCK"  # block id without a decode routine
ERR_BAD_VALUE: str = "ERR_BAD_VALUE"          # value breaks a hard invariant

ALL_CODES = (
    ERR_READ_PAST_END,
    ERR_CORRUPT_DATA,
    ERR_UNKNOWN_BLOCK,
    ERR_BAD_VALUE,
)


class DecodeError(Exception):
    """Exception for fatal settings decode errors.

    The `.code` attribute is one of the ERR_* strings above.  `.block_id`
    and `.offset` (stream offset of the failing block's id) are filled in
    by the host loop; both stay None for a header failure.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code
        self.block_id = None
        self.offset = None
