"""Host loop — version header, block sequence, reconcile, rollback on failure.

Stream layout:

    int32 version
    repeat until end: uint32 block_id, payload (shape fixed by block_id)

There is no per-block length, so the loop can only stop cleanly at the
end of the buffer or on the first block it can't decode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ._collaborators import Collaborators, FallbackConfig
from ._config import ReadOptions
from ._context import LegacyContext
from ._dispatch import block_name, read_setting
from ._errors import ERR_BAD_VALUE, DecodeError
from ._reconcile import apply_fallback_config
from ._stream import Cursor

logger = logging.getLogger(__name__)

# Called after each decoded block with (block_id, cursor offset).
BlockHook = Callable[[int, int], None]


@dataclass
class LoadResult:
    ok: bool
    version: int = 0
    context: Optional[LegacyContext] = None
    fallback_config: Optional[FallbackConfig] = None
    error: Optional[DecodeError] = None

    def __bool__(self) -> bool:
        return self.ok


def read_version(cursor: Cursor) -> int:
    version = cursor.read_int32()
    if version < 0:
        raise DecodeError(ERR_BAD_VALUE, "negative format version {}".format(version))
    return version


def decode_settings(
    data: bytes,
    collaborators: Collaborators,
    *,
    legacy_has_custom_day_background: bool = False,
    options: Optional[ReadOptions] = None,
    on_block: Optional[BlockHook] = None,
) -> LegacyContext:
    """Run the block pass over `data` and return the filled context.

    Collaborators are mutated as blocks are read.  Raises DecodeError on the
    first failure, with `.offset` set to the failing block id's position and
    `.block_id` set when a block was being decoded.
    """
    options = options or ReadOptions()
    cursor = Cursor(data)
    version = read_version(cursor)
    context = LegacyContext(
        version=version,
        legacy_has_custom_day_background=legacy_has_custom_day_background,
    )

    while not cursor.at_end:
        offset = cursor.position
        try:
            block_id = cursor.read_uint32()
        except DecodeError as e:
            # Fewer than four bytes left after the last complete block.
            e.offset = offset
            raise
        try:
            read_setting(block_id, cursor, version, context, collaborators, options)
        except DecodeError as e:
            e.block_id = block_id
            e.offset = offset
            raise
        if on_block is not None:
            on_block(block_id, cursor.position)
    logger.debug("decoded settings stream, version %d, %d bytes", version, cursor.position)
    return context


def _where(e: DecodeError) -> str:
    if e.block_id is not None:
        return "{} at offset {}".format(block_name(e.block_id), e.offset)
    if e.offset is not None:
        return "block id at offset {}".format(e.offset)
    return "header"


def load_settings(
    data: bytes,
    collaborators: Collaborators,
    *,
    legacy_has_custom_day_background: bool = False,
    options: Optional[ReadOptions] = None,
    on_block: Optional[BlockHook] = None,
) -> LoadResult:
    """Decode, reconcile and commit.

    On any failure every collaborator is put back to the state it had
    before the pass; nothing the pass wrote survives.
    """
    saved = collaborators.snapshot()
    try:
        context = decode_settings(
            data,
            collaborators,
            legacy_has_custom_day_background=legacy_has_custom_day_background,
            options=options,
            on_block=on_block,
        )
    except DecodeError as e:
        logger.warning("settings load failed in %s [%s]: %s", _where(e), e.code, e)
        collaborators.restore(saved)
        return LoadResult(ok=False, error=e)

    config = apply_fallback_config(
        context,
        collaborators.fallback_config,
        collaborators.construct_fallback_config,
    )
    collaborators.fallback_config = config
    return LoadResult(ok=True, version=context.version, context=context, fallback_config=config)
