"""Reconciler — fold the legacy fallback-config pieces into the live config.

Runs once, after a clean pass.  Two paths:

  - the stream carried a serialized fallback config (dbiFallbackProductionConfig):
    that blob is authoritative and every scattered legacy field is ignored;
  - otherwise the config is patched from the scattered fields, each one
    only if it was present (positive limit, non-empty string).

Applying the same context twice gives the same config as applying it once:
the endpoint merge skips options already present and every other step is
a plain assignment.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ._collaborators import FallbackConfig
from ._context import LegacyContext

logger = logging.getLogger(__name__)


def apply_fallback_config(
    context: LegacyContext,
    config: FallbackConfig,
    construct: Optional[Callable[[bytes], FallbackConfig]] = None,
) -> FallbackConfig:
    """Return the fallback config after applying `context` to `config`.

    When the stream held a serialized config, the result is a new object
    built by `construct` (FallbackConfig.from_serialized by default) and
    `config` is left untouched; otherwise `config` is patched in place and
    returned.
    """
    if context.fallback_config:
        build = construct or FallbackConfig.from_serialized
        logger.debug("using serialized fallback config (%d bytes)", len(context.fallback_config))
        return build(context.fallback_config)

    config.dc_options.add_from_other(context.fallback_config_legacy_dc_options)
    if context.fallback_config_legacy_chat_size_max > 0:
        config.chat_size_max = context.fallback_config_legacy_chat_size_max
    if context.fallback_config_legacy_saved_gifs_limit > 0:
        config.saved_gifs_limit = context.fallback_config_legacy_saved_gifs_limit
    if context.fallback_config_legacy_stickers_recent_limit > 0:
        config.stickers_recent_limit = context.fallback_config_legacy_stickers_recent_limit
    if context.fallback_config_legacy_stickers_faved_limit > 0:
        config.stickers_faved_limit = context.fallback_config_legacy_stickers_faved_limit
    if context.fallback_config_legacy_megagroup_size_max > 0:
        config.megagroup_size_max = context.fallback_config_legacy_megagroup_size_max
    if context.fallback_config_legacy_txt_domain_string:
        config.txt_domain_string = context.fallback_config_legacy_txt_domain_string
    return config
