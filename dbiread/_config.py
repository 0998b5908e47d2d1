"""Decoder options.

Defaults match the application's own cache database and desktop builds.
Environment overrides exist so the CLI and fuzz runner can be pointed at
streams written by store builds without code changes.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ._constants import MAX_DATA_SIZE

logger = logging.getLogger(__name__)

ENV_MAX_DATA_SIZE = "DBIREAD_MAX_DATA_SIZE"
ENV_STORE_BUILD = "DBIREAD_STORE_BUILD"

_TRUE_STRINGS = ("1", "true", "yes", "on")


def _coerce_positive_int(raw: Any, default: int) -> int:
    """Return a positive int; fallback to default for invalid values."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class ReadOptions:
    # Cache sizes at or below this are rejected as corrupt.
    max_data_size: int = MAX_DATA_SIZE
    # Sandboxed store builds never honoured a stored download path.
    store_build: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ReadOptions":
        env = os.environ if environ is None else environ
        max_data_size = MAX_DATA_SIZE
        raw = env.get(ENV_MAX_DATA_SIZE)
        if raw is not None:
            max_data_size = _coerce_positive_int(raw, MAX_DATA_SIZE)
            if max_data_size == MAX_DATA_SIZE and raw.strip() != str(MAX_DATA_SIZE):
                logger.warning("ignoring invalid %s=%r", ENV_MAX_DATA_SIZE, raw)
        store_build = env.get(ENV_STORE_BUILD, "").strip().lower() in _TRUE_STRINGS
        return cls(max_data_size=max_data_size, store_build=store_build)
