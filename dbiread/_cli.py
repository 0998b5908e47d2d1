"""dbiread command-line interface.

Usage:
    python3 -m dbiread decode --input settings.bin [--custom-day-background]
    cat settings.bin | python3 -m dbiread blocks
    python3 -m dbiread version

Input is the decrypted settings stream (version header + blocks), not the
encrypted file on disk.
"""

from __future__ import annotations

import argparse
import base64
import dataclasses
import json
import logging
import sys
from typing import Any, List, Optional

from . import (
    Collaborators,
    DecodeError,
    ReadOptions,
    __version__,
    block_name,
    decode_settings,
    load_settings,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbiread",
        description="dbiread — decode legacy local-settings streams",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Errors only")
    sub = parser.add_subparsers(dest="command")

    # ── decode ──
    decode_p = sub.add_parser("decode", help="Decode and print resulting settings as JSON")
    decode_p.add_argument("--input", "-i", metavar="FILE",
                          help="Read the stream from FILE instead of stdin")
    decode_p.add_argument("--custom-day-background", action="store_true",
                          help="The map file recorded a custom day background")
    decode_p.add_argument("--night-mode", action="store_true",
                          help="Theme is in night mode before decoding")

    # ── blocks ──
    blocks_p = sub.add_parser("blocks", help="List block ids as they are decoded")
    blocks_p.add_argument("--input", "-i", metavar="FILE",
                          help="Read the stream from FILE instead of stdin")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _read_input(filepath: Optional[str]) -> bytes:
    """Read stream bytes from a file or stdin."""
    if filepath:
        with open(filepath, "rb") as f:
            return f.read()
    if sys.stdin.isatty():
        print("dbiread: reading from stdin (Ctrl-D to end)...", file=sys.stderr)
    return sys.stdin.buffer.read()


def _jsonable(val: Any) -> Any:
    if dataclasses.is_dataclass(val) and not isinstance(val, type):
        return {f.name: _jsonable(getattr(val, f.name)) for f in dataclasses.fields(val)}
    if isinstance(val, bytes):
        return base64.b64encode(val).decode("ascii")
    if isinstance(val, dict):
        # Auto-download limits are keyed by (source, type).
        return {(":".join(k) if isinstance(k, tuple) else str(k)): _jsonable(v)
                for k, v in val.items()}
    if isinstance(val, (list, tuple)):
        return [_jsonable(v) for v in val]
    return val


def _cmd_decode(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)
    collab = Collaborators()
    collab.theme.night_mode = args.night_mode
    result = load_settings(
        raw,
        collab,
        legacy_has_custom_day_background=args.custom_day_background,
        options=ReadOptions.from_env(),
    )
    if not result:
        raise result.error
    out = {
        "version": result.version,
        "app": _jsonable(collab.app),
        "globals": _jsonable(collab.globals),
        "proxy": _jsonable(collab.proxy),
        "theme": _jsonable(collab.theme),
        "updater": _jsonable(collab.updater),
        "fallback_config": _jsonable(collab.fallback_config),
        "context": _jsonable(result.context),
    }
    print(json.dumps(out, indent=2, sort_keys=True))


def _cmd_blocks(args: argparse.Namespace) -> None:
    raw = _read_input(args.input)

    def show(block_id: int, offset: int) -> None:
        print("{:>8}  0x{:02x}  {}".format(offset, block_id, block_name(block_id)))

    context = decode_settings(raw, Collaborators(), options=ReadOptions.from_env(), on_block=show)
    print("version {}".format(context.version))


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    level = logging.DEBUG if args.verbose else logging.ERROR if args.quiet else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "version":
        print(f"dbiread {__version__}")
        return

    try:
        if args.command == "decode":
            _cmd_decode(args)
        elif args.command == "blocks":
            _cmd_blocks(args)
    except DecodeError as e:
        print(f"dbiread: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"dbiread: cannot read input: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
