#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Settings-stream fuzzing.
#
# Generates three fuzz categories:
#   A) random VALID block sequences -> must load cleanly
#   B) mutated valid streams (truncate, flip, splice) -> ok or DecodeError
#   C) random garbage after a version header -> ok or DecodeError
#
# For every input the decoder must raise nothing but DecodeError, give the
# same outcome twice, and leave collaborators as they were on failure.
# Any violation prints a minimal repro payload and exits non-zero.

import os, sys, json, base64, random
from typing import Any, Callable, Dict, List, Tuple

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
STREAMUTIL = os.path.join(ROOT, "tests", "streamutil.py")

sys.path.insert(0, ROOT)

import importlib.util
spec = importlib.util.spec_from_file_location("streamutil", STREAMUTIL)
streamutil = importlib.util.module_from_spec(spec)
spec.loader.exec_module(streamutil)

from dbiread import BlockId, Collaborators, load_settings

StreamWriter = streamutil.StreamWriter

SEED = int(os.environ.get("DBIREAD_SEED", "4242"))
ROUNDS = int(os.environ.get("DBIREAD_FUZZ_ROUNDS", "5000"))

random.seed(SEED)

def b64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def failure(label: str, ctx: Dict[str, Any]) -> None:
    print("FAILURE:", label)
    print("CTX:", json.dumps(ctx, ensure_ascii=False)[:4000])
    raise SystemExit(1)

# --- generators ---

def rand_text(nmax: int) -> str:
    n = random.randint(0, nmax)
    return "".join(chr(random.randint(0x20, 0x7E)) for _ in range(n))

def p_int32(lo: int = -3, hi: int = 3) -> bytes:
    return StreamWriter().int32(random.randint(lo, hi)).getvalue()

def p_cache_old() -> bytes:
    return (StreamWriter().int64(random.randint(10 * 1024 * 1024 + 1, 2**40))
            .int32(random.choice([0, 2**31 - 1, -1, 3600])).getvalue())

def p_proxies() -> bytes:
    count = random.randint(0, 4)
    w = StreamWriter().int32(5).int32(count).int32(random.randint(-count, count))
    w.int32(random.randint(0, 2)).int32(random.randint(0, 1))
    for _ in range(count):
        w.proxy(random.choice([0, 1025, 1026, 1027]), rand_text(12),
                random.randint(0, 65535), rand_text(6), rand_text(6))
    return w.getvalue()

def p_recent_emoji() -> bytes:
    count = random.randint(0, 4)
    w = StreamWriter().uint32(count)
    for _ in range(count):
        w.uint64(random.choice([0xD83DDE00, 0xD83CDDEF, 0xFFFF0001, random.getrandbits(64)]))
        w.uint16(random.randint(0, 100))
    return w.getvalue()

def p_call_settings() -> bytes:
    inner = StreamWriter().string(rand_text(8)).int32(random.randint(0, 100))
    if random.random() < 0.7:
        inner.string(rand_text(8)).int32(random.randint(0, 100)).int32(1)
    return StreamWriter().bytes_(inner.getvalue()).getvalue()

def p_path() -> bytes:
    return StreamWriter().string(rand_text(20)).getvalue()

GENERATORS: List[Tuple[int, Callable[[], bytes]]] = [
    (BlockId.dbiAutoStart, p_int32),
    (BlockId.dbiWorkMode, lambda: p_int32(-1, 5)),
    (BlockId.dbiSendKeyOld, lambda: p_int32(0, 1)),
    (BlockId.dbiScalePercent, lambda: p_int32(0, 400)),
    (BlockId.dbiScaleOld, lambda: p_int32(0, 6)),
    (BlockId.dbiAutoDownloadOld, lambda: p_int32(0, 3) + p_int32(0, 3) + p_int32(0, 3)),
    (BlockId.dbiTileBackgroundOld, lambda: p_int32(0, 1)),
    (BlockId.dbiCacheSettingsOld, p_cache_old),
    (BlockId.dbiConnectionType, p_proxies),
    (BlockId.dbiRecentEmojiOld, p_recent_emoji),
    (BlockId.dbiCallSettingsOld, p_call_settings),
    (BlockId.dbiDialogLastPath, p_path),
    (BlockId.dbiChatSizeMaxOld, lambda: p_int32(-10, 1000)),
]

def rand_valid_stream() -> bytes:
    blocks = []
    for _ in range(random.randint(0, 8)):
        block_id, gen = random.choice(GENERATORS)
        blocks.append(streamutil.block(block_id, gen()))
    return streamutil.settings_stream(random.choice([8000, 8005, 8006, 2000000]), blocks)

def mutate(data: bytes) -> bytes:
    b = bytearray(data)
    r = random.random()
    if r < 0.4 and len(b) > 4:
        return bytes(b[:random.randint(4, len(b) - 1)])
    if r < 0.8 and b:
        for _ in range(random.randint(1, 4)):
            b[random.randrange(len(b))] = random.getrandbits(8)
        return bytes(b)
    return bytes(b) + bytes(random.getrandbits(8) for _ in range(random.randint(1, 12)))

def rand_garbage() -> bytes:
    return streamutil.settings_stream(8006, [bytes(random.getrandbits(8) for _ in range(random.randint(0, 40)))])

# --- checks ---

def snapshot(collab: Collaborators) -> Tuple[Any, ...]:
    return (collab.app, collab.globals, collab.proxy, collab.theme,
            collab.updater, collab.fallback_config)

def outcome(data: bytes, ctx: Dict[str, Any]) -> Tuple[bool, str]:
    collab = Collaborators()
    collab.globals.config_scale = 125
    collab.updater.disabled = True
    before = snapshot(collab)
    try:
        result = load_settings(data, collab)
    except Exception as e:  # anything but a handled DecodeError is a bug
        failure("unexpected exception: {!r}".format(e), ctx)
    if not result.ok and snapshot(collab) != before:
        failure("collaborators changed by a failed load", ctx)
    return result.ok, result.error.code if result.error else ""

def check(label: str, data: bytes, i: int, must_load: bool = False) -> None:
    ctx = {"label": label, "round": i, "input_b64": b64(data)}
    first = outcome(data, ctx)
    second = outcome(data, ctx)
    if first != second:
        failure("non-deterministic outcome {} vs {}".format(first, second), ctx)
    if must_load and not first[0]:
        failure("valid stream failed with {}".format(first[1]), ctx)

def main() -> int:
    for i in range(ROUNDS):
        r = random.random()

        # A) valid streams
        if r < 0.35:
            check("A valid", rand_valid_stream(), i, must_load=True)
            continue

        # B) mutated valid streams
        if r < 0.85:
            check("B mutated", mutate(rand_valid_stream()), i)
            continue

        # C) garbage blocks
        check("C garbage", rand_garbage(), i)

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no violations)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
