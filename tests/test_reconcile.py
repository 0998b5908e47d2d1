"""Unit tests for the endpoint table and the fallback-config reconciler."""

from __future__ import annotations

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from dbiread import (
    CdnPublicKey,
    DcOptions,
    FallbackConfig,
    LegacyContext,
    apply_fallback_config,
)
from streamutil import StreamWriter


def option(w: StreamWriter, dc_id: int, ip: bytes, port: int, flags: int = 0) -> StreamWriter:
    return w.int32(dc_id).int32(flags).int32(port).int32(len(ip)).raw(ip)


def legacy_context() -> LegacyContext:
    ctx = LegacyContext()
    ctx.fallback_config_legacy_dc_options.construct_add_one(2, 0, "149.154.167.50", 443)
    ctx.fallback_config_legacy_chat_size_max = 500
    ctx.fallback_config_legacy_saved_gifs_limit = 0
    ctx.fallback_config_legacy_megagroup_size_max = 20000
    ctx.fallback_config_legacy_txt_domain_string = "apv3.example"
    return ctx


# ── Serialized endpoint table ─────────────────────────────────

class TestDcOptionsSerialized(unittest.TestCase):
    def test_version_zero(self):
        w = StreamWriter().int32(1)
        option(w, 1, b"1.2.3.4", 443)
        table = DcOptions()
        table.construct_from_serialized(w.getvalue())
        self.assertEqual(table.snapshot(), [(1, 0, "1.2.3.4", 443, "")])

    def test_version_one_secret(self):
        w = StreamWriter().int32(-1).int32(2)
        option(w, 1, b"1.2.3.4", 443).int32(0)
        option(w, 2, b"5.6.7.8", 80, flags=0x10).int32(16).raw(b"\xab" * 16)
        table = DcOptions()
        table.construct_from_serialized(w.getvalue())
        self.assertEqual(len(table), 2)
        self.assertEqual(table.options[1].secret, b"\xab" * 16)
        self.assertEqual(table.options[1].flags, 0x10)
        self.assertEqual(table.cdn_public_keys, [])

    def test_version_two_cdn_keys(self):
        w = StreamWriter().int32(-2).int32(1)
        option(w, 1, b"1.2.3.4", 443).int32(0)
        w.int32(1).int32(203).bytes_(b"modulus").bytes_(b"\x01\x00\x01")
        table = DcOptions()
        table.construct_from_serialized(w.getvalue())
        self.assertEqual(table.cdn_public_keys,
                         [CdnPublicKey(203, b"modulus", b"\x01\x00\x01")])

    def test_version_two_without_keys(self):
        w = StreamWriter().int32(-2).int32(1)
        option(w, 1, b"1.2.3.4", 443).int32(0)
        table = DcOptions()
        table.construct_from_serialized(w.getvalue())
        self.assertEqual(len(table), 1)
        self.assertEqual(table.cdn_public_keys, [])

    def test_bad_ip_size_keeps_earlier_entries(self):
        w = StreamWriter().int32(2)
        option(w, 1, b"1.2.3.4", 443)
        w.int32(2).int32(0).int32(443).int32(0)
        table = DcOptions()
        with self.assertLogs("dbiread._dc_options", level="WARNING"):
            table.construct_from_serialized(w.getvalue())
        self.assertEqual(table.snapshot(), [(1, 0, "1.2.3.4", 443, "")])

    def test_bad_secret_size(self):
        w = StreamWriter().int32(-1).int32(1)
        option(w, 1, b"1.2.3.4", 443).int32(33)
        table = DcOptions()
        with self.assertLogs("dbiread._dc_options", level="WARNING"):
            table.construct_from_serialized(w.getvalue())
        self.assertEqual(len(table), 0)

    def test_truncated_table(self):
        table = DcOptions()
        with self.assertLogs("dbiread._dc_options", level="WARNING"):
            table.construct_from_serialized(b"\x00\x00\x00\x05\x00")
        self.assertEqual(len(table), 0)

    def test_negative_count_logged(self):
        for blob in (StreamWriter().int32(-1).int32(-2).getvalue(),
                     StreamWriter().int32(-2).int32(-1).getvalue()):
            table = DcOptions()
            with self.assertLogs("dbiread._dc_options", level="WARNING") as logs:
                table.construct_from_serialized(blob)
            self.assertIn("option count", logs.output[0])
            self.assertEqual(len(table), 0)

    def test_negative_cdn_key_count_logged(self):
        w = StreamWriter().int32(-2).int32(1)
        option(w, 1, b"1.2.3.4", 443).int32(0)
        w.int32(-1)
        table = DcOptions()
        with self.assertLogs("dbiread._dc_options", level="WARNING") as logs:
            table.construct_from_serialized(w.getvalue())
        self.assertIn("cdn key count", logs.output[0])
        self.assertEqual(table.cdn_public_keys, [])

    def test_duplicates_skipped(self):
        table = DcOptions()
        table.construct_add_one(1, 0, "1.2.3.4", 443)
        table.construct_add_one(1, 0, "1.2.3.4", 443)
        self.assertEqual(len(table), 1)


# ── Reconciler ────────────────────────────────────────────────

class TestApplyFallbackConfig(unittest.TestCase):
    def test_scattered_fields(self):
        config = apply_fallback_config(legacy_context(), FallbackConfig())
        self.assertEqual(config.chat_size_max, 500)
        self.assertEqual(config.megagroup_size_max, 20000)
        self.assertEqual(config.txt_domain_string, "apv3.example")
        self.assertEqual(config.dc_options.snapshot(), [(2, 0, "149.154.167.50", 443, "")])

    def test_absent_fields_keep_defaults(self):
        config = apply_fallback_config(legacy_context(), FallbackConfig())
        defaults = FallbackConfig()
        self.assertEqual(config.saved_gifs_limit, defaults.saved_gifs_limit)
        self.assertEqual(config.stickers_recent_limit, defaults.stickers_recent_limit)
        self.assertEqual(config.stickers_faved_limit, defaults.stickers_faved_limit)

    def test_negative_limit_ignored(self):
        ctx = LegacyContext()
        ctx.fallback_config_legacy_stickers_faved_limit = -4
        config = apply_fallback_config(ctx, FallbackConfig())
        self.assertEqual(config.stickers_faved_limit, 5)

    def test_patches_in_place(self):
        config = FallbackConfig()
        self.assertIs(apply_fallback_config(legacy_context(), config), config)

    def test_idempotent(self):
        ctx = legacy_context()
        once = apply_fallback_config(ctx, FallbackConfig())
        twice = apply_fallback_config(ctx, apply_fallback_config(ctx, FallbackConfig()))
        self.assertEqual(once, twice)
        self.assertEqual(len(twice.dc_options), 1)

    def test_serialized_blob_is_authoritative(self):
        ctx = legacy_context()
        ctx.fallback_config = b"\x01\x02\x03"
        original = FallbackConfig()
        config = apply_fallback_config(ctx, original)
        self.assertIsNot(config, original)
        self.assertEqual(config.serialized, b"\x01\x02\x03")
        self.assertEqual(config.chat_size_max, 200)
        self.assertEqual(len(config.dc_options), 0)
        self.assertEqual(original, FallbackConfig())

    def test_custom_constructor(self):
        ctx = LegacyContext(fallback_config=b"blob")
        seen = []

        def construct(blob):
            seen.append(blob)
            return FallbackConfig(chat_size_max=1)

        config = apply_fallback_config(ctx, FallbackConfig(), construct)
        self.assertEqual(seen, [b"blob"])
        self.assertEqual(config.chat_size_max, 1)


if __name__ == "__main__":
    unittest.main()
