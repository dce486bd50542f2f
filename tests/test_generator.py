# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ
# PixAvatar â Generation Pipeline Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# âââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââââ

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from pixavatar.core import (
    AvatarConfig,
    AvatarGenerator,
    AvatarRequest,
    EncodingError,
    PayloadTooLargeError,
    generate_avatar,
    parse_int_param,
    resolve_request,
)
from pixavatar.core.hasher import hash_name
from pixavatar.core.metrics import metrics
from pixavatar.core.pattern import fill_mask
from pixavatar.core.raster import block_bounds


class TestParseIntParam:
    @pytest.mark.parametrize(
        "value,expected",
        [(None, None), ("", None), ("abc", None), ("12.5", None), ("64", 64),
         ("-3", -3), ("0", 0), ("+7", 7), ("5_000", None), (" 64 ", None),
         ("٦٤", None), ("1_0_8_0", None), ("0x10", None), ("64\n", None)],
    )
    def test_parse(self, value, expected):
        assert parse_int_param(value) == expected


class TestResolveRequest:
    def test_defaults(self, config):
        req = resolve_request(None, None, None, config)
        assert req == AvatarRequest(name="saitama", size=256, grid=6)

    def test_non_positive_values_use_defaults(self, config):
        assert resolve_request("", 0, -1, config) == AvatarRequest("saitama", 256, 6)

    def test_explicit_values_kept(self, config):
        assert resolve_request("bob", 1080, 9, config) == AvatarRequest("bob", 1080, 9)

    def test_oversize_rejected(self, config):
        with pytest.raises(PayloadTooLargeError) as exc_info:
            resolve_request("bob", 5000, None, config)
        assert exc_info.value.requested == 5000
        assert exc_info.value.maximum == 1080

    def test_oversize_clamped(self):
        cfg = AvatarConfig(oversize_policy="clamp")
        assert resolve_request("bob", 5000, None, cfg).size == 1080

    def test_oversize_grid_rejected(self, config):
        with pytest.raises(PayloadTooLargeError) as exc_info:
            resolve_request("bob", None, 100_000, config)
        assert exc_info.value.what == "grid"
        assert exc_info.value.requested == 100_000
        assert exc_info.value.maximum == 256

    def test_max_grid_allowed(self, config):
        assert resolve_request("bob", None, 256, config).grid == 256

    def test_oversize_grid_clamped(self):
        cfg = AvatarConfig(oversize_policy="clamp", max_grid=32)
        assert resolve_request("bob", None, 100_000, cfg).grid == 32

    def test_request_invariants(self):
        with pytest.raises(ValueError):
            AvatarRequest(name="x", size=0, grid=6)
        with pytest.raises(ValueError):
            AvatarRequest(name="x", size=10, grid=0)


class TestGenerate:
    def test_deterministic(self, generator):
        assert generator.generate("alice", 128, 8) == generator.generate("alice", 128, 8)

    def test_default_substitution(self):
        assert generate_avatar("", 0, 0) == generate_avatar("saitama", 256, 6)

    def test_none_uses_defaults(self, generator):
        assert generator.generate(None) == generator.generate("saitama", 256, 6)

    def test_distinct_names(self, generator, decode):
        images = [decode(generator.generate(n)) for n in ("alice", "bob", "carol")]
        for i in range(3):
            for j in range(i + 1, 3):
                assert not np.array_equal(images[i], images[j])

    def test_oversize_clamped_to_max(self, decode):
        gen = AvatarGenerator(AvatarConfig(oversize_policy="clamp"))
        assert decode(gen.generate("bob", 5000)).shape == (1080, 1080, 4)

    def test_oversize_rejected(self, generator):
        with pytest.raises(PayloadTooLargeError):
            generator.generate("bob", 5000)

    def test_clamp_color_changes_extreme_channel(self, decode):
        # alice -> 63 84 e2, blue channel above 225
        raw = decode(generate_avatar("alice", 60, 6))
        soft = decode(generate_avatar("alice", 60, 6, AvatarConfig(clamp_color=True)))
        colors = {tuple(p) for p in soft.reshape(-1, 4) if p[3] == 255}
        assert colors == {(0x63, 0x84, 225, 255)}
        assert not np.array_equal(raw, soft)

    def test_hash_algorithm_changes_avatar(self):
        md5 = generate_avatar("saitama", 64, 8)
        sha = generate_avatar("saitama", 64, 8, AvatarConfig(hash_algorithm="sha256"))
        assert md5 != sha

    def test_huge_grid_clamped_renders(self, decode):
        gen = AvatarGenerator(AvatarConfig(oversize_policy="clamp"))
        clamped = gen.generate("bob", 64, 100_000)
        assert clamped == gen.generate("bob", 64, 256)
        assert decode(clamped).shape == (64, 64, 4)

    def test_concurrent_matches_serial(self, generator):
        jobs = [
            (name, size, grid)
            for name in ("alice", "bob", "carol", "saitama", "")
            for size, grid in ((64, 5), (96, 8), (120, 6))
        ]
        serial = [generator.generate(*job) for job in jobs]
        with ThreadPoolExecutor(max_workers=8) as pool:
            concurrent = list(pool.map(lambda job: generator.generate(*job), jobs * 4))
        assert concurrent == serial * 4

    def test_encoding_error_counted_and_raised(self, generator, monkeypatch):
        def boom(buffer):
            raise EncodingError("disk on fire")

        monkeypatch.setattr("pixavatar.core.generator.encode", boom)
        before = metrics.get_metrics()["counters"]["generation_errors_total"]
        with pytest.raises(EncodingError):
            generator.generate("saitama")
        after = metrics.get_metrics()["counters"]["generation_errors_total"]
        assert after == before + 1


class TestSaitamaScenario:
    """Default saitama avatar: 256x256, grid 6, md5."""

    def test_dimensions(self, generator, decode):
        pixels = decode(generator.generate("saitama"))
        assert pixels.shape == (256, 256, 4)

    def test_foreground_pixels_match_mask(self, generator, decode):
        pixels = decode(generator.generate("saitama"))
        size, grid = 256, 6
        block = size / grid
        mask = fill_mask(hash_name("saitama"), grid)

        expected = 0
        for y, row in enumerate(mask):
            y1, y2 = block_bounds(y, block)
            for x, filled in enumerate(row):
                if not filled:
                    continue
                x1, x2 = block_bounds(x, block)
                m1, m2 = block_bounds(grid - x - 1, block)
                expected += (y2 - y1) * ((x2 - x1) + (m2 - m1))

        assert int((pixels[..., 3] == 255).sum()) == expected

    def test_only_two_pixel_values(self, generator, decode):
        pixels = decode(generator.generate("saitama")).reshape(-1, 4)
        values = {tuple(p) for p in pixels}
        assert values == {(0, 0, 0, 0), (0x3B, 0xCC, 0xBA, 255)}
