# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Rasterizer Tests
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import numpy as np
import pytest

from pixavatar.core.color import derive_color
from pixavatar.core.hasher import hash_name
from pixavatar.core.pattern import fill_mask
from pixavatar.core.raster import block_bounds, rasterize
from pixavatar.core.types import AvatarColor

RED = AvatarColor(200, 10, 10)


def _opaque(buf):
    return buf[..., 3] == 255


class TestBlockBounds:
    def test_even_division(self):
        assert block_bounds(2, 40.0) == (80, 120)

    def test_truncation(self):
        block = 256 / 6
        assert [block_bounds(i, block)[0] for i in range(7)] == [
            0, 42, 85, 128, 170, 213, 256,
        ]


class TestRasterize:
    def test_buffer_shape_and_dtype(self):
        buf = rasterize(((False,),), RED, 32, 1)
        assert buf.shape == (32, 32, 4)
        assert buf.dtype == np.uint8

    def test_empty_mask_is_transparent(self):
        mask = ((False, False, False),) * 6
        buf = rasterize(mask, RED, 60, 6)
        assert not buf.any()

    def test_full_mask_is_solid(self):
        mask = ((True, True, True),) * 6
        buf = rasterize(mask, RED, 60, 6)
        assert (buf == np.array(RED.as_tuple(), dtype=np.uint8)).all()

    def test_filled_cell_and_mirror_painted(self):
        mask = ((True, False),) + ((False, False),) * 3
        buf = rasterize(mask, RED, 40, 4)
        assert tuple(buf[0, 0]) == RED.as_tuple()
        assert tuple(buf[9, 39]) == RED.as_tuple()
        assert _opaque(buf).sum() == 2 * 10 * 10

    def test_odd_grid_centre_painted_once(self):
        mask = ((False, False, True),) + ((False, False, False),) * 4
        buf = rasterize(mask, RED, 50, 5)
        assert _opaque(buf).sum() == 10 * 10
        assert _opaque(buf)[0:10, 20:30].all()

    @pytest.mark.parametrize("name", ["saitama", "alice", "bob", "carol"])
    @pytest.mark.parametrize("size,grid", [(240, 6), (256, 8), (105, 7), (96, 12)])
    def test_exact_symmetry_when_divisible(self, name, size, grid):
        digest = hash_name(name)
        buf = rasterize(fill_mask(digest, grid), derive_color(digest), size, grid)
        assert np.array_equal(buf, buf[:, ::-1])

    def test_block_symmetry_with_truncation(self):
        digest = hash_name("saitama")
        size, grid = 256, 6
        buf = rasterize(fill_mask(digest, grid), derive_color(digest), size, grid)
        block = size / grid
        for y in range(grid):
            cy = int((y + 0.5) * block)
            for x in range(grid):
                cx = int((x + 0.5) * block)
                mx = int((grid - x - 0.5) * block)
                assert tuple(buf[cy, cx]) == tuple(buf[cy, mx])

    def test_grid_larger_than_size(self):
        mask = fill_mask(hash_name("saitama"), 20)
        buf = rasterize(mask, RED, 10, 20)
        assert buf.shape == (10, 10, 4)
