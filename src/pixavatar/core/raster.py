# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Rasterizer
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Expand a half-grid mask into a mirrored RGBA pixel buffer.

Block edges are ``floor(i * size / grid)`` and are shared by neighbouring
blocks, so blocks tile without gaps. When ``size`` is not a multiple of
``grid`` a mirrored block may sit one pixel off the exact reflection of
its source block; that offset is part of the output format.
"""

from __future__ import annotations

import math

import numpy as np

from .types import AvatarColor, HalfGrid, PixelBuffer


def block_bounds(index: int, block: float) -> tuple[int, int]:
    """Pixel span ``[start, stop)`` of the block at *index*."""
    return math.floor(index * block), math.floor((index + 1) * block)


def rasterize(mask: HalfGrid, color: AvatarColor, size: int, grid: int) -> PixelBuffer:
    """Paint every filled cell and its mirror onto a transparent canvas."""
    buf = np.zeros((size, size, 4), dtype=np.uint8)
    rgba = np.array(color.as_tuple(), dtype=np.uint8)
    block = size / grid

    for y, row in enumerate(mask):
        y1, y2 = block_bounds(y, block)
        for x, filled in enumerate(row):
            if not filled:
                continue
            x1, x2 = block_bounds(x, block)
            buf[y1:y2, x1:x2] = rgba
            # Centre column of an odd grid is its own mirror
            mx1, mx2 = block_bounds(grid - x - 1, block)
            buf[y1:y2, mx1:mx2] = rgba

    return buf
