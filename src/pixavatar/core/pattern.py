# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Pattern Generator
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Fill decisions for the left half of the avatar grid.

Only ``ceil(grid / 2)`` columns are decided; the rasterizer mirrors them
onto the right half. Cell ``(x, y)`` reads digest byte
``(x + y * half) % 16`` and is filled when that byte is even, so every
grid size cycles over the same first 16 bytes.
"""

from __future__ import annotations

from .exceptions import InvalidParameterError
from .hasher import MIN_DIGEST_BYTES
from .types import HalfGrid

PATTERN_BYTES = 16


def half_width(grid: int) -> int:
    """Number of decided columns, including the centre column of odd grids."""
    return (grid + 1) // 2


def cell_index(x: int, y: int, grid: int) -> int:
    """Digest index consulted for cell ``(x, y)``."""
    return (x + y * half_width(grid)) % PATTERN_BYTES


def fill_mask(digest: bytes, grid: int) -> HalfGrid:
    """Return ``grid`` rows of ``half_width(grid)`` fill flags."""
    if grid < 1:
        raise InvalidParameterError(f"grid must be >= 1, got {grid}")
    if len(digest) < MIN_DIGEST_BYTES:
        raise InvalidParameterError(
            f"digest must hold at least {MIN_DIGEST_BYTES} bytes, got {len(digest)}"
        )

    half = half_width(grid)
    return tuple(
        tuple(digest[cell_index(x, y, grid)] % 2 == 0 for x in range(half))
        for y in range(grid)
    )


def count_filled(mask: HalfGrid) -> int:
    """Number of filled cells in the half grid (mirrors not counted)."""
    return sum(1 for row in mask for cell in row if cell)
