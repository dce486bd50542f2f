# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Shared Types
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

# Row-major fill decisions for the left half (plus centre column) of the grid.
HalfGrid = tuple[tuple[bool, ...], ...]

# uint8 array of shape (size, size, 4), RGBA.
PixelBuffer = np.ndarray


@dataclass(frozen=True)
class AvatarRequest:
    """A fully resolved generation request (defaults already applied)."""

    name: str
    size: int  # Output width and height in pixels
    grid: int  # Number of cells per row and column

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"size must be > 0, got {self.size}")
        if self.grid <= 0:
            raise ValueError(f"grid must be > 0, got {self.grid}")


@dataclass(frozen=True)
class AvatarColor:
    """Opaque foreground colour derived from the digest."""

    r: int
    g: int
    b: int
    a: int = 255

    def as_tuple(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"
