# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Colour Deriver
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

from __future__ import annotations

from .exceptions import InvalidParameterError
from .types import AvatarColor

CHANNEL_MIN = 30
CHANNEL_MAX = 225


def clamp_channel(value: int, lo: int = CHANNEL_MIN, hi: int = CHANNEL_MAX) -> int:
    """Clamp a single channel value to [lo, hi]."""
    return max(lo, min(hi, value))


def derive_color(digest: bytes, clamp: bool = False) -> AvatarColor:
    """Take digest bytes 0, 1, 2 as R, G, B with full alpha.

    With *clamp* set, each channel is pulled into [30, 225] so the colour
    never disappears into a near-black or near-white background.
    """
    if len(digest) < 3:
        raise InvalidParameterError(
            f"digest must hold at least 3 bytes, got {len(digest)}"
        )
    r, g, b = digest[0], digest[1], digest[2]
    if clamp:
        r, g, b = clamp_channel(r), clamp_channel(g), clamp_channel(b)
    return AvatarColor(r=r, g=g, b=b)
