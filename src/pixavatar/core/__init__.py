# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Core Package (Avatar Engine)
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Avatar Engine — deterministic symmetric pixel avatars from a name.

Quick start::

    from pixavatar.core import generate_avatar

    png = generate_avatar("saitama")
    open("saitama.png", "wb").write(png)
"""

from .color import clamp_channel, derive_color
from .config import AvatarConfig
from .encoder import CONTENT_TYPE, encode
from .exceptions import (
    EncodingError,
    InvalidParameterError,
    PayloadTooLargeError,
    PixAvatarError,
)
from .generator import (
    AvatarGenerator,
    generate_avatar,
    parse_int_param,
    resolve_request,
)
from .hasher import hash_name
from .metrics import MetricsCollector, metrics
from .pattern import count_filled, fill_mask, half_width
from .raster import rasterize
from .types import AvatarColor, AvatarRequest, HalfGrid, PixelBuffer

__all__ = [
    "AvatarColor",
    "AvatarRequest",
    "HalfGrid",
    "PixelBuffer",
    "AvatarConfig",
    "AvatarGenerator",
    "generate_avatar",
    "resolve_request",
    "parse_int_param",
    "hash_name",
    "derive_color",
    "clamp_channel",
    "fill_mask",
    "half_width",
    "count_filled",
    "rasterize",
    "encode",
    "CONTENT_TYPE",
    "MetricsCollector",
    "metrics",
    "PixAvatarError",
    "InvalidParameterError",
    "PayloadTooLargeError",
    "EncodingError",
]
