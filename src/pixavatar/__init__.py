# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Package Initialisation
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
PixAvatar: deterministic symmetric pixel-art avatars.

Consumer API::

    from pixavatar import AvatarGenerator, AvatarConfig

HTTP server (requires ``pip install pixavatar[server]``)::

    from pixavatar.server import create_app
"""

__version__ = "1.0.0"

from .core import (
    AvatarColor,
    AvatarConfig,
    AvatarGenerator,
    AvatarRequest,
    EncodingError,
    InvalidParameterError,
    PayloadTooLargeError,
    PixAvatarError,
    generate_avatar,
)

__all__ = [
    "AvatarColor",
    "AvatarConfig",
    "AvatarGenerator",
    "AvatarRequest",
    "generate_avatar",
    "PixAvatarError",
    "InvalidParameterError",
    "PayloadTooLargeError",
    "EncodingError",
]
