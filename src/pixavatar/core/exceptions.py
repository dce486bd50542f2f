# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Exception Hierarchy
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Structured exception hierarchy for PixAvatar.

All library-specific exceptions descend from ``PixAvatarError`` so
callers can catch the entire family with a single except clause.
"""


class PixAvatarError(Exception):
    """Base exception for all PixAvatar errors."""


class InvalidParameterError(PixAvatarError, ValueError):
    """Raised for invalid inputs (grid, digest, hash algorithm)."""


class PayloadTooLargeError(PixAvatarError):
    """Raised when the requested size or grid exceeds the configured maximum."""

    def __init__(self, requested: int, maximum: int, what: str = "size"):
        self.requested = requested
        self.maximum = maximum
        self.what = what
        unit = "px" if what == "size" else " cells"
        super().__init__(
            f"Requested payload exceeds maximum allowed {what} of {maximum}{unit}"
        )


class EncodingError(PixAvatarError):
    """Raised when the pixel buffer cannot be serialized to an image."""
