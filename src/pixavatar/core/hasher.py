# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Name Hasher
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Map an arbitrary name to a fixed-length digest.

The digest is only ever used as an index source for colour and pattern
decisions. ``md5`` is the default and reproduces the original avatar set;
every other algorithm yields a different, incompatible set of avatars.
"""

from __future__ import annotations

import hashlib

from .exceptions import InvalidParameterError

MIN_DIGEST_BYTES = 16

SUPPORTED_ALGORITHMS: frozenset[str] = frozenset({"md5", "sha1", "sha256", "blake2b"})


def hash_name(name: str, algorithm: str = "md5") -> bytes:
    """Return the digest of *name* (UTF-8 encoded) under *algorithm*."""
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise InvalidParameterError(
            f"Unknown hash algorithm '{algorithm}'. "
            f"Choose from: {sorted(SUPPORTED_ALGORITHMS)}"
        )

    data = name.encode("utf-8")
    if algorithm == "blake2b":
        digest = hashlib.blake2b(data, digest_size=MIN_DIGEST_BYTES).digest()
    else:
        digest = hashlib.new(algorithm, data).digest()
    return digest
