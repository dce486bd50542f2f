# ─────────────────────────────────────────────────────────────────────
# PixAvatar — PNG Encoder
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

from __future__ import annotations

import io

from PIL import Image

from .exceptions import EncodingError
from .types import PixelBuffer

IMAGE_FORMAT = "PNG"
CONTENT_TYPE = "image/png"


def encode(buffer: PixelBuffer) -> bytes:
    """Serialize an RGBA pixel buffer to PNG bytes."""
    sink = io.BytesIO()
    try:
        Image.fromarray(buffer).save(sink, format=IMAGE_FORMAT)
    except (OSError, TypeError, ValueError) as exc:
        raise EncodingError(f"failed to encode {IMAGE_FORMAT}: {exc}") from exc
    return sink.getvalue()
