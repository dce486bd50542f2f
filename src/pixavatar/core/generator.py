# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Generation Pipeline
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Name-to-PNG pipeline: hash, colour, mask, rasterize, encode.

Each call owns every intermediate (digest, colour, mask, buffer), so a
single ``AvatarGenerator`` can be shared across request threads.

Usage::

    from pixavatar.core import AvatarGenerator

    png = AvatarGenerator().generate("saitama", size=128, grid=8)
"""

from __future__ import annotations

import logging
import re

from .color import derive_color
from .config import AvatarConfig
from .encoder import encode
from .exceptions import EncodingError, PayloadTooLargeError
from .hasher import hash_name
from .metrics import metrics
from .pattern import fill_mask
from .raster import rasterize
from .types import AvatarRequest, PixelBuffer

logger = logging.getLogger("PixAvatar.Generator")

# ASCII digits with an optional sign; no whitespace, underscores or other scripts.
_INT_RE = re.compile(r"[+-]?[0-9]+")


def parse_int_param(value: str | None) -> int | None:
    """Parse a query/CLI value, returning None when absent or not an integer."""
    if value is None or value == "":
        return None
    if not _INT_RE.fullmatch(value):
        logger.debug("Ignoring non-integer parameter %r", value)
        return None
    return int(value)


def _bounded(value: int, maximum: int, what: str, config: AvatarConfig) -> int:
    if value <= maximum:
        return value
    if config.oversize_policy == "reject":
        metrics.inc("oversize_rejections_total")
        raise PayloadTooLargeError(value, maximum, what)
    logger.debug("Clamping %s %d to %d", what, value, maximum)
    return maximum


def resolve_request(
    name: str | None,
    size: int | None,
    grid: int | None,
    config: AvatarConfig,
) -> AvatarRequest:
    """Apply defaults and the oversize policy to raw request values.

    Empty names fall back to ``config.default_name``; missing or
    non-positive sizes and grids fall back to the configured defaults.
    A size above ``config.max_size`` or a grid above ``config.max_grid``
    raises ``PayloadTooLargeError`` under the ``reject`` policy and is
    lowered to the maximum under ``clamp``.
    """
    if not name:
        name = config.default_name

    if size is None or size <= 0:
        size = config.default_size
    size = _bounded(size, config.max_size, "size", config)

    if grid is None or grid <= 0:
        grid = config.default_grid
    grid = _bounded(grid, config.max_grid, "grid", config)

    return AvatarRequest(name=name, size=size, grid=grid)


class AvatarGenerator:
    """Deterministic identicon renderer bound to one configuration."""

    def __init__(self, config: AvatarConfig | None = None) -> None:
        self.config = config or AvatarConfig()

    def render(self, request: AvatarRequest) -> PixelBuffer:
        """Produce the RGBA pixel buffer for a resolved request."""
        digest = hash_name(request.name, self.config.hash_algorithm)
        color = derive_color(digest, clamp=self.config.clamp_color)
        logger.debug("Colour for '%s': %s", request.name, color.hex())
        mask = fill_mask(digest, request.grid)
        return rasterize(mask, color, request.size, request.grid)

    def generate(
        self,
        name: str | None,
        size: int | None = None,
        grid: int | None = None,
    ) -> bytes:
        """Resolve, render and PNG-encode the avatar for *name*."""
        request = resolve_request(name, size, grid, self.config)
        metrics.observe("avatar_size_pixels", request.size)

        with metrics.rendering():
            buffer = self.render(request)
            try:
                data = encode(buffer)
            except EncodingError:
                metrics.inc("generation_errors_total")
                raise

        metrics.inc("avatars_generated_total")
        logger.debug(
            "Generated %dx%d avatar (grid=%d) for '%s': %d bytes",
            request.size,
            request.size,
            request.grid,
            request.name,
            len(data),
        )
        return data


def generate_avatar(
    name: str | None,
    size: int | None = None,
    grid: int | None = None,
    config: AvatarConfig | None = None,
) -> bytes:
    """One-shot convenience wrapper around ``AvatarGenerator.generate``."""
    return AvatarGenerator(config).generate(name, size, grid)
