# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Shared Test Fixtures
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────

import io

import numpy as np
import pytest
from PIL import Image

from pixavatar.core import AvatarConfig, AvatarGenerator


@pytest.fixture
def config():
    """Default configuration (md5, no colour clamp, reject oversize)."""
    return AvatarConfig()


@pytest.fixture
def generator(config):
    """AvatarGenerator bound to the default configuration."""
    return AvatarGenerator(config)


@pytest.fixture
def decode():
    """Decode PNG bytes into an RGBA numpy array."""

    def _decode(data: bytes) -> np.ndarray:
        with Image.open(io.BytesIO(data)) as img:
            assert img.format == "PNG"
            return np.asarray(img.convert("RGBA"))

    return _decode


@pytest.fixture(autouse=True)
def _metrics_enabled():
    """Keep the module-level collector on between tests."""
    from pixavatar.core.metrics import metrics

    metrics.enabled = True
    yield
    metrics.enabled = True
