# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Configuration Manager
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
Immutable dataclass configuration with env var, YAML, and profile support.

Usage::

    config = AvatarConfig.from_env()
    config = AvatarConfig.from_yaml("config.yaml")
    config = AvatarConfig.from_profile("soft")
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

from .hasher import SUPPORTED_ALGORITHMS

OVERSIZE_POLICIES = ("reject", "clamp")


@dataclass(frozen=True)
class AvatarConfig:
    """Central configuration for PixAvatar.

    Parameters
    ----------
    default_name : str — name used when the request carries none.
    default_size : int — output size in pixels when absent or non-positive.
    default_grid : int — cells per row when absent or non-positive.
    max_size : int — largest size the service will render.
    max_grid : int — largest grid the service will render; render cost
        grows with the square of the grid.
    clamp_color : bool — clamp colour channels to [30, 225].
    oversize_policy : str — "reject" (413) or "clamp" (render at max_size
        / max_grid) for sizes and grids above their maximum.
    hash_algorithm : str — md5, sha1, sha256 or blake2b. Changing it
        changes every avatar.
    server_host : str — FastAPI server bind address.
    server_port : int — FastAPI server port.
    cors_origins : str — comma-separated allowed origins.
    output_path : str — default file written by ``pixavatar generate``.
    metrics_enabled : bool — enable in-process metrics collection.
    log_level : str — logging level.
    log_json : bool — structured JSON logging.
    """

    # Generation
    default_name: str = "saitama"
    default_size: int = 256
    default_grid: int = 6
    max_size: int = 1080
    max_grid: int = 256
    clamp_color: bool = False
    oversize_policy: str = "reject"
    hash_algorithm: str = "md5"

    # Server
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    cors_origins: str = "*"

    # File output
    output_path: str = "avatar.png"

    # Observability
    metrics_enabled: bool = True
    log_level: str = "INFO"
    log_json: bool = False

    # Profile name (informational)
    profile: str = "default"

    def __post_init__(self) -> None:
        if not self.default_name:
            raise ValueError("default_name must be a non-empty string")
        if self.default_size < 1:
            raise ValueError(f"default_size must be >= 1, got {self.default_size}")
        if self.default_grid < 1:
            raise ValueError(f"default_grid must be >= 1, got {self.default_grid}")
        if self.max_size < self.default_size:
            raise ValueError(
                f"max_size ({self.max_size}) must be "
                f">= default_size ({self.default_size})"
            )
        if self.max_grid < self.default_grid:
            raise ValueError(
                f"max_grid ({self.max_grid}) must be "
                f">= default_grid ({self.default_grid})"
            )
        if self.oversize_policy not in OVERSIZE_POLICIES:
            raise ValueError(
                f"oversize_policy must be one of {OVERSIZE_POLICIES}, "
                f"got {self.oversize_policy!r}"
            )
        if self.hash_algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(
                f"hash_algorithm must be one of {sorted(SUPPORTED_ALGORITHMS)}, "
                f"got {self.hash_algorithm!r}"
            )
        if not (1 <= self.server_port <= 65535):
            raise ValueError(
                f"server_port must be in [1, 65535], got {self.server_port}"
            )

    @classmethod
    def from_env(cls, prefix: str = "PIXAVATAR_") -> AvatarConfig:
        """Load configuration from environment variables.

        Reads ``PIXAVATAR_<FIELD>`` env vars (case-insensitive field matching).
        Example: ``PIXAVATAR_CLAMP_COLOR=true``
        """
        kwargs: dict = {}
        field_map = {f.name.upper(): f for f in cls.__dataclass_fields__.values()}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            field_name = key[len(prefix) :]
            if field_name in field_map:
                fld = field_map[field_name]
                try:
                    kwargs[fld.name] = _coerce(value, fld.type)  # type: ignore[arg-type]
                except (ValueError, TypeError) as exc:
                    raise ValueError(
                        f"Invalid value for env var {key}={value!r}: {exc}"
                    ) from exc

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str) -> AvatarConfig:
        """Load configuration from a YAML file.

        Falls back to JSON parsing if PyYAML is not installed.
        """
        with open(path, encoding="utf-8") as f:
            raw = f.read()

        try:
            import yaml  # type: ignore[import-untyped]

            data = yaml.safe_load(raw)
        except ImportError:
            data = json.loads(raw)

        if not isinstance(data, dict):
            return cls()
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})

    @classmethod
    def from_profile(cls, name: str) -> AvatarConfig:
        """Load a predefined profile.

        Profiles
        --------
        - ``"classic"`` — md5 digest, raw colours, oversized requests rejected.
        - ``"soft"`` — md5 digest, colours clamped away from black and white,
          oversized requests rendered at ``max_size`` / ``max_grid``.
        """
        profiles: dict[str, dict] = {
            "classic": {
                "hash_algorithm": "md5",
                "clamp_color": False,
                "oversize_policy": "reject",
                "profile": "classic",
            },
            "soft": {
                "hash_algorithm": "md5",
                "clamp_color": True,
                "oversize_policy": "clamp",
                "profile": "soft",
            },
        }
        if name not in profiles:
            raise ValueError(
                f"Unknown profile '{name}'. Choose from: {list(profiles.keys())}"
            )
        return cls(**profiles[name])

    def configure_logging(self) -> None:
        """Apply log_level and log_json settings to the PixAvatar logger hierarchy."""
        root = logging.getLogger("PixAvatar")
        root.setLevel(getattr(logging, self.log_level.upper(), logging.INFO))

        if self.log_json:
            handler = logging.StreamHandler()
            handler.setFormatter(_JsonFormatter())
            root.handlers = [handler]

    def to_dict(self) -> dict:
        """Serialize to a plain dict (safe for JSON/API responses)."""
        return {fld: getattr(self, fld) for fld in self.__dataclass_fields__}


class _JsonFormatter(logging.Formatter):
    """Structured JSON log formatter for production use."""

    def format(self, record: logging.LogRecord) -> str:
        import time as _time

        entry = {
            "ts": _time.time(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            entry["request_id"] = request_id
        return json.dumps(entry)


def _coerce(value: str, type_hint: str) -> object:
    """Coerce a string env var to the target type."""
    if type_hint == "bool":
        low = value.lower()
        if low in ("true", "1", "yes"):
            return True
        if low in ("false", "0", "no"):
            return False
        raise ValueError(
            f"invalid bool value: {value!r} (expected true/false/1/0/yes/no)"
        )
    if type_hint == "int":
        return int(value)
    return value
