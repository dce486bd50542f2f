# ─────────────────────────────────────────────────────────────────────
# PixAvatar — FastAPI Server
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
FastAPI server exposing ``GET /avatar``.

Usage::

    # Programmatic
    from pixavatar.server import create_app
    app = create_app()

    # CLI
    pixavatar serve --port 8080
"""

from __future__ import annotations

import contextvars
import logging
import time
import uuid
from contextlib import asynccontextmanager

from .core.config import AvatarConfig
from .core.encoder import CONTENT_TYPE
from .core.exceptions import EncodingError, PayloadTooLargeError
from .core.generator import AvatarGenerator, parse_int_param
from .core.metrics import metrics

REQUEST_ID_CTX: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)

logger = logging.getLogger("PixAvatar.Server")

try:
    from fastapi import FastAPI, Request
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import PlainTextResponse, Response
    from pydantic import BaseModel

    _FASTAPI_AVAILABLE = True
except ImportError:
    _FASTAPI_AVAILABLE = False


def _check_fastapi() -> None:
    if not _FASTAPI_AVAILABLE:
        raise ImportError(
            "FastAPI is required for the server. "
            "Install with: pip install pixavatar[server]"
        )


# ── Pydantic response models ──────────────────────────────────────────

if _FASTAPI_AVAILABLE:

    class HealthResponse(BaseModel):
        status: str = "ok"
        version: str
        profile: str
        uptime_seconds: float

    class ConfigResponse(BaseModel):
        config: dict


def create_app(config: AvatarConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    _check_fastapi()

    cfg = config or AvatarConfig.from_env()
    generator = AvatarGenerator(cfg)
    _start_time = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg.configure_logging()
        metrics.enabled = cfg.metrics_enabled
        logger.info(
            "PixAvatar server started (profile=%s, hash=%s, oversize=%s)",
            cfg.profile,
            cfg.hash_algorithm,
            cfg.oversize_policy,
        )
        yield
        logger.info("PixAvatar server shutting down")

    app = FastAPI(
        title="PixAvatar",
        description="Deterministic symmetric pixel avatars",
        version=__import__("pixavatar").__version__,
        lifespan=lifespan,
    )

    _origins = [o.strip() for o in cfg.cors_origins.split(",") if o.strip()]
    if len(_origins) > 100:
        raise ValueError(f"Too many CORS origins: {len(_origins)} (max 100)")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # ── Middleware: correlation IDs + metrics ─────────────────────────

    @app.middleware("http")
    async def _http_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        REQUEST_ID_CTX.set(request_id)

        start = time.monotonic()
        response = await call_next(request)
        metrics.record_request(
            request.method,
            request.url.path,
            response.status_code,
            time.monotonic() - start,
        )
        response.headers["X-Request-ID"] = request_id
        return response

    # ── Avatar ────────────────────────────────────────────────────────

    # Plain ``def`` so each render runs on the worker threadpool.
    @app.get("/avatar")
    def avatar(
        name: str = "",
        resolution: str | None = None,
        size: str | None = None,
        grid: str | None = None,
    ):
        requested = parse_int_param(resolution)
        if requested is None:
            requested = parse_int_param(size)

        try:
            data = generator.generate(name, requested, parse_int_param(grid))
        except PayloadTooLargeError as exc:
            logger.info(
                "Rejected avatar for '%s': %s %d", name, exc.what, exc.requested
            )
            return PlainTextResponse(str(exc), status_code=413)
        except EncodingError as exc:
            logger.error(
                "Error generating avatar for '%s': %s",
                name or cfg.default_name,
                exc,
            )
            return PlainTextResponse("Failed to generate avatar", status_code=500)

        return Response(content=data, media_type=CONTENT_TYPE)

    # ── Health ────────────────────────────────────────────────────────

    @app.get("/v1/health", response_model=HealthResponse)
    async def health():
        import pixavatar

        return HealthResponse(
            version=pixavatar.__version__,
            profile=cfg.profile,
            uptime_seconds=time.monotonic() - _start_time,
        )

    # ── Metrics ───────────────────────────────────────────────────────

    @app.get("/v1/metrics")
    async def get_metrics():
        return metrics.get_metrics()

    @app.get("/v1/metrics/prometheus", response_class=PlainTextResponse)
    async def get_prometheus():
        return metrics.prometheus_format()

    # ── Config ────────────────────────────────────────────────────────

    @app.get("/v1/config", response_model=ConfigResponse)
    async def get_config():
        return ConfigResponse(config=cfg.to_dict())

    return app
