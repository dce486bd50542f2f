# ─────────────────────────────────────────────────────────────────────
# PixAvatar — Metrics & Observability
# (C) 1998-2026 Miroslav Sotek. All rights reserved.
# License: GNU AGPL v3 | Commercial licensing available
# ─────────────────────────────────────────────────────────────────────
"""
In-process render and request metrics with Prometheus text output.

Usage::

    from pixavatar.core.metrics import metrics

    with metrics.rendering():
        png = generator.generate("saitama")
    print(metrics.prometheus_format())
"""

from __future__ import annotations

import bisect
import threading
import time
from contextlib import contextmanager

COUNTERS: dict[str, str] = {
    "avatars_generated_total": "Avatars rendered and encoded",
    "generation_errors_total": "Avatar generations that failed to encode",
    "oversize_rejections_total": "Requests rejected for exceeding size or grid limits",
}

HISTOGRAMS: dict[str, tuple[str, tuple[float, ...]]] = {
    "generation_duration_seconds": (
        "Hash-to-PNG generation latency",
        (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    ),
    "avatar_size_pixels": (
        "Rendered avatar edge length",
        (32, 64, 128, 256, 512, 768, 1080),
    ),
    "http_request_duration_seconds": (
        "HTTP request duration",
        (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    ),
}


class _Histogram:
    """Fixed-bucket histogram; keeps per-bucket counts, not samples."""

    def __init__(self, bounds: tuple[float, ...]) -> None:
        self.bounds = bounds
        self.hits = [0] * (len(bounds) + 1)  # last slot is +Inf
        self.count = 0
        self.sum = 0.0

    def observe(self, value: float) -> None:
        self.hits[bisect.bisect_left(self.bounds, value)] += 1
        self.count += 1
        self.sum += value

    def cumulative(self) -> list[tuple[str, int]]:
        labels = [f"{b:g}" for b in self.bounds] + ["+Inf"]
        out, running = [], 0
        for label, hits in zip(labels, self.hits):
            running += hits
            out.append((label, running))
        return out


class MetricsCollector:
    """Thread-safe collector shared by every request thread."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        """Zero every metric (for testing)."""
        with self._lock:
            self._counters = dict.fromkeys(COUNTERS, 0)
            self._requests: dict[tuple[str, str, int], int] = {}
            self._histograms = {
                name: _Histogram(bounds) for name, (_, bounds) in HISTOGRAMS.items()
            }
            self._in_flight = 0

    def inc(self, name: str) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._counters[name] += 1

    def observe(self, name: str, value: float) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._histograms[name].observe(value)

    def record_request(
        self, method: str, endpoint: str, status: int, seconds: float
    ) -> None:
        """Count one HTTP exchange and its duration."""
        if not self.enabled:
            return
        key = (method, endpoint, status)
        with self._lock:
            self._requests[key] = self._requests.get(key, 0) + 1
            self._histograms["http_request_duration_seconds"].observe(seconds)

    @contextmanager
    def rendering(self):
        """Track one in-flight render and time it."""
        if not self.enabled:
            yield
            return
        with self._lock:
            self._in_flight += 1
        start = time.monotonic()
        try:
            yield
        finally:
            elapsed = time.monotonic() - start
            with self._lock:
                self._in_flight -= 1
                self._histograms["generation_duration_seconds"].observe(elapsed)

    def get_metrics(self) -> dict:
        """Snapshot as a JSON-ready dict."""
        with self._lock:
            return {
                "counters": dict(self._counters),
                "requests": [
                    {"method": m, "endpoint": e, "status": s, "count": n}
                    for (m, e, s), n in sorted(self._requests.items())
                ],
                "histograms": {
                    name: {"count": h.count, "sum": h.sum}
                    for name, h in self._histograms.items()
                },
                "renders_in_flight": self._in_flight,
            }

    def prometheus_format(self) -> str:
        """Render metrics in Prometheus text exposition format."""
        lines: list[str] = []
        with self._lock:
            for name, help_text in COUNTERS.items():
                fqn = f"pixavatar_{name}"
                lines += [
                    f"# HELP {fqn} {help_text}",
                    f"# TYPE {fqn} counter",
                    f"{fqn} {self._counters[name]}",
                ]

            fqn = "pixavatar_http_requests_total"
            lines += [
                f"# HELP {fqn} HTTP requests by method/endpoint/status",
                f"# TYPE {fqn} counter",
            ]
            for (method, endpoint, status), n in sorted(self._requests.items()):
                lines.append(
                    f'{fqn}{{endpoint="{endpoint}",method="{method}",'
                    f'status="{status}"}} {n}'
                )

            for name, (help_text, _) in HISTOGRAMS.items():
                h = self._histograms[name]
                fqn = f"pixavatar_{name}"
                lines += [f"# HELP {fqn} {help_text}", f"# TYPE {fqn} histogram"]
                lines += [
                    f'{fqn}_bucket{{le="{le}"}} {n}' for le, n in h.cumulative()
                ]
                lines += [f"{fqn}_count {h.count}", f"{fqn}_sum {h.sum}"]

            fqn = "pixavatar_renders_in_flight"
            lines += [
                f"# HELP {fqn} Avatars currently being rendered",
                f"# TYPE {fqn} gauge",
                f"{fqn} {self._in_flight}",
            ]
        return "\n".join(lines) + "\n"


# Module-level singleton
metrics = MetricsCollector()
