"""Dispatch, effect and render metrics.

Metrics Exposed:
  - rinkside_actions_total            (Counter[label=action])
  - rinkside_effects_total            (Counter[label=kind])
  - rinkside_fetch_failures_total     (Counter[label=key])
  - rinkside_inflight_tasks           (Gauge)
  - rinkside_render_seconds           (Histogram[label=panel])
  - rinkside_cache_requests_total     (Counter[labels=entity,result])

All collectors live on a dedicated ``CollectorRegistry`` so repeated
construction (tests, reloads) never collides with the process default
registry. ``start_http_server`` can expose it when RINKSIDE_METRICS_PORT is
set.
"""
from __future__ import annotations

import logging
import threading

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server

logger = logging.getLogger(__name__)

_RENDER_BUCKETS = (0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25)


class RinksideMetrics:
    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()
        self.actions = Counter(
            'rinkside_actions_total', 'Actions dispatched through the runtime',
            ['action'], registry=self.registry,
        )
        self.effects = Counter(
            'rinkside_effects_total', 'Effects executed by kind',
            ['kind'], registry=self.registry,
        )
        self.fetch_failures = Counter(
            'rinkside_fetch_failures_total', 'Failed data loads by completion action',
            ['key'], registry=self.registry,
        )
        self.inflight = Gauge(
            'rinkside_inflight_tasks', 'RunAsync effects currently in flight',
            registry=self.registry,
        )
        self.render_seconds = Histogram(
            'rinkside_render_seconds', 'Time spent rendering one panel',
            ['panel'], buckets=_RENDER_BUCKETS, registry=self.registry,
        )
        self.cache_requests = Counter(
            'rinkside_cache_requests_total', 'Provider cache lookups by entity and hit/miss',
            ['entity', 'result'], registry=self.registry,
        )

    def value(self, name: str, labels: dict[str, str] | None = None) -> float:
        """Sample lookup used by tests and the debug status line."""
        v = self.registry.get_sample_value(name, labels or {})
        return v if v is not None else 0.0

    def serve(self, port: int) -> None:
        start_http_server(port, registry=self.registry)
        logger.info("Metrics endpoint listening on :%d", port)


_metrics: RinksideMetrics | None = None
_lock = threading.Lock()


def get_metrics() -> RinksideMetrics:
    global _metrics
    with _lock:
        if _metrics is None:
            _metrics = RinksideMetrics()
        return _metrics


__all__ = ["RinksideMetrics", "get_metrics"]
