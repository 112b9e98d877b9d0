"""Prometheus metrics for gateway calls."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY


def _safe_counter(name: str, desc: str, registry: CollectorRegistry, labelnames: tuple[str, ...] = ()) -> Counter:
    try:
        return Counter(name, desc, labelnames=labelnames, registry=registry)
    except ValueError:
        return registry._names_to_collectors.get(name + "_total") or registry._names_to_collectors[name]


def _safe_histogram(name: str, desc: str, registry: CollectorRegistry, labelnames: tuple[str, ...] = ()) -> Histogram:
    try:
        return Histogram(name, desc, labelnames=labelnames, registry=registry)
    except ValueError:
        return registry._names_to_collectors[name]


class Metrics:
    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        reg = registry or REGISTRY
        self.registry = reg
        self.completions_total = _safe_counter("deskbridge_completions_total", "Chat completions attempted", reg)
        self.completion_errors = _safe_counter(
            "deskbridge_completion_errors_total", "Failed chat completions per error kind", reg, labelnames=("kind",)
        )
        self.completion_latency = _safe_histogram("deskbridge_completion_latency_seconds", "Chat completion latency", reg)
        self.commands_total = _safe_counter("deskbridge_commands_total", "Front-end commands invoked", reg, labelnames=("command",))


_metrics: Metrics | None = None


def get_metrics(registry: CollectorRegistry | None = None) -> Metrics:
    global _metrics
    if _metrics is None:
        _metrics = Metrics(registry)
    return _metrics
