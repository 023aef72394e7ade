"""
Prometheus metrics for the validation engine

Counts validation runs, per-kind rule outcomes, rule compilation errors and
validator resolution misses, and times each run.
"""
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from ..config import get_settings

# Private registry so importing the engine never touches the process default
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

validation_runs_total = Counter(
    name="validation_runs_total",
    documentation="Total number of validator runs",
    labelnames=["validator", "result"],  # result: pass, fail
    registry=REGISTRY,
)

rule_evaluations_total = Counter(
    name="validation_rule_evaluations_total",
    documentation="Total number of rule evaluations",
    labelnames=["kind", "outcome"],  # outcome: pass, fail, error
    registry=REGISTRY,
)

validation_duration_seconds = Histogram(
    name="validation_duration_seconds",
    documentation="Time spent evaluating a rule set in seconds",
    labelnames=["mode"],  # mode: short_circuit, collect
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)


# =======================
# ERROR METRICS
# =======================

rule_compile_errors_total = Counter(
    name="validation_rule_compile_errors_total",
    documentation="Total number of rules that failed to compile",
    labelnames=["kind", "error_type"],
    registry=REGISTRY,
)

validator_resolution_failures_total = Counter(
    name="validation_validator_resolution_failures_total",
    documentation="Total number of runs whose validator was missing or inactive",
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def start_metrics_server(port: Optional[int] = None) -> int:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to Settings.metrics_port)

    Returns:
        The port the server listens on
    """
    # Lazy import: only bind a port when the endpoint is wanted
    from prometheus_client import start_http_server

    metrics_port = port or get_settings().metrics_port
    start_http_server(metrics_port, registry=REGISTRY)
    return metrics_port


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(validation_duration_seconds, mode="collect"):
            ...
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    if labels:
        counter.labels(**labels).inc(value)
    else:
        counter.inc(value)


def record_rule_outcome(kind: str, passed: bool) -> None:
    """Count one rule evaluation"""
    increment_counter(rule_evaluations_total, kind=kind, outcome="pass" if passed else "fail")


def record_rule_error(kind: str) -> None:
    """Count one rule that raised while evaluating"""
    increment_counter(rule_evaluations_total, kind=kind, outcome="error")


def record_compile_error(kind: str, error_type: str) -> None:
    """Count one rule that could not be compiled"""
    increment_counter(rule_compile_errors_total, kind=kind or "unknown", error_type=error_type)


def record_validation_run(validator: str, success: bool) -> None:
    """Count one validator run"""
    increment_counter(validation_runs_total, validator=validator, result="pass" if success else "fail")


def record_resolution_failure() -> None:
    """Count one run whose validator could not be resolved"""
    increment_counter(validator_resolution_failures_total)
