"""
Prometheus metrics for system monitoring.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from src.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()
prometheus_multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")

if prometheus_multiproc_dir and os.path.isdir(prometheus_multiproc_dir):
    try:
        multiprocess.MultiProcessCollector(registry)
    except ValueError as e:
        logger.warning("Failed to initialize multiprocess collector", error=str(e))
        registry = CollectorRegistry()


class DummyMetric:
    """Stand-in used when a metric cannot be registered."""

    def labels(self, *args, **kwargs):
        return self

    def inc(self, amount=1):
        pass

    def observe(self, value):
        pass


def get_registry():
    """Get the current registry."""
    return registry


def _get_metric(metric_class, *args, **kwargs):
    """Create a metric, falling back to a no-op when registration fails."""
    try:
        return metric_class(*args, **kwargs, registry=get_registry())
    except ValueError as e:
        logger.warning(
            "Failed to create metric", metric=metric_class.__name__, error=str(e)
        )
        return DummyMetric()


APPOINTMENTS_SCHEDULED = _get_metric(
    Counter,
    "appointments_scheduled_total",
    "Total number of appointments booked",
    ["time_slot"],
)

APPOINTMENTS_CANCELLED = _get_metric(
    Counter,
    "appointments_cancelled_total",
    "Total number of appointments cancelled",
    ["source"],
)

APPOINTMENTS_RESCHEDULED = _get_metric(
    Counter,
    "appointments_rescheduled_total",
    "Total number of appointments moved to another slot",
)

SLOT_CONFLICTS = _get_metric(
    Counter,
    "slot_conflicts_total",
    "Total number of booking attempts rejected because the slot was taken",
    ["stage"],
)

REPAIR_REQUESTS_CREATED = _get_metric(
    Counter,
    "repair_requests_created_total",
    "Total number of repair requests created",
    ["urgency_level"],
)

NOTIFICATIONS_SENT = _get_metric(
    Counter,
    "appointment_notifications_total",
    "Appointment notifications by kind and outcome",
    ["kind", "status"],
)

MATCHER_BEST_SCORE = _get_metric(
    Histogram,
    "technician_matcher_best_score",
    "Score of the technician picked by the matcher",
    buckets=[50, 70, 80, 90, 100, 105, 110],
)

API_REQUESTS = _get_metric(
    Counter,
    "api_requests_total",
    "Total number of API requests",
    ["method", "endpoint", "status_code"],
)

API_REQUEST_DURATION = _get_metric(
    Histogram,
    "api_request_duration_seconds",
    "Time spent processing API requests",
    ["method", "endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)

ERRORS_TOTAL = _get_metric(
    Counter,
    "errors_total",
    "Total number of errors",
    ["error_type", "component"],
)


def record_appointment_scheduled(time_slot: str):
    """Record a successful booking."""
    APPOINTMENTS_SCHEDULED.labels(time_slot=time_slot).inc()


def record_appointment_cancelled(source: str):
    """Record a cancellation (customer, request_cancelled)."""
    APPOINTMENTS_CANCELLED.labels(source=source).inc()


def record_appointment_rescheduled():
    """Record a reschedule."""
    APPOINTMENTS_RESCHEDULED.inc()


def record_slot_conflict(stage: str):
    """Record a rejected booking (precheck, booking, constraint)."""
    SLOT_CONFLICTS.labels(stage=stage).inc()


def record_repair_request_created(urgency_level: str):
    """Record repair request creation."""
    REPAIR_REQUESTS_CREATED.labels(urgency_level=urgency_level).inc()


def record_notification(kind: str, status: str):
    """Record a notification attempt."""
    NOTIFICATIONS_SENT.labels(kind=kind, status=status).inc()


def record_matcher_score(score: float):
    """Record the winning matcher score."""
    MATCHER_BEST_SCORE.observe(score)


def record_api_request(method: str, endpoint: str, status_code: int, duration: float):
    """Record API request metrics."""
    API_REQUESTS.labels(
        method=method, endpoint=endpoint, status_code=str(status_code)
    ).inc()
    API_REQUEST_DURATION.labels(method=method, endpoint=endpoint).observe(duration)


def record_error(error_type: str, component: str):
    """Record error metric."""
    ERRORS_TOTAL.labels(error_type=error_type, component=component).inc()


def get_metrics() -> bytes:
    """Get Prometheus metrics in text format."""
    return generate_latest(get_registry())


def get_metrics_content_type() -> str:
    """Get Prometheus metrics content type."""
    return CONTENT_TYPE_LATEST
