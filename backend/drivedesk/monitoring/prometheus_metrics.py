"""
Prometheus metrics for DriveDesk.

Service operations wrapped in ``@BaseService.measure_operation`` and every HTTP
request feed the collectors below. Everything lives on a private registry so
test runs and reloads never collide with the process-wide default.
"""

from typing import Optional, cast

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

http_request_duration_seconds = Histogram(
    "drivedesk_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

http_requests_total = Counter(
    "drivedesk_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

http_requests_in_progress = Gauge(
    "drivedesk_http_requests_in_progress",
    "HTTP requests currently being handled",
    ["method", "endpoint"],
    registry=REGISTRY,
)

service_operation_duration_seconds = Histogram(
    "drivedesk_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "drivedesk_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "drivedesk_errors_total",
    "Failed service operations by exception type",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

# Domain counters
bookings_created_total = Counter(
    "drivedesk_bookings_created_total",
    "Bookings created, counting each lesson of a repeat series",
    ["lesson_type", "repeat"],
    registry=REGISTRY,
)

prepaid_hours_deducted_total = Counter(
    "drivedesk_prepaid_hours_deducted_total",
    "Pre-paid lesson hours drawn down when bookings complete",
    registry=REGISTRY,
)

prepaid_hours_refunded_total = Counter(
    "drivedesk_prepaid_hours_refunded_total",
    "Pre-paid lesson hours returned when bookings leave the completed state",
    registry=REGISTRY,
)

calendar_views_total = Counter(
    "drivedesk_calendar_views_total",
    "Calendar views resolved, by view mode",
    ["view_mode"],
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Thin recording facade over the module-level collectors."""

    @staticmethod
    def record_http_request(method: str, endpoint: str, duration: float, status_code: int) -> None:
        labels = {"method": method, "endpoint": endpoint, "status_code": str(status_code)}
        http_request_duration_seconds.labels(**labels).observe(duration)
        http_requests_total.labels(**labels).inc()

    @staticmethod
    def track_http_request_start(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).inc()

    @staticmethod
    def track_http_request_end(method: str, endpoint: str) -> None:
        http_requests_in_progress.labels(method=method, endpoint=endpoint).dec()

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record one ``measure_operation`` call.

        Args:
            service: Service class name (e.g. 'BookingService')
            operation: Operation name given to the decorator
            duration: Wall time in seconds
            status: 'success' or 'error'
            error_type: Exception class name when status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def inc_bookings_created(lesson_type: str, repeat: str, count: int = 1) -> None:
        bookings_created_total.labels(lesson_type=lesson_type, repeat=repeat).inc(count)

    @staticmethod
    def add_prepaid_hours_deducted(hours: float) -> None:
        if hours > 0:
            prepaid_hours_deducted_total.inc(hours)

    @staticmethod
    def add_prepaid_hours_refunded(hours: float) -> None:
        if hours > 0:
            prepaid_hours_refunded_total.inc(hours)

    @staticmethod
    def inc_calendar_view(view_mode: str) -> None:
        calendar_views_total.labels(view_mode=view_mode).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Current registry in the Prometheus text exposition format."""
        return cast(bytes, generate_latest(REGISTRY))

    @staticmethod
    def get_content_type() -> str:
        return cast(str, CONTENT_TYPE_LATEST)


prometheus_metrics = PrometheusMetrics()
