"""Prometheus metrics for the booking API.

Everything lives on a private registry so the exposition only carries what
this service records.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

http_requests_total = Counter(
    "seminar_hall_http_requests_total",
    "Total number of HTTP requests",
    ["method", "route", "status"],
    registry=REGISTRY,
)

http_request_duration_seconds = Histogram(
    "seminar_hall_http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    ["method", "route", "status"],
    registry=REGISTRY,
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0),
)

http_requests_in_progress = Gauge(
    "seminar_hall_http_requests_in_progress",
    "HTTP requests currently being served",
    registry=REGISTRY,
)

bookings_total = Counter(
    "seminar_hall_bookings_total",
    "Bookings written, by the status they were left in",
    ["status"],
    registry=REGISTRY,
)

booking_conflicts_total = Counter(
    "seminar_hall_booking_conflicts_total",
    "Create or reschedule attempts refused because the slot was taken",
    registry=REGISTRY,
)

api_up = Gauge("seminar_hall_api_up", "API availability", registry=REGISTRY)
api_up.set(1)


def route_label(path: str) -> str:
    # /bookings/12/status -> /bookings/:id/status keeps label cardinality bounded
    return "/".join(":id" if part.isdigit() else part for part in path.split("/"))


def record_http_request(method: str, path: str, status_code: int, duration: float):
    labels = {"method": method, "route": route_label(path), "status": str(status_code)}
    http_requests_total.labels(**labels).inc()
    http_request_duration_seconds.labels(**labels).observe(max(duration, 0.0))


def record_booking(status: str):
    bookings_total.labels(status=status).inc()


def record_conflict():
    booking_conflicts_total.inc()


def render() -> tuple[bytes, str]:
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
