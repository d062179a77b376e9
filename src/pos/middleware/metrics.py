"""Prometheus metrics for the POS API.

HTTP traffic is recorded by :class:`PrometheusMiddleware`; the cache layer
records its own lookups and Redis timings through the helpers at the bottom.
"""
import time
from typing import Callable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Routers mounted under /v1; anything else is grouped as "/other"
RESOURCES = frozenset({"users", "payments", "categories", "products", "orders"})

HTTP_REQUESTS = Counter(
    "pos_http_requests_total",
    "HTTP requests by route group and status",
    ["method", "endpoint", "status"],
)

HTTP_LATENCY = Histogram(
    "pos_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

HTTP_IN_FLIGHT = Gauge(
    "pos_http_requests_in_flight",
    "Requests currently being served",
)

ORDERS = Counter(
    "pos_orders_total",
    "Order creation attempts by outcome",
    ["status"],  # created | rejected | error
)

CACHE_LOOKUPS = Counter(
    "pos_cache_lookups_total",
    "Read-through cache lookups",
    ["result"],  # hit | miss
)

REDIS_LATENCY = Histogram(
    "pos_redis_operation_duration_seconds",
    "Redis command latency in seconds",
    ["operation"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1],
)


def normalize_endpoint(path: str) -> str:
    """Collapse a request path to its route group.

    ``/v1/orders/42`` and ``/v1/orders`` both become ``/v1/orders`` so ids
    never end up as label values.
    """
    if path in ("/health", "/metrics"):
        return path

    parts = path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "v1" and parts[1] in RESOURCES:
        return f"/v1/{parts[1]}"
    return "/other"


def order_outcome(status_code: int) -> str:
    if status_code < 300:
        return "created"
    if status_code >= 500:
        return "error"
    return "rejected"


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Count and time every request except scrapes of ``/metrics``."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        endpoint = normalize_endpoint(request.url.path)
        status_code = 500
        HTTP_IN_FLIGHT.inc()
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            HTTP_IN_FLIGHT.dec()
            HTTP_LATENCY.labels(method=request.method, endpoint=endpoint).observe(
                time.perf_counter() - start
            )
            HTTP_REQUESTS.labels(
                method=request.method, endpoint=endpoint, status=status_code
            ).inc()
            if endpoint == "/v1/orders" and request.method == "POST":
                ORDERS.labels(status=order_outcome(status_code)).inc()


async def metrics_endpoint(request: Request) -> Response:
    """Prometheus scrape endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_cache_lookup(result: str) -> None:
    CACHE_LOOKUPS.labels(result=result).inc()


def record_redis_operation(operation: str, duration: float) -> None:
    REDIS_LATENCY.labels(operation=operation).observe(duration)
