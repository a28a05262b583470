"""Prometheus metrics for the ERP Finance Gateway.

Business Metrics:
- erp_plans_total: Plans previewed or materialized, by kind
- erp_plan_items_total: Entries created from confirmed plans
- erp_entry_transitions_total: Settle / revert / cancel transitions
- erp_invoice_payments_total: Card invoices paid
- erp_revert_cascade_size: Entries reverted together with an invoice payment

Technical Metrics:
- erp_statement_latency_seconds: Statement projection latency
- erp_http_requests_total: HTTP requests by endpoint/status
- erp_http_request_latency_seconds: HTTP latency by endpoint
"""

import time
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics
# =============================================================================

plans_total = Counter(
    "erp_plans_total",
    "Total number of installment/recurrence plans",
    ["kind", "action"],  # action: preview, confirm
)

plan_items_total = Counter(
    "erp_plan_items_total",
    "Ledger entries created from confirmed plans",
    ["kind"],
)

entry_transitions_total = Counter(
    "erp_entry_transitions_total",
    "Ledger entry status transitions",
    ["transition"],  # settle, revert, cancel
)

invoice_payments_total = Counter(
    "erp_invoice_payments_total",
    "Total number of card invoice payments",
)

revert_cascade_size = Histogram(
    "erp_revert_cascade_size",
    "Entries reverted by a single invoice payment reversal",
    buckets=[2, 3, 5, 10, 25, 50, 100],
)


# =============================================================================
# Technical Metrics
# =============================================================================

statement_latency = Histogram(
    "erp_statement_latency_seconds",
    "Statement projection latency in seconds",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0],
)

http_requests_total = Counter(
    "erp_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "erp_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_plan(kind: str, action: str, items: int = 0) -> None:
    """Record a plan preview or confirmation."""
    plans_total.labels(kind=kind, action=action).inc()
    if action == "confirm":
        plan_items_total.labels(kind=kind).inc(items)


def record_entry_transition(transition: str) -> None:
    entry_transitions_total.labels(transition=transition).inc()


def record_invoice_payment() -> None:
    invoice_payments_total.inc()


def record_cascade_revert(size: int) -> None:
    revert_cascade_size.observe(size)


@contextmanager
def track_statement_latency() -> Generator[None, None, None]:
    """Context manager to track statement projection latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        statement_latency.observe(time.perf_counter() - start)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
