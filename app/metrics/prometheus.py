# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "clan_requests_total",
    "Total HTTP requests to the clan key reminder service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "clan_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "clan_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
REMINDER_TICKS = Counter(
    "clan_reminder_ticks_total",
    "Total reminder ticks evaluated",
)
REMINDERS_DISPATCHED = Counter(
    "clan_reminders_dispatched_total",
    "Reminder dispatch outcomes per boss type",
    ["boss", "status"],
)
WEBHOOK_DURATION = Histogram(
    "clan_webhook_duration_seconds",
    "Webhook POST latency in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)
KEY_UPDATES = Counter(
    "clan_key_updates_total",
    "Key-update requests by result",
    ["result"],
)
