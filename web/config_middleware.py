"""Flask application configuration and middleware setup."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from flask import Flask, g, request
from prometheus_client import Counter, Histogram

if TYPE_CHECKING:
    from config import Config

REQUEST_LATENCY = Histogram(
    "http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)
REQUEST_ERRORS = Counter(
    "http_request_errors_total",
    "Total number of 5xx responses",
    ["method", "path"],
)


def configure_app(app: Flask, config: Config, testing: bool = False) -> None:
    """Configure Flask application settings.

    Args:
        app: Flask application instance
        config: Application configuration
        testing: Whether running in testing mode
    """
    app.config.update(
        TESTING=testing,
        DEBUG=config.debug,
        DATABASE_PATH=config.database_path,
        WEBHOOK_PATH=config.webhook_path,
        JSON_SORT_KEYS=False,
    )


def _route_label(app: Flask) -> str:
    # Never label metrics with the raw webhook path, it contains the token
    rule = getattr(request.url_rule, "rule", None)
    if rule is None:
        return "unmatched"
    if rule == app.config.get("WEBHOOK_PATH"):
        return "/bot<token>"
    return rule


def setup_metrics(app: Flask) -> None:
    """Setup Prometheus metrics middleware.

    Args:
        app: Flask application instance
    """
    @app.before_request
    def before_metrics():
        g._metrics_start = time.time()

    @app.after_request
    def after_metrics(response):
        start = getattr(g, "_metrics_start", None)
        path = _route_label(app)
        if start is not None:
            REQUEST_LATENCY.labels(method=request.method, path=path).observe(time.time() - start)
        if response.status_code >= 500:
            REQUEST_ERRORS.labels(method=request.method, path=path).inc()
        return response
