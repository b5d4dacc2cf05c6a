"""Route registration for the Flask app."""

from __future__ import annotations

from flask import Flask

from .health import health_bp
from .webhook import register_webhook_route


def register_routes(app: Flask, webhook_path: str) -> None:
    app.register_blueprint(health_bp)
    register_webhook_route(app, webhook_path)
