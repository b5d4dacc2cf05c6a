"""Flask application factory."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from web.config_middleware import configure_app, setup_metrics
from web.routes import register_routes

UpdateSink = Callable[[Dict[str, Any]], Any]


def create_app(config, update_sink: Optional[UpdateSink] = None, testing: bool = False) -> Flask:
    """Create and configure Flask application.

    Args:
        config: Application configuration
        update_sink: Callable receiving every webhook update payload
        testing: Whether running in testing mode

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    configure_app(app, config, testing)
    app.config["UPDATE_SINK"] = update_sink

    setup_metrics(app)
    register_routes(app, config.webhook_path)

    _setup_routes(app)
    _setup_error_handlers(app)

    return app


def _setup_routes(app: Flask) -> None:
    @app.route('/metrics')
    def metrics():
        """Expose Prometheus metrics."""
        data = generate_latest()
        return data, 200, {'Content-Type': CONTENT_TYPE_LATEST}


def _setup_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        app.logger.error(f"Internal server error: {error}")
        return jsonify({"error": "internal server error"}), 500
