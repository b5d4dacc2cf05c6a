"""Endpoint receiving updates pushed by Telegram."""

from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from core import get_logger

logger = get_logger(__name__)


def receive_update():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "expected a JSON update"}), 400

    sink = current_app.config.get("UPDATE_SINK")
    if sink is None:
        logger.warning("Update received while the bot is not running")
        return jsonify({"ok": False, "error": "bot is not running"}), 503

    logger.debug(f"Update {payload.get('update_id')} received")
    sink(payload)
    return jsonify({"ok": True})


def register_webhook_route(app: Flask, path: str) -> None:
    """Mount the webhook under ``path`` (``/bot<token>``)."""
    app.add_url_rule(path, endpoint="webhook", view_func=receive_update, methods=["POST"])
