"""Liveness and health endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from core.exceptions import StoreUnavailableError
from database.connection import get_db_pool
from utils.performance import monitor


health_bp = Blueprint("health", __name__)


@health_bp.route("/")
def liveness():
    return jsonify({"status": "OK"})


@health_bp.route("/health")
def health_check():
    try:
        pool = get_db_pool()
    except StoreUnavailableError:
        pool = None

    if pool is not None:
        monitor.record_db_pool(pool.size)

    data = {
        "status": "ok" if pool is not None else "degraded",
        "store": "ok" if pool is not None else "unavailable",
        "db_pool_size": pool.size if pool is not None else 0,
        "host": monitor.gather_host_metrics(),
    }
    return jsonify(data), 200 if pool is not None else 503
