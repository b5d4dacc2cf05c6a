"""Performance monitoring utilities using Prometheus metrics."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

import psutil
from prometheus_client import Counter, Gauge, Histogram


commands_total = Counter("bot_commands_total", "Handled bot commands", labelnames=("command",))
command_errors_total = Counter("bot_command_errors_total", "Bot commands that failed", labelnames=("command",))
command_duration = Histogram("bot_command_duration_seconds", "Bot command duration", labelnames=("command",))
draws_total = Counter("lottery_draws_total", "Draw attempts by outcome", labelnames=("kind", "status"))
db_connections = Gauge("db_connection_pool_size", "DB connection pool size")


class PerformanceMonitor:
    @contextmanager
    def track_command(self, command: str) -> Iterator[None]:
        start = time.perf_counter()
        commands_total.labels(command=command).inc()
        try:
            yield
        except Exception:
            command_errors_total.labels(command=command).inc()
            raise
        finally:
            command_duration.labels(command=command).observe(time.perf_counter() - start)

    def record_draw(self, kind: str, status: str) -> None:
        draws_total.labels(kind=kind, status=status).inc()

    def record_db_pool(self, pool_size: int) -> None:
        db_connections.set(pool_size)

    def gather_host_metrics(self) -> dict:
        process = psutil.Process()
        memory_info = process.memory_info()
        return {
            "memory_rss": memory_info.rss,
            "cpu_percent": process.cpu_percent(interval=None),
        }


monitor = PerformanceMonitor()
