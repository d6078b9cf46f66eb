from __future__ import annotations

import time

from flask import Flask, g

from ..common.responses import fail, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.health_service

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _record_metrics(response):
        started = g.pop("request_started", None)
        if started is not None:
            elapsed_ms = (time.perf_counter() - started) * 1000
            service.metrics.record(response.status_code < 400, elapsed_ms)
            response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"
        return response

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return ok(service.basic())

    @app.route("/health/system", methods=["GET"], endpoint="health_system")
    def health_system():
        result = service.system_health()
        return ok(result["data"], summary=result["summary"], status=result["status"], message=result["message"])

    @app.route("/health/devices", methods=["GET"], endpoint="health_devices")
    def health_devices():
        return ok(service.device_health())

    @app.route("/<prefix>/health", methods=["GET"], endpoint="device_health")
    def device_health(prefix: str):
        if not container.registry.is_valid(prefix):
            return fail(f"Device not found: {prefix}", 404)
        return ok(service.check_device(prefix))

    @app.route("/health/report", methods=["GET"], endpoint="health_report")
    def health_report():
        return ok(service.report())

    @app.route("/health/metrics", methods=["GET"], endpoint="health_metrics")
    def health_metrics():
        return ok(service.metrics_snapshot())

    @app.route("/health/info", methods=["GET"], endpoint="health_info")
    def health_info():
        scheduler = container.webhook_scheduler
        return ok(service.info(scheduler.status() if scheduler is not None else None))
