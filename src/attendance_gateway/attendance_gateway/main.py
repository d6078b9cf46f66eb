from __future__ import annotations

import importlib
import logging
import os
from typing import Mapping, Optional

import requests
from dotenv import load_dotenv
from flask import Flask, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.logging import configure_logging
from .common.responses import fail, fail_from
from .core.exceptions import DomainError
from .container import build_container
from .devices.adapter import AdapterFactory
from .health.service import Probe
from .docs.controller import register as register_docs
from .health.controller import register as register_health
from .devices.controller import register as register_devices
from .attendance.controller import register as register_attendance
from .shifts.controller import register as register_shifts
from .webhooks.controller import register as register_webhooks

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return fail_from(error)

    @app.errorhandler(404)
    def handle_not_found(error):
        return fail(f"Endpoint not found: {request.method} {request.path}", 404)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return fail(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("Internal server error", 500)


def create_app(
    settings=None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    adapter_factory: AdapterFactory | None = None,
    http_session: requests.Session | None = None,
    health_probe: Probe | None = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings = importlib.import_module(get_settings_module())
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), bool(getattr(settings, "LOG_JSON", False)))

    container = build_container(
        settings=settings,
        environ=os.environ if environ is None else environ,
        adapter_factory=adapter_factory,
        http_session=http_session,
        health_probe=health_probe,
    )
    app.extensions["attendance_gateway"] = container

    register_docs(app, container)
    register_health(app, container)
    register_devices(app, container)
    register_attendance(app, container)
    register_shifts(app, container)
    register_webhooks(app, container)
    _register_error_handlers(app)

    logger.info(
        "Gateway ready with %s device(s)",
        len(container.registry),
        extra={"devices": [d.prefix for d in container.registry.list_all()]},
    )

    if container.webhook_scheduler is not None:
        container.webhook_scheduler.start()

    return app
