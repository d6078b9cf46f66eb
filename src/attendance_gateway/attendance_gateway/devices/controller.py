from __future__ import annotations

from flask import Flask, abort

from ..common.responses import fail_from, ok
from ..core.constants import RESERVED_PATH_SEGMENTS
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.device_service

    @app.route("/devices", methods=["GET"], endpoint="list_devices")
    def list_devices():
        result = service.list_devices()
        return ok(result["data"], summary=result["summary"])

    @app.route("/country/<code>/devices", methods=["GET"], endpoint="country_devices")
    def country_devices(code: str):
        try:
            result = service.list_by_country(code)
        except DomainError as e:
            return fail_from(e)
        return ok(result["data"], summary=result["summary"])

    @app.route("/<prefix>/device/info", methods=["GET"], endpoint="device_info")
    def device_info(prefix: str):
        try:
            return ok(service.get_device_info(prefix))
        except DomainError as e:
            return fail_from(e)

    @app.route("/<prefix>/validate", methods=["GET"], endpoint="validate_device")
    def validate_device(prefix: str):
        if prefix in RESERVED_PATH_SEGMENTS:
            abort(405)
        return ok(service.validate_prefix(prefix))
