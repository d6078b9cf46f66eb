from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail_from, ok
from ..core.exceptions import DomainError
from ..container import Container
from .model import DeviceSelector


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _device_response(call, *args, **kwargs):
        try:
            result = call(*args, **kwargs)
        except DomainError as e:
            return fail_from(e)
        return ok(result["data"], summary=result["summary"])

    @app.route("/<prefix>/attendance", methods=["GET"], endpoint="device_attendance")
    def device_attendance(prefix: str):
        return _device_response(service.get_latest, prefix)

    @app.route("/<prefix>/attendance/date/<date>", methods=["GET"], endpoint="device_attendance_by_date")
    def device_attendance_by_date(prefix: str, date: str):
        return _device_response(service.get_by_date, prefix, date)

    @app.route(
        "/<prefix>/attendance/filter/<start>/<end>",
        methods=["GET"],
        endpoint="device_attendance_by_range",
    )
    def device_attendance_by_range(prefix: str, start: str, end: str):
        return _device_response(service.get_by_range, prefix, start, end)

    @app.route("/<prefix>/attendance/today", methods=["GET"], endpoint="device_attendance_today")
    def device_attendance_today(prefix: str):
        return _device_response(service.get_today, prefix)

    @app.route("/attendance/all-devices", methods=["GET"], endpoint="all_devices_attendance")
    def all_devices_attendance():
        selector = DeviceSelector.from_payload(
            {
                "country": request.args.get("country"),
                "deviceIds": [i for i in request.args.get("deviceIds", "").split(",") if i] or None,
            }
        )
        result = service.get_all_devices(selector)
        return ok(result["devices"], summary=result["summary"])

    @app.route("/country/<code>/attendance", methods=["GET"], endpoint="country_attendance")
    def country_attendance(code: str):
        try:
            result = service.get_by_country(code)
        except DomainError as e:
            return fail_from(e)
        return ok(result["devices"], summary=result["summary"], country=result["country"])
