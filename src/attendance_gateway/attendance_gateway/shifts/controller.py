from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_record_time
from ..common.responses import fail, fail_from, json_object, ok
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.shift_service

    def _respond(result: dict):
        data = result.pop("data")
        summary = result.pop("summary", None)
        return ok(data, summary=summary, **result)

    @app.route("/<prefix>/attendance/todayShift", methods=["GET"], endpoint="today_shift")
    def today_shift(prefix: str):
        try:
            return _respond(service.get_today_shift(prefix))
        except DomainError as e:
            return fail_from(e)

    @app.route("/<prefix>/attendance/todayShift/checkin", methods=["GET"], endpoint="today_shift_checkin")
    def today_shift_checkin(prefix: str):
        try:
            return _respond(service.get_shift_checkin(prefix))
        except DomainError as e:
            return fail_from(e)

    @app.route("/<prefix>/attendance/todayShift/checkout", methods=["GET"], endpoint="today_shift_checkout")
    def today_shift_checkout(prefix: str):
        try:
            return _respond(service.get_shift_checkout(prefix))
        except DomainError as e:
            return fail_from(e)

    @app.route("/attendance/all-devices/todayShift", methods=["GET"], endpoint="all_devices_shift")
    def all_devices_shift():
        result = service.get_all_devices_shift()
        return ok(result["results"], summary={
            "totalDevices": result["totalDevices"],
            "successfulDevices": result["successfulDevices"],
        })

    @app.route("/<prefix>/attendance/todayShift/process", methods=["POST"], endpoint="process_shift_records")
    def process_shift_records(prefix: str):
        body = json_object()
        if "records" not in body:
            return fail("records is required", 400)
        try:
            now = parse_record_time(body["referenceTime"]) if body.get("referenceTime") else None
            result = service.process_records(
                prefix,
                body["records"],
                overrides=body.get("shiftConfig"),
                now=now,
            )
        except DomainError as e:
            return fail_from(e)
        return _respond(result)
