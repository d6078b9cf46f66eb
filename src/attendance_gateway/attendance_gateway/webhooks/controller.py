from __future__ import annotations

from flask import Flask, request

from ..attendance.model import DeviceSelector
from ..common.responses import fail, fail_from, json_object, ok
from ..core.enums import WebhookType
from ..core.exceptions import DomainError
from ..container import Container
from .service import validate_webhook_url


def register(app: Flask, container: Container) -> None:
    service = container.webhook_service

    def _trigger(prefix: str, webhook_type: WebhookType, **kwargs):
        try:
            return ok(service.trigger_device(prefix, webhook_type, **kwargs))
        except DomainError as e:
            return fail_from(e)

    @app.route("/<prefix>/attendance/webhook/todayShift", methods=["GET"], endpoint="webhook_today_shift")
    def webhook_today_shift(prefix: str):
        return _trigger(prefix, WebhookType.TODAY_SHIFT, webhook_url=request.args.get("webhookUrl"))

    @app.route("/<prefix>/attendance/webhook/today", methods=["POST"], endpoint="webhook_today")
    def webhook_today(prefix: str):
        return _trigger(prefix, WebhookType.TODAY, webhook_url=json_object().get("webhookUrl"))

    @app.route("/<prefix>/attendance/webhook/date", methods=["POST"], endpoint="webhook_date")
    def webhook_date(prefix: str):
        body = json_object()
        if not body.get("date"):
            return fail("Date is required", 400)
        return _trigger(prefix, WebhookType.DATE, webhook_url=body.get("webhookUrl"), date=body["date"])

    @app.route("/<prefix>/attendance/webhook/all", methods=["POST"], endpoint="webhook_enriched")
    def webhook_enriched(prefix: str):
        try:
            return ok(service.trigger_enriched(prefix, webhook_url=json_object().get("webhookUrl")))
        except DomainError as e:
            return fail_from(e)

    def _fleet(webhook_type: WebhookType):
        body = json_object()
        try:
            result = service.trigger_fleet(
                webhook_type,
                DeviceSelector.from_payload(body),
                webhook_url=body.get("webhookUrl"),
            )
        except DomainError as e:
            return fail_from(e)
        extra = {"message": result["message"]} if "message" in result else {}
        return ok(result["results"], summary=result["summary"], **extra)

    @app.route("/devices/webhook/todayShift", methods=["POST"], endpoint="fleet_webhook_today_shift")
    def fleet_webhook_today_shift():
        return _fleet(WebhookType.TODAY_SHIFT)

    @app.route("/devices/webhook/today", methods=["POST"], endpoint="fleet_webhook_today")
    def fleet_webhook_today():
        return _fleet(WebhookType.TODAY)

    @app.route("/webhook/test", methods=["GET"], endpoint="webhook_test")
    def webhook_test():
        data = service.test()
        if container.webhook_scheduler is not None:
            data["scheduler"] = container.webhook_scheduler.status()
        return ok(data)

    @app.route("/webhook/validate", methods=["POST"], endpoint="webhook_validate")
    def webhook_validate():
        body = json_object()
        if "url" not in body:
            return fail("url is required", 400)
        result = validate_webhook_url(body["url"])
        if not result["isValid"]:
            return fail(result["error"], 400, isValid=False)
        return ok(result)

    @app.route("/webhook/send", methods=["POST"], endpoint="webhook_send")
    def webhook_send():
        body = json_object()
        if body.get("data") is None or not body.get("webhookUrl"):
            return fail("data and webhookUrl are required", 400)
        try:
            return ok(service.send_custom(body["data"], body["webhookUrl"]))
        except DomainError as e:
            return fail_from(e)
