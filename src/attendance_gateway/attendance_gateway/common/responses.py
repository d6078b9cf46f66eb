from __future__ import annotations

import uuid
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import (
    DeviceConnectionError,
    DeviceNotFoundError,
    DomainError,
    ValidationError,
    WebhookDeliveryError,
)
from .datetime_utils import utc_timestamp


def request_id() -> str:
    return request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:12]}"


def json_object() -> dict:
    """Request JSON body as a dict; a missing or unparseable body is empty."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def ok(data: Any = None, *, summary: Optional[dict] = None, code: int = 200, **extra):
    body = {"success": True, "timestamp": utc_timestamp()}
    body.update(extra)
    if data is not None:
        body["data"] = data
    if summary is not None:
        body["summary"] = summary
    return jsonify(body), code


def fail(message: str, code: int, **extra):
    body = {
        "success": False,
        "timestamp": utc_timestamp(),
        "error": message,
        "requestId": request_id(),
    }
    body.update(extra)
    return jsonify(body), code


def status_for(error: DomainError) -> int:
    if isinstance(error, ValidationError):
        return 400
    if isinstance(error, DeviceNotFoundError):
        return 404
    if isinstance(error, (DeviceConnectionError, WebhookDeliveryError)):
        return 502
    return 500


def fail_from(error: DomainError, **extra):
    return fail(str(error), status_for(error), **extra)
