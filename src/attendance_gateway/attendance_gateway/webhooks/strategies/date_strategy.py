from __future__ import annotations

from typing import Optional

from ...attendance.service import AttendanceService
from ...core.enums import WebhookType
from ...core.exceptions import ValidationError
from .base import WebhookPayloadStrategy


class DatePayloadStrategy(WebhookPayloadStrategy):
    webhook_type = WebhookType.DATE
    url_key = "today"

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def fetch(self, prefix: str, *, date: Optional[str] = None) -> dict:
        if not date:
            raise ValidationError("Date is required for date webhook type")
        return self._attendance.get_by_date(prefix, date)["data"]
