from __future__ import annotations

from typing import Optional

from ...attendance.service import AttendanceService
from ...core.enums import WebhookType
from .base import WebhookPayloadStrategy


class TodayPayloadStrategy(WebhookPayloadStrategy):
    """Today's punches for one device."""

    webhook_type = WebhookType.TODAY
    url_key = "today"

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def fetch(self, prefix: str, *, date: Optional[str] = None) -> dict:
        return self._attendance.get_today(prefix)["data"]
