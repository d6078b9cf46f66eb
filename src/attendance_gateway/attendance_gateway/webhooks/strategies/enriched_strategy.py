from __future__ import annotations

from typing import Optional

from ...attendance.service import AttendanceService
from ...core.enums import WebhookType
from .base import WebhookPayloadStrategy


class EnrichedPayloadStrategy(WebhookPayloadStrategy):
    """Every stored punch with employee names attached."""

    webhook_type = WebhookType.ENRICHED_ATTENDANCE
    url_key = "enriched"

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def fetch(self, prefix: str, *, date: Optional[str] = None) -> dict:
        return self._attendance.get_latest(prefix)["data"]
