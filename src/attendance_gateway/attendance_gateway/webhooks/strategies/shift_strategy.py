from __future__ import annotations

from typing import Optional

from ...core.enums import WebhookType
from ...shifts.service import ShiftService
from .base import WebhookPayloadStrategy


class ShiftPayloadStrategy(WebhookPayloadStrategy):
    """Current shift evaluation for one device."""

    webhook_type = WebhookType.TODAY_SHIFT
    url_key = "todayShift"

    def __init__(self, shifts: ShiftService):
        self._shifts = shifts

    def fetch(self, prefix: str, *, date: Optional[str] = None) -> dict:
        return self._shifts.get_today_shift(prefix)
