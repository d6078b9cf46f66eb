from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.service import AttendanceService
from ..core.enums import WebhookType
from ..core.exceptions import ValidationError
from ..shifts.service import ShiftService
from .strategies.base import WebhookPayloadStrategy
from .strategies.date_strategy import DatePayloadStrategy
from .strategies.enriched_strategy import EnrichedPayloadStrategy
from .strategies.shift_strategy import ShiftPayloadStrategy
from .strategies.today_strategy import TodayPayloadStrategy


@dataclass
class WebhookPayloadFactory:
    """Factory Pattern: pick the payload strategy for a webhook type."""

    attendance: AttendanceService
    shifts: ShiftService
    _strategies: dict = field(init=False, repr=False)

    def __post_init__(self):
        self._strategies = {
            WebhookType.TODAY: TodayPayloadStrategy(self.attendance),
            WebhookType.TODAY_SHIFT: ShiftPayloadStrategy(self.shifts),
            WebhookType.DATE: DatePayloadStrategy(self.attendance),
            WebhookType.ENRICHED_ATTENDANCE: EnrichedPayloadStrategy(self.attendance),
        }

    def for_type(self, webhook_type) -> WebhookPayloadStrategy:
        try:
            key = WebhookType(webhook_type)
        except ValueError as exc:
            raise ValidationError(f"Invalid webhook type: {webhook_type}") from exc
        return self._strategies[key]

    def supported_types(self) -> list[str]:
        return [t.value for t in self._strategies]
