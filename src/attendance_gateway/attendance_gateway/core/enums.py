from __future__ import annotations

from enum import Enum


class ShiftStatus(str, Enum):
    """Where an employee stands inside the running shift."""

    COMPLETED = "completed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    NOT_STARTED = "not-started"


class WebhookType(str, Enum):
    """Kinds of data a webhook can carry."""

    TODAY = "today"
    TODAY_SHIFT = "todayShift"
    DATE = "date"
    ENRICHED_ATTENDANCE = "enrichedAttendance"


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"
    CRITICAL = "critical"
    ERROR = "error"
    UNKNOWN = "unknown"
