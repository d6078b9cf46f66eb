from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import WebhookType


class WebhookPayloadStrategy(ABC):
    """Strategy Pattern: how one webhook type gathers its data."""

    webhook_type: WebhookType
    url_key: str

    @abstractmethod
    def fetch(self, prefix: str, *, date: Optional[str] = None) -> dict:
        raise NotImplementedError
