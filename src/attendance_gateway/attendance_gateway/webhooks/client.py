from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

import requests

from ..common.datetime_utils import utc_timestamp
from ..common.validators import is_valid_http_url
from ..core.constants import WEBHOOK_PAYLOAD_VERSION, WEBHOOK_SOURCE, WEBHOOK_USER_AGENT
from ..core.exceptions import ValidationError, WebhookDeliveryError

logger = logging.getLogger(__name__)


def build_payload(data: Any) -> dict:
    return {
        "timestamp": utc_timestamp(),
        "source": WEBHOOK_SOURCE,
        "version": WEBHOOK_PAYLOAD_VERSION,
        "data": data,
    }


class WebhookClient:
    """POSTs JSON envelopes to webhook receivers.

    Client errors (4xx) and malformed requests are final. Server errors,
    timeouts and connection failures are retried with a linearly growing
    delay.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._session = session or requests.Session()
        self._timeout = float(timeout)
        self._max_retries = max(0, int(max_retries))
        self._retry_delay = float(retry_delay)
        self._sleep = sleep

    def send(self, url: str, data: Any) -> dict:
        if data is None:
            raise ValidationError("Data is required")
        if not url:
            raise ValidationError("Webhook URL is required")
        if not is_valid_http_url(url):
            raise ValidationError(f"Invalid webhook URL format: {url}")

        payload = build_payload(data)
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": WEBHOOK_USER_AGENT,
        }

        last_reason = "Unknown error"
        last_status: Optional[int] = None
        for attempt in range(self._max_retries + 1):
            try:
                response = self._session.post(url, json=payload, headers=headers, timeout=self._timeout)
            except requests.Timeout:
                last_reason, last_status = "Webhook request timed out", None
                logger.warning("Webhook timeout (attempt %s): %s", attempt + 1, url)
            except requests.ConnectionError as exc:
                last_reason, last_status = f"Connection error: {exc}", None
                logger.warning("Webhook connection error (attempt %s): %s", attempt + 1, url)
            except requests.RequestException as exc:
                logger.error("Webhook request to %s failed: %s", url, exc)
                raise WebhookDeliveryError(url, f"Request error: {exc}") from exc
            else:
                if 200 <= response.status_code < 300:
                    logger.info("Webhook delivered to %s (%s)", url, response.status_code)
                    return {
                        "success": True,
                        "statusCode": response.status_code,
                        "webhookResponse": self._body(response),
                        "webhookUrl": url,
                    }
                last_status = response.status_code
                last_reason = f"HTTP {response.status_code}"
                if 400 <= response.status_code < 500:
                    logger.error("Webhook rejected by %s: %s", url, response.status_code)
                    raise WebhookDeliveryError(url, last_reason, last_status)
                logger.warning("Webhook server error (attempt %s): %s %s", attempt + 1, url, response.status_code)

            if attempt < self._max_retries:
                self._sleep(self._retry_delay * (attempt + 1))

        raise WebhookDeliveryError(url, last_reason, last_status)

    @staticmethod
    def _body(response: requests.Response):
        try:
            return response.json()
        except ValueError:
            return response.text
