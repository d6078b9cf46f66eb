from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Optional

from ..attendance.model import DeviceSelector
from ..common.validators import is_valid_http_url
from ..core.enums import WebhookType
from ..core.exceptions import DomainError, ValidationError
from ..devices.registry import DeviceRegistry
from .client import WebhookClient
from .factory import WebhookPayloadFactory

logger = logging.getLogger(__name__)


def validate_webhook_url(url) -> dict:
    if not isinstance(url, str) or not url.strip():
        return {"success": False, "error": "URL must be a non-empty string", "isValid": False}
    if not is_valid_http_url(url):
        return {"success": False, "error": f"Invalid URL format: {url}", "url": url, "isValid": False}
    return {"success": True, "url": url, "isValid": True}


class WebhookService:
    def __init__(
        self,
        registry: DeviceRegistry,
        factory: WebhookPayloadFactory,
        client: WebhookClient,
        *,
        default_urls: Mapping[str, str] | None = None,
        max_workers: int = 3,
    ):
        self._registry = registry
        self._factory = factory
        self._client = client
        self._default_urls = {k: v for k, v in (default_urls or {}).items() if v}
        self._max_workers = max(1, int(max_workers))

    def _resolve_url(self, url_key: str, webhook_url: Optional[str]) -> str:
        url = webhook_url or self._default_urls.get(url_key)
        if not url:
            raise ValidationError(f"Webhook URL is required (no default configured for '{url_key}')")
        return url

    def trigger_device(
        self,
        prefix: str,
        webhook_type,
        *,
        webhook_url: Optional[str] = None,
        date: Optional[str] = None,
    ) -> dict:
        self._registry.require(prefix)
        strategy = self._factory.for_type(webhook_type)
        url = self._resolve_url(strategy.url_key, webhook_url)
        data = strategy.fetch(prefix, date=date)
        logger.info("Sending %s webhook", strategy.webhook_type.value, extra={"device": prefix})
        return {
            "deviceId": prefix,
            "webhookType": strategy.webhook_type.value,
            "dataFetched": True,
            "webhookResult": self._client.send(url, data),
        }

    def trigger_enriched(self, prefix: str, *, webhook_url: Optional[str] = None) -> dict:
        result = self.trigger_device(prefix, WebhookType.ENRICHED_ATTENDANCE, webhook_url=webhook_url)
        result["webhookUrl"] = result["webhookResult"]["webhookUrl"]
        return result

    def trigger_fleet(
        self,
        webhook_type,
        selector: DeviceSelector | None = None,
        *,
        webhook_url: Optional[str] = None,
    ) -> dict:
        self._factory.for_type(webhook_type)
        if selector is None:
            devices = self._registry.list_all()
        else:
            devices = self._registry.select(country=selector.country, device_ids=selector.device_ids)
        if not devices:
            return {
                "message": "No devices to process",
                "results": {},
                "summary": {"totalDevices": 0, "successfulDevices": 0, "failedDevices": 0},
            }

        def run(prefix: str) -> dict:
            try:
                return {"success": True, **self.trigger_device(prefix, webhook_type, webhook_url=webhook_url)}
            except DomainError as exc:
                logger.warning("Webhook failed: %s", exc, extra={"device": prefix})
                return {"success": False, "deviceId": prefix, "error": str(exc)}

        prefixes = [d.prefix for d in devices]
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(prefixes)), thread_name_prefix="webhook") as pool:
            results = dict(zip(prefixes, pool.map(run, prefixes)))

        successful = sum(1 for r in results.values() if r["success"])
        return {
            "results": results,
            "summary": {
                "totalDevices": len(prefixes),
                "successfulDevices": successful,
                "failedDevices": len(prefixes) - successful,
            },
        }

    def send_custom(self, data: Any, webhook_url: str) -> dict:
        check = validate_webhook_url(webhook_url)
        if not check["isValid"]:
            raise ValidationError(check["error"])
        return self._client.send(webhook_url, data)

    def test(self) -> dict:
        return {
            "status": "operational",
            "message": "Webhook service is operational",
            "supportedTypes": self._factory.supported_types(),
            "configuredWebhooks": sorted(self._default_urls),
            "totalDevices": len(self._registry),
            "capabilities": [
                "device webhooks",
                "fleet webhooks",
                "custom payloads",
                "url validation",
            ],
        }
