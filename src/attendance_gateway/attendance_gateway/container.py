from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from .attendance.service import AttendanceService
from .common.cache import TTLCache
from .devices.adapter import AdapterFactory
from .devices.registry import DeviceRegistry, load_devices_from_env
from .devices.service import DeviceService
from .devices.zk_adapter import zk_adapter_factory
from .health.service import HealthService, Probe, tcp_probe
from .shifts.service import ShiftService, build_shift_configs
from .webhooks.client import WebhookClient
from .webhooks.factory import WebhookPayloadFactory
from .webhooks.scheduler import WebhookScheduler
from .webhooks.service import WebhookService


@dataclass(frozen=True)
class Container:
    api_host: str
    api_port: int

    registry: DeviceRegistry
    cache: TTLCache

    device_service: DeviceService
    attendance_service: AttendanceService
    shift_service: ShiftService
    webhook_service: WebhookService
    health_service: HealthService
    webhook_scheduler: Optional[WebhookScheduler]


def build_container(
    *,
    settings,
    environ: Mapping[str, str],
    adapter_factory: AdapterFactory | None = None,
    http_session: requests.Session | None = None,
    health_probe: Probe | None = None,
) -> Container:
    registry = DeviceRegistry(load_devices_from_env(environ))
    cache = TTLCache(ttl_seconds=getattr(settings, "ATTENDANCE_CACHE_TTL", 60))
    max_workers = int(getattr(settings, "MAX_CONCURRENT_DEVICES", 3))

    adapter_factory = adapter_factory or zk_adapter_factory(
        max_retries=int(getattr(settings, "DEVICE_MAX_RETRIES", 3)),
        retry_delay=float(getattr(settings, "DEVICE_RETRY_DELAY", 2.0)),
    )

    device_service = DeviceService(registry)
    attendance_service = AttendanceService(registry, adapter_factory, cache=cache, max_workers=max_workers)
    shift_service = ShiftService(registry, attendance_service, build_shift_configs(registry, environ))

    client = WebhookClient(
        http_session,
        timeout=float(getattr(settings, "WEBHOOK_TIMEOUT", 30)),
        max_retries=int(getattr(settings, "WEBHOOK_MAX_RETRIES", 3)),
        retry_delay=float(getattr(settings, "WEBHOOK_RETRY_DELAY", 1.0)),
    )
    webhook_service = WebhookService(
        registry,
        WebhookPayloadFactory(attendance=attendance_service, shifts=shift_service),
        client,
        default_urls=getattr(settings, "WEBHOOK_URLS", {}),
        max_workers=max_workers,
    )

    scheduler = None
    if getattr(settings, "SCHEDULER_ENABLED", False):
        scheduler = WebhookScheduler(
            webhook_service,
            interval_minutes=float(getattr(settings, "WEBHOOK_INTERVAL_MINUTES", 15)),
        )

    health_service = HealthService(
        registry,
        cache=cache,
        probe=health_probe or tcp_probe,
        probe_timeout=float(getattr(settings, "DEVICE_CONNECT_TIMEOUT", 5.0)),
        environment=getattr(settings, "ENVIRONMENT", "development"),
    )

    return Container(
        api_host=str(getattr(settings, "API_HOST", "0.0.0.0")),
        api_port=int(getattr(settings, "API_PORT", 3000)),
        registry=registry,
        cache=cache,
        device_service=device_service,
        attendance_service=attendance_service,
        shift_service=shift_service,
        webhook_service=webhook_service,
        health_service=health_service,
        webhook_scheduler=scheduler,
    )
