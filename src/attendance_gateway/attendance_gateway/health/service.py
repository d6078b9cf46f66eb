from __future__ import annotations

import logging
import os
import platform
import socket
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

import psutil

from ..common.cache import TTLCache
from ..common.datetime_utils import utc_timestamp
from ..core.constants import DEGRADED_RESPONSE_MS, SERVICE_VERSION
from ..core.enums import HealthStatus
from ..devices.model import DeviceConfig
from ..devices.registry import DeviceRegistry

logger = logging.getLogger(__name__)

Probe = Callable[[str, int, float], None]


def tcp_probe(host: str, port: int, timeout: float) -> None:
    """Raise OSError unless a TCP connection to host:port succeeds."""
    with socket.create_connection((host, port), timeout=timeout):
        pass


def format_uptime(seconds: float) -> str:
    seconds = int(seconds)
    minutes, secs = divmod(seconds, 60)
    hours, mins = divmod(minutes, 60)
    days, hrs = divmod(hours, 24)
    if days:
        return f"{days}d {hrs}h {mins}m {secs}s"
    if hours:
        return f"{hrs}h {mins}m {secs}s"
    if minutes:
        return f"{mins}m {secs}s"
    return f"{secs}s"


def format_bytes(size: float) -> str:
    if size < 1024:
        return f"{int(size)} B"
    for unit in ("KB", "MB"):
        size /= 1024
        if size < 1024:
            return f"{size:.2f} {unit}"
    return f"{size / 1024:.2f} GB"


def memory_usage() -> dict:
    process = psutil.Process(os.getpid())
    info = process.memory_info()
    system = psutil.virtual_memory()
    return {
        "rss": format_bytes(info.rss),
        "vms": format_bytes(info.vms),
        "percent": round(process.memory_percent(), 2),
        "systemTotal": format_bytes(system.total),
        "systemAvailable": format_bytes(system.available),
        "systemPercent": system.percent,
    }


def cpu_usage(interval: float = 0.1) -> dict:
    """Host CPU load sampled over interval seconds, plus this process's CPU times."""
    times = psutil.Process(os.getpid()).cpu_times()
    return {
        "percent": psutil.cpu_percent(interval=interval),
        "count": psutil.cpu_count(),
        "user": round(times.user, 3),
        "system": round(times.system, 3),
    }


def overall_health(total: int, healthy: int) -> dict:
    if total == 0:
        return {"status": HealthStatus.UNKNOWN.value, "message": "No devices configured"}
    pct = healthy / total * 100
    if pct == 100:
        return {"status": HealthStatus.HEALTHY.value, "message": "All devices are operational"}
    if pct >= 75:
        return {"status": HealthStatus.DEGRADED.value, "message": "Most devices are operational"}
    if pct >= 50:
        return {"status": HealthStatus.UNHEALTHY.value, "message": "Many devices are experiencing issues"}
    return {"status": HealthStatus.CRITICAL.value, "message": "Most devices are experiencing issues"}


class RequestMetrics:
    def __init__(self):
        self._lock = threading.Lock()
        self.total = 0
        self.successful = 0
        self.failed = 0
        self.average_ms = 0.0

    def record(self, success: bool, elapsed_ms: float) -> None:
        with self._lock:
            self.total += 1
            if success:
                self.successful += 1
            else:
                self.failed += 1
            self.average_ms += (elapsed_ms - self.average_ms) / self.total

    def snapshot(self) -> dict:
        with self._lock:
            return {
                "totalRequests": self.total,
                "successfulRequests": self.successful,
                "failedRequests": self.failed,
                "averageResponseTime": round(self.average_ms, 2),
                "lastUpdated": utc_timestamp(),
            }


class HealthService:
    def __init__(
        self,
        registry: DeviceRegistry,
        *,
        cache: TTLCache | None = None,
        probe: Probe = tcp_probe,
        probe_timeout: float = 5.0,
        environment: str = "development",
        clock: Callable[[], float] = time.monotonic,
        cpu_interval: float = 0.1,
    ):
        self._registry = registry
        self._cache = cache
        self._probe = probe
        self._probe_timeout = float(probe_timeout)
        self._environment = environment
        self._clock = clock
        self._cpu_interval = float(cpu_interval)
        self._started = clock()
        self.metrics = RequestMetrics()

    def uptime(self) -> str:
        return format_uptime(self._clock() - self._started)

    def check_device(self, prefix: str) -> dict:
        device = self._registry.get(prefix)
        if device is None:
            return {
                "deviceId": prefix,
                "deviceName": "Unknown",
                "status": HealthStatus.ERROR.value,
                "message": "Health check failed",
                "error": f"Device not found: {prefix}",
                "timestamp": utc_timestamp(),
                "responseTime": None,
                "details": None,
            }
        return self._check(device)

    def _check(self, device: DeviceConfig) -> dict:
        started = self._clock()
        try:
            self._probe(device.ip, int(device.port), self._probe_timeout)
            reachable, error = True, None
        except OSError as exc:
            reachable, error = False, str(exc) or exc.__class__.__name__
        elapsed_ms = int((self._clock() - started) * 1000)

        if not reachable:
            status, message = HealthStatus.UNHEALTHY, "Device is not reachable"
            logger.warning("Device unreachable: %s", error, extra={"device": device.prefix})
        elif elapsed_ms > DEGRADED_RESPONSE_MS:
            status, message = HealthStatus.DEGRADED, "Device is responding slowly"
        else:
            status, message = HealthStatus.HEALTHY, "Device is operational"

        result = {
            "deviceId": device.prefix,
            "deviceName": device.name,
            "status": status.value,
            "message": message,
            "timestamp": utc_timestamp(),
            "responseTime": elapsed_ms,
            "details": {
                "ip": device.ip,
                "port": device.port,
                "location": device.location,
                "country": device.country,
                "model": device.model,
                "connectivity": {"reachable": reachable, "protocol": "TCP", "port": device.port},
            },
        }
        if error:
            result["error"] = error
        return result

    def device_health(self) -> dict:
        devices = self._registry.list_all()
        checks: list[dict] = []
        if devices:
            with ThreadPoolExecutor(max_workers=min(10, len(devices)), thread_name_prefix="health") as pool:
                checks = list(pool.map(self._check, devices))
        healthy = sum(1 for c in checks if c["status"] == HealthStatus.HEALTHY.value)
        return {
            "totalDevices": len(devices),
            "healthyDevices": healthy,
            "unhealthyDevices": len(devices) - healthy,
            "devices": checks,
            "lastChecked": utc_timestamp(),
        }

    def metrics_snapshot(self) -> dict:
        data = self.metrics.snapshot()
        if self._cache is not None:
            data["cache"] = self._cache.stats()
        return data

    def system_info(self) -> dict:
        return {
            "uptime": self.uptime(),
            "version": SERVICE_VERSION,
            "environment": self._environment,
            "pythonVersion": platform.python_version(),
            "platform": platform.system().lower(),
            "pid": os.getpid(),
            "memory": memory_usage(),
            "cpu": cpu_usage(self._cpu_interval),
        }

    def system_health(self) -> dict:
        started = self._clock()
        devices = self.device_health()
        overall = overall_health(devices["totalDevices"], devices["healthyDevices"])
        return {
            "status": overall["status"],
            "message": overall["message"],
            "data": {
                "system": self.system_info(),
                "devices": devices,
                "metrics": self.metrics_snapshot(),
                "responseTime": int((self._clock() - started) * 1000),
            },
            "summary": {
                "totalDevices": devices["totalDevices"],
                "healthyDevices": devices["healthyDevices"],
                "unhealthyDevices": devices["unhealthyDevices"],
                "overallHealth": overall["status"],
            },
        }

    def recommendations(self, devices: dict) -> list[dict]:
        items = []
        if devices["unhealthyDevices"] > 0:
            items.append({
                "type": "warning",
                "message": f"{devices['unhealthyDevices']} device(s) are experiencing issues",
                "action": "Check device connectivity and configuration",
            })
        if devices["totalDevices"] == 0:
            items.append({
                "type": "critical",
                "message": "No devices are configured",
                "action": "Add device configurations to environment variables",
            })
        m = self.metrics
        if m.failed > m.successful * 0.1:
            items.append({
                "type": "warning",
                "message": "High failure rate detected",
                "action": "Review error logs and device connectivity",
            })
        if m.average_ms > DEGRADED_RESPONSE_MS:
            items.append({
                "type": "info",
                "message": "Slow response times detected",
                "action": "Consider optimizing device connections or increasing timeouts",
            })
        return items

    def report(self) -> dict:
        devices = self.device_health()
        overall = overall_health(devices["totalDevices"], devices["healthyDevices"])
        return {
            "status": overall["status"],
            "system": self.system_info(),
            "devices": devices,
            "metrics": self.metrics_snapshot(),
            "recommendations": self.recommendations(devices),
        }

    def basic(self) -> dict:
        return {
            "status": HealthStatus.HEALTHY.value,
            "uptime": self.uptime(),
            "version": SERVICE_VERSION,
            "totalDevices": len(self._registry),
        }

    def info(self, scheduler_status: Optional[dict] = None) -> dict:
        return {
            "system": self.system_info(),
            "configuration": self._registry.configuration_summary(),
            "cache": self._cache.stats() if self._cache is not None else None,
            "scheduler": scheduler_status,
        }
