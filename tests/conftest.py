from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace
from typing import Optional

import pytest

from src.attendance_gateway.attendance_gateway.core.exceptions import DeviceConnectionError
from src.attendance_gateway.attendance_gateway.devices.model import AttendanceLog, DeviceConfig, DeviceUser
from src.attendance_gateway.attendance_gateway.devices.registry import DeviceRegistry, load_devices_from_env
from src.attendance_gateway.attendance_gateway.main import create_app


DEVICE_ENV = {
    "PK01_IP": "10.0.0.11",
    "PK01_PORT": "4370",
    "PK01_NAME": "Lahore Office",
    "PK02_IP": "10.0.0.12",
    "PK02_PORT": "4370",
    "US01_IP": "10.1.0.11",
    "US01_PORT": "4370",
    "US01_MODEL": "K40",
}


def punch(user_id: str, when: datetime, name: Optional[str] = None, ip: str = "10.0.0.11") -> AttendanceLog:
    return AttendanceLog(
        user_sn=int(when.timestamp()) % 100000,
        device_user_id=user_id,
        record_time=when,
        device_ip=ip,
        employee_name=name or f"Employee {user_id}",
    )


class FakeAdapter:
    def __init__(self, device: DeviceConfig, logs, *, failing: bool = False):
        self.device = device
        self._logs = list(logs)
        self._failing = failing

    def ping(self) -> bool:
        return not self._failing

    def get_info(self) -> dict:
        return {"deviceName": self.device.name}

    def get_users(self):
        return [DeviceUser(uid=i, user_id=log.device_user_id, name=log.employee_name or "") for i, log in enumerate(self._logs)]

    def get_attendance(self):
        if self._failing:
            raise DeviceConnectionError(self.device.prefix, "Connection refused - device may be offline or port blocked")
        return list(self._logs)


class FakeAdapterFactory:
    """Hands out FakeAdapters backed by per-prefix punch lists."""

    def __init__(self, logs_by_prefix=None, failing=()):
        self.logs_by_prefix = dict(logs_by_prefix or {})
        self.failing = set(failing)
        self.calls: list[str] = []

    def __call__(self, device: DeviceConfig) -> FakeAdapter:
        self.calls.append(device.prefix)
        return FakeAdapter(device, self.logs_by_prefix.get(device.prefix, []), failing=device.prefix in self.failing)


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None):
        self.status_code = status_code
        self._body = body if body is not None else {"received": True}

    def json(self):
        if isinstance(self._body, str):
            raise ValueError("not json")
        return self._body

    @property
    def text(self) -> str:
        return str(self._body)


class FakeSession:
    """Stands in for requests.Session; replays queued outcomes, then 200s."""

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.posts: list[dict] = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.posts.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0) if self.outcomes else FakeResponse(200)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 16, 9, 30)


@pytest.fixture
def device_env() -> dict:
    return dict(DEVICE_ENV)


@pytest.fixture
def registry(device_env) -> DeviceRegistry:
    return DeviceRegistry(load_devices_from_env(device_env))


@pytest.fixture
def overnight_logs(fixed_now):
    shift_day = (fixed_now - timedelta(days=1)).replace(hour=0, minute=0)
    return [
        punch("101", shift_day.replace(hour=17, minute=55), "Ayesha Khan"),
        punch("101", shift_day.replace(hour=18, minute=2), "Ayesha Khan"),
        punch("101", fixed_now.replace(hour=2, minute=5), "Ayesha Khan"),
        punch("102", shift_day.replace(hour=19, minute=10), "Bilal Ahmed"),
        punch("103", fixed_now.replace(hour=1, minute=45), "Sara Malik"),
        punch("104", shift_day.replace(hour=9, minute=0), "Omar Farooq"),
    ]


@pytest.fixture
def adapter_factory(overnight_logs) -> FakeAdapterFactory:
    return FakeAdapterFactory({"pk01": overnight_logs, "pk02": overnight_logs[:2]})


@pytest.fixture
def http_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def settings():
    return SimpleNamespace(
        DEBUG=False,
        TESTING=True,
        ENVIRONMENT="testing",
        API_HOST="127.0.0.1",
        API_PORT=3000,
        LOG_LEVEL="WARNING",
        LOG_JSON=False,
        DEVICE_CONNECT_TIMEOUT=0.5,
        DEVICE_MAX_RETRIES=1,
        DEVICE_RETRY_DELAY=0.0,
        MAX_CONCURRENT_DEVICES=2,
        ATTENDANCE_CACHE_TTL=0,
        WEBHOOK_TIMEOUT=1.0,
        WEBHOOK_MAX_RETRIES=0,
        WEBHOOK_RETRY_DELAY=0.0,
        WEBHOOK_URLS={"today": "https://hooks.example.com/today", "todayShift": "https://hooks.example.com/shift"},
        SCHEDULER_ENABLED=False,
        WEBHOOK_INTERVAL_MINUTES=15,
    )


@pytest.fixture
def reachable_probe():
    def probe(host: str, port: int, timeout: float) -> None:
        if host.startswith("10.1."):
            raise ConnectionRefusedError("Connection refused")

    return probe


@pytest.fixture
def app(settings, device_env, adapter_factory, http_session, reachable_probe):
    return create_app(
        settings,
        environ=device_env,
        adapter_factory=adapter_factory,
        http_session=http_session,
        health_probe=reachable_probe,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fakes():
    """Fake classes for tests that need to build their own doubles."""
    return SimpleNamespace(
        AdapterFactory=FakeAdapterFactory,
        Session=FakeSession,
        Response=FakeResponse,
        punch=punch,
    )
