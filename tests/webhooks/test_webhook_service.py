import pytest

from src.attendance_gateway.attendance_gateway.attendance.model import DeviceSelector
from src.attendance_gateway.attendance_gateway.attendance.service import AttendanceService
from src.attendance_gateway.attendance_gateway.core.enums import WebhookType
from src.attendance_gateway.attendance_gateway.core.exceptions import ValidationError, WebhookDeliveryError
from src.attendance_gateway.attendance_gateway.shifts.service import ShiftService
from src.attendance_gateway.attendance_gateway.webhooks.client import WebhookClient
from src.attendance_gateway.attendance_gateway.webhooks.factory import WebhookPayloadFactory
from src.attendance_gateway.attendance_gateway.webhooks.service import WebhookService, validate_webhook_url
from src.attendance_gateway.attendance_gateway.webhooks.strategies.date_strategy import DatePayloadStrategy
from src.attendance_gateway.attendance_gateway.webhooks.strategies.shift_strategy import ShiftPayloadStrategy

URLS = {"today": "https://hooks.example.com/today", "todayShift": "https://hooks.example.com/shift"}


@pytest.fixture
def attendance(registry, adapter_factory):
    return AttendanceService(registry, adapter_factory)


@pytest.fixture
def factory(registry, attendance):
    return WebhookPayloadFactory(attendance=attendance, shifts=ShiftService(registry, attendance))


@pytest.fixture
def session(fakes):
    return fakes.Session()


@pytest.fixture
def service(registry, factory, session):
    client = WebhookClient(session, max_retries=0, sleep=lambda s: None)
    return WebhookService(registry, factory, client, default_urls=URLS, max_workers=2)


def test_factory_selects_strategy(factory):
    assert isinstance(factory.for_type("todayShift"), ShiftPayloadStrategy)
    assert isinstance(factory.for_type(WebhookType.DATE), DatePayloadStrategy)
    with pytest.raises(ValidationError, match="Invalid webhook type"):
        factory.for_type("weekly")


def test_trigger_device_uses_default_url(service, session):
    result = service.trigger_device("pk01", "todayShift")

    assert result["deviceId"] == "pk01"
    assert result["webhookType"] == "todayShift"
    assert result["dataFetched"] is True
    assert result["webhookResult"]["success"] is True
    assert session.posts[0]["url"] == URLS["todayShift"]
    assert session.posts[0]["json"]["data"]["devicePrefix"] == "pk01"


def test_date_type_requires_date(service, session):
    with pytest.raises(ValidationError, match="Date is required"):
        service.trigger_device("pk01", "date")

    result = service.trigger_device("pk01", "date", date="2024-01-16", webhook_url="https://custom.example.com/h")
    assert session.posts[0]["url"] == "https://custom.example.com/h"
    assert session.posts[0]["json"]["data"]["recordCount"] == 2
    assert result["webhookType"] == "date"


def test_missing_default_url_is_a_validation_error(service):
    with pytest.raises(ValidationError, match="enriched"):
        service.trigger_enriched("pk01")


def test_enriched_with_explicit_url(service, session):
    result = service.trigger_enriched("pk01", webhook_url="https://hooks.example.com/all")
    assert result["webhookType"] == "enrichedAttendance"
    assert result["webhookUrl"] == "https://hooks.example.com/all"
    assert session.posts[0]["json"]["data"]["recordCount"] == 6


def test_delivery_failure_propagates(registry, factory, fakes):
    session = fakes.Session([fakes.Response(400, "bad")])
    service = WebhookService(registry, factory, WebhookClient(session, max_retries=0), default_urls=URLS)
    with pytest.raises(WebhookDeliveryError):
        service.trigger_device("pk01", "today")


def test_fleet_reports_per_device(registry, factory, fakes):
    session = fakes.Session([fakes.Response(500)])
    service = WebhookService(registry, factory, WebhookClient(session, max_retries=0), default_urls=URLS, max_workers=1)

    result = service.trigger_fleet("today", DeviceSelector(country="PK"))

    assert result["summary"] == {"totalDevices": 2, "successfulDevices": 1, "failedDevices": 1}
    assert result["results"]["pk01"]["success"] is False
    assert result["results"]["pk02"]["success"] is True


def test_fleet_with_empty_selection(service):
    result = service.trigger_fleet("todayShift", DeviceSelector(country="AE"))
    assert result["message"] == "No devices to process"
    assert result["summary"]["totalDevices"] == 0


def test_send_custom_validates_first(service, session):
    with pytest.raises(ValidationError):
        service.send_custom({"a": 1}, "nope")
    assert session.posts == []
    assert service.send_custom({"a": 1}, "http://localhost:5678/hook")["success"] is True


def test_validate_webhook_url():
    assert validate_webhook_url("https://x.example.com/h") == {"success": True, "url": "https://x.example.com/h", "isValid": True}
    assert validate_webhook_url("") == {"success": False, "error": "URL must be a non-empty string", "isValid": False}
    assert validate_webhook_url("mailto:a@b.c")["isValid"] is False
    assert validate_webhook_url("http://:80")["isValid"] is False
    assert validate_webhook_url("https://")["isValid"] is False


def test_service_test_lists_capabilities(service):
    info = service.test()
    assert info["status"] == "operational"
    assert set(info["supportedTypes"]) == {"today", "todayShift", "date", "enrichedAttendance"}
    assert info["configuredWebhooks"] == ["today", "todayShift"]
