import pytest

from src.attendance_gateway.attendance_gateway.attendance.model import DeviceSelector
from src.attendance_gateway.attendance_gateway.attendance.service import AttendanceService
from src.attendance_gateway.attendance_gateway.common.cache import TTLCache
from src.attendance_gateway.attendance_gateway.core.exceptions import DeviceConnectionError, DeviceNotFoundError, ValidationError


@pytest.fixture
def service(registry, adapter_factory):
    return AttendanceService(registry, adapter_factory, max_workers=2)


def test_latest_returns_envelope_with_counts(service):
    result = service.get_latest("pk01")
    data = result["data"]

    assert data["deviceId"] == "pk01"
    assert data["deviceName"] == "Lahore Office"
    assert data["recordCount"] == 6
    assert data["uniqueEmployees"] == 4
    assert data["data"][0]["deviceUserId"] == "101"
    assert result["summary"] == {"totalRecords": 6, "uniqueEmployees": 4}


def test_by_date_filters_on_local_date(service):
    result = service.get_by_date("pk01", "2024-01-16")
    assert result["data"]["recordCount"] == 2
    assert result["summary"]["date"] == "2024-01-16"


@pytest.mark.parametrize("bad", ["2024/01/16", "16-01-2024", "2024-13-01", ""])
def test_by_date_rejects_malformed_dates(service, bad):
    with pytest.raises(ValidationError):
        service.get_by_date("pk01", bad)


def test_range_is_inclusive_and_ordered(service):
    assert service.get_by_range("pk01", "2024-01-15", "2024-01-16")["data"]["recordCount"] == 6
    with pytest.raises(ValidationError, match="Start date"):
        service.get_by_range("pk01", "2024-01-16", "2024-01-15")


def test_today_uses_reference_time(service, fixed_now):
    assert service.get_today("pk01", now=fixed_now)["data"]["recordCount"] == 2


def test_unknown_device(service):
    with pytest.raises(DeviceNotFoundError):
        service.get_latest("xx01")


def test_device_failure_is_raised_for_single_device(registry, fakes):
    service = AttendanceService(registry, fakes.AdapterFactory(failing={"pk01"}))
    with pytest.raises(DeviceConnectionError):
        service.get_latest("pk01")


def test_fleet_survives_one_failing_device(registry, overnight_logs, fakes):
    factory = fakes.AdapterFactory({"pk01": overnight_logs, "pk02": overnight_logs[:2]}, failing={"us01"})
    service = AttendanceService(registry, factory, max_workers=3)

    result = service.get_all_devices()

    assert list(result["devices"]) == ["pk01", "pk02", "us01"]
    assert result["devices"]["us01"]["success"] is False
    assert "Connection refused" in result["devices"]["us01"]["error"]
    assert result["summary"] == {
        "totalDevices": 3,
        "successfulDevices": 2,
        "failedDevices": 1,
        "totalRecords": 8,
        "totalUniqueEmployees": 4,
    }


def test_fleet_selector_skips_unknown_ids(service):
    result = service.get_all_devices(DeviceSelector(device_ids=["pk02", "ghost"]))
    assert list(result["devices"]) == ["pk02"]
    assert result["summary"]["totalDevices"] == 1


def test_country_without_devices_is_empty_success(service):
    result = service.get_by_country("ae")
    assert result["country"] == "AE"
    assert result["devices"] == {}
    assert result["summary"]["totalDevices"] == 0
    assert result["summary"]["totalRecords"] == 0


def test_logs_are_cached_per_device(registry, adapter_factory):
    now = [0.0]
    cache = TTLCache(ttl_seconds=30, clock=lambda: now[0])
    service = AttendanceService(registry, adapter_factory, cache=cache)

    service.get_latest("pk01")
    service.get_by_date("pk01", "2024-01-15")
    assert adapter_factory.calls == ["pk01"]

    now[0] = 31.0
    service.get_latest("pk01")
    assert adapter_factory.calls == ["pk01", "pk01"]
    assert cache.stats()["hits"] == 1


def test_selector_from_payload():
    assert DeviceSelector.from_payload({}) is None
    sel = DeviceSelector.from_payload({"deviceIds": "pk01"})
    assert sel.device_ids == ["pk01"]
    assert DeviceSelector.from_payload({"country": "PK"}).country == "PK"
