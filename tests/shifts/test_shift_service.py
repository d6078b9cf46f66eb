import pytest

from src.attendance_gateway.attendance_gateway.attendance.service import AttendanceService
from src.attendance_gateway.attendance_gateway.core.exceptions import DeviceNotFoundError, ValidationError
from src.attendance_gateway.attendance_gateway.shifts.model import ShiftConfig
from src.attendance_gateway.attendance_gateway.shifts.service import ShiftService, build_shift_configs


@pytest.fixture
def service(registry, adapter_factory):
    return ShiftService(registry, AttendanceService(registry, adapter_factory))


def test_today_shift_envelope(service, fixed_now):
    result = service.get_today_shift("pk01", now=fixed_now)

    assert result["devicePrefix"] == "pk01"
    assert result["shiftConfig"]["startHour"] == 18
    assert result["shiftConfig"]["currentHour"] == 9
    assert result["shiftPeriod"]["shiftDate"] == "2024-01-15"
    assert result["summary"]["completed"] == 1


def test_checkin_and_checkout_views_only_show_their_buffers(service, fixed_now):
    checkin = service.get_shift_checkin("pk01", now=fixed_now)
    checkout = service.get_shift_checkout("pk01", now=fixed_now)

    assert set(checkin["shiftConfig"]) == {"checkInBufferStart", "checkInBufferEnd", "currentTime", "currentHour"}
    assert set(checkout["shiftConfig"]) == {"checkOutBufferStart", "checkOutBufferEnd", "currentTime", "currentHour"}
    assert len(checkout["data"]) == 4


def test_all_devices_reports_failures(registry, overnight_logs, fakes, fixed_now):
    factory = fakes.AdapterFactory({"pk01": overnight_logs}, failing={"pk02"})
    service = ShiftService(registry, AttendanceService(registry, factory))

    result = service.get_all_devices_shift(now=fixed_now)

    assert result["totalDevices"] == 3
    assert result["successfulDevices"] == 2
    assert result["results"]["pk02"]["success"] is False


def test_device_specific_config(registry, adapter_factory):
    configs = build_shift_configs(registry, {"PK02_SHIFT_START_HOUR": "20"})
    service = ShiftService(registry, AttendanceService(registry, adapter_factory), configs)
    assert service.get_config("pk02")["startHour"] == 20
    assert service.get_config("pk01")["startHour"] == 18
    with pytest.raises(DeviceNotFoundError):
        service.get_config("zz01")


def test_process_records_with_overrides(service, fixed_now):
    records = [
        {"deviceUserId": "5", "employeeName": "Hina", "recordTime": "2024-01-15T21:00:00"},
        {"deviceUserId": "5", "employeeName": "Hina", "recordTime": "2024-01-16T05:30:00"},
    ]
    result = service.process_records("pk01", records, overrides={"checkOutBufferEnd": 10}, now=fixed_now)

    assert result["data"][0]["shiftStatus"] == "completed"
    assert result["shiftConfig"]["checkOutBufferEnd"] == 10
    assert result["data"][0]["shiftCheckIn"]["ip"] == "10.0.0.11"


def test_process_records_with_utc_timestamps(service):
    records = [{"deviceUserId": "5", "recordTime": "2024-01-15T21:00:00Z"}]
    result = service.process_records("pk01", records)
    assert len(result["data"]) == 1


@pytest.mark.parametrize(
    "records",
    [
        "not-a-list",
        [{"recordTime": "2024-01-15T21:00:00"}],
        [{"deviceUserId": "5", "recordTime": "yesterday"}],
        [{"deviceUserId": "5"}],
        ["oops"],
    ],
)
def test_process_records_rejects_bad_input(service, records):
    with pytest.raises(ValidationError):
        service.process_records("pk01", records)


def test_default_config_is_used_when_not_built(service):
    assert service.config_for("us01") == ShiftConfig()
