import pytest

from src.attendance_gateway.attendance_gateway.core.exceptions import DeviceNotFoundError
from src.attendance_gateway.attendance_gateway.devices.registry import DeviceRegistry, load_devices_from_env


def test_loads_configured_slots_in_order(registry):
    assert [d.prefix for d in registry.list_all()] == ["pk01", "pk02", "us01"]
    pk01 = registry.require("pk01")
    assert pk01.name == "Lahore Office"
    assert pk01.country == "PK"
    assert pk01.model == "MB460"
    assert pk01.port == 4370
    assert pk01.timeout == 10000


def test_slot_without_port_is_skipped():
    devices = load_devices_from_env({"PK01_IP": "10.0.0.1", "PK01_PORT": "4370", "US01_IP": "10.1.0.1"})
    assert [d.prefix for d in devices] == ["pk01"]


def test_legacy_device_takes_pk01_slot():
    env = {
        "MB460_IP": "192.168.1.201",
        "MB460_PORT": "4370",
        "MB460_TIMEOUT": "5000",
        "PK01_IP": "10.0.0.1",
        "PK01_PORT": "4370",
    }
    devices = load_devices_from_env(env)
    assert len(devices) == 1
    assert devices[0].prefix == "pk01"
    assert devices[0].ip == "192.168.1.201"
    assert devices[0].timeout == 5000


def test_legacy_device_requires_integer_port():
    with pytest.raises(ValueError):
        load_devices_from_env({"MB460_IP": "192.168.1.201", "MB460_PORT": "abc", "MB460_TIMEOUT": "5000"})


def test_no_devices_is_a_startup_error():
    with pytest.raises(ValueError, match="No biometric devices configured"):
        load_devices_from_env({})


def test_lookup_and_country_filter(registry):
    assert registry.get("PK01") is None
    assert registry.is_valid("pk02")
    assert [d.prefix for d in registry.by_country("pk")] == ["pk01", "pk02"]
    assert registry.by_country("  ") == []
    with pytest.raises(DeviceNotFoundError):
        registry.require("zz99")


def test_select_prefers_country_and_drops_unknown_ids(registry):
    assert [d.prefix for d in registry.select(country="US", device_ids=["pk01"])] == ["us01"]
    assert [d.prefix for d in registry.select(device_ids=["pk02", "nope"])] == ["pk02"]
    assert len(registry.select()) == 3


def test_configuration_summary_is_deduplicated(registry):
    assert registry.configuration_summary() == {
        "totalDevices": 3,
        "deviceTypes": ["MB460", "K40"],
        "countries": ["PK", "US"],
    }
    summary = registry.summary()
    assert summary["countries"][0] == {"country": "PK", "count": 2, "devices": ["pk01", "pk02"]}


def test_empty_registry_summary():
    assert DeviceRegistry([]).configuration_summary() == {"totalDevices": 0, "deviceTypes": [], "countries": []}
