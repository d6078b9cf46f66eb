from datetime import datetime

import pytest

ROOT_KEYS = {"service", "version", "description", "timestamp", "architecture", "endpoints", "configuration", "examples"}
API_DOC_KEYS = {
    "title",
    "version",
    "description",
    "timestamp",
    "deviceManagement",
    "attendanceManagement",
    "shiftManagement",
    "webhookManagement",
    "responseFormat",
    "examples",
}


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_root_document_shape(client):
    resp = client.get("/")
    body = resp.get_json()

    assert resp.status_code == 200
    assert set(body) == ROOT_KEYS
    assert body["service"] == "ZKTeco Multi-Device Attendance API"
    assert body["version"] == "2.0.0"
    assert parse_timestamp(body["timestamp"]).tzinfo is not None
    assert "GET /<prefix>/attendance/todayShift" in body["endpoints"]


def test_root_configuration_reflects_registry(client):
    config = client.get("/").get_json()["configuration"]
    assert config == {
        "apiHost": "127.0.0.1",
        "apiPort": 3000,
        "totalDevices": 3,
        "deviceTypes": ["MB460", "K40"],
        "countries": ["PK", "US"],
    }


def test_api_docs_shape(client):
    resp = client.get("/api-docs")
    body = resp.get_json()

    assert resp.status_code == 200
    assert set(body) == API_DOC_KEYS
    assert body["version"] == "2.0.0"
    parse_timestamp(body["timestamp"])
    assert "POST /<prefix>/attendance/todayShift/process" in body["shiftManagement"]["endpoints"]
    assert body["responseFormat"]["standard"]["requestId"].startswith("string")


@pytest.mark.parametrize("path", ["/", "/api-docs"])
def test_documents_only_differ_by_timestamp(client, path):
    first = client.get(path).get_json()
    second = client.get(path + "?verbose=1", headers={"X-Request-ID": "abc"}).get_json()
    first.pop("timestamp")
    second.pop("timestamp")
    assert first == second


@pytest.mark.parametrize("path", ["/", "/api-docs"])
def test_documents_do_not_touch_devices(client, adapter_factory, path):
    client.get(path)
    assert adapter_factory.calls == []
