"""Static endpoint catalog served by ``GET /`` and ``GET /api-docs``."""

from __future__ import annotations

import copy

from ..common.datetime_utils import utc_timestamp
from ..core.constants import SERVICE_NAME, SERVICE_VERSION

ARCHITECTURE = "Layered (Controllers -> Services -> Device Adapters)"

_PREFIX = "Device prefix (e.g., pk01, us01)"
_COUNTRY = "Country code (e.g., PK, US)"
_FLEET_BODY = {"country": "Optional country filter", "deviceIds": "Optional array of device IDs"}

ENDPOINTS = {
    "GET /<prefix>/health": "Device health check",
    "GET /<prefix>/device/info": "Device information",
    "GET /<prefix>/validate": "Check whether a device prefix is configured",
    "GET /devices": "List all configured devices",
    "GET /country/<code>/devices": "Devices by country",
    "GET /<prefix>/attendance": "Latest attendance for device",
    "GET /<prefix>/attendance/date/<date>": "Date-specific attendance",
    "GET /<prefix>/attendance/filter/<start>/<end>": "Filtered attendance",
    "GET /<prefix>/attendance/today": "Today's attendance",
    "GET /attendance/all-devices": "Attendance from all devices",
    "GET /country/<code>/attendance": "Attendance by country",
    "GET /<prefix>/attendance/todayShift": "Today's shift data (spanning midnight)",
    "GET /<prefix>/attendance/todayShift/checkin": "Shift check-in data",
    "GET /<prefix>/attendance/todayShift/checkout": "Shift check-out data",
    "GET /attendance/all-devices/todayShift": "Shift data from all devices",
    "POST /<prefix>/attendance/todayShift/process": "Process shift data with custom config",
    "GET /<prefix>/attendance/webhook/todayShift": "Trigger webhook with shift data",
    "POST /<prefix>/attendance/webhook/today": "Trigger webhook with today's data",
    "POST /<prefix>/attendance/webhook/date": "Trigger webhook with specific date",
    "POST /<prefix>/attendance/webhook/all": "Trigger webhook with enriched attendance data",
    "POST /devices/webhook/todayShift": "Trigger webhook for all devices",
    "POST /devices/webhook/today": "Trigger webhook for all devices with today's data",
    "GET /webhook/test": "Test webhook functionality",
    "POST /webhook/validate": "Validate webhook URL",
    "POST /webhook/send": "Send data to custom webhook",
    "GET /health": "Lightweight service health check",
    "GET /health/system": "System and fleet health",
    "GET /health/devices": "Reachability of every device",
    "GET /health/report": "Detailed health report with recommendations",
    "GET /health/metrics": "Request and cache metrics",
    "GET /health/info": "Runtime and configuration information",
}

ROOT_EXAMPLES = {
    "deviceScoped": "/pk01/attendance/today",
    "fleetLevel": "/attendance/all-devices",
    "countryFilter": "/country/PK/attendance",
    "webhookTrigger": "GET /pk01/attendance/webhook/todayShift",
}


def _entry(description: str, parameters, response: str) -> dict:
    return {"description": description, "parameters": parameters, "response": response}


DEVICE_MANAGEMENT = {
    "description": "Device configuration and health management",
    "endpoints": {
        "GET /<prefix>/health": _entry(
            "Check device health status", {"prefix": _PREFIX}, "Device health information with status"
        ),
        "GET /<prefix>/device/info": _entry(
            "Get device configuration information",
            {"prefix": _PREFIX},
            "Device details including IP, port, location, model",
        ),
        "GET /<prefix>/validate": _entry(
            "Check whether a device prefix is configured", {"prefix": _PREFIX}, "Validity flag and device summary"
        ),
        "GET /devices": _entry(
            "List all configured devices", "None", "Array of all device configurations with summary"
        ),
        "GET /country/<code>/devices": _entry(
            "Get devices filtered by country", {"code": _COUNTRY}, "Devices in the specified country"
        ),
    },
}

ATTENDANCE_MANAGEMENT = {
    "description": "Attendance data retrieval with device-scoped operations",
    "endpoints": {
        "GET /<prefix>/attendance": _entry(
            "Get latest attendance data from device", {"prefix": _PREFIX}, "Latest attendance records with summary"
        ),
        "GET /<prefix>/attendance/date/<date>": _entry(
            "Get attendance for specific date",
            {"prefix": _PREFIX, "date": "Date in YYYY-MM-DD format"},
            "Date-specific attendance data",
        ),
        "GET /<prefix>/attendance/filter/<start>/<end>": _entry(
            "Get attendance for date range",
            {
                "prefix": _PREFIX,
                "start": "Start date in YYYY-MM-DD format",
                "end": "End date in YYYY-MM-DD format",
            },
            "Filtered attendance data for date range",
        ),
        "GET /<prefix>/attendance/today": _entry(
            "Get today's attendance data", {"prefix": _PREFIX}, "Today's attendance records"
        ),
        "GET /attendance/all-devices": _entry(
            "Get attendance from all devices",
            {"query": {"country": "Optional country filter", "deviceIds": "Optional comma-separated device IDs"}},
            "Combined attendance data from all devices",
        ),
        "GET /country/<code>/attendance": _entry(
            "Get attendance by country", {"code": _COUNTRY}, "Attendance data from devices in the country"
        ),
    },
}

SHIFT_MANAGEMENT = {
    "description": "Shift data management spanning midnight boundaries",
    "endpoints": {
        "GET /<prefix>/attendance/todayShift": _entry(
            "Get today's shift data (spanning midnight)",
            {"prefix": _PREFIX},
            "Shift data with check-in/check-out times",
        ),
        "GET /<prefix>/attendance/todayShift/checkin": _entry(
            "Get shift check-in data", {"prefix": _PREFIX}, "Check-in records for the shift period"
        ),
        "GET /<prefix>/attendance/todayShift/checkout": _entry(
            "Get shift check-out data", {"prefix": _PREFIX}, "Check-out records for the shift period"
        ),
        "GET /attendance/all-devices/todayShift": _entry(
            "Get shift data from all devices", "None", "Combined shift data from all devices"
        ),
        "POST /<prefix>/attendance/todayShift/process": _entry(
            "Process shift data with custom configuration",
            {
                "prefix": _PREFIX,
                "body": {
                    "records": "Array of attendance records",
                    "shiftConfig": "Optional shift configuration",
                    "referenceTime": "Optional ISO-8601 time to evaluate the shift at",
                },
            },
            "Processed shift data with custom settings",
        ),
    },
}

WEBHOOK_MANAGEMENT = {
    "description": "Webhook integration and management",
    "endpoints": {
        "GET /<prefix>/attendance/webhook/todayShift": _entry(
            "Trigger webhook with today's shift data",
            {"prefix": _PREFIX},
            "Webhook trigger result with delivery status",
        ),
        "POST /<prefix>/attendance/webhook/today": _entry(
            "Trigger webhook with today's data",
            {"prefix": _PREFIX, "body": {"webhookUrl": "Optional custom webhook URL"}},
            "Webhook trigger result",
        ),
        "POST /<prefix>/attendance/webhook/date": _entry(
            "Trigger webhook with specific date data",
            {
                "prefix": _PREFIX,
                "body": {"date": "Date in YYYY-MM-DD format", "webhookUrl": "Optional custom webhook URL"},
            },
            "Webhook trigger result for specific date",
        ),
        "POST /<prefix>/attendance/webhook/all": _entry(
            "Trigger webhook with all attendance records enriched with employee names",
            {"prefix": _PREFIX, "body": {"webhookUrl": "Optional custom webhook URL"}},
            "Webhook trigger result with record counts",
        ),
        "POST /devices/webhook/todayShift": _entry(
            "Trigger webhook for all devices with shift data",
            {"body": _FLEET_BODY},
            "Fleet webhook result with per-device status",
        ),
        "POST /devices/webhook/today": _entry(
            "Trigger webhook for all devices with today's data",
            {"body": _FLEET_BODY},
            "Fleet webhook result with per-device status",
        ),
        "GET /webhook/test": _entry(
            "Test webhook functionality", "None", "Webhook service status and capabilities"
        ),
        "POST /webhook/validate": _entry(
            "Validate webhook URL format", {"body": {"url": "URL to validate"}}, "URL validation result"
        ),
        "POST /webhook/send": _entry(
            "Send data to custom webhook",
            {"body": {"data": "Data to send", "webhookUrl": "Target webhook URL"}},
            "Webhook delivery result",
        ),
    },
}

RESPONSE_FORMAT = {
    "success": "All successful responses include success: true, timestamp, and data",
    "error": "All error responses include success: false, error message, and requestId",
    "standard": {
        "success": "boolean - Operation success status",
        "timestamp": "ISO string - Response timestamp",
        "data": "object - Response data payload",
        "summary": "object - Optional summary information",
        "error": "string - Error message (only on failure)",
        "requestId": "string - Unique request identifier for tracking",
    },
}

API_EXAMPLES = {
    "deviceScoped": {
        "url": "/pk01/attendance/today",
        "description": "Get today's attendance from Pakistan device 01",
    },
    "fleetLevel": {
        "url": "/attendance/all-devices",
        "description": "Get attendance data from all configured devices",
    },
    "countryFilter": {
        "url": "/country/PK/attendance",
        "description": "Get attendance data from all Pakistan devices",
    },
    "webhookTrigger": {
        "url": "GET /pk01/attendance/webhook/todayShift",
        "description": "Trigger webhook with shift data from Pakistan device 01",
    },
}


def root_document(configuration: dict) -> dict:
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Scalable biometric device management with device-scoped endpoints",
        "timestamp": utc_timestamp(),
        "architecture": ARCHITECTURE,
        "endpoints": dict(ENDPOINTS),
        "configuration": configuration,
        "examples": dict(ROOT_EXAMPLES),
    }


def api_document() -> dict:
    return {
        "title": f"{SERVICE_NAME} Documentation",
        "version": SERVICE_VERSION,
        "description": "Complete API reference for the device-scoped architecture",
        "timestamp": utc_timestamp(),
        "deviceManagement": copy.deepcopy(DEVICE_MANAGEMENT),
        "attendanceManagement": copy.deepcopy(ATTENDANCE_MANAGEMENT),
        "shiftManagement": copy.deepcopy(SHIFT_MANAGEMENT),
        "webhookManagement": copy.deepcopy(WEBHOOK_MANAGEMENT),
        "responseFormat": copy.deepcopy(RESPONSE_FORMAT),
        "examples": copy.deepcopy(API_EXAMPLES),
    }
