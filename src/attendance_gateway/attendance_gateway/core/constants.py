"""Service identity, device defaults and retry limits."""

SERVICE_NAME = "ZKTeco Multi-Device Attendance API"
SERVICE_VERSION = "2.0.0"

WEBHOOK_SOURCE = "ZKTeco-Multi-Location-API"
WEBHOOK_PAYLOAD_VERSION = "1.0"
WEBHOOK_USER_AGENT = "ZKTeco-Multi-Location-API/1.0"

DEFAULT_DEVICE_MODEL = "MB460"
DEFAULT_DEVICE_TIMEOUT_MS = 10000
DEFAULT_DEVICE_INPORT = "4000"

# prefix -> (country, location)
LOCATION_SLOTS = (
    ("pk01", "PK", "Pakistan"),
    ("pk02", "PK", "Pakistan"),
    ("pk03", "PK", "Pakistan"),
    ("us01", "US", "USA"),
    ("us02", "US", "USA"),
    ("us03", "US", "USA"),
    ("uk01", "UK", "United Kingdom"),
    ("uk02", "UK", "United Kingdom"),
    ("ae01", "AE", "UAE"),
    ("ae02", "AE", "UAE"),
)

MIN_ACCEPTED_RECORDS = 10
MAX_BACKOFF_SECONDS = 10.0

DEGRADED_RESPONSE_MS = 5000

# First path segments owned by fleet-level routes; never device prefixes.
RESERVED_PATH_SEGMENTS = frozenset({"api-docs", "attendance", "country", "devices", "health", "webhook"})
