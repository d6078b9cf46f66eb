from .config import *  # noqa: F401,F403

DEBUG = False
TESTING = True
ENVIRONMENT = "testing"

ATTENDANCE_CACHE_TTL = 0
DEVICE_MAX_RETRIES = 1
DEVICE_RETRY_DELAY = 0.0
WEBHOOK_MAX_RETRIES = 0
WEBHOOK_RETRY_DELAY = 0.0
SCHEDULER_ENABLED = False
