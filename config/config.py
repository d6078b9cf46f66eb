import os


def env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "3000"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON = env_flag("LOG_JSON", "0")

    # Device I/O
    DEVICE_CONNECT_TIMEOUT = float(os.getenv("DEVICE_CONNECT_TIMEOUT", "5"))
    DEVICE_MAX_RETRIES = int(os.getenv("DEVICE_MAX_RETRIES", "3"))
    DEVICE_RETRY_DELAY = float(os.getenv("DEVICE_RETRY_DELAY", "2"))
    MAX_CONCURRENT_DEVICES = int(os.getenv("MAX_CONCURRENT_DEVICES", "3"))
    ATTENDANCE_CACHE_TTL = int(os.getenv("ATTENDANCE_CACHE_TTL", "60"))

    # Webhooks
    WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT", "30"))
    WEBHOOK_MAX_RETRIES = int(os.getenv("WEBHOOK_MAX_RETRIES", "3"))
    WEBHOOK_RETRY_DELAY = float(os.getenv("WEBHOOK_RETRY_DELAY", "1"))
    WEBHOOK_URLS = {
        "today": os.getenv("WEBHOOK_TODAY_URL", ""),
        "todayShift": os.getenv("WEBHOOK_TODAY_SHIFT_URL", ""),
        "enriched": os.getenv("WEBHOOK_ENRICHED_URL", ""),
    }
    SCHEDULER_ENABLED = env_flag("SCHEDULER_ENABLED", "0")
    WEBHOOK_INTERVAL_MINUTES = float(os.getenv("WEBHOOK_INTERVAL_MINUTES", "15"))


API_HOST = Config.API_HOST
API_PORT = Config.API_PORT
LOG_LEVEL = Config.LOG_LEVEL
LOG_JSON = Config.LOG_JSON
DEVICE_CONNECT_TIMEOUT = Config.DEVICE_CONNECT_TIMEOUT
DEVICE_MAX_RETRIES = Config.DEVICE_MAX_RETRIES
DEVICE_RETRY_DELAY = Config.DEVICE_RETRY_DELAY
MAX_CONCURRENT_DEVICES = Config.MAX_CONCURRENT_DEVICES
ATTENDANCE_CACHE_TTL = Config.ATTENDANCE_CACHE_TTL
WEBHOOK_TIMEOUT = Config.WEBHOOK_TIMEOUT
WEBHOOK_MAX_RETRIES = Config.WEBHOOK_MAX_RETRIES
WEBHOOK_RETRY_DELAY = Config.WEBHOOK_RETRY_DELAY
WEBHOOK_URLS = Config.WEBHOOK_URLS
SCHEDULER_ENABLED = Config.SCHEDULER_ENABLED
WEBHOOK_INTERVAL_MINUTES = Config.WEBHOOK_INTERVAL_MINUTES

DEBUG = env_flag("DEBUG", "0")
