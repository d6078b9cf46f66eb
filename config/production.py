import os

from .config import *  # noqa: F401,F403
from .config import env_flag

DEBUG = False
ENVIRONMENT = "production"

LOG_JSON = env_flag("LOG_JSON", "1")
SCHEDULER_ENABLED = env_flag("SCHEDULER_ENABLED", "1")
MAX_CONCURRENT_DEVICES = int(os.getenv("MAX_CONCURRENT_DEVICES", "5"))
