from .config import *  # noqa: F401,F403
from .config import env_flag

DEBUG = env_flag("DEBUG", "1")
ENVIRONMENT = "development"
