import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")
API_TOKEN = Config.API_TOKEN

DB_CONFIG = dict(DB_CONFIG)

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

DEFAULT_TIMEZONE = Config.DEFAULT_TIMEZONE
LATENESS_DEFAULTS = Config.LATENESS_DEFAULTS
