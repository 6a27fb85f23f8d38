import os

from .config import DB_CONFIG

SECRET_KEY = "test-secret"
API_TOKEN = "test-token"

DB_CONFIG = dict(DB_CONFIG, database=os.getenv("DB_NAME", "lateness_test_db"))

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

DEFAULT_TIMEZONE = "UTC"
LATENESS_DEFAULTS: dict = {}
