import json
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "lateness-dev-secret"
    API_TOKEN = os.environ.get("API_TOKEN", "")

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "lateness_db")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    DEFAULT_TIMEZONE = os.environ.get("DEFAULT_TIMEZONE", "UTC")

    # JSON object overriding the default company rules, e.g.
    # {"work_start_time": "09:00", "latest_allowed_time": "09:15", "violation": {"time_minutes": 120}}
    LATENESS_DEFAULTS = json.loads(os.environ.get("LATENESS_DEFAULTS", "{}") or "{}")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
