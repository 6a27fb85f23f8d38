import os

from .config import DB_CONFIG, Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
API_TOKEN = os.getenv("API_TOKEN", "please-set-API_TOKEN")

DB_CONFIG = dict(DB_CONFIG)

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = Config.AUTO_INIT_DB

DEFAULT_TIMEZONE = Config.DEFAULT_TIMEZONE
LATENESS_DEFAULTS = Config.LATENESS_DEFAULTS
