from __future__ import annotations

import importlib
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .allowances.controller import register as register_allowances
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, list_tables
from .deductions.controller import register as register_deductions
from .lateness.controller import register as register_lateness
from .logging_config import configure_logging, get_logger
from .reports.controller import register as register_reports

logger = get_logger("app")


def load_settings():
    load_dotenv(override=False)
    return importlib.import_module(get_settings_module())


def create_app() -> Flask:
    settings = load_settings()
    app = Flask(__name__)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["API_TOKEN"] = getattr(settings, "API_TOKEN", "")
    db_config = getattr(settings, "DB_CONFIG")

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings.__name__, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))

    container = build_container(
        db_config=db_config,
        lateness_defaults=getattr(settings, "LATENESS_DEFAULTS", None),
        default_timezone=getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE),
    )
    app.extensions["lateness_container"] = container

    register_routes(app, container)

    return app


def register_routes(app: Flask, container: Container) -> None:
    register_lateness(app, container)
    register_allowances(app, container)
    register_deductions(app, container)
    register_reports(app, container)
