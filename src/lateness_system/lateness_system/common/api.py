"""Helpers shared by the feature controllers (JSON encoding, argument parsing, error mapping)."""

from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from functools import wraps
from typing import Any

from flask import current_app, jsonify, request

from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..logging_config import get_logger
from .datetime_utils import parse_iso_date

logger = get_logger("api")


def jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    return value


def body() -> dict:
    return request.get_json(silent=True) or {}


def int_arg(data, name: str, *, required: bool = True):
    raw = data.get(name)
    if raw in (None, ""):
        if required:
            raise ValidationError(f"{name} is required")
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")


def date_arg(data, name: str) -> date:
    raw = data.get(name)
    if not raw:
        raise ValidationError(f"{name} is required")
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def datetime_arg(data, name: str) -> datetime:
    raw = data.get(name)
    if not raw:
        raise ValidationError(f"{name} is required")
    text = str(raw).strip()
    # fromisoformat() only understands a trailing Z from Python 3.11
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"{name} must be an ISO 8601 timestamp")


def require_employee(users, company_id: int, user_id: int) -> None:
    employee = users.get_by_id(user_id)
    if not employee or employee.company_id != company_id:
        raise NotFoundError(f"Employee {user_id} not found in company {company_id}")


def api_view(view):
    """Check the X-Api-Token header and map domain errors to JSON responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get("API_TOKEN")
        if expected and request.headers.get("X-Api-Token") != expected:
            return jsonify({"success": False, "message": "Unauthorized"}), 401
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"success": False, "message": str(e)}), 404
        except DomainError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return jsonify({"success": False, "message": "Internal server error"}), 500

    return wrapper
