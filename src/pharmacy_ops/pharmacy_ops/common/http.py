"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import dataclasses
import logging
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Mapping

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    ConfirmationRequiredError,
    DomainError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def serialize(value: Any) -> Any:
    """Dataclasses/enums/dates -> JSON-friendly values (dates as YYYY-MM-DD / ISO)."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: serialize(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(serialize(k)): serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [serialize(v) for v in value]
    return value


def ok(**data: Any):
    return jsonify({"success": True, **{k: serialize(v) for k, v in data.items()}})


def fail(message: str, status: int, **extra: Any):
    return jsonify({"success": False, "message": message, **extra}), status


def payload() -> dict:
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def confirmed() -> bool:
    flag = request.args.get("confirm") or payload().get("confirm")
    return str(flag).strip().lower() in _TRUTHY


def current_uid() -> str:
    return str(session["uid"])


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "uid" not in session:
            return fail("Please sign in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def json_errors(view):
    """Map domain/backend failures to JSON responses; nothing is retried."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ConfirmationRequiredError as e:
            return fail(str(e), 409, confirm_required=True)
        except NotFoundError as e:
            return fail(str(e), 404)
        except AuthenticationError as e:
            return fail(str(e), 401)
        except AuthorizationError as e:
            return fail(str(e), 403)
        except DomainError as e:
            return fail(str(e), 400)
        except BackendError as e:
            return fail(str(e), 502)
        except Exception:
            logger.exception("Unhandled error in %s", request.path)
            return fail("Unexpected error. Please try again.", 500)

    return wrapper
