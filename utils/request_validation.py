"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request
from werkzeug.exceptions import BadRequest


class ValidationError(BadRequest):
    """A 400 error carrying per-field messages."""

    description = "Validation failed."

    def __init__(self, errors: list[dict[str, str]], description: str | None = None):
        super().__init__(description or self.description)
        self.errors = errors


def field_error(field: str, message: str) -> dict[str, str]:
    return {"field": field, "message": message}


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if allow_empty and not req.get_data(cache=True):
        return {}

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise ValidationError(
                [field_error(key, f"{key} is required") for key in sorted(missing)]
            )

    return data


def optional_text(data: dict, key: str) -> str | None:
    """Return a stripped string value or None when absent or blank."""

    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError([field_error(key, f"{key} must be a string")])
    value = value.strip()
    return value or None
