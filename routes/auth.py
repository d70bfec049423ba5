"""Authentication blueprint providing register and login endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token
from werkzeug.exceptions import Conflict, Unauthorized
from sqlalchemy import func

from models import db, utcnow
from models.business_profile import BusinessProfile
from models.profile import Profile
from models.user import User
from utils.request_validation import (
    ValidationError,
    field_error,
    optional_text,
    parse_json_request,
)

# Admins are provisioned with scripts/seed_admin.py, never through signup.
SIGNUP_ROLES = {"event_manager", "contractor"}
auth_bp = Blueprint("auth", __name__)


def _normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    if not isinstance(raw_email, str):
        return ""
    return raw_email.strip().lower()


def _validate_registration(payload: dict) -> tuple[str, str, str]:
    errors = []
    email = _normalize_email(payload.get("email"))
    password = payload.get("password")
    password = password.strip() if isinstance(password, str) else ""
    role = (payload.get("role") or "event_manager")
    role = role.strip().lower() if isinstance(role, str) else ""

    if not email:
        errors.append(field_error("email", "email is required"))
    elif "@" not in email:
        errors.append(field_error("email", "email must be a valid address"))
    if not password:
        errors.append(field_error("password", "password is required"))
    elif len(password) < 8:
        errors.append(field_error("password", "password must be at least 8 characters"))
    if role not in SIGNUP_ROLES:
        errors.append(field_error("role", "role must be one of contractor, event_manager"))
    if role == "contractor" and not optional_text(payload, "company_name"):
        errors.append(field_error("company_name", "company_name is required for contractors"))

    if errors:
        raise ValidationError(errors)
    return email, password, role


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register an event manager or contractor along with their profiles."""
    payload = parse_json_request(request)
    email, password, role = _validate_registration(payload)

    # Case-insensitive unique check
    existing = User.query.filter(func.lower(User.email) == email).first()
    if existing is not None:
        raise Conflict("A user with that email already exists.")

    user = User(email=email, role=role)
    user.set_password(password)
    user.profile = Profile(
        first_name=optional_text(payload, "first_name"),
        last_name=optional_text(payload, "last_name"),
        phone=optional_text(payload, "phone"),
        preferences={},
    )
    if role == "contractor":
        user.business_profile = BusinessProfile(
            company_name=optional_text(payload, "company_name"),
            business_address=optional_text(payload, "business_address"),
            nzbn=optional_text(payload, "nzbn"),
            service_areas=[],
        )

    db.session.add(user)
    db.session.commit()
    current_app.logger.info("Registered %s user %s", user.role, user.id)

    return (
        jsonify(
            {
                "message": "User registered successfully.",
                "user": {"id": user.id, "email": user.email, "role": user.role},
            }
        ),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user and return a JWT access token."""
    payload = parse_json_request(request)
    email = _normalize_email(payload.get("email"))
    password = payload.get("password")
    password = password.strip() if isinstance(password, str) else ""

    if not email or not password:
        raise ValidationError(
            [
                field_error(name, f"{name} is required")
                for name, value in (("email", email), ("password", password))
                if not value
            ]
        )

    # Case-insensitive lookup
    user = User.query.filter(func.lower(User.email) == email).first()
    if user is None or not user.check_password(password):
        raise Unauthorized("Invalid email or password.")

    user.last_login = utcnow()
    db.session.commit()

    token = create_access_token(identity=user.id)
    return (
        jsonify(
            {
                "access_token": token,
                "user": {"id": user.id, "email": user.email, "role": user.role},
            }
        ),
        HTTPStatus.OK,
    )
