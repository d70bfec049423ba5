"""Principal resolution shared by the blueprints."""

from __future__ import annotations

import hmac
from dataclasses import dataclass

from flask import current_app, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from werkzeug.exceptions import Forbidden, Unauthorized

from models import db
from models.user import User

ADMIN_TOKEN_HEADER = "X-Admin-Token"


@dataclass(frozen=True)
class TokenPrincipal:
    """Admin authenticated through the configured API token.

    It has no row in ``users``, so its id never lands in ``admin_id``.
    """

    id: str = "admin-token"
    role: str = "admin"
    email: str | None = None

    @property
    def is_admin(self) -> bool:
        return True


def _admin_token_matches() -> bool:
    expected = current_app.config.get("ADMIN_API_TOKEN")
    supplied = request.headers.get(ADMIN_TOKEN_HEADER)
    if not expected or not supplied:
        return False
    return hmac.compare_digest(supplied.encode(), str(expected).encode())


def _user_from_jwt() -> User | None:
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if identity is None:
        return None
    user = db.session.get(User, str(identity))
    if user is None:
        raise Unauthorized("Authenticated user no longer exists.")
    return user


def current_principal() -> User | TokenPrincipal | None:
    """Return the authenticated caller: a JWT user, the admin token, or None."""

    user = _user_from_jwt()
    if user is not None:
        return user
    if _admin_token_matches():
        return TokenPrincipal()
    return None


def require_principal() -> User | TokenPrincipal:
    principal = current_principal()
    if principal is None:
        raise Unauthorized("Authentication required.")
    return principal


def require_user() -> User:
    """Return the caller as a stored user; token principals are rejected."""

    principal = require_principal()
    if not isinstance(principal, User):
        raise Forbidden("This action requires a user account.")
    return principal


def require_admin() -> User | TokenPrincipal:
    principal = require_principal()
    if not principal.is_admin:
        raise Forbidden("Admin privileges required.")
    return principal
