"""Tests covering registration and login."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from models import db
from models.user import User


def _register(client: FlaskClient, **overrides):
    payload = {
        "email": "planner@example.com",
        "password": "PlannerPass1",
        "role": "event_manager",
        "first_name": "Pat",
        "last_name": "Planner",
    }
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


def test_register_event_manager_creates_profile(app, client: FlaskClient):
    response = _register(client)

    assert response.status_code == 201
    user_id = response.get_json()["user"]["id"]

    with app.app_context():
        user = db.session.get(User, user_id)
        assert user.role == "event_manager"
        assert user.is_verified is False
        assert user.profile.first_name == "Pat"
        assert user.business_profile is None


def test_register_contractor_creates_business_profile(app, client: FlaskClient):
    response = _register(
        client,
        email="Vendor@Example.com",
        role="contractor",
        company_name="Sound & Light Ltd",
        nzbn="9429041234567",
    )

    assert response.status_code == 201
    payload = response.get_json()
    assert payload["user"]["email"] == "vendor@example.com"

    with app.app_context():
        user = db.session.get(User, payload["user"]["id"])
        assert user.business_profile.company_name == "Sound & Light Ltd"
        assert user.business_profile.is_verified is False


def test_register_contractor_requires_company_name(client: FlaskClient):
    response = _register(client, role="contractor")

    assert response.status_code == 400
    assert response.get_json()["errors"] == [
        {"field": "company_name", "message": "company_name is required for contractors"}
    ]


def test_register_reports_every_invalid_field(client: FlaskClient):
    response = client.post(
        "/auth/register",
        json={"email": "nope", "password": "short", "role": "admin"},
    )

    assert response.status_code == 400
    fields = [error["field"] for error in response.get_json()["errors"]]
    assert fields == ["email", "password", "role"]


def test_register_duplicate_email_conflicts(client: FlaskClient):
    assert _register(client).status_code == 201

    response = _register(client, email="PLANNER@example.com")

    assert response.status_code == 409


def test_login_returns_access_token(app, client: FlaskClient):
    """Users should receive a JWT when providing valid credentials."""

    _register(client)

    response = client.post(
        "/auth/login",
        json={"email": "planner@example.com", "password": "PlannerPass1"},
    )

    assert response.status_code == 200
    data = response.get_json()
    assert "access_token" in data
    assert data["user"]["role"] == "event_manager"

    with app.app_context():
        user = db.session.get(User, data["user"]["id"])
        assert user.last_login is not None


@pytest.mark.parametrize(
    "payload, status_code",
    [
        ({"email": "planner@example.com"}, 400),
        ({"password": "PlannerPass1"}, 400),
        ({"email": "planner@example.com", "password": "wrong-pass"}, 401),
        ({"email": "ghost@example.com", "password": "PlannerPass1"}, 401),
    ],
)
def test_login_validation(client: FlaskClient, payload, status_code):
    """Login endpoint should validate request bodies and credentials."""

    _register(client)

    response = client.post("/auth/login", json=payload)

    assert response.status_code == status_code


def test_login_token_reaches_protected_route(client: FlaskClient):
    user_id = _register(client).get_json()["user"]["id"]
    token = client.post(
        "/auth/login",
        json={"email": "planner@example.com", "password": "PlannerPass1"},
    ).get_json()["access_token"]

    response = client.get(
        f"/verification/{user_id}",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    assert response.get_json()["verification_status"] == "onboarding"
