"""Tests for onboarding progress endpoints."""

from __future__ import annotations

from flask_jwt_extended import create_access_token

from models import db
from models.business_profile import BusinessProfile
from models.profile import Profile
from models.user import User


def _auth_headers(app, user_id: str) -> dict[str, str]:
    with app.app_context():
        token = create_access_token(identity=user_id)
    return {"Authorization": f"Bearer {token}"}


def _create_user(email: str, role: str) -> str:
    user = User(email=email, password_hash="hash", role=role)
    user.profile = Profile(preferences={})
    if role == "contractor":
        user.business_profile = BusinessProfile(company_name="Stage Hire", service_areas=[])
    db.session.add(user)
    db.session.commit()
    return user.id


def test_contractor_steps_and_submission(app, client):
    """A contractor moves from onboarding to pending once submitted."""

    with app.app_context():
        user_id = _create_user("contractor@example.com", "contractor")
    headers = _auth_headers(app, user_id)

    status = client.get("/onboarding/status", headers=headers).get_json()
    assert status["onboarding_status"] is None
    assert status["verification_status"] == "onboarding"

    for step in (1, 2, 3, 4):
        response = client.put(f"/onboarding/steps/{step}", headers=headers)
        assert response.status_code == 200

    step_state = response.get_json()["onboarding_status"]
    assert step_state["step4_completed"] is True
    assert step_state["is_submitted"] is False

    response = client.post("/onboarding/submit", headers=headers)

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["onboarding_status"]["is_submitted"] is True
    assert payload["onboarding_status"]["submission_date"] is not None
    assert payload["verification_status"] == "pending"


def test_submit_with_missing_steps_lists_them(app, client):
    with app.app_context():
        user_id = _create_user("contractor@example.com", "contractor")
    headers = _auth_headers(app, user_id)

    client.put("/onboarding/steps/1", headers=headers)
    client.put("/onboarding/steps/3", headers=headers)
    response = client.post("/onboarding/submit", headers=headers)

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["detail"] == "Onboarding is incomplete."
    assert [error["field"] for error in payload["errors"]] == ["step2", "step4"]


def test_unknown_step_is_404(app, client):
    with app.app_context():
        user_id = _create_user("contractor@example.com", "contractor")

    response = client.put("/onboarding/steps/7", headers=_auth_headers(app, user_id))

    assert response.status_code == 404


def test_event_manager_cannot_use_contractor_steps(app, client):
    with app.app_context():
        user_id = _create_user("manager@example.com", "event_manager")

    response = client.put("/onboarding/steps/1", headers=_auth_headers(app, user_id))

    assert response.status_code == 403


def test_event_manager_completion_flag(app, client):
    with app.app_context():
        user_id = _create_user("manager@example.com", "event_manager")
    headers = _auth_headers(app, user_id)

    response = client.post("/onboarding/complete", headers=headers)

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["onboarding_completed"] is True
    assert payload["verification_status"] == "pending"

    with app.app_context():
        user = db.session.get(User, user_id)
        assert user.profile.preferences["onboarding_completed"] is True


def test_onboarding_requires_user_account(client):
    response = client.get(
        "/onboarding/status", headers={"X-Admin-Token": "test-admin-token"}
    )

    assert response.status_code == 403
