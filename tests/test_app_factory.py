"""Tests for the Flask application factory."""
from __future__ import annotations


def test_health_endpoint_returns_ok(client):
    """The health endpoint should respond with an OK payload."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_blueprints_registered(app):
    """Application factory should register expected blueprints."""
    bps = set(app.blueprints.keys())
    assert {"auth", "verification", "onboarding", "criteria"}.issubset(bps)


def test_verification_rules_registered(app):
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/verification/queue" in rules
    assert "/verification/<user_id>/approve" in rules
    assert "/verification/<user_id>/reject" in rules
    assert "/verification/<user_id>/unapprove" in rules
    assert "/verification/<user_id>/resubmit" in rules
