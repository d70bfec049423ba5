"""Onboarding progress endpoints for contractors and event managers."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import Forbidden, NotFound

from models import db, utcnow
from models.onboarding_status import ONBOARDING_STEPS, ContractorOnboardingStatus
from models.profile import Profile
from models.user import User
from utils.auth import require_user
from utils.request_validation import ValidationError, field_error
from utils.verification_log import build_verification_facts
from utils.verification_status import resolve_verification_status

onboarding_bp = Blueprint("onboarding", __name__)


def _require_contractor() -> User:
    user = require_user()
    if not user.is_contractor:
        raise Forbidden("Only contractors have onboarding steps.")
    return user


def _get_or_create_onboarding(user: User) -> ContractorOnboardingStatus:
    onboarding = user.onboarding_status
    if onboarding is None:
        onboarding = ContractorOnboardingStatus(user_id=user.id)
        user.onboarding_status = onboarding
        db.session.add(onboarding)
    return onboarding


def _status_payload(user: User) -> dict:
    profile = user.profile
    return {
        "role": user.role,
        "onboarding_status": (
            user.onboarding_status.to_dict() if user.onboarding_status else None
        ),
        "onboarding_completed": profile.onboarding_completed if profile else None,
        "verification_status": resolve_verification_status(
            build_verification_facts(user)
        ),
    }


@onboarding_bp.route("/status", methods=["GET"])
def onboarding_status():
    """Return the caller's onboarding progress and resolved status."""

    user = require_user()
    return jsonify(_status_payload(user))


@onboarding_bp.route("/steps/<int:step>", methods=["PUT"])
def complete_step(step: int):
    """Mark one contractor onboarding step as completed."""

    user = _require_contractor()
    if step not in ONBOARDING_STEPS:
        raise NotFound("Unknown onboarding step.")

    onboarding = _get_or_create_onboarding(user)
    onboarding.complete_step(step)
    db.session.commit()
    return jsonify(_status_payload(user))


@onboarding_bp.route("/submit", methods=["POST"])
def submit_onboarding():
    """Submit a contractor's completed onboarding for review."""

    user = _require_contractor()
    onboarding = _get_or_create_onboarding(user)

    missing = onboarding.incomplete_steps()
    if missing:
        raise ValidationError(
            [field_error(f"step{step}", "step is not completed") for step in missing],
            "Onboarding is incomplete.",
        )

    onboarding.is_submitted = True
    onboarding.submission_date = utcnow()
    onboarding.approval_status = "pending"
    db.session.commit()
    current_app.logger.info("Contractor %s submitted onboarding", user.id)
    return jsonify(_status_payload(user))


@onboarding_bp.route("/complete", methods=["POST"])
def complete_event_manager_onboarding():
    """Flag an event manager's onboarding as completed."""

    user = require_user()
    if user.role != "event_manager":
        raise Forbidden("Only event managers complete onboarding this way.")

    profile = user.profile
    if profile is None:
        profile = Profile(user_id=user.id, preferences={})
        user.profile = profile
        db.session.add(profile)
    profile.mark_onboarding_completed()
    db.session.commit()
    return jsonify(_status_payload(user))
