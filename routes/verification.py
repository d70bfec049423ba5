"""Verification blueprint: review queue, user detail and moderation actions."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from werkzeug.exceptions import BadRequest, Forbidden, InternalServerError, NotFound

from models import db, utcnow
from models.profile import Profile
from models.user import User
from models.verification_log import VerificationLog
from utils.auth import require_admin, require_principal
from utils.request_validation import (
    ValidationError,
    field_error,
    optional_text,
    parse_json_request,
)
from utils.verification_log import (
    build_verification_facts,
    fetch_log,
    fetch_logs_for_users,
    is_uuid,
    record_verification_action,
)
from utils.verification_status import RESOLVED_STATUSES, resolve_verification_status

verification_bp = Blueprint("verification", __name__)

QUEUE_ROLES = ("event_manager", "contractor")


def _get_user_or_404(user_id: str) -> User:
    user = db.session.get(User, user_id) if is_uuid(user_id) else None
    if user is None:
        raise NotFound("User not found.")
    return user


def _positive_int(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError([field_error(name, f"{name} must be an integer")])
    if value < 1:
        raise ValidationError([field_error(name, f"{name} must be at least 1")])
    return value


def _set_verified(user: User, verified: bool) -> None:
    """Write the business flag and its cached copy on the user together."""

    user.is_verified = verified
    business_profile = user.business_profile
    if business_profile is not None:
        business_profile.is_verified = verified
        business_profile.verification_date = utcnow() if verified else None


def _set_onboarding_outcome(user: User, approval_status: str, notes: str | None = None) -> None:
    onboarding = user.onboarding_status
    if onboarding is None:
        return
    onboarding.approval_status = approval_status
    onboarding.approval_date = utcnow() if approval_status == "approved" else None
    if notes is not None:
        onboarding.admin_notes = notes


def _commit_action(user: User, action: str, principal) -> None:
    """Commit the flag changes and the log entry as one transaction."""

    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(
            "Failed to record verification action %s for user %s", action, user.id
        )
        raise InternalServerError("Verification action could not be saved.")

    current_app.logger.info(
        "Verification action %s recorded for user %s by %s",
        action,
        user.id,
        getattr(principal, "id", None),
    )


def _action_response(user: User, entry: VerificationLog):
    status = resolve_verification_status(build_verification_facts(user))
    return (
        jsonify({"verification_log": entry.to_dict(), "verification_status": status}),
        201,
    )


def _serialize_user(
    user: User,
    log: list[VerificationLog],
    detailed: bool = False,
    status: str | None = None,
) -> dict:
    if status is None:
        status = resolve_verification_status(build_verification_facts(user, log))
    payload = user.to_dict()
    payload["verification_status"] = status
    payload["profile"] = user.profile.to_dict() if user.profile else None
    payload["business_profile"] = (
        user.business_profile.to_dict() if user.business_profile else None
    )
    if detailed:
        payload["onboarding_status"] = (
            user.onboarding_status.to_dict() if user.onboarding_status else None
        )
        payload["verification_logs"] = [entry.to_dict() for entry in log]
    else:
        payload["latest_log"] = log[0].to_dict() if log else None
    return payload


@verification_bp.route("/queue", methods=["GET"])
def verification_queue():
    """Return a page of users with their resolved verification status."""

    require_admin()

    page = _positive_int("page", 1)
    default_per_page = int(current_app.config.get("VERIFICATION_QUEUE_PER_PAGE", 20))
    max_per_page = int(current_app.config.get("VERIFICATION_QUEUE_MAX_PER_PAGE", 100))
    per_page = min(_positive_int("per_page", default_per_page), max_per_page)

    errors = []
    role = request.args.get("role") or None
    if role and role not in QUEUE_ROLES:
        errors.append(field_error("role", "role must be one of event_manager, contractor"))
    status = request.args.get("status") or None
    if status and status not in RESOLVED_STATUSES:
        errors.append(
            field_error("status", "status must be one of " + ", ".join(RESOLVED_STATUSES))
        )
    if errors:
        raise ValidationError(errors)

    query = User.query.options(
        selectinload(User.profile),
        selectinload(User.business_profile),
        selectinload(User.onboarding_status),
    ).filter(User.role.in_([role] if role else QUEUE_ROLES))

    search = (request.args.get("search") or "").strip()
    if search:
        like = f"%{search}%"
        query = query.outerjoin(User.profile).filter(
            or_(
                User.email.ilike(like),
                Profile.first_name.ilike(like),
                Profile.last_name.ilike(like),
            )
        )

    # The status is derived, so counts and filtering happen after resolution.
    users = query.order_by(User.created_at.desc()).all()
    logs = fetch_logs_for_users(user.id for user in users)
    resolved = []
    for user in users:
        facts = build_verification_facts(user, logs.get(user.id, []))
        resolved.append((user, resolve_verification_status(facts)))

    counts = dict.fromkeys(RESOLVED_STATUSES, 0)
    for _, user_status in resolved:
        counts[user_status] += 1

    if status is not None:
        resolved = [item for item in resolved if item[1] == status]

    total = len(resolved)
    start = (page - 1) * per_page
    results = [
        _serialize_user(user, logs.get(user.id, []), status=user_status)
        for user, user_status in resolved[start : start + per_page]
    ]

    pages = (total + per_page - 1) // per_page if total else 0
    return jsonify(
        {
            "results": results,
            "page": page,
            "per_page": per_page,
            "total": total,
            "pages": pages,
            "counts": counts,
        }
    )


@verification_bp.route("/<user_id>", methods=["GET"])
def verification_detail(user_id: str):
    """Return a user's verification record. Admins or the user themself."""

    principal = require_principal()
    if not principal.is_admin and principal.id != user_id:
        raise Forbidden("You may only view your own verification record.")

    user = _get_user_or_404(user_id)
    return jsonify(_serialize_user(user, fetch_log(user.id), detailed=True))


@verification_bp.route("/<user_id>/approve", methods=["POST"])
def approve_user(user_id: str):
    """Mark a user verified and record the approval."""

    principal = require_admin()
    user = _get_user_or_404(user_id)
    payload = parse_json_request(request, allow_empty=True)

    _set_verified(user, True)
    _set_onboarding_outcome(user, "approved")
    entry = record_verification_action(
        user, "approve", principal, reason=optional_text(payload, "reason")
    )
    _commit_action(user, "approve", principal)
    return _action_response(user, entry)


@verification_bp.route("/<user_id>/reject", methods=["POST"])
def reject_user(user_id: str):
    """Reject a user's verification with a reason and optional feedback."""

    principal = require_admin()
    user = _get_user_or_404(user_id)
    payload = parse_json_request(request, required_keys=["reason"])

    reason = optional_text(payload, "reason")
    if reason is None:
        raise ValidationError([field_error("reason", "reason is required")])
    feedback = optional_text(payload, "feedback")

    _set_verified(user, False)
    _set_onboarding_outcome(user, "rejected", notes=feedback)
    entry = record_verification_action(
        user, "reject", principal, reason=reason, feedback=feedback
    )
    _commit_action(user, "reject", principal)
    return _action_response(user, entry)


@verification_bp.route("/<user_id>/unapprove", methods=["POST"])
def unapprove_user(user_id: str):
    """Reset a verified user to unverified, keeping the approval history."""

    principal = require_admin()
    user = _get_user_or_404(user_id)
    payload = parse_json_request(request, allow_empty=True)

    _set_verified(user, False)
    _set_onboarding_outcome(user, "pending")
    entry = record_verification_action(
        user, "unapprove", principal, reason=optional_text(payload, "reason")
    )
    _commit_action(user, "unapprove", principal)
    return _action_response(user, entry)


@verification_bp.route("/<user_id>/resubmit", methods=["POST"])
def resubmit_verification(user_id: str):
    """Put a user back into review without changing any verification flag."""

    principal = require_principal()
    if not principal.is_admin and principal.id != user_id:
        raise Forbidden("You may only resubmit your own verification.")
    user = _get_user_or_404(user_id)
    if user.is_admin:
        raise BadRequest("Administrators do not go through verification.")

    payload = parse_json_request(request, allow_empty=True)
    entry = record_verification_action(
        user, "resubmit", principal, reason=optional_text(payload, "reason")
    )
    _commit_action(user, "resubmit", principal)
    return _action_response(user, entry)
