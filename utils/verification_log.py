"""Reading and appending verification log entries."""

from __future__ import annotations

import uuid
from collections import defaultdict
from typing import Iterable, Sequence

from models import db
from models.user import User
from models.verification_log import VerificationLog
from utils.verification_status import VerificationFacts

ACTION_STATUS_LABELS = {
    "approve": "approved",
    "reject": "rejected",
    "resubmit": "pending",
    "unapprove": "pending",
}


def is_uuid(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def resolve_admin_id(principal) -> str | None:
    """Return the principal's id if it can be stored as ``admin_id``.

    Only admins are recorded. Token principals and anything else that is not
    a persisted user yield None so the log row is still written.
    """

    if getattr(principal, "role", None) != "admin":
        return None
    principal_id = getattr(principal, "id", None)
    if not is_uuid(principal_id):
        return None
    if isinstance(principal, User):
        return principal_id
    return principal_id if db.session.get(User, principal_id) is not None else None


def record_verification_action(
    user: User,
    action: str,
    principal,
    *,
    reason: str | None = None,
    feedback: str | None = None,
) -> VerificationLog:
    """Add one log entry to the current session without committing."""

    if action not in ACTION_STATUS_LABELS:
        raise ValueError(f"Unknown verification action: {action}")

    entry = VerificationLog(
        user_id=user.id,
        action=action,
        status=ACTION_STATUS_LABELS[action],
        reason=reason,
        feedback=feedback,
        admin_id=resolve_admin_id(principal),
    )
    db.session.add(entry)
    return entry


def fetch_log(user_id: str) -> list[VerificationLog]:
    """Return a user's log entries, newest first."""

    return (
        VerificationLog.query.filter_by(user_id=user_id)
        .order_by(VerificationLog.created_at.desc())
        .all()
    )


def fetch_logs_for_users(user_ids: Iterable[str]) -> dict[str, list[VerificationLog]]:
    """Load the logs of several users with a single query."""

    ids = list(user_ids)
    grouped: dict[str, list[VerificationLog]] = defaultdict(list)
    if not ids:
        return grouped

    entries = (
        VerificationLog.query.filter(VerificationLog.user_id.in_(ids))
        .order_by(VerificationLog.created_at.desc())
        .all()
    )
    for entry in entries:
        grouped[entry.user_id].append(entry)
    return grouped


def build_verification_facts(
    user: User, log: Sequence[VerificationLog] | None = None
) -> VerificationFacts:
    """Assemble resolver input from a stored user and its related rows."""

    if log is None:
        log = fetch_log(user.id)

    business_profile = user.business_profile
    onboarding = user.onboarding_status
    profile = user.profile

    return VerificationFacts(
        role=user.role,
        is_user_verified=bool(user.is_verified),
        is_business_verified=bool(business_profile and business_profile.is_verified),
        onboarding_submitted=bool(onboarding.is_submitted) if onboarding else None,
        onboarding_completed=profile.onboarding_completed if profile else None,
        log=tuple(log),
    )
