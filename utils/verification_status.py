"""Verification status resolution.

Every endpoint that reports a user's verification state goes through
:func:`resolve_verification_status`. The function only looks at the facts it
is handed, so the same stored rows always produce the same status.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

APPROVED = "approved"
REJECTED = "rejected"
ONBOARDING = "onboarding"
PENDING = "pending"

RESOLVED_STATUSES = (APPROVED, REJECTED, ONBOARDING, PENDING)

_APPROVAL_ACTIONS = {"approve"}
_APPROVAL_LABELS = {"approved"}
_REJECTION_ACTIONS = {"reject"}
_REJECTION_LABELS = {"rejected"}


@dataclass(frozen=True)
class VerificationFacts:
    """Everything the resolver needs to know about one user."""

    role: str | None = None
    is_user_verified: bool = False
    is_business_verified: bool = False
    # None means the contractor has no onboarding row yet.
    onboarding_submitted: bool | None = None
    onboarding_completed: bool | None = None
    log: Sequence[Any] = field(default_factory=tuple)


def _entry_value(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _normalize_label(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().lower()


def _coerce_timestamp(value: Any) -> datetime | None:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is not None:
        try:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        except (OverflowError, ValueError):
            return None
    return value


def _is_approval(entry: Any) -> bool:
    return (
        _normalize_label(_entry_value(entry, "action")) in _APPROVAL_ACTIONS
        or _normalize_label(_entry_value(entry, "status")) in _APPROVAL_LABELS
    )


def _is_rejection(entry: Any) -> bool:
    return (
        _normalize_label(_entry_value(entry, "action")) in _REJECTION_ACTIONS
        or _normalize_label(_entry_value(entry, "status")) in _REJECTION_LABELS
    )


def _recency_key(entry: Any, position: int, total: int) -> tuple:
    """Sort key where a larger value means a more recent entry.

    Entries without a usable timestamp rank below timestamped ones and fall
    back to their position, since logs arrive newest first.
    """

    timestamp = _coerce_timestamp(_entry_value(entry, "created_at"))
    if timestamp is None:
        return (0, datetime.min, total - position)
    return (1, timestamp, total - position)


def _latest(keys: Iterable[tuple]) -> tuple | None:
    keys = list(keys)
    return max(keys) if keys else None


def resolve_verification_status(facts: VerificationFacts) -> str:
    """Classify a user as approved, rejected, onboarding or pending."""

    if facts.is_business_verified or facts.is_user_verified:
        return APPROVED

    log = list(facts.log or ())
    total = len(log)
    keyed = [(_recency_key(entry, index, total), entry) for index, entry in enumerate(log)]

    latest_approval = _latest(key for key, entry in keyed if _is_approval(entry))
    latest_rejection = _latest(key for key, entry in keyed if _is_rejection(entry))

    if latest_rejection is not None and (
        latest_approval is None or not _strictly_newer(latest_approval, latest_rejection)
    ):
        return REJECTED

    # A user who was approved once and later reset never drops back to onboarding.
    if latest_approval is None:
        if facts.role == "contractor" and not facts.onboarding_submitted:
            return ONBOARDING
        if facts.role == "event_manager" and facts.onboarding_completed is not True:
            return ONBOARDING

    return PENDING


def _strictly_newer(candidate: tuple, other: tuple) -> bool:
    """Compare two recency keys, treating equal timestamps as a tie."""

    if candidate[0] == 1 and other[0] == 1:
        return candidate[1] > other[1]
    return candidate > other

