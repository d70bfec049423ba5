"""Database initialization and model exports."""

import uuid
from datetime import UTC, datetime

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def generate_uuid() -> str:
    """Return a new random UUID string for primary keys."""

    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""

    return datetime.now(UTC).replace(tzinfo=None)


# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .profile import Profile  # noqa: E402,F401
from .business_profile import BusinessProfile  # noqa: E402,F401
from .onboarding_status import ContractorOnboardingStatus  # noqa: E402,F401
from .verification_log import VerificationLog  # noqa: E402,F401
from .verification_criterion import VerificationCriterion  # noqa: E402,F401

__all__ = [
    "db",
    "generate_uuid",
    "utcnow",
    "User",
    "Profile",
    "BusinessProfile",
    "ContractorOnboardingStatus",
    "VerificationLog",
    "VerificationCriterion",
]
