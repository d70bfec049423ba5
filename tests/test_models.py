"""Tests for model helpers."""

import pytest

from models import db
from models.onboarding_status import ContractorOnboardingStatus
from models.profile import Profile
from models.user import User


def test_user_password_helpers(app):
    with app.app_context():
        user = User(email="helper@example.com", role="contractor")
        user.set_password("password123")
        db.session.add(user)
        db.session.commit()

        assert user.is_verified is False
        assert user.is_contractor is True
        assert user.is_admin is False
        assert user.check_password("password123") is True
        assert user.check_password("wrong") is False
        assert "password_hash" not in user.to_dict()


def test_profile_onboarding_flag(app):
    with app.app_context():
        user = User(email="manager@example.com", role="event_manager", password_hash="x")
        user.profile = Profile(preferences={"theme": "dark"})
        db.session.add(user)
        db.session.commit()

        assert user.profile.onboarding_completed is None

        user.profile.mark_onboarding_completed()
        db.session.commit()
        db.session.refresh(user.profile)

        assert user.profile.onboarding_completed is True
        assert user.profile.preferences == {"theme": "dark", "onboarding_completed": True}


def test_onboarding_incomplete_steps():
    onboarding = ContractorOnboardingStatus(
        step1_completed=True,
        step2_completed=False,
        step3_completed=True,
        step4_completed=False,
    )

    assert onboarding.incomplete_steps() == [2, 4]

    onboarding.complete_step(2)
    assert onboarding.incomplete_steps() == [4]

    with pytest.raises(ValueError):
        onboarding.complete_step(5)
