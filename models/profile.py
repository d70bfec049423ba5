"""Profile model definition."""

from . import db, generate_uuid, utcnow


class Profile(db.Model):
    """Personal details and preferences attached to a user."""

    __tablename__ = "profiles"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
        unique=True,
    )
    first_name = db.Column(db.String(120), nullable=True)
    last_name = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(64), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    preferences = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    user = db.relationship("User", back_populates="profile")

    @property
    def onboarding_completed(self) -> bool | None:
        """Event manager onboarding flag kept in the preferences blob."""

        preferences = self.preferences or {}
        value = preferences.get("onboarding_completed")
        if value is None:
            return None
        return value is True

    def mark_onboarding_completed(self) -> None:
        # Reassign so the JSON column is flagged as modified.
        preferences = dict(self.preferences or {})
        preferences["onboarding_completed"] = True
        self.preferences = preferences

    def to_dict(self) -> dict:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "phone": self.phone,
            "address": self.address,
            "bio": self.bio,
            "preferences": self.preferences or {},
        }
