"""Verification criteria shown to reviewers."""

from . import db, generate_uuid, utcnow


CRITERION_USER_TYPES = ("event_manager", "contractor")


class VerificationCriterion(db.Model):
    """A rule reviewers check before approving a user of a given type."""

    __tablename__ = "verification_criteria"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_type = db.Column(db.String(32), nullable=False, index=True)
    criteria_name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False, default="")
    is_required = db.Column(db.Boolean, nullable=False, default=True)
    validation_rule = db.Column(db.String(255), nullable=False, default="")
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_type": self.user_type,
            "criteria_name": self.criteria_name,
            "description": self.description,
            "is_required": self.is_required,
            "validation_rule": self.validation_rule,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
