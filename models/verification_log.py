"""VerificationLog model definition."""

from . import db, generate_uuid, utcnow


VERIFICATION_ACTIONS = ("approve", "reject", "resubmit", "unapprove")


class VerificationLog(db.Model):
    """Append-only record of one action affecting a user's verification."""

    __tablename__ = "verification_logs"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    action = db.Column(
        db.Enum(*VERIFICATION_ACTIONS, name="verification_action"),
        nullable=False,
    )
    status = db.Column(db.String(32), nullable=False)
    reason = db.Column(db.Text, nullable=True)
    feedback = db.Column(db.Text, nullable=True)
    admin_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(
        db.DateTime,
        nullable=False,
        default=utcnow,
        server_default=db.func.now(),
        index=True,
    )

    user = db.relationship("User", foreign_keys=[user_id])
    admin = db.relationship("User", foreign_keys=[admin_id])

    def __repr__(self) -> str:
        return (
            f"<VerificationLog id={self.id} user_id={self.user_id} action={self.action}>"
        )

    def to_dict(self) -> dict:
        """Serialize the log entry into a dictionary."""

        return {
            "id": self.id,
            "user_id": self.user_id,
            "action": self.action,
            "status": self.status,
            "reason": self.reason,
            "feedback": self.feedback,
            "admin_id": self.admin_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
