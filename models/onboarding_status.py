"""Contractor onboarding progress model."""

from . import db, generate_uuid, utcnow


APPROVAL_STATUSES = ("pending", "approved", "rejected")
ONBOARDING_STEPS = (1, 2, 3, 4)


class ContractorOnboardingStatus(db.Model):
    """Tracks which onboarding steps a contractor has completed."""

    __tablename__ = "contractor_onboarding_status"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
        unique=True,
    )
    step1_completed = db.Column(db.Boolean, nullable=False, default=False)
    step2_completed = db.Column(db.Boolean, nullable=False, default=False)
    step3_completed = db.Column(db.Boolean, nullable=False, default=False)
    step4_completed = db.Column(db.Boolean, nullable=False, default=False)
    is_submitted = db.Column(db.Boolean, nullable=False, default=False)
    submission_date = db.Column(db.DateTime, nullable=True)
    approval_status = db.Column(
        db.Enum(*APPROVAL_STATUSES, name="onboarding_approval_status"),
        nullable=False,
        default="pending",
        server_default=db.text("'pending'"),
    )
    approval_date = db.Column(db.DateTime, nullable=True)
    admin_notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    user = db.relationship("User", back_populates="onboarding_status")

    def complete_step(self, step: int) -> None:
        if step not in ONBOARDING_STEPS:
            raise ValueError(f"Unknown onboarding step: {step}")
        setattr(self, f"step{step}_completed", True)

    def incomplete_steps(self) -> list[int]:
        return [
            step
            for step in ONBOARDING_STEPS
            if not getattr(self, f"step{step}_completed")
        ]

    def to_dict(self) -> dict:
        return {
            "step1_completed": bool(self.step1_completed),
            "step2_completed": bool(self.step2_completed),
            "step3_completed": bool(self.step3_completed),
            "step4_completed": bool(self.step4_completed),
            "is_submitted": bool(self.is_submitted),
            "submission_date": (
                self.submission_date.isoformat() if self.submission_date else None
            ),
            "approval_status": self.approval_status,
            "approval_date": (
                self.approval_date.isoformat() if self.approval_date else None
            ),
            "admin_notes": self.admin_notes,
        }
