"""Business profile model for contractors."""

from . import db, generate_uuid, utcnow


class BusinessProfile(db.Model):
    """Company details and the authoritative verification flag of a contractor."""

    __tablename__ = "business_profiles"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
        unique=True,
    )
    company_name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    website = db.Column(db.String(255), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    business_address = db.Column(db.String(255), nullable=True)
    nzbn = db.Column(db.String(32), nullable=True)
    service_areas = db.Column(db.JSON, nullable=False, default=list)
    is_verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_date = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    user = db.relationship("User", back_populates="business_profile")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_name": self.company_name,
            "description": self.description,
            "website": self.website,
            "location": self.location,
            "business_address": self.business_address,
            "nzbn": self.nzbn,
            "service_areas": self.service_areas or [],
            "is_verified": self.is_verified,
            "verification_date": (
                self.verification_date.isoformat() if self.verification_date else None
            ),
        }
