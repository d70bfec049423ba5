"""create users, profiles and verification tables

Revision ID: 3f1c9a7e2b10
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1c9a7e2b10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False, unique=True
        ),
        sa.Column("first_name", sa.String(length=120), nullable=True),
        sa.Column("last_name", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("preferences", sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "business_profiles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False, unique=True
        ),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("business_address", sa.String(length=255), nullable=True),
        sa.Column("nzbn", sa.String(length=32), nullable=True),
        sa.Column("service_areas", sa.JSON(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_date", sa.DateTime(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "contractor_onboarding_status",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False, unique=True
        ),
        sa.Column("step1_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("step2_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("step3_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("step4_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_submitted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("submission_date", sa.DateTime(), nullable=True),
        sa.Column(
            "approval_status",
            sa.Enum("pending", "approved", "rejected", name="onboarding_approval_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("approval_date", sa.DateTime(), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "verification_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "action",
            sa.Enum("approve", "reject", "resubmit", "unapprove", name="verification_action"),
            nullable=False,
        ),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("admin_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_verification_logs_user_id", "verification_logs", ["user_id"])
    op.create_index("ix_verification_logs_created_at", "verification_logs", ["created_at"])

    op.create_table(
        "verification_criteria",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_type", sa.String(length=32), nullable=False),
        sa.Column("criteria_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_required", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("validation_rule", sa.String(length=255), nullable=False, server_default=""),
        *_timestamps(),
    )
    op.create_index("ix_verification_criteria_user_type", "verification_criteria", ["user_type"])


def downgrade() -> None:
    op.drop_index("ix_verification_criteria_user_type", table_name="verification_criteria")
    op.drop_table("verification_criteria")
    op.drop_index("ix_verification_logs_created_at", table_name="verification_logs")
    op.drop_index("ix_verification_logs_user_id", table_name="verification_logs")
    op.drop_table("verification_logs")
    op.drop_table("contractor_onboarding_status")
    op.drop_table("business_profiles")
    op.drop_table("profiles")
    op.drop_table("users")
    op.execute("DROP TYPE IF EXISTS verification_action")
    op.execute("DROP TYPE IF EXISTS onboarding_approval_status")
