"""create volunteer hub tables

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-01-12 09:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def json_type():
    return sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "user",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(), nullable=True),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("profile_picture", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_id"), "user", ["id"], unique=False)
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)

    op.create_table(
        "token",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("token", sa.String(), nullable=False),
        sa.Column("expired_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_token_id"), "token", ["id"], unique=False)
    op.create_index(op.f("ix_token_user_id"), "token", ["user_id"], unique=False)
    op.create_index(op.f("ix_token_token"), "token", ["token"], unique=False)

    op.create_table(
        "refresh_token",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("refresh_token", sa.String(), nullable=False),
        sa.Column("expired_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("token_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(["token_id"], ["token.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_refresh_token_id"), "refresh_token", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_refresh_token_user_id"), "refresh_token", ["user_id"], unique=False
    )

    op.create_table(
        "reset_password",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("expired_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(
        op.f("ix_reset_password_id"), "reset_password", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_reset_password_token"), "reset_password", ["token"], unique=True
    )

    op.create_table(
        "volunteer",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("volunteer_type", sa.String(length=50), nullable=True),
        sa.Column("is_alumni", sa.Boolean(), nullable=False),
        sa.Column("background_check_status", sa.String(length=20), nullable=False),
        sa.Column("media_release", sa.Boolean(), nullable=False),
        sa.Column("availability", json_type(), nullable=True),
        sa.Column("notification_preference", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "background_check_status IN ('not_required', 'pending', 'approved', 'rejected')",
            name="ck_volunteer_background_check_status",
        ),
        sa.CheckConstraint(
            "notification_preference IN ('email', 'sms', 'both', 'none')",
            name="ck_volunteer_notification_preference",
        ),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(op.f("ix_volunteer_id"), "volunteer", ["id"], unique=False)

    op.create_table(
        "staff",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("notification_preference", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(op.f("ix_staff_id"), "staff", ["id"], unique=False)

    op.create_table(
        "admin",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("staff_id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["staff_id"], ["staff.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("staff_id"),
    )
    op.create_index(op.f("ix_admin_id"), "admin", ["id"], unique=False)

    op.create_table(
        "opportunity",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("max_volunteers", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_by_id", sa.UUID(), nullable=True),
        sa.Column("is_recurring", sa.Boolean(), nullable=False),
        sa.Column("recurrence_pattern", json_type(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("end_date > start_date", name="ck_opportunity_time_window"),
        sa.CheckConstraint(
            "max_volunteers IS NULL OR max_volunteers >= 0",
            name="ck_opportunity_max_volunteers",
        ),
        sa.CheckConstraint(
            "status IN ('open', 'full', 'completed', 'canceled')",
            name="ck_opportunity_status",
        ),
        sa.ForeignKeyConstraint(["created_by_id"], ["user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_opportunity_id"), "opportunity", ["id"], unique=False)
    op.create_index(
        op.f("ix_opportunity_start_date"), "opportunity", ["start_date"], unique=False
    )
    op.create_index(
        op.f("ix_opportunity_status"), "opportunity", ["status"], unique=False
    )

    op.create_table(
        "volunteer_rsvp",
        sa.Column("volunteer_id", sa.UUID(), nullable=False),
        sa.Column("opportunity_id", sa.UUID(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("rsvp_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'declined', 'attended', 'no_show')",
            name="ck_volunteer_rsvp_status",
        ),
        sa.ForeignKeyConstraint(
            ["opportunity_id"], ["opportunity.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["volunteer_id"], ["volunteer.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("volunteer_id", "opportunity_id"),
    )
    op.create_index(
        op.f("ix_volunteer_rsvp_opportunity_id"),
        "volunteer_rsvp",
        ["opportunity_id"],
        unique=False,
    )

    op.create_table(
        "volunteer_hours",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("volunteer_id", sa.UUID(), nullable=False),
        sa.Column("opportunity_id", sa.UUID(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("hours", sa.Numeric(precision=6, scale=2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("verified_by", sa.UUID(), nullable=True),
        sa.Column("verified_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("hours > 0", name="ck_volunteer_hours_positive"),
        sa.ForeignKeyConstraint(
            ["opportunity_id"], ["opportunity.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["verified_by"], ["user.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["volunteer_id"], ["volunteer.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_volunteer_hours_id"), "volunteer_hours", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_volunteer_hours_volunteer_id"),
        "volunteer_hours",
        ["volunteer_id"],
        unique=False,
    )

    op.create_table(
        "skill",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_skill_id"), "skill", ["id"], unique=False)

    op.create_table(
        "interest",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_interest_id"), "interest", ["id"], unique=False)

    op.create_table(
        "volunteer_skill",
        sa.Column("volunteer_id", sa.UUID(), nullable=False),
        sa.Column("skill_id", sa.UUID(), nullable=False),
        sa.Column("proficiency_level", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "proficiency_level IN ('beginner', 'intermediate', 'advanced')",
            name="ck_volunteer_skill_proficiency_level",
        ),
        sa.ForeignKeyConstraint(["skill_id"], ["skill.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["volunteer_id"], ["volunteer.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("volunteer_id", "skill_id"),
    )
    op.create_index(
        op.f("ix_volunteer_skill_skill_id"),
        "volunteer_skill",
        ["skill_id"],
        unique=False,
    )

    op.create_table(
        "volunteer_interest",
        sa.Column("volunteer_id", sa.UUID(), nullable=False),
        sa.Column("interest_id", sa.UUID(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["interest_id"], ["interest.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(["volunteer_id"], ["volunteer.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("volunteer_id", "interest_id"),
    )
    op.create_index(
        op.f("ix_volunteer_interest_interest_id"),
        "volunteer_interest",
        ["interest_id"],
        unique=False,
    )

    op.create_table(
        "opportunity_required_skill",
        sa.Column("opportunity_id", sa.UUID(), nullable=False),
        sa.Column("skill_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(
            ["opportunity_id"], ["opportunity.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["skill_id"], ["skill.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("opportunity_id", "skill_id"),
    )

    op.create_table(
        "opportunity_interest",
        sa.Column("opportunity_id", sa.UUID(), nullable=False),
        sa.Column("interest_id", sa.UUID(), nullable=False),
        sa.ForeignKeyConstraint(
            ["interest_id"], ["interest.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["opportunity_id"], ["opportunity.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("opportunity_id", "interest_id"),
    )

    op.create_table(
        "bulk_communication_log",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("sender_id", sa.UUID(), nullable=True),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("recipient_type", sa.String(length=20), nullable=False),
        sa.Column("recipient_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "recipient_type IN ('volunteers', 'staff', 'both')",
            name="ck_bulk_communication_log_recipient_type",
        ),
        sa.ForeignKeyConstraint(["sender_id"], ["user.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_bulk_communication_log_id"),
        "bulk_communication_log",
        ["id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_bulk_communication_log_sent_at"),
        "bulk_communication_log",
        ["sent_at"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        op.f("ix_bulk_communication_log_sent_at"), table_name="bulk_communication_log"
    )
    op.drop_index(
        op.f("ix_bulk_communication_log_id"), table_name="bulk_communication_log"
    )
    op.drop_table("bulk_communication_log")
    op.drop_table("opportunity_interest")
    op.drop_table("opportunity_required_skill")
    op.drop_index(
        op.f("ix_volunteer_interest_interest_id"), table_name="volunteer_interest"
    )
    op.drop_table("volunteer_interest")
    op.drop_index(op.f("ix_volunteer_skill_skill_id"), table_name="volunteer_skill")
    op.drop_table("volunteer_skill")
    op.drop_index(op.f("ix_interest_id"), table_name="interest")
    op.drop_table("interest")
    op.drop_index(op.f("ix_skill_id"), table_name="skill")
    op.drop_table("skill")
    op.drop_index(
        op.f("ix_volunteer_hours_volunteer_id"), table_name="volunteer_hours"
    )
    op.drop_index(op.f("ix_volunteer_hours_id"), table_name="volunteer_hours")
    op.drop_table("volunteer_hours")
    op.drop_index(
        op.f("ix_volunteer_rsvp_opportunity_id"), table_name="volunteer_rsvp"
    )
    op.drop_table("volunteer_rsvp")
    op.drop_index(op.f("ix_opportunity_status"), table_name="opportunity")
    op.drop_index(op.f("ix_opportunity_start_date"), table_name="opportunity")
    op.drop_index(op.f("ix_opportunity_id"), table_name="opportunity")
    op.drop_table("opportunity")
    op.drop_index(op.f("ix_admin_id"), table_name="admin")
    op.drop_table("admin")
    op.drop_index(op.f("ix_staff_id"), table_name="staff")
    op.drop_table("staff")
    op.drop_index(op.f("ix_volunteer_id"), table_name="volunteer")
    op.drop_table("volunteer")
    op.drop_index(op.f("ix_reset_password_token"), table_name="reset_password")
    op.drop_index(op.f("ix_reset_password_id"), table_name="reset_password")
    op.drop_table("reset_password")
    op.drop_index(op.f("ix_refresh_token_user_id"), table_name="refresh_token")
    op.drop_index(op.f("ix_refresh_token_id"), table_name="refresh_token")
    op.drop_table("refresh_token")
    op.drop_index(op.f("ix_token_token"), table_name="token")
    op.drop_index(op.f("ix_token_user_id"), table_name="token")
    op.drop_index(op.f("ix_token_id"), table_name="token")
    op.drop_table("token")
    op.drop_index(op.f("ix_user_email"), table_name="user")
    op.drop_index(op.f("ix_user_id"), table_name="user")
    op.drop_table("user")
