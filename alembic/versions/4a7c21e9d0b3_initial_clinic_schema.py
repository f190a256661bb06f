"""Initial schema for the clinic booking backend.

Revision ID: 4a7c21e9d0b3
Revises:
Create Date: 2025-03-03 09:12:41.206815

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4a7c21e9d0b3"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("student", "staff", "nurse", "admin", name="userrole")
appointment_status = sa.Enum(
    "pending", "confirmed", "completed", "cancelled", "no-show", name="appointmentstatus"
)
appointment_priority = sa.Enum("normal", "high", name="appointmentpriority")

DEFAULT_APPOINTMENT_TYPES = [
    {"value": "general-checkup", "label": "General Checkup", "duration_minutes": 30},
    {"value": "illness", "label": "Illness/Symptoms", "duration_minutes": 30},
    {"value": "injury", "label": "Injury", "duration_minutes": 45},
    {"value": "follow-up", "label": "Follow-up", "duration_minutes": 30},
    {"value": "mental-health", "label": "Mental Health", "duration_minutes": 60},
    {"value": "vaccination", "label": "Vaccination", "duration_minutes": 15},
    {"value": "screening", "label": "Health Screening", "duration_minutes": 45},
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(length=26), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=False, server_default="student"),
        sa.Column("student_id", sa.String(length=32)),
        sa.Column("phone_number", sa.String(length=32)),
        sa.Column("shift", sa.String(length=32)),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role_name", "users", ["role", "name"])

    appointment_types = op.create_table(
        "appointment_types",
        sa.Column("value", sa.String(length=64), primary_key=True),
        sa.Column("label", sa.String(length=120), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("duration_minutes > 0", name="ck_appointment_types_duration_positive"),
    )
    op.bulk_insert(appointment_types, DEFAULT_APPOINTMENT_TYPES)

    op.create_table(
        "appointments",
        sa.Column("appointment_id", sa.String(length=26), primary_key=True),
        sa.Column("patient_id", sa.String(length=64), nullable=False),
        sa.Column("patient_name", sa.String(length=120), nullable=False),
        sa.Column("patient_email", sa.String(length=255), nullable=False),
        sa.Column("nurse_id", sa.String(length=26), sa.ForeignKey("users.user_id", ondelete="RESTRICT"), nullable=False),
        sa.Column("nurse_name", sa.String(length=120), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("status", appointment_status, nullable=False, server_default="pending"),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("notes", sa.Text()),
        sa.Column("symptoms", sa.Text()),
        sa.Column("priority", appointment_priority, nullable=False, server_default="normal"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("nurse_id", "date", "time", name="uq_appointments_nurse_slot"),
        sa.CheckConstraint("end_time > time", name="ck_appointments_time_order"),
    )
    op.create_index("ix_appointments_slot", "appointments", ["date", "time"])
    op.create_index("ix_appointments_patient", "appointments", ["patient_id"])


def downgrade() -> None:
    op.drop_index("ix_appointments_patient", table_name="appointments")
    op.drop_index("ix_appointments_slot", table_name="appointments")
    op.drop_table("appointments")
    op.drop_table("appointment_types")
    op.drop_index("ix_users_role_name", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    appointment_priority.drop(op.get_bind(), checkfirst=True)
    appointment_status.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
