"""Create users, halls and bookings

Revision ID: 3b1f2c9a7d10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


revision = "3b1f2c9a7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="faculty"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "halls",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("equipment", sa.JSON(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("image_hint", sa.String(50), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_halls_id", "halls", ["id"])
    op.create_index("ix_halls_name", "halls", ["name"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "hall_id",
            sa.Integer(),
            sa.ForeignKey("halls.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("hall_name", sa.String(100), nullable=False),
        sa.Column("faculty_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("faculty_name", sa.String(50), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("purpose", sa.String(500), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_slot", "bookings", ["hall_id", "date", "start_time", "end_time"])
    op.create_index("ix_bookings_faculty_date", "bookings", ["faculty_id", "date"])
    op.create_index("ix_bookings_status_date", "bookings", ["status", "date"])


def downgrade():
    op.drop_table("bookings")
    op.drop_table("halls")
    op.drop_table("users")
