"""users and opening_hours

Revision ID: 3b9e1f2a7c41
Revises: 
Create Date: 2026-10-18 09:12:03.418225

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b9e1f2a7c41'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=180), nullable=False),
        sa.Column("first_name", sa.String(length=90), nullable=True),
        sa.Column("last_name", sa.String(length=90), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("role", sa.Enum("super_admin", "admin", name="userrole"), nullable=False),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "opening_hours",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("day_of_week", sa.Enum(*DAYS, name="dayofweek"), nullable=False),
        sa.Column("open_time", sa.String(length=5), nullable=False, server_default=""),
        sa.Column("close_time", sa.String(length=5), nullable=False, server_default=""),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_open", sa.Boolean(), nullable=False),
        sa.Column("is_closed_next_day", sa.Boolean(), nullable=False),
        sa.Column("special_note", sa.String(length=500), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("uix_opening_hours_day", "opening_hours", ["day_of_week"], unique=True)


def downgrade() -> None:
    op.drop_index("uix_opening_hours_day", table_name="opening_hours")
    op.drop_table("opening_hours")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    sa.Enum(name="dayofweek").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)
