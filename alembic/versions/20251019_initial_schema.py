"""Initial schema: users, authorities, reports

Revision ID: 20251019_initial_schema
Revises:
Create Date: 2025-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# Revision identifiers, used by Alembic.
revision = "20251019_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.CheckConstraint("role IN ('user', 'authority')", name="ck_users_role"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "authorities",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    )
    op.create_index("ix_authorities_username", "authorities", ["username"], unique=True)

    op.create_table(
        "reports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("severity", sa.String(16), nullable=False, server_default="medium"),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lng", sa.Float, nullable=True),
        sa.Column("image_path", sa.Text, nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="submitted"),
        sa.Column("timestamp", sa.DateTime, server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("resolved_at", sa.DateTime, nullable=True),
        sa.Column("reporter_id", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.CheckConstraint("type IN ('garbage', 'drainage', 'stagnant_water', 'other')", name="ck_reports_type"),
        sa.CheckConstraint("severity IN ('low', 'medium', 'high', 'critical')", name="ck_reports_severity"),
        sa.CheckConstraint("status IN ('submitted', 'in_progress', 'resolved')", name="ck_reports_status"),
    )
    op.create_index("ix_reports_timestamp", "reports", ["timestamp"])
    op.create_index("ix_reports_reporter_id", "reports", ["reporter_id"])

def downgrade():
    op.drop_index("ix_reports_reporter_id", table_name="reports")
    op.drop_index("ix_reports_timestamp", table_name="reports")
    op.drop_table("reports")
    op.drop_index("ix_authorities_username", table_name="authorities")
    op.drop_table("authorities")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
