"""Create bugs table

Revision ID: 001_create_bugs
Revises:
Create Date: 2026-10-19

"""
import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers
revision = "001_create_bugs"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "bugs",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column(
            "status",
            sa.Enum("open", "in-progress", "resolved", name="bug_status"),
            nullable=False,
            server_default="open",
        ),
        sa.Column(
            "priority",
            sa.Enum("low", "medium", "high", "critical", name="bug_priority"),
            nullable=False,
            server_default="medium",
        ),
        sa.Column("reported_by", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_index("ix_bugs_status", "bugs", ["status"])
    op.create_index("ix_bugs_priority", "bugs", ["priority"])
    op.create_index("ix_bugs_created_at", "bugs", ["created_at"])
    op.create_index("ix_bugs_status_priority", "bugs", ["status", "priority"])


def downgrade() -> None:
    op.drop_index("ix_bugs_status_priority", table_name="bugs")
    op.drop_index("ix_bugs_created_at", table_name="bugs")
    op.drop_index("ix_bugs_priority", table_name="bugs")
    op.drop_index("ix_bugs_status", table_name="bugs")
    op.drop_table("bugs")
    sa.Enum(name="bug_priority").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="bug_status").drop(op.get_bind(), checkfirst=True)
