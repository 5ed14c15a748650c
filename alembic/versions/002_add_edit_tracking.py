"""Add edit tracking (changed sections, summary, change type) to resume_version.

Revision ID: 002
Revises: 001
Create Date: 2026-02-24

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column(
        "resume_version",
        sa.Column(
            "changed_sections",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
    )
    op.add_column("resume_version", sa.Column("change_summary", sa.Text(), nullable=True))
    op.add_column(
        "resume_version",
        sa.Column("change_type", sa.String(16), nullable=False, server_default="edit"),
    )
    op.create_check_constraint(
        "ck_resume_version_change_type",
        "resume_version",
        "change_type IN ('edit', 'upload', 'rollback')",
    )
    op.create_index(
        "ix_resume_version_resume_change_type",
        "resume_version",
        ["resume_id", "change_type"],
    )


def downgrade() -> None:
    op.drop_index("ix_resume_version_resume_change_type", table_name="resume_version")
    op.drop_constraint("ck_resume_version_change_type", "resume_version", type_="check")
    op.drop_column("resume_version", "change_type")
    op.drop_column("resume_version", "change_summary")
    op.drop_column("resume_version", "changed_sections")
