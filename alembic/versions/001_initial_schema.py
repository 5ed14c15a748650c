"""Initial schema - resume, resume_version, generation.

Revision ID: 001
Revises:
Create Date: 2026-02-10

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "resume",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False, server_default="anonymous"),
        sa.Column("meta_code", sa.String(64), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("data", postgresql.JSONB(), nullable=False),
        sa.Column("current_version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("current_version >= 1", name="ck_resume_current_version_positive"),
    )
    op.create_index("ix_resume_meta_code", "resume", ["meta_code"])
    op.create_index("ix_resume_user_updated", "resume", ["user_id", sa.text("updated_at DESC")])

    # (resume_id, version_number) is the uniqueness guarantee for the version log.
    op.create_table(
        "resume_version",
        sa.Column(
            "resume_id",
            sa.UUID(),
            sa.ForeignKey("resume.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("version_number", sa.Integer(), primary_key=True),
        sa.Column("data", postgresql.JSONB(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "generation",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column(
            "resume_id",
            sa.UUID(),
            sa.ForeignKey("resume.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="PENDING"),
        sa.Column("output_filename", sa.String(255), nullable=False),
        sa.Column("meta_code", sa.String(64), nullable=False),
        sa.Column("resume_data", postgresql.JSONB(), nullable=False),
        sa.Column("drive_link", sa.Text(), nullable=True),
        sa.Column("pdf_path", sa.Text(), nullable=True),
        sa.Column("error_log", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_generation_status_created", "generation", ["status", "created_at"])
    op.create_index(
        "ix_generation_resume_created", "generation", ["resume_id", sa.text("created_at DESC")]
    )


def downgrade() -> None:
    op.drop_table("generation")
    op.drop_table("resume_version")
    op.drop_table("resume")
