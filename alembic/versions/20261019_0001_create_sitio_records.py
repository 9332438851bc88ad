"""create sitio_records table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "sitio_records",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("municipality", sa.String(length=120), nullable=False),
        sa.Column("barangay", sa.String(length=120), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("payload_json", sa.JSON(), nullable=False, comment="Full sitio profile as plain JSON"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_sitio_records"),
    )
    op.create_index("ix_sitio_records_municipality", "sitio_records", ["municipality"], unique=False)
    op.create_index(
        "ix_sitio_records_natural_key",
        "sitio_records",
        ["municipality", "barangay", "name"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_sitio_records_natural_key", table_name="sitio_records")
    op.drop_index("ix_sitio_records_municipality", table_name="sitio_records")
    op.drop_table("sitio_records")
