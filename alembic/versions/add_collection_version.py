"""Add version counter to stored_collections

Revision ID: 9d4f0b3e6a12
Revises: 7c1e2a9b4d30
Create Date: 2026-10-19

Optimistic concurrency: writers holding an older version are rejected.
"""
from alembic import op
import sqlalchemy as sa

revision = "9d4f0b3e6a12"
down_revision = "7c1e2a9b4d30"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("stored_collections") as batch_op:
        batch_op.add_column(
            sa.Column("version", sa.Integer(), nullable=False, server_default="1")
        )


def downgrade() -> None:
    with op.batch_alter_table("stored_collections") as batch_op:
        batch_op.drop_column("version")
