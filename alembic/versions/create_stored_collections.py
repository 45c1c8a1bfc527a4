"""Create stored_collections for the record store

Revision ID: 7c1e2a9b4d30
Revises:
Create Date: 2026-10-18

One row per collection (students, payments, ...); payload holds the JSON list.
"""
from alembic import op
import sqlalchemy as sa

revision = "7c1e2a9b4d30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "stored_collections",
        sa.Column("name", sa.String(length=64), primary_key=True),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("stored_collections")
