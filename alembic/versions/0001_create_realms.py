"""create realms table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "realms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("realm_name", sa.String(length=100), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.CheckConstraint("length(realm_name) > 0", name=op.f("ck_realms_realm_name_not_empty")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_realms")),
        sa.UniqueConstraint("realm_name", name=op.f("uq_realms_realm_name")),
    )


def downgrade() -> None:
    op.drop_table("realms")
