"""create_parking_tables

Revision ID: 4f2a9c1d7e35
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "4f2a9c1d7e35"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "parking_lots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("total_capacity", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "parking_spots",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("lot_id", sa.Uuid(), nullable=False),
        sa.Column("label", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("floor", sa.String(length=255), nullable=True),
        sa.Column("section", sa.String(length=64), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["lot_id"], ["parking_lots.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("lot_id", "label", name="uq_parking_spots_lot_label"),
    )

    op.create_index("ix_parking_spots_lot_id", "parking_spots", ["lot_id"])
    op.create_index("ix_parking_spots_status", "parking_spots", ["status"])


def downgrade() -> None:
    op.drop_index("ix_parking_spots_status", table_name="parking_spots")
    op.drop_index("ix_parking_spots_lot_id", table_name="parking_spots")

    op.drop_table("parking_spots")
    op.drop_table("parking_lots")
