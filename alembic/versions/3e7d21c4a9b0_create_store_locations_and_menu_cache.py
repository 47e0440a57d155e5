"""create_store_locations_and_menu_cache

Revision ID: 3e7d21c4a9b0
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3e7d21c4a9b0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "store_locations",
        sa.Column("store_id", sa.String(length=7), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("store_id"),
    )
    op.create_index(op.f("ix_store_locations_latitude"), "store_locations", ["latitude"], unique=False)
    op.create_index(op.f("ix_store_locations_longitude"), "store_locations", ["longitude"], unique=False)

    op.create_table(
        "menu_cache",
        sa.Column("store_id", sa.String(length=7), nullable=False),
        sa.Column("items_json", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("store_id"),
    )
    op.create_index(op.f("ix_menu_cache_updated_at"), "menu_cache", ["updated_at"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_menu_cache_updated_at"), table_name="menu_cache")
    op.drop_table("menu_cache")
    op.drop_index(op.f("ix_store_locations_longitude"), table_name="store_locations")
    op.drop_index(op.f("ix_store_locations_latitude"), table_name="store_locations")
    op.drop_table("store_locations")
