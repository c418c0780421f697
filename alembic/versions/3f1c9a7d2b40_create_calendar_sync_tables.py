"""Create housing units, reservations and missions tables

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-17 09:12:31.418207

"""

import sqlalchemy as sa

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "3f1c9a7d2b40"
down_revision = None
branch_labels = None
depends_on = None

SCHEMA = "calsync"


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "housing_units",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("ical_url", sa.Text(), nullable=True),
        sa.Column("ical_last_synced_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    op.create_index(
        op.f("ix_calsync_housing_units_tenant_id"),
        "housing_units",
        ["tenant_id"],
        unique=False,
        schema=SCHEMA,
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("housing_unit_id", sa.Integer(), nullable=False),
        sa.Column("guest_name", sa.String(length=255), nullable=False),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("guest_count", sa.Integer(), nullable=False),
        sa.Column("platform", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ["housing_unit_id"], [f"{SCHEMA}.housing_units.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "housing_unit_id",
            "check_in_date",
            "check_out_date",
            name="uq_reservations_unit_stay",
        ),
        schema=SCHEMA,
    )
    op.create_index(
        op.f("ix_calsync_reservations_tenant_id"),
        "reservations",
        ["tenant_id"],
        unique=False,
        schema=SCHEMA,
    )
    op.create_index(
        op.f("ix_calsync_reservations_housing_unit_id"),
        "reservations",
        ["housing_unit_id"],
        unique=False,
        schema=SCHEMA,
    )

    op.create_table(
        "missions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_id", sa.String(length=64), nullable=False),
        sa.Column("housing_unit_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False
        ),
        sa.ForeignKeyConstraint(
            ["housing_unit_id"], [f"{SCHEMA}.housing_units.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        schema=SCHEMA,
    )
    op.create_index(
        op.f("ix_calsync_missions_tenant_id"),
        "missions",
        ["tenant_id"],
        unique=False,
        schema=SCHEMA,
    )
    op.create_index(
        op.f("ix_calsync_missions_housing_unit_id"),
        "missions",
        ["housing_unit_id"],
        unique=False,
        schema=SCHEMA,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f("ix_calsync_missions_housing_unit_id"), table_name="missions", schema=SCHEMA)
    op.drop_index(op.f("ix_calsync_missions_tenant_id"), table_name="missions", schema=SCHEMA)
    op.drop_table("missions", schema=SCHEMA)
    op.drop_index(
        op.f("ix_calsync_reservations_housing_unit_id"), table_name="reservations", schema=SCHEMA
    )
    op.drop_index(op.f("ix_calsync_reservations_tenant_id"), table_name="reservations", schema=SCHEMA)
    op.drop_table("reservations", schema=SCHEMA)
    op.drop_index(
        op.f("ix_calsync_housing_units_tenant_id"), table_name="housing_units", schema=SCHEMA
    )
    op.drop_table("housing_units", schema=SCHEMA)
