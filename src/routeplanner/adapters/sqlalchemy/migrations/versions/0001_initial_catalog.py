"""initial catalog schema

Revision ID: 0001
Revises:
Create Date: 2026-02-23 00:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "city",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_city")),
    )
    op.create_index(op.f("ix_city_name"), "city", ["name"])

    op.create_table(
        "company",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("key", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("is_unmapped", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_company")),
        sa.UniqueConstraint("key", name=op.f("uq_company_company_key")),
    )

    op.create_table(
        "cargo_type",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("key", sa.String(), nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_cargo_type")),
        sa.UniqueConstraint("key", name=op.f("uq_cargo_type_cargo_type_key")),
    )

    op.create_table(
        "company_alias",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("alias_key", sa.String(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(
            ["company_id"],
            ["company.id"],
            name=op.f("fk_company_alias_company_alias_company_id_company"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_company_alias")),
        sa.UniqueConstraint("alias_key", name=op.f("uq_company_alias_company_alias_alias_key")),
    )
    op.create_index(op.f("ix_company_alias_company_id"), "company_alias", ["company_id"])

    op.create_table(
        "company_cargo_rule",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column("cargo_type_id", sa.Uuid(), nullable=False),
        sa.Column(
            "direction",
            sa.Enum("IN", "OUT", name="cargodirection", native_enum=False),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["cargo_type_id"],
            ["cargo_type.id"],
            name=op.f("fk_company_cargo_rule_company_cargo_rule_cargo_type_id_cargo_type"),
        ),
        sa.ForeignKeyConstraint(
            ["company_id"],
            ["company.id"],
            name=op.f("fk_company_cargo_rule_company_cargo_rule_company_id_company"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_company_cargo_rule")),
        sa.UniqueConstraint(
            "company_id",
            "cargo_type_id",
            "direction",
            name=op.f("uq_company_cargo_rule_company_cargo_rule_company_id"),
        ),
    )
    op.create_index(
        op.f("ix_company_cargo_rule_company_id"), "company_cargo_rule", ["company_id"]
    )

    op.create_table(
        "city_company",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("city_id", sa.Uuid(), nullable=False),
        sa.Column("company_id", sa.Uuid(), nullable=False),
        sa.Column(
            "source",
            sa.Enum("MAP_FEED", "MANUAL", name="citycompanysource", native_enum=False),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["city_id"],
            ["city.id"],
            name=op.f("fk_city_company_city_company_city_id_city"),
        ),
        sa.ForeignKeyConstraint(
            ["company_id"],
            ["company.id"],
            name=op.f("fk_city_company_city_company_company_id_company"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_city_company")),
        sa.UniqueConstraint(
            "city_id", "company_id", name=op.f("uq_city_company_city_company_city_id")
        ),
    )
    op.create_index(op.f("ix_city_company_company_id"), "city_company", ["company_id"])

    op.create_table(
        "import_log",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("kind", sa.String(), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("success", sa.Boolean(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_import_log")),
    )


def downgrade() -> None:
    op.drop_table("import_log")
    op.drop_index(op.f("ix_city_company_company_id"), table_name="city_company")
    op.drop_table("city_company")
    op.drop_index(op.f("ix_company_cargo_rule_company_id"), table_name="company_cargo_rule")
    op.drop_table("company_cargo_rule")
    op.drop_index(op.f("ix_company_alias_company_id"), table_name="company_alias")
    op.drop_table("company_alias")
    op.drop_table("cargo_type")
    op.drop_table("company")
    op.drop_index(op.f("ix_city_name"), table_name="city")
    op.drop_table("city")
