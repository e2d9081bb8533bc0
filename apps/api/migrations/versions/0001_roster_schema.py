"""roster schema: factions, races, classes, race_classes, specializations, characters

Revision ID: 0001_roster_schema
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_roster_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "factions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.UniqueConstraint("name", name="uq_factions_name"),
    )

    op.create_table(
        "races",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("faction_id", sa.Integer(), sa.ForeignKey("factions.id"), nullable=False),
        sa.UniqueConstraint("name", name="uq_races_name"),
        sa.UniqueConstraint("slug", name="uq_races_slug"),
    )
    op.create_index("ix_races_faction_id", "races", ["faction_id"], unique=False)

    op.create_table(
        "classes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("armor_type", sa.String(255), nullable=False, server_default=""),
        sa.Column("color_code", sa.String(255), nullable=False, server_default=""),
        sa.UniqueConstraint("name", name="uq_classes_name"),
        sa.UniqueConstraint("slug", name="uq_classes_slug"),
    )

    op.create_table(
        "race_classes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("race_id", sa.Integer(), sa.ForeignKey("races.id"), nullable=False),
        sa.Column("class_id", sa.Integer(), sa.ForeignKey("classes.id"), nullable=False),
        sa.UniqueConstraint("race_id", "class_id", name="uq_race_classes_race_class"),
    )
    op.create_index("ix_race_classes_race_id", "race_classes", ["race_id"], unique=False)
    op.create_index("ix_race_classes_class_id", "race_classes", ["class_id"], unique=False)

    op.create_table(
        "specializations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("class_id", sa.Integer(), sa.ForeignKey("classes.id"), nullable=False),
        sa.UniqueConstraint("class_id", "name", name="uq_specializations_class_name"),
        sa.UniqueConstraint("class_id", "slug", name="uq_specializations_class_slug"),
    )
    op.create_index("ix_specializations_class_id", "specializations", ["class_id"], unique=False)

    op.create_table(
        "characters",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("gender", sa.String(16), nullable=False),
        sa.Column("note", sa.String(1000), nullable=False, server_default=""),
        sa.Column("race_id", sa.Integer(), sa.ForeignKey("races.id"), nullable=False),
        sa.Column("specialization_id", sa.Integer(), sa.ForeignKey("specializations.id"), nullable=False),
        sa.UniqueConstraint("name", name="uq_characters_name"),
    )
    op.create_index("ix_characters_race_id", "characters", ["race_id"], unique=False)
    op.create_index("ix_characters_specialization_id", "characters", ["specialization_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_characters_specialization_id", table_name="characters")
    op.drop_index("ix_characters_race_id", table_name="characters")
    op.drop_table("characters")
    op.drop_index("ix_specializations_class_id", table_name="specializations")
    op.drop_table("specializations")
    op.drop_index("ix_race_classes_class_id", table_name="race_classes")
    op.drop_index("ix_race_classes_race_id", table_name="race_classes")
    op.drop_table("race_classes")
    op.drop_table("classes")
    op.drop_index("ix_races_faction_id", table_name="races")
    op.drop_table("races")
    op.drop_table("factions")
