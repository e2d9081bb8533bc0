"""seed factions (Alliance, Horde)

Revision ID: 0002_seed_factions
Revises: 0001_roster_schema
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0002_seed_factions"
down_revision = "0001_roster_schema"
branch_labels = None
depends_on = None

FACTIONS = ("Alliance", "Horde")

factions = sa.table("factions", sa.column("id", sa.Integer()), sa.column("name", sa.String()))


def upgrade() -> None:
    op.bulk_insert(factions, [{"name": n} for n in FACTIONS])


def downgrade() -> None:
    op.execute(factions.delete().where(factions.c.name.in_(FACTIONS)))
