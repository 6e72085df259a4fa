"""seed base roles

Revision ID: 20261017_0002
Revises: 20261017_0001
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261017_0002_seed_roles"
down_revision = "20261017_0001_init_schema"
branch_labels = None
depends_on = None


def upgrade() -> None:
    roles_table = sa.table(
        "roles",
        sa.column("id", sa.Integer()),
        sa.column("name", sa.String()),
        sa.column("description", sa.String()),
    )
    op.bulk_insert(
        roles_table,
        [
            {"id": 1, "name": "admin", "description": "System administrator"},
            {"id": 2, "name": "financeiro", "description": "Finance team (writes)"},
            {"id": 3, "name": "comercial", "description": "Sales team (read only)"},
            {"id": 4, "name": "auditoria", "description": "Audit (global read only)"},
        ],
    )


def downgrade() -> None:
    op.execute("DELETE FROM roles WHERE name IN ('admin','financeiro','comercial','auditoria')")
