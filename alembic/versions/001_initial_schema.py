"""Initial schema - principals, roles, role edges and grants.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _entity_columns() -> list[sa.Column]:
    return [
        sa.Column("properties", postgresql.JSONB(), nullable=False, server_default="{}"),
        sa.Column("entity_version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("create_timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_update_timestamp", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "principal",
        sa.Column("name", sa.String(256), primary_key=True),
        *_entity_columns(),
    )

    op.create_table(
        "principal_role",
        sa.Column("name", sa.String(256), primary_key=True),
        *_entity_columns(),
    )

    op.create_table(
        "catalog_role",
        sa.Column("catalog_name", sa.String(256), primary_key=True),
        sa.Column("name", sa.String(256), primary_key=True),
        *_entity_columns(),
    )

    op.create_table(
        "principal_principal_role",
        sa.Column(
            "principal_name",
            sa.String(256),
            sa.ForeignKey("principal.name", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "principal_role_name",
            sa.String(256),
            sa.ForeignKey("principal_role.name", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index(
        "ix_principal_principal_role_role",
        "principal_principal_role",
        ["principal_role_name"],
    )

    op.create_table(
        "principal_role_catalog_role",
        sa.Column(
            "principal_role_name",
            sa.String(256),
            sa.ForeignKey("principal_role.name", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("catalog_name", sa.String(256), primary_key=True),
        sa.Column("catalog_role_name", sa.String(256), primary_key=True),
        sa.ForeignKeyConstraint(
            ["catalog_name", "catalog_role_name"],
            ["catalog_role.catalog_name", "catalog_role.name"],
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        "ix_principal_role_catalog_role_catalog_role",
        "principal_role_catalog_role",
        ["catalog_name", "catalog_role_name"],
    )

    op.create_table(
        "grant_record",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("catalog_name", sa.String(256), nullable=False),
        sa.Column("catalog_role_name", sa.String(256), nullable=False),
        sa.Column("resource_type", sa.String(20), nullable=False),
        sa.Column(
            "namespace",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        # '' for catalog and namespace grants
        sa.Column("leaf_name", sa.String(256), nullable=False, server_default=""),
        sa.Column("privilege", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["catalog_name", "catalog_role_name"],
            ["catalog_role.catalog_name", "catalog_role.name"],
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "resource_type IN ('catalog', 'namespace', 'table', 'view', 'policy')",
            name="ck_grant_record_resource_type",
        ),
    )
    op.create_index(
        "ux_grant_record_tuple",
        "grant_record",
        [
            "catalog_name",
            "catalog_role_name",
            "resource_type",
            "namespace",
            "leaf_name",
            "privilege",
        ],
        unique=True,
    )
    op.create_index(
        "ix_grant_record_resource",
        "grant_record",
        ["catalog_name", "resource_type", "namespace", "leaf_name"],
    )


def downgrade() -> None:
    op.drop_table("grant_record")
    op.drop_table("principal_role_catalog_role")
    op.drop_table("principal_principal_role")
    op.drop_table("catalog_role")
    op.drop_table("principal_role")
    op.drop_table("principal")
