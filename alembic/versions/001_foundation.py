"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema base: workspaces (con privacidad embebida),
    collaborators y rate_limits.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres (usa este esquema como contrato)

Policy:
  - Migración BASELINE. Evoluciones futuras: migraciones aditivas (002+).
  - Convención de nombres:
      pk_<tabla>, uq_<tabla>_<col>, ix_<tabla>_<col>,
      fk_<tabla>_<col>__<ref_tabla>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # =========================================================
    # WORKSPACES (+ privacy embebida, se borra con el workspace)
    # =========================================================
    op.create_table(
        "workspaces",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(64), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("owner_user_id", sa.String(255), nullable=False),
        # level como string: un valor corrupto se detecta en la policy
        sa.Column(
            "privacy_level",
            sa.String(32),
            nullable=False,
            server_default=sa.text("'public'"),
        ),
        sa.Column("privacy_secret_token", sa.String(128), nullable=True),
        sa.Column("privacy_password_hash", sa.Text, nullable=True),
        sa.Column(
            "privacy_allow_search_engines",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "privacy_ever_public",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_workspaces"),
        sa.UniqueConstraint("slug", name="uq_workspaces_slug"),
    )
    op.create_index("ix_workspaces_owner_user_id", "workspaces", ["owner_user_id"])

    # =========================================================
    # COLLABORATORS
    # =========================================================
    op.create_table(
        "collaborators",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("workspace_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("can_edit", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column(
            "can_suggest_changes",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "can_view_analytics",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "can_invite_others",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "can_manage_settings",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "status",
            sa.String(16),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("invite_email", sa.String(320), nullable=True),
        sa.Column("invited_by", sa.String(255), nullable=True),
        sa.Column("invited_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_collaborators"),
        sa.ForeignKeyConstraint(
            ["workspace_id"],
            ["workspaces.id"],
            name="fk_collaborators_workspace_id__workspaces",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "role IN ('owner', 'collaborator', 'viewer')",
            name="ck_collaborators_role",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="ck_collaborators_status",
        ),
    )
    op.create_index(
        "ix_collaborators_workspace_id", "collaborators", ["workspace_id"]
    )
    op.create_index(
        "ix_collaborators_invite_email", "collaborators", ["invite_email"]
    )
    # Un único registro aceptado por (workspace, usuario)
    op.create_index(
        "uq_collaborators_workspace_id_user_id_accepted",
        "collaborators",
        ["workspace_id", "user_id"],
        unique=True,
        postgresql_where=sa.text("status = 'accepted'"),
    )

    # =========================================================
    # RATE LIMITS (ventana fija, tiempos en ms epoch)
    # =========================================================
    op.create_table(
        "rate_limits",
        sa.Column("identifier", sa.String(255), nullable=False),
        sa.Column("endpoint", sa.String(64), nullable=False),
        sa.Column("count", sa.Integer, nullable=False),
        sa.Column("window_start", sa.BigInteger, nullable=False),
        sa.Column("window_end", sa.BigInteger, nullable=False),
        sa.PrimaryKeyConstraint(
            "identifier", "endpoint", name="pk_rate_limits"
        ),
    )
    op.create_index("ix_rate_limits_window_end", "rate_limits", ["window_end"])


def downgrade() -> None:
    raise RuntimeError("Downgrade no soportado para la migración baseline.")
