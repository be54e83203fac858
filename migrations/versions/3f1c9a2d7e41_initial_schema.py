"""initial_schema

Create the foundational schema:
- Users (profile fields plus the deprecated single-provider identity)
- Authorizations (one row per linked provider, owned by a user)
- Tomatoes (completed work units, kept when their user is deleted)

Revision ID: 3f1c9a2d7e41
Revises:
Create Date: 2025-11-02 10:12:45.204311

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2d7e41"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # USERS
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column("provider", sa.String(50), nullable=True),
        sa.Column("uid", sa.String(255), nullable=True),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("gravatar_id", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
        sa.Column("time_zone", sa.String(64), nullable=True),
        sa.Column("color", sa.String(7), nullable=True),
        sa.Column("volume", sa.Integer(), nullable=True),
        sa.Column("ticking", sa.Boolean(), nullable=True),
        sa.Column("work_hours_per_day", sa.Integer(), nullable=True),
        sa.Column("average_hourly_rate", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(3), nullable=True),
        sa.Column("created_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("updated_at", postgresql.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint("volume >= 0 AND volume < 4", name="volume_range"),
        sa.CheckConstraint(
            "currency IN ('USD', 'EUR', 'JPY', 'GBP', 'CHF')", name="currency_known"
        ),
        sa.CheckConstraint("work_hours_per_day > 0", name="work_hours_positive"),
        sa.CheckConstraint("average_hourly_rate > 0", name="hourly_rate_positive"),
    )
    op.create_index("idx_users_legacy_identity", "users", ["provider", "uid"])
    op.create_index("idx_users_created_at", "users", ["created_at"])

    # ========================================================================
    # AUTHORIZATIONS
    # ========================================================================
    op.create_table(
        "authorizations",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),
        sa.Column("uid", sa.String(255), nullable=False),
        sa.Column("token", sa.Text(), nullable=True),
        sa.Column("nickname", sa.String(255), nullable=True),
        sa.Column("image", sa.Text(), nullable=True),
    )
    op.create_index("idx_authorizations_user_id", "authorizations", ["user_id"])
    # Lookup indexes; uniqueness is added by the next revision
    op.create_index(
        "idx_authorizations_provider_uid", "authorizations", ["provider", "uid"]
    )
    op.create_index("idx_authorizations_token", "authorizations", ["token"])

    # ========================================================================
    # TOMATOES
    # ========================================================================
    op.create_table(
        "tomatoes",
        sa.Column(
            "id",
            postgresql.UUID(),
            primary_key=True,
            server_default=sa.text("uuid_generate_v4()"),
        ),
        sa.Column(
            "user_id",
            postgresql.UUID(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index(
        "idx_tomatoes_user_id_created_at", "tomatoes", ["user_id", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("tomatoes")
    op.drop_table("authorizations")
    op.drop_table("users")
