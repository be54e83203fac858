"""SQLAlchemy table definitions.

These table definitions match the schema defined in Alembic migrations.
A user row and its authorization rows together form one user document and
are always written in the same transaction.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    # Deprecated single-provider identity
    Column("provider", String(50), nullable=True),
    Column("uid", String(255), nullable=True),
    Column("token", Text, nullable=True),
    Column("gravatar_id", String(255), nullable=True),
    # Profile
    Column("name", String(255), nullable=True),
    Column("email", String(255), nullable=True),
    Column("image", Text, nullable=True),
    Column("time_zone", String(64), nullable=True),
    Column("color", String(7), nullable=True),
    Column("volume", Integer, nullable=True),
    Column("ticking", Boolean, nullable=True),
    Column("work_hours_per_day", Integer, nullable=True),
    Column("average_hourly_rate", Float, nullable=True),
    Column("currency", String(3), nullable=True),
    # NULL for users created before timestamps were recorded
    Column("created_at", TIMESTAMP(timezone=True), nullable=True),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("volume >= 0 AND volume < 4", name="volume_range"),
    CheckConstraint(
        "currency IN ('USD', 'EUR', 'JPY', 'GBP', 'CHF')", name="currency_known"
    ),
    CheckConstraint("work_hours_per_day > 0", name="work_hours_positive"),
    CheckConstraint("average_hourly_rate > 0", name="hourly_rate_positive"),
)

Index("idx_users_legacy_identity", users_table.c.provider, users_table.c.uid)
Index("idx_users_created_at", users_table.c.created_at)

# ============================================================================
# AUTHORIZATIONS TABLE (embedded in users, one row per linked provider)
# ============================================================================
authorizations_table = Table(
    "authorizations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False),  # Order within the user
    Column("provider", String(50), nullable=False),
    Column("uid", String(255), nullable=False),
    Column("token", Text, nullable=True),
    Column("nickname", String(255), nullable=True),
    Column("image", Text, nullable=True),
    UniqueConstraint("provider", "uid", name="uq_authorization_identity"),
)

Index("idx_authorizations_user_id", authorizations_table.c.user_id)
Index("idx_authorizations_token", authorizations_table.c.token, unique=True)

# ============================================================================
# TOMATOES TABLE
# ============================================================================
tomatoes_table = Table(
    "tomatoes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    # Deleting a user keeps its tomatoes and clears the owner
    Column("user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_tomatoes_user_id_created_at",
    tomatoes_table.c.user_id,
    tomatoes_table.c.created_at,
)
