"""unique_authorization_identity

Make (provider, uid) and token unique across all authorizations.

Existing duplicates must be merged by hand before this revision runs; the
upgrade refuses to continue while any are left so that no account is
silently dropped.

Revision ID: 9b7e4c03a5d8
Revises: 3f1c9a2d7e41
Create Date: 2025-11-09 18:40:03.551027

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9b7e4c03a5d8"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2d7e41"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _count_duplicates(columns: str, where: str = "TRUE") -> int:
    result = op.get_bind().execute(
        sa.text(f"""
            SELECT COUNT(*) FROM (
                SELECT {columns}
                FROM authorizations
                WHERE {where}
                GROUP BY {columns}
                HAVING COUNT(*) > 1
            ) AS duplicates
        """)
    )
    return result.scalar_one()


def upgrade() -> None:
    """Upgrade schema.

    1. Abort if duplicate identities or tokens exist
    2. Replace the lookup indexes with unique ones
    """
    identities = _count_duplicates("provider, uid")
    tokens = _count_duplicates("token", where="token IS NOT NULL")
    if identities or tokens:
        raise RuntimeError(
            f"Found {identities} duplicated (provider, uid) pairs and {tokens} "
            "duplicated tokens in authorizations; merge them before upgrading"
        )

    op.drop_index("idx_authorizations_provider_uid", table_name="authorizations")
    op.drop_index("idx_authorizations_token", table_name="authorizations")

    op.create_unique_constraint(
        "uq_authorization_identity", "authorizations", ["provider", "uid"]
    )
    op.create_index(
        "idx_authorizations_token", "authorizations", ["token"], unique=True
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_authorizations_token", table_name="authorizations")
    op.drop_constraint(
        "uq_authorization_identity", "authorizations", type_="unique"
    )
    op.create_index("idx_authorizations_token", "authorizations", ["token"])
    op.create_index(
        "idx_authorizations_provider_uid", "authorizations", ["provider", "uid"]
    )
