"""Add idempotency key to transcripts

Revision ID: 005
Revises: 004
Create Date: 2026-10-18 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column("transcripts", sa.Column("idempotency_key", sa.String(), nullable=True))
    op.create_unique_constraint(
        "uq_transcripts_idempotency_key", "transcripts", ["idempotency_key"]
    )


def downgrade() -> None:
    op.drop_constraint("uq_transcripts_idempotency_key", "transcripts", type_="unique")
    op.drop_column("transcripts", "idempotency_key")
