"""Add per-candidate sequence number to stage events

Revision ID: 0002_stage_event_sequence
Revises: 0001_initial_schema
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0002_stage_event_sequence"
down_revision: Union[str, None] = "0001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "candidate_stages",
        sa.Column("sequence_number", sa.Integer(), nullable=False, server_default="1"),
    )

    # Number existing history per candidate in timestamp order, id breaking ties
    op.execute(
        """
        UPDATE candidate_stages
        SET sequence_number = (
            SELECT COUNT(*)
            FROM candidate_stages AS earlier
            WHERE earlier.candidate_id = candidate_stages.candidate_id
              AND (
                earlier.created_at < candidate_stages.created_at
                OR (earlier.created_at = candidate_stages.created_at AND earlier.id <= candidate_stages.id)
              )
        )
        """
    )

    op.create_index(
        "ix_candidate_stages_candidate_sequence",
        "candidate_stages",
        ["candidate_id", "sequence_number"],
    )


def downgrade() -> None:
    op.drop_index("ix_candidate_stages_candidate_sequence", table_name="candidate_stages")
    with op.batch_alter_table("candidate_stages") as batch_op:
        batch_op.drop_column("sequence_number")
