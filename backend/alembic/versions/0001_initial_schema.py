"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the two tables owned by the community events backend:
event_responses and event_metadata.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- event_responses ---
    op.create_table(
        "event_responses",
        sa.Column("id", sa.String(512), primary_key=True),
        sa.Column("event_id", sa.String(255), nullable=False),
        sa.Column("participant_id", sa.String(255), nullable=False),
        sa.Column("response_type", sa.String(20), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("event_id", "participant_id", name="uq_event_participant"),
    )
    op.create_index("ix_event_responses_event_id", "event_responses", ["event_id"])

    # --- event_metadata ---
    op.create_table(
        "event_metadata",
        sa.Column("event_id", sa.String(255), primary_key=True),
        sa.Column("image_path", sa.Text, nullable=True),
        sa.Column("image_category", sa.String(50), nullable=True),
        sa.Column("additional_info", sa.Text, nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("event_metadata")
    op.drop_index("ix_event_responses_event_id", table_name="event_responses")
    op.drop_table("event_responses")
