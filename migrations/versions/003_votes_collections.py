"""Add votes and saved-question collections."""

from typing import Sequence
from typing import Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003_votes_collections"
down_revision: Union[str, None] = "002_questions_tags_answers"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create votes and collections tables."""
    op.create_table(
        "votes",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("author_id", sa.String(length=24), nullable=False),
        sa.Column("action_id", sa.String(length=24), nullable=False),
        sa.Column("action_type", sa.String(length=16), nullable=False),
        sa.Column("vote_type", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.CheckConstraint(
            "action_type IN ('question', 'answer')",
            name="ck_votes_action_type",
        ),
        sa.CheckConstraint(
            "vote_type IN ('upvote', 'downvote')",
            name="ck_votes_vote_type",
        ),
        sa.ForeignKeyConstraint(
            ["author_id"],
            ["users.id"],
            name="fk_votes_author_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_votes"),
        sa.UniqueConstraint(
            "author_id",
            "action_id",
            "action_type",
            name="uq_votes_author_id_action_id_action_type",
        ),
    )

    op.create_table(
        "collections",
        sa.Column("id", sa.String(length=24), nullable=False),
        sa.Column("author_id", sa.String(length=24), nullable=False),
        sa.Column("question_id", sa.String(length=24), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["author_id"],
            ["users.id"],
            name="fk_collections_author_id_users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["question_id"],
            ["questions.id"],
            name="fk_collections_question_id_questions",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_collections"),
        sa.UniqueConstraint("author_id", "question_id", name="uq_collections_author_id_question_id"),
    )


def downgrade() -> None:
    """Drop votes and collections tables."""
    op.drop_table("collections")
    op.drop_table("votes")
