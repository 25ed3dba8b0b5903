"""SQLAlchemy models for votes and saved-question collections."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column

from devflow.db.models.user import Base
from devflow.db.models.user import OBJECT_ID_LENGTH
from devflow.db.models.user import TimestampMixin


class ActionTypeEnum(str, Enum):
    QUESTION = "question"
    ANSWER = "answer"


class VoteTypeEnum(str, Enum):
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


def _enum_column(enum_cls: type[Enum], name: str) -> SAEnum:
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        length=16,
    )


class Vote(TimestampMixin, Base):
    """One user's vote on a question or an answer."""

    __tablename__ = "votes"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_votes"),
        UniqueConstraint(
            "author_id",
            "action_id",
            "action_type",
            name="uq_votes_author_id_action_id_action_type",
        ),
    )

    author_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", name="fk_votes_author_id_users", ondelete="CASCADE"),
        nullable=False,
    )
    action_id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), nullable=False)
    action_type: Mapped[ActionTypeEnum] = mapped_column(
        _enum_column(ActionTypeEnum, "action_type"),
        nullable=False,
    )
    vote_type: Mapped[VoteTypeEnum] = mapped_column(
        _enum_column(VoteTypeEnum, "vote_type"),
        nullable=False,
    )


class Collection(TimestampMixin, Base):
    """A question saved by a user."""

    __tablename__ = "collections"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_collections"),
        UniqueConstraint("author_id", "question_id", name="uq_collections_author_id_question_id"),
    )

    author_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", name="fk_collections_author_id_users", ondelete="CASCADE"),
        nullable=False,
    )
    question_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("questions.id", name="fk_collections_question_id_questions", ondelete="CASCADE"),
        nullable=False,
    )
