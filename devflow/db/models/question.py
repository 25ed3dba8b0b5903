"""SQLAlchemy models for questions, tags and their link table."""

from __future__ import annotations

from sqlalchemy import ForeignKey
from sqlalchemy import Integer
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column
from sqlalchemy.orm import relationship

from devflow.db.models.user import Base
from devflow.db.models.user import OBJECT_ID_LENGTH
from devflow.db.models.user import TimestampMixin


class Tag(TimestampMixin, Base):
    """Topic label with a running count of tagged questions."""

    __tablename__ = "tags"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_tags"),
        UniqueConstraint("name", name="uq_tags_name"),
    )

    name: Mapped[str] = mapped_column(String(30), nullable=False)
    questions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Question(TimestampMixin, Base):
    """Question posted by a user."""

    __tablename__ = "questions"
    __table_args__ = (PrimaryKeyConstraint("id", name="pk_questions"),)

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    answers: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    author_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", name="fk_questions_author_id_users", ondelete="CASCADE"),
        nullable=False,
    )

    tags: Mapped[list[Tag]] = relationship(
        Tag,
        secondary="tag_questions",
        order_by="Tag.name",
        viewonly=True,
    )


class TagQuestion(TimestampMixin, Base):
    """Link row between a tag and a question."""

    __tablename__ = "tag_questions"
    __table_args__ = (
        PrimaryKeyConstraint("id", name="pk_tag_questions"),
        UniqueConstraint("tag_id", "question_id", name="uq_tag_questions_tag_id_question_id"),
    )

    tag_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("tags.id", name="fk_tag_questions_tag_id_tags", ondelete="CASCADE"),
        nullable=False,
    )
    question_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("questions.id", name="fk_tag_questions_question_id_questions", ondelete="CASCADE"),
        nullable=False,
    )
