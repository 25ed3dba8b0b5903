"""SQLAlchemy model for answers."""

from __future__ import annotations

from sqlalchemy import ForeignKey
from sqlalchemy import Integer
from sqlalchemy import PrimaryKeyConstraint
from sqlalchemy import String
from sqlalchemy import Text
from sqlalchemy.orm import Mapped
from sqlalchemy.orm import mapped_column

from devflow.db.models.user import Base
from devflow.db.models.user import OBJECT_ID_LENGTH
from devflow.db.models.user import TimestampMixin


class Answer(TimestampMixin, Base):
    """Answer to a question."""

    __tablename__ = "answers"
    __table_args__ = (PrimaryKeyConstraint("id", name="pk_answers"),)

    author_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("users.id", name="fk_answers_author_id_users", ondelete="CASCADE"),
        nullable=False,
    )
    question_id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        ForeignKey("questions.id", name="fk_answers_question_id_questions", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
