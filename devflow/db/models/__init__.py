"""Model module imports for SQLAlchemy relationship registration."""

from devflow.db.models.account import Account
from devflow.db.models.answer import Answer
from devflow.db.models.question import Question
from devflow.db.models.question import Tag
from devflow.db.models.question import TagQuestion
from devflow.db.models.user import Base
from devflow.db.models.user import User
from devflow.db.models.vote import Collection
from devflow.db.models.vote import Vote

__all__ = [
    "Account",
    "Answer",
    "Base",
    "Collection",
    "Question",
    "Tag",
    "TagQuestion",
    "User",
    "Vote",
]
