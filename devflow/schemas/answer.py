"""Pydantic schemas for answers."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import ConfigDict

from devflow.schemas.validators import CamelModel
from devflow.schemas.validators import ObjectId
from devflow.schemas.validators import non_empty


class AnswerCreate(CamelModel):
    """Payload to answer a question."""

    question_id: ObjectId
    content: Annotated[str, non_empty("Answer is required.")]


class Answer(CamelModel):
    """Answer response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    author_id: str
    question_id: str
    content: str
    upvotes: int
    downvotes: int
    created_at: datetime
    updated_at: datetime
