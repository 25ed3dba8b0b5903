"""Pydantic schemas for question and tag payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator
from pydantic import ConfigDict

from devflow.schemas.validators import CamelModel
from devflow.schemas.validators import ObjectId
from devflow.schemas.validators import RuleViolation
from devflow.schemas.validators import length_between
from devflow.schemas.validators import non_empty

TagName = Annotated[
    str,
    length_between(1, 30, too_short="Tag is required.", too_long="Tag cannot exceed 30 characters."),
]


def _check_tag_count(tags: list[str]) -> list[str]:
    if not tags:
        raise RuleViolation(["At least one tag is required."])
    if len(tags) > 3:
        raise RuleViolation(["Cannot add more than 3 tags."])
    return tags


class AskQuestion(CamelModel):
    """Payload to post a new question."""

    title: Annotated[
        str,
        length_between(
            5,
            100,
            too_short="Title must be at least 5 characters long.",
            too_long="Title cannot exceed 100 characters.",
        ),
    ]
    content: Annotated[str, non_empty("Body is required.")]
    tags: Annotated[list[TagName], AfterValidator(_check_tag_count)]


class QuestionLookup(CamelModel):
    """Payload identifying one question."""

    question_id: ObjectId


class Tag(CamelModel):
    """Tag response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    questions: int


class Question(CamelModel):
    """Question response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    tags: list[Tag]
    views: int
    upvotes: int
    downvotes: int
    answers: int
    author_id: str
    created_at: datetime
    updated_at: datetime
