"""Pydantic schemas for votes and saved questions."""

from __future__ import annotations

from pydantic import BaseModel

from devflow.db.models.vote import ActionTypeEnum
from devflow.db.models.vote import VoteTypeEnum
from devflow.schemas.validators import CamelModel
from devflow.schemas.validators import ObjectId


class VoteCreate(CamelModel):
    """Payload to cast, switch or withdraw a vote."""

    target_id: ObjectId
    target_type: ActionTypeEnum
    vote_type: VoteTypeEnum


class VoteResult(CamelModel):
    """Vote outcome with the target's counters after the change."""

    vote_type: VoteTypeEnum | None
    upvotes: int
    downvotes: int


class CollectionToggle(CamelModel):
    """Payload to save or unsave a question."""

    question_id: ObjectId


class CollectionResult(BaseModel):
    """Whether the question is saved after the toggle."""

    saved: bool
