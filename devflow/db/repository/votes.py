"""Repository primitives for votes and saved questions."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from devflow.db.models.vote import ActionTypeEnum
from devflow.db.models.vote import Collection
from devflow.db.models.vote import Vote
from devflow.db.models.vote import VoteTypeEnum


def get_vote(
    session: Session,
    *,
    author_id: str,
    action_id: str,
    action_type: ActionTypeEnum,
) -> Vote | None:
    """Fetch the author's vote on one target."""
    stmt = select(Vote).where(
        Vote.author_id == author_id,
        Vote.action_id == action_id,
        Vote.action_type == action_type,
    )
    return session.scalars(stmt.limit(1)).first()


def create_vote(
    session: Session,
    *,
    author_id: str,
    action_id: str,
    action_type: ActionTypeEnum,
    vote_type: VoteTypeEnum,
) -> Vote:
    vote = Vote(
        author_id=author_id,
        action_id=action_id,
        action_type=action_type,
        vote_type=vote_type,
    )
    session.add(vote)
    session.flush()
    return vote


def delete_vote(session: Session, vote: Vote) -> None:
    session.delete(vote)
    session.flush()


def get_collection_entry(session: Session, *, author_id: str, question_id: str) -> Collection | None:
    """Fetch the saved-question row for an author, if any."""
    stmt = select(Collection).where(
        Collection.author_id == author_id,
        Collection.question_id == question_id,
    )
    return session.scalars(stmt.limit(1)).first()


def create_collection_entry(session: Session, *, author_id: str, question_id: str) -> Collection:
    entry = Collection(author_id=author_id, question_id=question_id)
    session.add(entry)
    session.flush()
    return entry


def delete_collection_entry(session: Session, entry: Collection) -> None:
    session.delete(entry)
    session.flush()
