"""Server actions for votes and saved questions."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from devflow.core.action import run_action
from devflow.core.auth import SessionProvider
from devflow.core.handlers import handle_error
from devflow.core.http_errors import not_found
from devflow.db.base import Database
from devflow.db.base import get_database
from devflow.db.models.answer import Answer
from devflow.db.models.question import Question
from devflow.db.models.vote import ActionTypeEnum
from devflow.db.models.vote import VoteTypeEnum
from devflow.db.repository.questions import get_answer
from devflow.db.repository.questions import get_question
from devflow.db.repository.votes import create_collection_entry
from devflow.db.repository.votes import create_vote as insert_vote
from devflow.db.repository.votes import delete_collection_entry
from devflow.db.repository.votes import delete_vote
from devflow.db.repository.votes import get_collection_entry
from devflow.db.repository.votes import get_vote
from devflow.schemas.vote import CollectionResult
from devflow.schemas.vote import CollectionToggle
from devflow.schemas.vote import VoteCreate
from devflow.schemas.vote import VoteResult


def _load_target(db_session: Session, target_id: str, target_type: ActionTypeEnum) -> Question | Answer:
    if target_type is ActionTypeEnum.QUESTION:
        target = get_question(db_session, target_id)
        resource = "Question"
    else:
        target = get_answer(db_session, target_id)
        resource = "Answer"
    if target is None:
        raise not_found(resource)
    return target


def _adjust_count(target: Question | Answer, vote_type: VoteTypeEnum, delta: int) -> None:
    if vote_type is VoteTypeEnum.UPVOTE:
        target.upvotes += delta
    else:
        target.downvotes += delta


def create_vote(
    params: Any,
    *,
    session_provider: SessionProvider | None = None,
    database: Database | None = None,
) -> dict[str, Any]:
    """Cast a vote; repeating it withdraws it, the opposite vote switches it."""
    database = database or get_database()
    try:
        context = run_action(
            params=params,
            schema=VoteCreate,
            authorize=True,
            session_provider=session_provider,
            database=database,
        )
        payload: VoteCreate = context.params
        author_id = context.session.user_id
        with database.session_scope() as db_session:
            target = _load_target(db_session, payload.target_id, payload.target_type)
            existing = get_vote(
                db_session,
                author_id=author_id,
                action_id=payload.target_id,
                action_type=payload.target_type,
            )
            current: VoteTypeEnum | None = payload.vote_type
            if existing is None:
                insert_vote(
                    db_session,
                    author_id=author_id,
                    action_id=payload.target_id,
                    action_type=payload.target_type,
                    vote_type=payload.vote_type,
                )
                _adjust_count(target, payload.vote_type, 1)
            elif existing.vote_type == payload.vote_type:
                delete_vote(db_session, existing)
                _adjust_count(target, payload.vote_type, -1)
                current = None
            else:
                _adjust_count(target, existing.vote_type, -1)
                existing.vote_type = payload.vote_type
                _adjust_count(target, payload.vote_type, 1)
            db_session.flush()
            result = VoteResult(vote_type=current, upvotes=target.upvotes, downvotes=target.downvotes)
        return {"success": True, "data": result.model_dump(mode="json", by_alias=True)}
    except Exception as exc:
        return handle_error(exc, "server")


def toggle_save_question(
    params: Any,
    *,
    session_provider: SessionProvider | None = None,
    database: Database | None = None,
) -> dict[str, Any]:
    """Save the question to the caller's collection, or remove it if already saved."""
    database = database or get_database()
    try:
        context = run_action(
            params=params,
            schema=CollectionToggle,
            authorize=True,
            session_provider=session_provider,
            database=database,
        )
        question_id = context.params.question_id
        author_id = context.session.user_id
        with database.session_scope() as db_session:
            if get_question(db_session, question_id) is None:
                raise not_found("Question")
            entry = get_collection_entry(db_session, author_id=author_id, question_id=question_id)
            if entry is None:
                create_collection_entry(db_session, author_id=author_id, question_id=question_id)
                saved = True
            else:
                delete_collection_entry(db_session, entry)
                saved = False
        return {"success": True, "data": CollectionResult(saved=saved).model_dump()}
    except Exception as exc:
        return handle_error(exc, "server")
