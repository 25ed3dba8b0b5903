"""Server actions for questions and answers.

Actions are called from rendering code rather than over HTTP, so they return
the envelope as a plain dict (``handle_error`` in ``"server"`` mode) instead
of raising.
"""

from __future__ import annotations

from typing import Any

from devflow.core.action import run_action
from devflow.core.auth import SessionProvider
from devflow.core.handlers import handle_error
from devflow.core.http_errors import not_found
from devflow.db.base import Database
from devflow.db.base import get_database
from devflow.db.repository.questions import create_answer as insert_answer
from devflow.db.repository.questions import create_question as insert_question
from devflow.db.repository.questions import get_or_create_tag
from devflow.db.repository.questions import get_question as fetch_question
from devflow.db.repository.questions import link_tag
from devflow.schemas.answer import Answer
from devflow.schemas.answer import AnswerCreate
from devflow.schemas.question import AskQuestion
from devflow.schemas.question import Question
from devflow.schemas.question import QuestionLookup


def _unique_tag_names(tags: list[str]) -> list[str]:
    seen: dict[str, str] = {}
    for name in tags:
        seen.setdefault(name.strip().lower(), name.strip())
    return list(seen.values())


def create_question(
    params: Any,
    *,
    session_provider: SessionProvider | None = None,
    database: Database | None = None,
) -> dict[str, Any]:
    """Post a question as the signed-in user, creating any new tags."""
    database = database or get_database()
    try:
        context = run_action(
            params=params,
            schema=AskQuestion,
            authorize=True,
            session_provider=session_provider,
            database=database,
        )
        payload: AskQuestion = context.params
        with database.session_scope() as db_session:
            question = insert_question(
                db_session,
                author_id=context.session.user_id,
                title=payload.title,
                content=payload.content,
            )
            for name in _unique_tag_names(payload.tags):
                link_tag(db_session, tag=get_or_create_tag(db_session, name), question=question)
            data = Question.model_validate(question).model_dump(mode="json", by_alias=True)
        return {"success": True, "data": data}
    except Exception as exc:
        return handle_error(exc, "server")


def get_question(
    params: Any,
    *,
    session_provider: SessionProvider | None = None,
    database: Database | None = None,
) -> dict[str, Any]:
    """Fetch one question with its tags."""
    database = database or get_database()
    try:
        context = run_action(
            params=params,
            schema=QuestionLookup,
            authorize=True,
            session_provider=session_provider,
            database=database,
        )
        with database.session_scope() as db_session:
            question = fetch_question(db_session, context.params.question_id)
            if question is None:
                raise not_found("Question")
            data = Question.model_validate(question).model_dump(mode="json", by_alias=True)
        return {"success": True, "data": data}
    except Exception as exc:
        return handle_error(exc, "server")


def create_answer(
    params: Any,
    *,
    session_provider: SessionProvider | None = None,
    database: Database | None = None,
) -> dict[str, Any]:
    """Answer a question as the signed-in user."""
    database = database or get_database()
    try:
        context = run_action(
            params=params,
            schema=AnswerCreate,
            authorize=True,
            session_provider=session_provider,
            database=database,
        )
        payload: AnswerCreate = context.params
        with database.session_scope() as db_session:
            question = fetch_question(db_session, payload.question_id)
            if question is None:
                raise not_found("Question")
            answer = insert_answer(
                db_session,
                author_id=context.session.user_id,
                question=question,
                content=payload.content,
            )
            data = Answer.model_validate(answer).model_dump(mode="json", by_alias=True)
        return {"success": True, "data": data}
    except Exception as exc:
        return handle_error(exc, "server")
