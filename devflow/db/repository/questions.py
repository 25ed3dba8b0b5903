"""Repository primitives for questions, tags and answers."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy.orm import Session

from devflow.db.models.answer import Answer
from devflow.db.models.question import Question
from devflow.db.models.question import Tag
from devflow.db.models.question import TagQuestion


def create_question(session: Session, *, author_id: str, title: str, content: str) -> Question:
    """Create and return a question row without tags."""
    question = Question(author_id=author_id, title=title, content=content)
    session.add(question)
    session.flush()
    session.refresh(question)
    return question


def get_question(session: Session, question_id: str) -> Question | None:
    """Fetch a question by id."""
    return session.get(Question, question_id)


def get_or_create_tag(session: Session, name: str) -> Tag:
    """Return the tag matching ``name`` case-insensitively, creating it if absent."""
    stmt = select(Tag).where(func.lower(Tag.name) == name.lower())
    tag = session.scalars(stmt.limit(1)).first()
    if tag is None:
        tag = Tag(name=name, questions=0)
        session.add(tag)
        session.flush()
    return tag


def link_tag(session: Session, *, tag: Tag, question: Question) -> TagQuestion:
    """Attach a tag to a question and bump the tag's question counter."""
    link = TagQuestion(tag_id=tag.id, question_id=question.id)
    session.add(link)
    tag.questions += 1
    session.flush()
    return link


def create_answer(session: Session, *, author_id: str, question: Question, content: str) -> Answer:
    """Create an answer and bump the question's answer counter."""
    answer = Answer(author_id=author_id, question_id=question.id, content=content)
    session.add(answer)
    question.answers += 1
    session.flush()
    session.refresh(answer)
    return answer


def get_answer(session: Session, answer_id: str) -> Answer | None:
    """Fetch an answer by id."""
    return session.get(Answer, answer_id)
