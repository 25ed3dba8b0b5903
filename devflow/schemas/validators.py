"""Reusable field rules for request schemas.

Each rule set reports every failing rule at once, so a weak password yields
all of its problems in a single response rather than the first one only.
"""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Sequence
import re
from typing import Annotated
from urllib.parse import urlparse

from pydantic import AfterValidator
from pydantic import BeforeValidator
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

Rule = tuple[Callable[[str], bool], str]

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_OBJECT_ID_RE = re.compile(r"^[a-fA-F0-9]{24}$")


class RuleViolation(ValueError):
    """Raised with every failed rule message for one field."""

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = list(messages)
        super().__init__(" and ".join(self.messages))


class CamelModel(BaseModel):
    """Base schema accepting and emitting camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _matches(pattern: str) -> Callable[[str], bool]:
    compiled = re.compile(pattern)
    return lambda value: compiled.search(value) is not None


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and bool(parsed.netloc)


def check_rules(value: str, rules: Sequence[Rule]) -> str:
    failures = [message for predicate, message in rules if not predicate(value)]
    if failures:
        raise RuleViolation(failures)
    return value


def _rules(*rules: Rule) -> AfterValidator:
    return AfterValidator(lambda value: check_rules(value, rules))


def _required(message: str) -> Rule:
    return (lambda value: len(value) >= 1, message)


EMAIL_RULES: tuple[Rule, ...] = (
    _required("Email is required."),
    (lambda value: _EMAIL_RE.match(value) is not None, "Please provide a valid email address."),
)

PASSWORD_RULES: tuple[Rule, ...] = (
    (lambda value: len(value) >= 6, "Password must be at least 6 characters long."),
    (lambda value: len(value) <= 100, "Password cannot exceed 100 characters."),
    (_matches(r"[A-Z]"), "Password must contain at least one uppercase letter."),
    (_matches(r"[a-z]"), "Password must contain at least one lowercase letter."),
    (_matches(r"[0-9]"), "Password must contain at least one number."),
    (_matches(r"[^a-zA-Z0-9]"), "Password must contain at least one special character."),
)

USERNAME_RULES: tuple[Rule, ...] = (
    (lambda value: len(value) >= 3, "Username must be at least 3 characters long."),
    (lambda value: len(value) <= 30, "Username cannot exceed 30 characters."),
    (_matches(r"^[a-zA-Z0-9_]+$"), "Username can only contain letters, numbers, and underscores."),
    (_matches(r"^(?!.*__)[a-zA-Z0-9_]+$"), "Username cannot contain consecutive underscores."),
    (_matches(r"^[a-zA-Z0-9]+(?:_[a-zA-Z0-9]+)*$"), "Username cannot start or end with an underscore."),
)

URL_RULES: tuple[Rule, ...] = ((_is_url, "Please provide a valid URL."),)

Email = Annotated[str, _rules(*EMAIL_RULES)]
Password = Annotated[str, _rules(*PASSWORD_RULES)]
Username = Annotated[str, _rules(*USERNAME_RULES)]
Url = Annotated[str, _rules(*URL_RULES)]
PersonName = Annotated[str, _rules(_required("Name is required."))]
ObjectId = Annotated[
    str,
    _rules((lambda value: _OBJECT_ID_RE.match(value) is not None, "Invalid ID format.")),
]


def non_empty(message: str) -> AfterValidator:
    """Annotation rule rejecting empty strings with ``message``."""
    return _rules(_required(message))


def not_null(message: str) -> BeforeValidator:
    """Annotation rule for optional fields that may be omitted but not set to null."""

    def _reject_null(value: object) -> object:
        if value is None:
            raise RuleViolation([message])
        return value

    return BeforeValidator(_reject_null)


def matching(pattern: str, message: str) -> AfterValidator:
    """Annotation rule requiring ``pattern`` to match."""
    return _rules((_matches(pattern), message))


def length_between(minimum: int, maximum: int, *, too_short: str, too_long: str) -> AfterValidator:
    """Annotation rule bounding the string length, reporting both ends."""
    return _rules(
        (lambda value: len(value) >= minimum, too_short),
        (lambda value: len(value) <= maximum, too_long),
    )
