"""Catalog record types: goals, questions and services."""

from dataclasses import dataclass, field
from enum import Enum


class QuestionType(str, Enum):
    """Answer shape expected by a question."""
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    TEXT = "text"


@dataclass(frozen=True)
class QuestionOption:
    """A selectable choice of a question."""
    value: str
    label: str


@dataclass(frozen=True)
class Question:
    """A question shown to the user.

    ``goal_id`` scopes the question to a goal (None = shared by all goals)
    and ``order`` defines the catalog-level ordering used to pick the first
    question of a flow.
    """
    id: str
    text: str
    type: QuestionType = QuestionType.SINGLE_CHOICE
    options: tuple[QuestionOption, ...] = ()
    description: str = ""
    goal_id: str | None = None
    order: int = 0


@dataclass(frozen=True)
class Goal:
    """A goal the user can select at the start of a flow."""
    id: str
    title: str
    description: str | None = None
    order: int = 0


@dataclass(frozen=True)
class Service:
    """A recommended service attached to a goal."""
    id: str
    name: str
    description: str | None = None
    docs_url: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)
    goal_id: str | None = None
