"""Pydantic schemas for flow turns."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from serviceflow.flow.models import Answer, FlowTurn, QuestionNode, ResultNode
from serviceflow.schemas.catalog import GoalRead, QuestionRead, ServiceRead


def _goal_id_to_str(value: str | int | None) -> str | None:
    # Goal ids may arrive as numbers from older clients
    return None if value is None else str(value)


class AnswerIn(BaseModel):
    """Schema for one answer in the submitted history."""

    question_id: str = Field(..., alias="questionId", min_length=1)
    value: str | list[str]

    model_config = ConfigDict(populate_by_name=True)

    def to_answer(self) -> Answer:
        return Answer(question_id=self.question_id, value=self.value)


class FlowStartRequest(BaseModel):
    """Schema for starting a flow."""

    goal_id: str | None = Field(default=None, alias="goalId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("goal_id", mode="before")
    @classmethod
    def normalize_goal_id(cls, value: str | int | None) -> str | None:
        return _goal_id_to_str(value)


class FlowNextRequest(BaseModel):
    """Schema for requesting the node after the last answer."""

    goal_id: str | None = Field(default=None, alias="goalId")
    answers: list[AnswerIn] = Field(
        default_factory=list,
        description="Every answer given so far, oldest first",
    )

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("goal_id", mode="before")
    @classmethod
    def normalize_goal_id(cls, value: str | int | None) -> str | None:
        return _goal_id_to_str(value)


class QuestionNodeRead(BaseModel):
    """A question to ask next."""

    type: Literal["question"] = "question"
    question: QuestionRead


class ResultNodeRead(BaseModel):
    """Terminal recommendations."""

    type: Literal["result"] = "result"
    summary: str
    services: list[ServiceRead]
    goals: list[GoalRead]
    goal_ids: list[str] = Field(alias="goalIds")

    model_config = ConfigDict(populate_by_name=True)


class FlowResponse(BaseModel):
    """Response of a flow turn; ``node`` is null when the flow is exhausted."""

    node: QuestionNodeRead | ResultNodeRead | None = None
    state: str

    @classmethod
    def from_turn(cls, turn: FlowTurn) -> "FlowResponse":
        node = turn.node
        if isinstance(node, QuestionNode):
            node_read = QuestionNodeRead(question=QuestionRead.from_entity(node.question))
        elif isinstance(node, ResultNode):
            node_read = ResultNodeRead(
                summary=node.summary,
                services=[ServiceRead.from_entity(s) for s in node.services],
                goals=[GoalRead.from_entity(g) for g in node.goals],
                goal_ids=node.goal_ids,
            )
        else:
            node_read = None
        return cls(node=node_read, state=turn.state.value)


class FlowErrorDetail(BaseModel):
    """Error body returned when a turn cannot be resolved."""

    code: str
    message: str
    retryable: bool = False
