"""Pydantic schemas for API request/response validation."""

from serviceflow.schemas.catalog import (
    GoalListResponse,
    GoalRead,
    QuestionListResponse,
    QuestionOptionRead,
    QuestionRead,
    ServiceListResponse,
    ServiceRead,
)
from serviceflow.schemas.flow import (
    AnswerIn,
    FlowErrorDetail,
    FlowNextRequest,
    FlowResponse,
    FlowStartRequest,
    QuestionNodeRead,
    ResultNodeRead,
)

__all__ = [
    "GoalRead",
    "QuestionRead",
    "QuestionOptionRead",
    "ServiceRead",
    "GoalListResponse",
    "QuestionListResponse",
    "ServiceListResponse",
    "AnswerIn",
    "FlowStartRequest",
    "FlowNextRequest",
    "FlowResponse",
    "FlowErrorDetail",
    "QuestionNodeRead",
    "ResultNodeRead",
]
