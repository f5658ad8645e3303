"""Pydantic schemas for catalog records."""

from pydantic import BaseModel, ConfigDict, Field

from serviceflow.catalog.entities import Goal, Question, Service


class QuestionOptionRead(BaseModel):
    """Schema for a question option."""

    value: str
    label: str


class QuestionRead(BaseModel):
    """Schema for reading a question."""

    id: str
    text: str
    type: str
    options: list[QuestionOptionRead] = Field(default_factory=list)
    description: str = ""
    goal_id: str | None = Field(default=None, alias="goalId")
    order: int = 0

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, question: Question) -> "QuestionRead":
        return cls(
            id=question.id,
            text=question.text,
            type=question.type.value,
            options=[QuestionOptionRead(value=o.value, label=o.label) for o in question.options],
            description=question.description,
            goal_id=question.goal_id,
            order=question.order,
        )


class GoalRead(BaseModel):
    """Schema for reading a goal."""

    id: str
    title: str
    description: str | None = None
    order: int = 0

    @classmethod
    def from_entity(cls, goal: Goal) -> "GoalRead":
        return cls(id=goal.id, title=goal.title, description=goal.description, order=goal.order)


class ServiceRead(BaseModel):
    """Schema for reading a recommended service."""

    id: str
    name: str
    description: str | None = None
    docs_url: str | None = Field(default=None, alias="docsUrl")
    tags: list[str] = Field(default_factory=list)
    goal_id: str | None = Field(default=None, alias="goalId")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceRead":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            docs_url=service.docs_url,
            tags=list(service.tags),
            goal_id=service.goal_id,
        )


class GoalListResponse(BaseModel):
    """Goals with the source they were served from."""

    goals: list[GoalRead]
    source: str
    count: int


class QuestionListResponse(BaseModel):
    """Questions, optionally scoped to a goal."""

    source: str
    goal_id: str | None = Field(default=None, alias="goalId")
    count: int
    questions: list[QuestionRead]

    model_config = ConfigDict(populate_by_name=True)


class ServiceListResponse(BaseModel):
    """Services, optionally scoped to a goal."""

    source: str
    goal_id: str | None = Field(default=None, alias="goalId")
    count: int
    services: list[ServiceRead]

    model_config = ConfigDict(populate_by_name=True)
