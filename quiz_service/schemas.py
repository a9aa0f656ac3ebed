from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class QuestionOut(CamelModel):
    id: str
    category: str | None = None
    section: str | None = None
    text: str = ""
    options: list[dict] = Field(default_factory=list)
    order: int = 0


class QuizResultIn(CamelModel):
    # all optional so the route can answer 400 with its own message
    quiz_type: str | None = None
    answers: dict[str, Any] | list[Any] | None = None
    results: dict[str, Any] | list[Any] | None = None
    recommended_streams: list[dict] | None = None


class QuizResultSavedOut(CamelModel):
    result_id: str
    id: str


class QuizResultOut(CamelModel):
    id: str
    result_id: str
    user_id: str | None = None
    quiz_type: str
    results: dict[str, Any] | list[Any] | None = None
    recommended_streams: list[dict] = Field(default_factory=list)
    recommendation_id: str | None = None
    created_at: datetime | None = None


class QuizResultDetailOut(QuizResultOut):
    answers: list[dict] = Field(default_factory=list)
