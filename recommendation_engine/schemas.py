from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RecommendIn(CamelModel):
    # required, but validated in the route so the 400 carries a readable message
    quiz_type: str | None = None

    top_categories: dict[str, Any] | list[Any] | None = None
    category_scores: dict[str, Any] | list[Any] | None = None
    results: dict[str, Any] | list[Any] | None = None
    quiz_result_id: str | None = None
    result_id: str | None = None
    answers: dict[str, Any] | list[Any] | None = None


class RecommendOut(CamelModel):
    courses: list[dict] = Field(default_factory=list)
    careers: list[dict] = Field(default_factory=list)
    programs: list[dict] = Field(default_factory=list)
    exams: list[dict] = Field(default_factory=list)
    interests: list[dict] = Field(default_factory=list)
    colleges: list[dict] = Field(default_factory=list)
    top_categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    recommendation_id: str | None = None


class RecommendationRecordOut(CamelModel):
    id: str
    user_id: str
    generated_at: datetime | None = None
    courses: list[dict] = Field(default_factory=list)
    programs: list[dict] = Field(default_factory=list)
    rationale: str = ""
    quiz_result_id: str | None = None


class RoadmapStepIn(CamelModel):
    key: str
    title: str
    description: str = ""
    category: str = "general"
    weight: float = 0.5


class RoadmapIn(CamelModel):
    steps: list[RoadmapStepIn] | None = None
    quiz_result_id: str | None = None


class GeneratedFrom(CamelModel):
    quiz_result_id: str | None = None
    rationale: str = ""


class RoadmapOut(CamelModel):
    id: str | None = None
    user_id: str
    steps: list[dict] = Field(default_factory=list)
    generated_from: GeneratedFrom
    created_at: datetime | None = None
