from datetime import datetime, timezone
from typing import Any, Iterable

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from shared.database import Base, new_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def option_tags(options: Iterable[Any] | None) -> set[str]:
    tags: set[str] = set()
    for opt in options or []:
        if not isinstance(opt, dict):
            continue
        for t in opt.get("tags") or []:
            s = str(t).strip().lower()
            if s:
                tags.add(s)
    return tags


class QuizQuestion(Base):
    __tablename__ = "quiz_question"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    # interest/aptitude/personality for linking questions, or a score label like "STEM"
    category: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    section: Mapped[str | None] = mapped_column(String(50), nullable=True)
    text: Mapped[str] = mapped_column(Text, default="")
    # [{"key": "a", "text": "...", "weight": 1, "tags": ["math", "science"]}]
    options: Mapped[list] = mapped_column(JSON, default=list)

    related_courses: Mapped[list] = mapped_column(JSON, default=list)
    related_careers: Mapped[list] = mapped_column(JSON, default=list)
    related_streams: Mapped[list] = mapped_column(JSON, default=list)
    interest_tags: Mapped[list] = mapped_column(JSON, default=list)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    order: Mapped[int] = mapped_column(Integer, default=0)

    # lowercased option tags, kept in step with `options`
    tag_links: Mapped[list["QuestionTag"]] = relationship(cascade="all, delete-orphan")
    tags: AssociationProxy[list[str]] = association_proxy(
        "tag_links", "tag", creator=lambda t: QuestionTag(tag=t),
    )

    @validates("options")
    def _sync_tags(self, key, options):
        self.tags = sorted(option_tags(options))
        return options


class QuestionTag(Base):
    __tablename__ = "quiz_question_tag"

    question_id: Mapped[str] = mapped_column(ForeignKey("quiz_question.id", ondelete="CASCADE"), primary_key=True)
    tag: Mapped[str] = mapped_column(String(120), primary_key=True, index=True)


class QuizResult(Base):
    __tablename__ = "quiz_result"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    result_id: Mapped[str] = mapped_column(String(36), unique=True, default=new_id)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    quiz_type: Mapped[str] = mapped_column(String(30), default="comprehensive")

    # [{"questionId": "...", "response": {"value": 4}}]
    answers: Mapped[list] = mapped_column(JSON, default=list)
    results: Mapped[dict | list | None] = mapped_column(JSON, nullable=True)
    # [{"stream": "Engineering", "streamId": "...", "score": 0.8}]
    recommended_streams: Mapped[list] = mapped_column(JSON, default=list)

    recommendation_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
