from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.database import Base, new_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Recommendation(Base):
    __tablename__ = "recommendation"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    generated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    courses: Mapped[list] = mapped_column(JSON, default=list)    # [{"courseId": ..., "score": ...}]
    programs: Mapped[list] = mapped_column(JSON, default=list)   # [{"programId": ..., "score": ...}]
    rationale: Mapped[str] = mapped_column(Text, default="")

    quiz_result_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)


class Roadmap(Base):
    __tablename__ = "roadmap"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True)
    # {"quizResultId": ..., "rationale": ...}
    generated_from: Mapped[dict] = mapped_column(JSON, default=dict)
    steps: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
