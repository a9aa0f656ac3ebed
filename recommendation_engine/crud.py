from sqlalchemy.orm import Session

from .models import Recommendation, Roadmap


def create_recommendation(
    db: Session,
    *,
    user_id: str,
    courses: list[dict],
    programs: list[dict],
    rationale: str,
    quiz_result_id: str | None,
) -> Recommendation:
    rec = Recommendation(
        user_id=user_id,
        courses=courses,
        programs=programs,
        rationale=rationale,
        quiz_result_id=quiz_result_id,
    )
    db.add(rec)
    db.commit()
    db.refresh(rec)
    return rec


def latest_recommendation(db: Session, user_id: str) -> Recommendation | None:
    return (
        db.query(Recommendation)
        .filter(Recommendation.user_id == user_id)
        .order_by(Recommendation.generated_at.desc())
        .first()
    )


def latest_roadmap(db: Session, user_id: str) -> Roadmap | None:
    return (
        db.query(Roadmap)
        .filter(Roadmap.user_id == user_id)
        .order_by(Roadmap.created_at.desc())
        .first()
    )


def create_roadmap(db: Session, *, user_id: str, generated_from: dict, steps: list[dict]) -> Roadmap:
    r = Roadmap(user_id=user_id, generated_from=generated_from, steps=steps)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r
