from typing import Any, Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .models import QuestionTag, QuizQuestion, QuizResult

LINKING_CATEGORY = "interest"
LINKING_QUESTION_LIMIT = 500


def list_questions(db: Session, category: str | None = None) -> list[QuizQuestion]:
    q = db.query(QuizQuestion).filter(QuizQuestion.is_active.is_(True))
    if category:
        q = q.filter(QuizQuestion.category == category)
    return q.order_by(QuizQuestion.order.asc(), QuizQuestion.id.asc()).all()


def get_questions_by_ids(db: Session, ids: Iterable[str]) -> dict[str, QuizQuestion]:
    ids = list(ids)
    if not ids:
        return {}
    rows = db.query(QuizQuestion).filter(QuizQuestion.id.in_(ids)).all()
    return {q.id: q for q in rows}


def list_linking_questions(
    db: Session,
    tags: Iterable[str] | None = None,
    limit: int = LINKING_QUESTION_LIMIT,
) -> list[QuizQuestion]:
    """
    Active interest questions whose option tags intersect `tags`.
    An empty tag set matches every active interest question.
    """
    q = db.query(QuizQuestion).filter(
        QuizQuestion.is_active.is_(True), QuizQuestion.category == LINKING_CATEGORY,
    )
    wanted = {str(t).strip().lower() for t in (tags or []) if str(t).strip()}
    if wanted:
        q = q.filter(QuizQuestion.tag_links.any(QuestionTag.tag.in_(wanted)))
    return q.order_by(QuizQuestion.order.asc(), QuizQuestion.id.asc()).limit(limit).all()


def normalize_answers(raw: Any) -> list[dict]:
    # Accepts either {questionId: value} or [{questionId, response|value|optionKeys}]
    if isinstance(raw, list):
        out = []
        for a in raw:
            if not isinstance(a, dict) or not a.get("questionId"):
                continue
            response = a.get("response")
            if response is None and ("optionKeys" in a or "value" in a):
                response = {"optionKeys": a.get("optionKeys"), "value": a.get("value")}
            item = {"questionId": str(a["questionId"]), "response": response}
            if isinstance(a.get("isCorrect"), bool):
                item["isCorrect"] = a["isCorrect"]
            out.append(item)
        return out

    out = []
    for question_id, val in (raw or {}).items():
        if isinstance(val, bool):
            response: Any = {"value": int(val)}
        elif isinstance(val, (int, float)):
            response = {"value": val}
        elif isinstance(val, list):
            response = {"optionKeys": val}
        else:
            response = val
        out.append({"questionId": str(question_id), "response": response})
    return out


def save_result(
    db: Session,
    *,
    user_id: str | None,
    quiz_type: str,
    answers: Any,
    results: Any,
    recommended_streams: list[dict] | None = None,
) -> QuizResult:
    r = QuizResult(
        user_id=user_id,
        quiz_type=quiz_type,
        answers=normalize_answers(answers),
        results=results,
        recommended_streams=list(recommended_streams or []),
    )
    db.add(r)
    db.commit()
    db.refresh(r)
    return r


def get_result(db: Session, ref: str) -> QuizResult | None:
    # a reference may be the primary id or the public resultId
    return (
        db.query(QuizResult)
        .filter(or_(QuizResult.id == ref, QuizResult.result_id == ref))
        .first()
    )


def get_result_by_public_id(db: Session, result_id: str) -> QuizResult | None:
    return db.query(QuizResult).filter(QuizResult.result_id == result_id).first()


def list_results_for_user(db: Session, user_id: str) -> list[QuizResult]:
    return (
        db.query(QuizResult)
        .filter(QuizResult.user_id == user_id)
        .order_by(QuizResult.created_at.desc())
        .all()
    )


def latest_result_for_user(db: Session, user_id: str) -> QuizResult | None:
    return (
        db.query(QuizResult)
        .filter(QuizResult.user_id == user_id)
        .order_by(QuizResult.created_at.desc())
        .first()
    )


def set_recommendation_id(db: Session, quiz_result_id: str, recommendation_id: str) -> bool:
    r = get_result(db, quiz_result_id)
    if not r:
        return False
    r.recommendation_id = recommendation_id
    db.commit()
    return True
