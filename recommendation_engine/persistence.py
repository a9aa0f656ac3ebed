"""
Best-effort recording of computed recommendations.

Nothing here may fail a request. Every write catches and logs its own
errors; callers only ever see an id or None.
"""
import logging

from quiz_service.crud import set_recommendation_id
from .crud import create_recommendation, create_roadmap

logger = logging.getLogger("recommendation-engine")


def positional_scores(items: list[dict], key: str) -> list[dict]:
    n = len(items)
    return [{key: item["id"], "score": round((n - i) / n, 4)} for i, item in enumerate(items)]


class RecommendationRecorder:
    def __init__(self, SessionLocal):
        self._session_factory = SessionLocal

    def save(
        self,
        *,
        user_id: str | None,
        payload: dict,
        rationale: str,
        quiz_result_id: str | None = None,
    ) -> str | None:
        if not user_id:
            logger.info("No user identity; recommendation not persisted")
            return None
        try:
            with self._session_factory() as db:
                rec = create_recommendation(
                    db,
                    user_id=user_id,
                    courses=positional_scores(payload.get("courses", []), "courseId"),
                    programs=positional_scores(payload.get("programs", []), "programId"),
                    rationale=rationale,
                    quiz_result_id=quiz_result_id,
                )
            logger.info("Recommendation %s saved for user %s", rec.id, user_id)
            return rec.id
        except Exception:
            logger.exception("Failed to persist recommendation for user %s", user_id)
            return None

    def link_quiz_result(self, quiz_result_id: str, recommendation_id: str) -> bool:
        try:
            with self._session_factory() as db:
                linked = set_recommendation_id(db, quiz_result_id, recommendation_id)
            if not linked:
                logger.warning("Quiz result %s not found; recommendation %s not linked", quiz_result_id, recommendation_id)
            return linked
        except Exception:
            logger.exception("Failed to link recommendation %s to quiz result %s", recommendation_id, quiz_result_id)
            return False

    def save_roadmap(self, *, user_id: str, generated_from: dict, steps: list[dict]):
        try:
            with self._session_factory() as db:
                return create_roadmap(db, user_id=user_id, generated_from=generated_from, steps=steps)
        except Exception:
            logger.exception("Error creating roadmap for user %s", user_id)
            return None
