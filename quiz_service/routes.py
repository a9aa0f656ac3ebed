import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from shared.database import db_dependency
from shared.identity import current_user_id, unauthorized
from .crud import (
    get_result_by_public_id,
    list_questions,
    list_results_for_user,
    save_result,
)
from .schemas import (
    QuestionOut,
    QuizResultDetailOut,
    QuizResultIn,
    QuizResultOut,
    QuizResultSavedOut,
)

logger = logging.getLogger("quiz-service")

QUIZ_CATEGORIES = ("interest", "aptitude", "personality", "comprehensive")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/questions", response_model=list[QuestionOut])
    def get_questions(category: str | None = None, db: Session = Depends(get_db)):
        if not category:
            return _error(400, "Category parameter is required")
        if category not in QUIZ_CATEGORIES:
            return _error(400, "Invalid category")

        # comprehensive draws from every category
        questions = list_questions(db, None if category == "comprehensive" else category)
        return [QuestionOut.model_validate(q) for q in questions]

    @router.post("/results", response_model=QuizResultSavedOut)
    def create_result(payload: QuizResultIn, request: Request, db: Session = Depends(get_db)):
        if not (payload.quiz_type or "").strip() or payload.answers is None or payload.results is None:
            logger.warning(
                "Missing required fields: quizType=%s answers=%s results=%s",
                bool(payload.quiz_type), payload.answers is not None, payload.results is not None,
            )
            return _error(400, "Missing required fields")

        uid = current_user_id(request)
        r = save_result(
            db,
            user_id=uid,
            quiz_type=payload.quiz_type,
            answers=payload.answers,
            results=payload.results,
            recommended_streams=payload.recommended_streams,
        )
        logger.info("Quiz result saved: %s (type=%s, user=%s)", r.result_id, r.quiz_type, uid)
        return QuizResultSavedOut(result_id=r.result_id, id=r.id)

    @router.get("/results", response_model=list[QuizResultOut])
    def my_results(request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        if not uid:
            return unauthorized()
        return [QuizResultOut.model_validate(r) for r in list_results_for_user(db, uid)]

    @router.get("/results/{result_id}", response_model=QuizResultDetailOut)
    def get_result(result_id: str, db: Session = Depends(get_db)):
        r = get_result_by_public_id(db, result_id)
        if not r:
            return _error(404, "Quiz result not found")
        return QuizResultDetailOut.model_validate(r)

    return router
