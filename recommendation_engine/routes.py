import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from fastapi.concurrency import run_in_threadpool

from quiz_service.crud import get_result, latest_result_for_user
from shared.database import db_dependency
from shared.identity import current_user_id, unauthorized
from .crud import latest_recommendation, latest_roadmap
from .persistence import RecommendationRecorder
from .pipeline import RecommendationPipeline
from .roadmap import build_roadmap_steps
from .schemas import (
    GeneratedFrom,
    RecommendationRecordOut,
    RecommendIn,
    RecommendOut,
    RoadmapIn,
    RoadmapOut,
)
from .store import CatalogStore

logger = logging.getLogger("recommendation-engine")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _roadmap_out(r) -> RoadmapOut:
    return RoadmapOut(
        id=r.id,
        user_id=r.user_id,
        steps=list(r.steps or []),
        generated_from=GeneratedFrom.model_validate(r.generated_from or {}),
        created_at=r.created_at,
    )


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)
    pipeline = RecommendationPipeline(CatalogStore(SessionLocal))
    recorder = RecommendationRecorder(SessionLocal)

    # -------------------------
    # Recommendations
    # -------------------------

    @router.post("/recommendations", response_model=RecommendOut, response_model_exclude_unset=True)
    async def recommend(payload: RecommendIn, request: Request, background_tasks: BackgroundTasks):
        if not (payload.quiz_type or "").strip():
            return _error(400, "quizType is required")

        try:
            result = await pipeline.run(payload)
        except Exception:
            logger.exception("Recommendation pipeline failed (quizType=%s)", payload.quiz_type)
            return _error(500, "Failed to generate recommendations")

        response = result.payload()

        # best-effort; a failed write only drops recommendationId
        if result.top_categories:
            rec_id = await run_in_threadpool(
                lambda: recorder.save(
                    user_id=current_user_id(request),
                    payload=response,
                    rationale=result.rationale,
                    quiz_result_id=result.quiz_result_id,
                )
            )
            if rec_id:
                response["recommendationId"] = rec_id
                if result.quiz_result_id:
                    background_tasks.add_task(recorder.link_quiz_result, result.quiz_result_id, rec_id)

        return RecommendOut.model_validate(response)

    @router.get("/recommendations/latest", response_model=RecommendationRecordOut)
    def my_latest_recommendation(request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        if not uid:
            return unauthorized()
        rec = latest_recommendation(db, uid)
        if not rec:
            return _error(404, "No recommendations yet")
        return RecommendationRecordOut.model_validate(rec)

    # -------------------------
    # Roadmap
    # -------------------------

    @router.get("/roadmap", response_model=RoadmapOut, response_model_exclude_none=True)
    def get_roadmap(request: Request, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        if not uid:
            return unauthorized()

        try:
            existing = latest_roadmap(db, uid)
            if existing:
                return _roadmap_out(existing)
            latest_quiz = latest_result_for_user(db, uid)
        except Exception:
            logger.exception("GET /roadmap failed for user %s", uid)
            return _error(500, "Failed to fetch roadmap")

        steps = [s.as_dict() for s in build_roadmap_steps(latest_quiz)]
        generated_from = {
            "quizResultId": latest_quiz.id if latest_quiz else None,
            "rationale": "Auto-generated initial roadmap",
        }
        created = recorder.save_roadmap(user_id=uid, generated_from=generated_from, steps=steps)
        if created:
            return _roadmap_out(created)
        return RoadmapOut(user_id=uid, steps=steps, generated_from=GeneratedFrom.model_validate(generated_from))

    @router.post("/roadmap", response_model=RoadmapOut, response_model_exclude_none=True)
    def regenerate_roadmap(request: Request, payload: RoadmapIn | None = None, db: Session = Depends(get_db)):
        uid = current_user_id(request)
        if not uid:
            return unauthorized()
        payload = payload or RoadmapIn()

        try:
            if payload.quiz_result_id:
                quiz = get_result(db, payload.quiz_result_id)
            else:
                quiz = latest_result_for_user(db, uid)
        except Exception:
            logger.exception("POST /roadmap failed for user %s", uid)
            return _error(500, "Failed to save roadmap")

        if payload.steps:
            steps = [s.model_dump() for s in payload.steps]
        else:
            steps = [s.as_dict() for s in build_roadmap_steps(quiz)]

        generated_from = {
            "quizResultId": quiz.id if quiz else None,
            "rationale": "User-triggered generation",
        }
        created = recorder.save_roadmap(user_id=uid, generated_from=generated_from, steps=steps)
        if created:
            return _roadmap_out(created)
        return RoadmapOut(user_id=uid, steps=steps, generated_from=GeneratedFrom.model_validate(generated_from))

    return router
