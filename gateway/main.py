from __future__ import annotations

import os
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.database import init_schema, make_engine, make_session_factory
from shared.identity import identity_middleware
from quiz_service.routes import build_router as build_quiz_router
from recommendation_engine.routes import build_router as build_recommendation_router

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("api-gateway")


# -------------------------
# Helpers / Config
# -------------------------

def _parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw:
        return ["*"]
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(database_url: str | None = None) -> FastAPI:
    app = FastAPI(title="Guidance API", version="1.0.0")

    engine = make_engine(database_url)
    init_schema(engine)
    SessionLocal = make_session_factory(engine)
    app.state.session_factory = SessionLocal

    origins = _parse_origins(os.getenv("CORS_ORIGINS", "*"))
    allow_credentials = True
    if origins == ["*"]:
        # Browsers reject "*" with credentials
        allow_credentials = False

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(identity_middleware)

    @app.get("/health", operation_id="health_check", tags=["Health"])
    async def health_check():
        return {"status": "healthy", "service": "guidance-api"}

    @app.get("/", operation_id="root", tags=["Root"])
    async def root():
        return {
            "service": "Guidance API",
            "version": "1.0.0",
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    app.include_router(build_quiz_router(SessionLocal), prefix="/quizzes", tags=["Quiz"])
    app.include_router(build_recommendation_router(SessionLocal), tags=["Recommendations"])

    logger.info("Guidance API ready (database=%s)", engine.url.render_as_string(hide_password=True))
    return app


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(create_app(), host="0.0.0.0", port=port)
