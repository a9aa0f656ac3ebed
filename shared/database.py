import os
import uuid
from typing import Any, Iterable

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./guidance.db")


class Base(DeclarativeBase):
    pass


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_id(value: Any) -> str | None:
    """
    Collapse the shapes a stored reference can take into one string id.
    Accepts uuid.UUID, ints, plain strings and {"$oid": "..."} wrappers
    exported from document stores.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("$oid") or value.get("id") or value.get("_id")
        if value is None:
            return None
    s = str(value).strip()
    return s or None


def normalize_ids(values: Iterable[Any] | None) -> set[str]:
    out = set()
    for v in values or []:
        s = normalize_id(v)
        if s:
            out.add(s)
    return out


def make_engine(url: str | None = None) -> Engine:
    url = url or DATABASE_URL
    kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # sessions are handed to worker threads by the entity fetcher
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_schema(engine: Engine) -> None:
    # import for side effects: registers every model on Base.metadata
    import catalog.models  # noqa: F401
    import quiz_service.models  # noqa: F401
    import recommendation_engine.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def db_dependency(SessionLocal):
    def get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    return get_db
