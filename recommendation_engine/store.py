"""
Async read interface over the catalog and quiz tables.

Each call runs its query in a worker thread with its own short-lived
session, so independent reads can be awaited together.
"""
from typing import Any, Callable, Iterable

from fastapi.concurrency import run_in_threadpool

from catalog import crud as catalog_crud
from quiz_service import crud as quiz_crud


class CatalogStore:
    def __init__(self, SessionLocal):
        self._session_factory = SessionLocal

    def _run(self, fn: Callable, *args) -> Any:
        with self._session_factory() as db:
            return fn(db, *args)

    async def _read(self, fn: Callable, *args) -> Any:
        return await run_in_threadpool(self._run, fn, *args)

    # quiz collaborator
    async def linking_questions(self, tags: Iterable[str]):
        return await self._read(quiz_crud.list_linking_questions, list(tags))

    async def questions_by_ids(self, ids: Iterable[str]):
        return await self._read(quiz_crud.get_questions_by_ids, list(ids))

    async def quiz_result(self, ref: str):
        return await self._read(quiz_crud.get_result, ref)

    async def latest_quiz_result(self, user_id: str):
        return await self._read(quiz_crud.latest_result_for_user, user_id)

    # entity domains
    async def courses(self, course_ids, limit: int):
        return await self._read(catalog_crud.find_courses, course_ids, limit)

    async def careers(self, career_ids, limit: int):
        return await self._read(catalog_crud.find_careers, career_ids, limit)

    async def programs(self, course_ids, limit: int):
        return await self._read(catalog_crud.find_programs, course_ids, limit)

    async def exams(self, course_ids, career_ids, interest_ids, limit: int):
        return await self._read(catalog_crud.find_exams, course_ids, career_ids, interest_ids, limit)

    async def interests(self, interest_ids, limit: int):
        return await self._read(catalog_crud.find_interests, interest_ids, limit)

    async def colleges(self, course_ids, stream_ids, limit: int):
        return await self._read(catalog_crud.find_colleges, course_ids, stream_ids, limit)
