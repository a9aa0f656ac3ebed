import asyncio
from dataclasses import dataclass, field

from .config import DOMAIN_RESULT_LIMIT
from .linking import LinkedIds

DOMAINS = ("courses", "careers", "programs", "exams", "interests", "colleges")


@dataclass
class EntityBundle:
    courses: list = field(default_factory=list)
    careers: list = field(default_factory=list)
    programs: list = field(default_factory=list)
    exams: list = field(default_factory=list)
    interests: list = field(default_factory=list)
    colleges: list = field(default_factory=list)


async def fetch_entities(store, links: LinkedIds, limit: int = DOMAIN_RESULT_LIMIT) -> EntityBundle:
    """
    The six domain reads are independent and run concurrently.
    An empty domain is normal; a failing read propagates.
    """
    if links.is_empty():
        return EntityBundle()

    results = await asyncio.gather(
        store.courses(links.course_ids, limit),
        store.careers(links.career_ids, limit),
        store.programs(links.course_ids, limit),
        store.exams(links.course_ids, links.career_ids, links.interest_ids, limit),
        store.interests(links.interest_ids, limit),
        store.colleges(links.course_ids, links.stream_ids, limit),
    )
    return EntityBundle(**dict(zip(DOMAINS, results)))
