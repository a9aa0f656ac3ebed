import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from shared.database import normalize_ids

logger = logging.getLogger("recommendation-engine")


@dataclass
class LinkedIds:
    course_ids: set[str] = field(default_factory=set)
    career_ids: set[str] = field(default_factory=set)
    stream_ids: set[str] = field(default_factory=set)
    interest_ids: set[str] = field(default_factory=set)

    def is_empty(self) -> bool:
        return not (self.course_ids or self.career_ids or self.stream_ids or self.interest_ids)


def collect_linked_ids(questions: Iterable[Any]) -> LinkedIds:
    links = LinkedIds()
    for q in questions:
        links.course_ids |= normalize_ids(q.related_courses)
        links.career_ids |= normalize_ids(q.related_careers)
        links.stream_ids |= normalize_ids(q.related_streams)
        links.interest_ids |= normalize_ids(q.interest_tags)
    return links


async def resolve_linked_ids(store, tags: Iterable[str]) -> LinkedIds:
    """
    Linking questions whose option tags meet `tags`; with no tags every
    active interest question is used so an unmapped category still
    yields candidates.
    """
    tags = list(tags)
    questions = await store.linking_questions(tags)
    links = collect_linked_ids(questions)
    logger.info(
        "Linked %d questions (tags=%d): courses=%d careers=%d streams=%d interests=%d",
        len(questions), len(tags), len(links.course_ids), len(links.career_ids),
        len(links.stream_ids), len(links.interest_ids),
    )
    return links
