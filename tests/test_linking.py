import asyncio
import uuid
from types import SimpleNamespace

from quiz_service.crud import list_linking_questions
from quiz_service.models import QuizQuestion
from recommendation_engine.linking import LinkedIds, collect_linked_ids, resolve_linked_ids
from recommendation_engine.store import CatalogStore
from shared.database import normalize_ids


def linking_question(**kw):
    base = {"related_courses": [], "related_careers": [], "related_streams": [], "interest_tags": []}
    base.update(kw)
    return SimpleNamespace(**base)


def test_collect_linked_ids_normalizes_reference_shapes() -> None:
    course = uuid.UUID("8a6e0804-2bd0-4672-b79d-d97027f9071a")
    links = collect_linked_ids([
        linking_question(related_courses=[course, None, ""], related_careers=[{"$oid": "career-1"}]),
        linking_question(related_courses=[str(course)], related_streams=[7], interest_tags=[" tech "]),
    ])

    assert links.course_ids == {str(course)}
    assert links.career_ids == {"career-1"}
    assert links.stream_ids == {"7"}
    assert links.interest_ids == {"tech"}
    assert not links.is_empty()
    assert LinkedIds().is_empty()


def test_list_linking_questions_matches_option_tags(seeded) -> None:
    with seeded() as db:
        assert [q.id for q in list_linking_questions(db, ["technology"])] == ["q-stem"]
        assert [q.id for q in list_linking_questions(db, ["DESIGN"])] == ["q-arts"]
        assert list_linking_questions(db, ["philately"]) == []


def test_empty_tags_use_every_active_interest_question(seeded) -> None:
    with seeded() as db:
        assert [q.id for q in list_linking_questions(db, [])] == ["q-stem", "q-arts"]


def test_resolve_linked_ids_from_store(seeded) -> None:
    links = asyncio.run(resolve_linked_ids(CatalogStore(seeded), ["technology", "science"]))
    assert links.course_ids == {"course-bsc", "course-btech", "course-old"}
    assert links.career_ids == {"career-swe"}
    assert links.stream_ids == {"stream-sci"}
    assert links.interest_ids == {"interest-tech"}


def test_resolve_linked_ids_without_tags_links_everything(seeded) -> None:
    links = asyncio.run(resolve_linked_ids(CatalogStore(seeded), []))
    assert "course-ba" in links.course_ids
    assert "course-bsc" in links.course_ids
    # inactive questions never contribute
    assert links.course_ids == {"course-bsc", "course-btech", "course-old", "course-ba"}


def test_option_tags_are_mirrored_for_lookup(seeded) -> None:
    with seeded() as db:
        q = db.get(QuizQuestion, "q-stem")
        assert sorted(q.tags) == ["mathematics", "technology"]

        q.options = [{"key": "b", "tags": ["Law", " "]}]
        db.commit()

        assert [x.id for x in list_linking_questions(db, ["law"])] == ["q-stem"]
        assert list_linking_questions(db, ["technology"]) == []


def test_linking_questions_are_capped(seeded) -> None:
    with seeded() as db:
        assert [q.id for q in list_linking_questions(db, [], limit=1)] == ["q-stem"]


def test_normalize_ids_collapses_reference_shapes() -> None:
    ref = uuid.UUID("8a6e0804-2bd0-4672-b79d-d97027f9071a")
    assert normalize_ids([ref, str(ref), {"$oid": "x"}, None, " "]) == {str(ref), "x"}
    assert normalize_ids(None) == set()
