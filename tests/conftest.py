import pytest
from fastapi.testclient import TestClient

from catalog.models import College, Course, Career, DegreeProgram, Exam, Interest
from gateway.main import create_app
from quiz_service.models import QuizQuestion
from shared.database import init_schema, make_engine, make_session_factory


def seed_catalog(db) -> None:
    db.add_all([
        Course(id="course-bsc", code="BSC-CS", name="B.Sc Computer Science", stream_id="stream-sci",
               tags=["Technology", "Computer Science"], description="Programming and systems"),
        Course(id="course-btech", code="BT-ME", name="B.Tech Mechanical", stream_id="stream-sci",
               tags=["Engineering", "Mechanics"]),
        Course(id="course-ba", code="BA-FA", name="BA Fine Arts", stream_id="stream-arts",
               tags=["Arts", "Design"]),
        Course(id="course-old", code="OLD", name="Archived Course", tags=["technology"], is_active=False),

        Career(id="career-swe", slug="software-engineer", name="Software Engineer",
               sectors=["Technology"], skills_required=["Mathematics"], growth_trend="Growing"),
        Career(id="career-designer", slug="graphic-designer", name="Graphic Designer",
               sectors=["Design"], skills_required=["Arts"]),

        Interest(id="interest-tech", name="Technology", slug="technology", popularity=10),
        Interest(id="interest-paint", name="Painting", slug="painting"),

        DegreeProgram(id="program-bsc", college_id="college-alpha", course_id="course-bsc",
                      code="ALPHA-BSC", name="Alpha B.Sc CS", medium=["English"],
                      fees={"tuitionPerYear": 20000, "currency": "INR"}),
        DegreeProgram(id="program-ba", college_id="college-delta", course_id="course-ba",
                      code="DELTA-BA", name="Delta BA Fine Arts"),

        # one college per linking path, plus decoys
        College(id="college-alpha", code="ALPHA", name="Alpha Institute", district="Pune", state="MH"),
        College(id="college-beta", code="BETA", name="Beta College", course_ids=["course-btech"]),
        College(id="college-gamma", code="GAMMA", name="Gamma College", stream_ids=["stream-sci"]),
        College(id="college-delta", code="DELTA", name="Delta Arts College"),
        College(id="college-closed", code="CLOSED", name="Closed College",
                course_ids=["course-bsc"], is_active=False),

        Exam(id="exam-course", name="Course Path Exam", authority="State Board", course_ids=["course-bsc"],
             tags=["technology"]),
        Exam(id="exam-career", name="Career Path Exam", career_ids=["career-swe"]),
        Exam(id="exam-interest", name="Interest Path Exam", interest_ids=["interest-tech"]),
        Exam(id="exam-arts", name="Arts Aptitude Test", course_ids=["course-ba"], tags=["arts"]),
    ])

    db.add_all([
        # linking questions
        QuizQuestion(
            id="q-stem", category="interest", text="Do you enjoy building things?", order=1,
            options=[{"key": "a", "text": "Yes", "weight": 1, "tags": ["Technology", "mathematics"]}],
            related_courses=["course-bsc", "course-btech", "course-old"],
            related_careers=["career-swe"],
            related_streams=["stream-sci"],
            interest_tags=["interest-tech"],
        ),
        QuizQuestion(
            id="q-arts", category="interest", text="Do you like to sketch?", order=2,
            options=[{"key": "a", "text": "Yes", "weight": 1, "tags": ["arts", "design"]}],
            related_courses=["course-ba"],
            related_careers=["career-designer"],
            related_streams=["stream-arts"],
            interest_tags=["interest-paint"],
        ),
        QuizQuestion(id="q-retired", category="interest", text="Retired", is_active=False,
                     options=[{"key": "a", "tags": ["technology"]}], related_courses=["course-ba"]),

        # scored questions
        QuizQuestion(id="s1", category="STEM", text="Solve puzzles", order=3),
        QuizQuestion(id="s2", category="STEM", text="Like experiments", order=4),
        QuizQuestion(id="s3", category="Arts", text="Visit galleries", order=5),
        QuizQuestion(id="s4", section="Commerce", text="Track budgets", order=6),
    ])
    db.commit()


@pytest.fixture()
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def SessionLocal(database_url):
    engine = make_engine(database_url)
    init_schema(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def seeded(SessionLocal):
    with SessionLocal() as db:
        seed_catalog(db)
    return SessionLocal


@pytest.fixture()
def client(database_url, seeded):
    with TestClient(create_app(database_url)) as c:
        yield c
