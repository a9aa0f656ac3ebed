from types import SimpleNamespace

from recommendation_engine.roadmap import build_roadmap_steps, review_step


def titles(steps) -> list[str]:
    return [s.title for s in steps]


def test_default_roadmap_has_seven_steps() -> None:
    steps = build_roadmap_steps()
    assert [s.key for s in steps] == ["onboarding", "assessment", "shortlist", "exams", "mentor", "apply", "track"]
    assert steps[0].as_dict() == {
        "key": "onboarding",
        "title": "Complete Profile",
        "description": "Fill your profile details",
        "category": "onboarding",
        "weight": 1,
    }


def test_review_step_follows_assessment() -> None:
    quiz = SimpleNamespace(recommended_streams=[{"stream": "Engineering"}, {"stream": "Science"}])
    steps = build_roadmap_steps(quiz)

    assert len(steps) == 8
    i = titles(steps).index("Review Results")
    assert titles(steps)[i - 1] == "Take Assessment"
    assert titles(steps)[i + 1] == "Shortlist Colleges & Programs"
    assert steps[i].description == "Top fit: Engineering, Science"
    assert steps[i].category == "analysis"


def test_review_step_reads_dicts_and_caps_streams() -> None:
    quiz = {"recommendedStreams": [{"stream": "A"}, {"stream": "B"}, {}, {"stream": "D"}]}
    assert review_step(quiz).description == "Top fit: A, B, Stream"


def test_no_streams_no_review_step() -> None:
    assert review_step(SimpleNamespace(recommended_streams=[])) is None
    assert review_step({}) is None
    assert len(build_roadmap_steps({"recommendedStreams": None})) == 7


def test_generation_is_deterministic() -> None:
    quiz = {"recommended_streams": [{"stream": "Commerce"}]}
    assert build_roadmap_steps(quiz) == build_roadmap_steps(quiz)
