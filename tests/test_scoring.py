from types import SimpleNamespace

from recommendation_engine.scoring import (
    CategoryScore,
    aggregate_answers,
    answer_value,
    clean_top_categories,
    explicit_top_categories,
    normalize_answer_set,
    parse_category_scores,
    top_categories,
    top_categories_from_results,
)


def question(category=None, section=None):
    return SimpleNamespace(category=category, section=section)


def test_normalize_answer_set_accepts_object_and_array_forms() -> None:
    assert normalize_answer_set({"q1": 5, "q2": {"value": 3}}) == {"q1": 5.0, "q2": 3.0}
    assert normalize_answer_set([
        {"questionId": "q1", "value": 4},
        {"questionId": "q2", "response": {"value": 2}},
        {"questionId": "q3", "response": None, "value": 1},
    ]) == {"q1": 4.0, "q2": 2.0, "q3": 1.0}


def test_normalize_answer_set_drops_unusable_entries() -> None:
    raw = {"q1": None, "q2": "often", "q3": True, "q4": 2}
    assert normalize_answer_set(raw) == {"q4": 2.0}
    assert normalize_answer_set("nonsense") == {}
    assert answer_value({"value": float("nan")}) is None


def test_aggregate_answers_averages_per_category() -> None:
    questions = {"s1": question("STEM"), "s2": question("STEM"), "s3": question("Arts")}
    scores = aggregate_answers({"s1": 5, "s2": 4, "s3": 2}, questions)

    by_label = {s.category: s for s in scores}
    assert by_label["STEM"].average == 4.5
    assert by_label["STEM"].total == 9
    assert by_label["STEM"].count == 2
    assert by_label["Arts"].average == 2
    assert top_categories(scores) == ["STEM", "Arts"]


def test_aggregate_answers_falls_back_to_section_and_skips_unknown_questions() -> None:
    questions = {"s4": question(section="Commerce"), "blank": question()}
    scores = aggregate_answers({"s4": 3, "blank": 5, "missing": 5}, questions)
    assert [s.as_dict() for s in scores] == [
        {"category": "Commerce", "average": 3.0, "total": 3.0, "count": 1},
    ]


def test_top_categories_keeps_input_order_on_ties_and_respects_limit() -> None:
    scores = [
        CategoryScore("Arts", 3, 3, 1),
        CategoryScore("Law", 3, 3, 1),
        CategoryScore("STEM", 5, 5, 1),
        CategoryScore("Sports", 1, 1, 1),
    ]
    assert top_categories(scores) == ["STEM", "Arts", "Law"]
    assert top_categories(scores, limit=1) == ["STEM"]
    assert top_categories([]) == []


def test_parse_category_scores_shapes() -> None:
    assert [s.category for s in parse_category_scores({"STEM": 5, "Arts": 1, "topCategories": ["Law"]})] == ["STEM", "Arts"]

    wrapped = parse_category_scores({"categoryScores": {"STEM": {"total": 9, "count": 2}}})
    assert wrapped[0].average == 4.5

    listed = parse_category_scores([
        {"category": "STEM", "average": 4.5},
        {"name": "Arts", "score": 2},
        {"category": "STEM", "average": 1},
        {"note": "no label"},
    ])
    assert [(s.category, s.average) for s in listed] == [("STEM", 4.5), ("Arts", 2.0)]

    assert parse_category_scores({"STEM": True}) == []


def test_explicit_top_categories_win_over_scores() -> None:
    results = {"STEM": 1, "Arts": 5, "topCategories": ["Law", "Law", " ", "Medical"]}
    scores, top = top_categories_from_results(results)
    assert top == ["Law", "Medical"]
    assert len(scores) == 2

    _, top = top_categories_from_results({"STEM": 1, "Arts": 5})
    assert top == ["Arts", "STEM"]


def test_clean_top_categories_caps_and_dedupes() -> None:
    assert clean_top_categories(["STEM", "Arts", "STEM", "Law", "Medical"]) == ["STEM", "Arts", "Law"]
    assert clean_top_categories([{"category": "Arts"}, None]) == ["Arts"]
    assert clean_top_categories("STEM") == []


def test_caller_top_categories_are_ranked_when_scored() -> None:
    scores, top = explicit_top_categories({"Arts": 1, "STEM": 5})
    assert top == ["STEM", "Arts"]
    assert [s.category for s in scores] == ["Arts", "STEM"]

    _, top = explicit_top_categories([{"category": "Arts", "score": 1}, {"category": "STEM", "average": 5}])
    assert top == ["STEM", "Arts"]


def test_caller_label_lists_keep_their_order() -> None:
    assert explicit_top_categories(["Arts", "STEM"]) == ([], ["Arts", "STEM"])
    assert explicit_top_categories([{"category": "Law"}, {"category": "STEM"}]) == ([], ["Law", "STEM"])
    assert explicit_top_categories(None) == ([], [])
