USER = {"X-User-ID": "user-1"}


def test_questions_require_a_valid_category(client) -> None:
    r = client.get("/quizzes/questions")
    assert r.status_code == 400
    assert r.json() == {"error": "Category parameter is required"}

    r = client.get("/quizzes/questions", params={"category": "astrology"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid category"}


def test_questions_by_category(client) -> None:
    r = client.get("/quizzes/questions", params={"category": "interest"})
    assert r.status_code == 200
    assert [q["id"] for q in r.json()] == ["q-stem", "q-arts"]

    r = client.get("/quizzes/questions", params={"category": "comprehensive"})
    ids = [q["id"] for q in r.json()]
    assert ids == ["q-stem", "q-arts", "s1", "s2", "s3", "s4"]
    assert "q-retired" not in ids


def test_save_result_requires_fields(client) -> None:
    r = client.post("/quizzes/results", json={"quizType": "interest", "answers": {"s1": 4}})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}


def test_save_and_read_result(client) -> None:
    body = {
        "quizType": "interest",
        "answers": {"s1": 4, "s3": [1, 2]},
        "results": {"STEM": 4, "Arts": 1},
        "recommendedStreams": [{"stream": "Engineering", "score": 0.8}],
    }
    r = client.post("/quizzes/results", json=body, headers=USER)
    assert r.status_code == 200
    saved = r.json()
    assert saved["resultId"] and saved["id"]

    r = client.get(f"/quizzes/results/{saved['resultId']}")
    assert r.status_code == 200
    detail = r.json()
    assert detail["userId"] == "user-1"
    assert detail["results"] == {"STEM": 4, "Arts": 1}
    assert detail["answers"] == [
        {"questionId": "s1", "response": {"value": 4}},
        {"questionId": "s3", "response": {"optionKeys": [1, 2]}},
    ]

    r = client.get("/quizzes/results", headers=USER)
    assert [x["resultId"] for x in r.json()] == [saved["resultId"]]


def test_unknown_result_is_404(client) -> None:
    r = client.get("/quizzes/results/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"error": "Quiz result not found"}


def test_listing_results_needs_identity(client) -> None:
    r = client.get("/quizzes/results")
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_blank_quiz_type_is_rejected(client) -> None:
    r = client.post("/quizzes/results", json={"quizType": " ", "answers": {"s1": 4}, "results": {"STEM": 4}})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required fields"}
