"""
Test Exam Routes
Sampling, submission, seeding and attempt history through the FastAPI app.
"""
from unittest.mock import MagicMock

from pymongo.errors import ServerSelectionTimeoutError


def _correct_option_id(db, question_id):
    doc = next(d for d in db.questions.docs if d["id"] == question_id)
    return next(opt["id"] for opt in doc["options"] if opt["isCorrect"])


def _wrong_option_id(db, question_id):
    doc = next(d for d in db.questions.docs if d["id"] == question_id)
    return next(opt["id"] for opt in doc["options"] if not opt["isCorrect"])


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_questions_require_auth(client, seeded_db):
    response = client.get("/api/exam/questions")
    assert response.status_code == 401


def test_sampling_returns_distinct_questions_without_answers(client, seeded_db, auth_headers):
    response = client.get("/api/exam/questions?limit=10", headers=auth_headers)

    assert response.status_code == 200
    questions = response.json()["questions"]
    assert len(questions) == 10
    assert len({q["id"] for q in questions}) == 10
    for question in questions:
        assert set(question) == {"id", "text", "options", "category", "difficulty"}
        for option in question["options"]:
            assert set(option) == {"id", "text"}
    assert "isCorrect" not in response.text


def test_sampling_small_store_returns_what_exists(client, seeded_db, auth_headers):
    seeded_db.questions.docs = seeded_db.questions.docs[:3]

    response = client.get("/api/exam/questions?limit=10", headers=auth_headers)

    assert response.status_code == 200
    assert len(response.json()["questions"]) == 3


def test_sampling_empty_store(client, fake_db, auth_headers):
    response = client.get("/api/exam/questions", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"questions": []}


def test_invalid_limit_falls_back_to_default(client, seeded_db, auth_headers):
    for limit in ("abc", "0", "-4"):
        response = client.get(f"/api/exam/questions?limit={limit}", headers=auth_headers)
        assert response.status_code == 200
        assert len(response.json()["questions"]) == 10


def test_sampling_dedupes_repeated_documents(client, seeded_db, auth_headers):
    doc = seeded_db.questions.docs[0]
    cursor = MagicMock()

    async def to_list(length):
        return [doc, doc, doc]

    cursor.to_list = to_list
    seeded_db.questions.aggregate = MagicMock(return_value=cursor)

    response = client.get("/api/exam/questions?limit=3", headers=auth_headers)

    assert [q["id"] for q in response.json()["questions"]] == [doc["id"]]
    seeded_db.questions.aggregate.assert_called_once_with([{"$sample": {"size": 3}}])


def test_sampling_database_error_returns_500(client, seeded_db, auth_headers):
    seeded_db.questions.aggregate = MagicMock(side_effect=ServerSelectionTimeoutError("down"))

    response = client.get("/api/exam/questions", headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Error fetching questions"


def test_submit_all_correct(client, seeded_db, auth_headers):
    questions = client.get("/api/exam/questions?limit=10", headers=auth_headers).json()["questions"]
    answers = [
        {"questionId": q["id"], "selectedOptionId": _correct_option_id(seeded_db, q["id"])}
        for q in questions
    ]

    response = client.post("/api/exam/submit", json={"answers": answers}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 10
    assert body["totalQuestions"] == 10
    assert body["percentage"] == 100
    assert body["passed"] is True
    assert len(body["results"]) == 10
    assert set(body["results"][0]) == {
        "questionId", "questionText", "selectedOptionText", "correctOptionText", "isCorrect",
    }


def test_submit_half_correct_fails(client, seeded_db, auth_headers):
    ids = [d["id"] for d in seeded_db.questions.docs[:10]]
    answers = [
        {
            "questionId": qid,
            "selectedOptionId": _correct_option_id(seeded_db, qid) if i < 5 else _wrong_option_id(seeded_db, qid),
        }
        for i, qid in enumerate(ids)
    ]

    body = client.post("/api/exam/submit", json={"answers": answers}, headers=auth_headers).json()

    assert body["score"] == 5
    assert body["percentage"] == 50
    assert body["passed"] is False


def test_submit_unknown_question_is_skipped(client, seeded_db, auth_headers):
    qid = seeded_db.questions.docs[0]["id"]
    answers = [
        {"questionId": qid, "selectedOptionId": _correct_option_id(seeded_db, qid)},
        {"questionId": "missing", "selectedOptionId": "nope"},
    ]

    body = client.post("/api/exam/submit", json={"answers": answers}, headers=auth_headers).json()

    assert body["score"] == 1
    assert body["totalQuestions"] == 1
    assert [r["questionId"] for r in body["results"]] == [qid]


def test_submit_empty_answers(client, seeded_db, auth_headers):
    response = client.post("/api/exam/submit", json={"answers": []}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "score": 0, "totalQuestions": 0, "percentage": 0, "passed": False, "results": [],
    }


def test_submit_rejects_malformed_body(client, seeded_db, auth_headers):
    for body in ({}, {"answers": "all of them"}, {"answers": [1, 2]}, [{"questionId": "x"}]):
        response = client.post("/api/exam/submit", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid answers format"

    for raw in (b"{not json", b"", b"\xff\xfe"):
        response = client.post(
            "/api/exam/submit",
            content=raw,
            headers={**auth_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid answers format"


def test_submit_requires_auth(client, seeded_db):
    response = client.post("/api/exam/submit", json={"answers": []})
    assert response.status_code == 401


def test_submit_records_attempt(client, seeded_db, auth_headers):
    qid = seeded_db.questions.docs[0]["id"]
    client.post("/api/exam/submit", json={"answers": [
        {"questionId": qid, "selectedOptionId": _correct_option_id(seeded_db, qid)},
    ]}, headers=auth_headers)
    client.post("/api/exam/submit", json={"answers": []}, headers=auth_headers)

    user = seeded_db.users.docs[0]
    assert len(user["examAttempts"]) == 2
    first = user["examAttempts"][0]
    assert first["examId"].startswith("exam_")
    assert first["score"] == 1
    assert first["totalQuestions"] == 1
    assert "completedAt" in first

    history = client.get("/api/exam/attempts", headers=auth_headers).json()["attempts"]
    assert [a["totalQuestions"] for a in history] == [0, 1]
    assert set(history[0]) == {"examId", "score", "totalQuestions", "completedAt"}


def test_submit_database_error_returns_500(client, seeded_db, auth_headers):
    seeded_db.questions.find = MagicMock(side_effect=ServerSelectionTimeoutError("down"))

    response = client.post("/api/exam/submit", json={"answers": []}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["detail"] == "Error submitting exam"


def test_seed_questions_is_idempotent(client, fake_db):
    first = client.post("/api/exam/seed-questions")
    assert first.status_code == 200
    assert first.json() == {"message": "Questions seeded successfully", "count": 12}

    second = client.post("/api/exam/seed-questions")
    assert second.json() == {"message": "Questions already seeded", "count": 12}
    assert len(fake_db.questions.docs) == 12


def test_seeded_questions_have_ids_and_one_correct_option(client, fake_db):
    client.post("/api/exam/seed-questions")

    ids = {doc["id"] for doc in fake_db.questions.docs}
    assert len(ids) == 12
    for doc in fake_db.questions.docs:
        assert all(opt["id"] for opt in doc["options"])
        assert sum(opt["isCorrect"] for opt in doc["options"]) == 1


def test_exam_settings(client):
    assert client.get("/api/exam/settings").json() == {
        "questionLimit": 10,
        "durationSeconds": 1800,
        "passingPercentage": 60,
    }
