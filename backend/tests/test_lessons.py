"""Tests for lessons, quiz scoring and XP/badge awarding."""

from __future__ import annotations

import json

from seed_lessons import main as seed_main, seed_lessons
from services import academy

LESSONS = [
    {
        "id": "porosity",
        "title": "Understanding porosity",
        "type": "lesson",
        "content": "Porosity is how well hair absorbs moisture.",
        "order": 2,
        "xpReward": 20,
    },
    {
        "id": "basics",
        "title": "Hair basics",
        "content": "Start here.",
        "order": 1,
    },
    {
        "id": "porosity-quiz",
        "title": "Porosity quiz",
        "type": "quiz",
        "order": 3,
        "xpReward": 30,
        "questions": [
            {"q": "Low porosity hair...", "choices": ["absorbs fast", "resists moisture"], "answer": 1},
            {"q": "Float test measures...", "choices": ["porosity", "density"], "answer": 0},
        ],
    },
]


def seed(db):
    seed_lessons(db, LESSONS)


class TestSeed:
    def test_reseeding_replaces_by_id(self, db):
        seed(db)
        seed(db)

        assert db.lessons.count_documents({}) == 3

    def test_lesson_without_id_gets_one(self, db):
        seed_lessons(db, [{"title": "Scalp care"}])

        lesson = academy.list_lessons(db)[0]
        assert lesson.id
        assert lesson.xp_reward == 5
        assert lesson.estimated_minutes == 5

    def test_main_reads_json_file(self, db, tmp_path, monkeypatch):
        path = tmp_path / "lessons.json"
        path.write_text(json.dumps(LESSONS), encoding="utf-8")
        monkeypatch.setattr("seed_lessons.Database", lambda: db)
        monkeypatch.setattr(db, "close", lambda: None)

        seed_main([str(path)])

        assert db.lessons.count_documents({}) == 3


class TestLessonRoutes:
    def test_list_is_ordered(self, client, auth_headers, db):
        seed(db)

        body = client.get("/api/lessons", headers=auth_headers).json()

        assert [lesson["id"] for lesson in body] == ["basics", "porosity", "porosity-quiz"]
        assert body[1]["xpReward"] == 20

    def test_detail(self, client, auth_headers, db):
        seed(db)

        body = client.get("/api/lessons/porosity-quiz", headers=auth_headers).json()

        assert body["type"] == "quiz"
        assert body["questions"][0]["choices"] == ["absorbs fast", "resists moisture"]

    def test_unknown_lesson(self, client, auth_headers):
        assert client.get("/api/lessons/nope", headers=auth_headers).status_code == 404
        assert client.post("/api/lessons/nope/complete", headers=auth_headers).status_code == 404

    def test_completion_awards_xp_once(self, client, auth_headers, db):
        seed(db)

        first = client.post("/api/lessons/porosity/complete", headers=auth_headers).json()
        second = client.post("/api/lessons/porosity/complete", headers=auth_headers).json()

        assert first["awarded_xp"] == 20
        assert first["already_completed"] is False
        assert second["awarded_xp"] == 0
        assert second["already_completed"] is True
        assert second["progress"] == {"xp": 20, "completed_lessons": ["porosity"], "badges": []}

    def test_badge_awarded_at_threshold(self, client, auth_headers, db):
        seed(db)

        client.post("/api/lessons/porosity/complete", headers=auth_headers)
        body = client.post(
            "/api/lessons/porosity-quiz/complete", json={"answers": [1, 1]}, headers=auth_headers
        ).json()

        assert body["score"] == 1
        assert body["total"] == 2
        assert body["progress"]["xp"] == 50
        assert body["progress"]["badges"] == ["Hair Scholar"]

        again = client.post("/api/lessons/basics/complete", headers=auth_headers).json()
        assert again["progress"]["xp"] == 55
        assert again["progress"]["badges"] == ["Hair Scholar"]

    def test_plain_lesson_has_no_score(self, client, auth_headers, db):
        seed(db)

        body = client.post("/api/lessons/basics/complete", headers=auth_headers).json()

        assert body["score"] is None
        assert body["progress"]["xp"] == 5

    def test_progress_for_new_user(self, client, auth_headers):
        body = client.get("/api/lessons/progress", headers=auth_headers).json()

        assert body == {"xp": 0, "completed_lessons": [], "badges": []}


class TestAcademyService:
    def test_score_quiz_ignores_missing_answers(self, db):
        seed(db)
        quiz = academy.get_lesson(db, "porosity-quiz")

        assert academy.score_quiz(quiz, [1]) == 1
        assert academy.score_quiz(quiz, []) == 0

    def test_complete_lesson_is_idempotent(self, db):
        seed(db)
        lesson = academy.get_lesson(db, "porosity")

        _, first = academy.complete_lesson(db, "user-1", lesson)
        progress, second = academy.complete_lesson(db, "user-1", lesson)

        assert first is True
        assert second is False
        assert progress.xp == 20
