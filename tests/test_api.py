from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from lingoquest import globals as app_globals
from lingoquest.app import create_app


@pytest.fixture
def client(app_settings):
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def session_client(client):
    response = client.post("/api/session")
    assert response.status_code == 200
    return client


def test_vocabulary_summary(client) -> None:
    data = client.get("/api/vocabulary").json()
    assert data["loaded"] is True
    assert data["total_entries"] == 6
    assert data["languages"] == ["de", "en", "fr"]
    assert data["supported_languages"] == ["en", "fr", "de"]
    assert data["difficulties"]["any"] == 2


def test_start_session_sets_cookie(client, app_settings) -> None:
    response = client.post("/api/session")
    assert response.status_code == 200
    assert app_settings.SESSION_COOKIE_NAME in response.cookies
    assert response.json() == {
        "state": "ready",
        "total_questions": 6,
        "remaining_questions": 6,
        "answered_count": 0,
    }
    assert len(app_globals.sessions) == 1


def test_question_requires_session(client) -> None:
    response = client.get("/api/question")
    assert response.status_code == 401
    assert response.json() == {"error": "Session invalid"}


def test_full_round(session_client) -> None:
    seen = []
    while True:
        data = session_client.get("/api/question", params={"difficulty": "hard", "lang": "de"}).json()
        if data["complete"]:
            assert data["question"] is None
            break
        question = data["question"]
        assert len(question["options"]) == 4
        assert question["options"].count(question["correctAnswer"]) == 1
        assert question["clue"].endswith("in German?")
        seen.append(question["id"])

        receipt = session_client.post("/api/answer", data={"question_id": question["id"]})
        assert receipt.status_code == 200
        assert receipt.json()["answered_count"] == len(seen)

    assert sorted(seen) == ["w001", "w002", "w003", "w004", "w005", "w006"]
    status = session_client.get("/api/session").json()
    assert status["state"] == "exhausted"


def test_default_parameters_are_easy_english(session_client) -> None:
    question = session_client.get("/api/question").json()["question"]
    assert len(question["options"]) == 2
    assert question["clue"].endswith("in English?")


def test_unsupported_language_falls_back_to_english(session_client) -> None:
    question = session_client.get("/api/question", params={"lang": "es"}).json()["question"]
    assert question["clue"].endswith("in English?")


def test_unknown_question_id(session_client) -> None:
    response = session_client.post("/api/answer", data={"question_id": "nope"})
    assert response.status_code == 404


def test_reset_makes_everything_eligible_again(session_client) -> None:
    for entry_id in ("w001", "w002", "w003"):
        session_client.post("/api/answer", data={"question_id": entry_id})

    reshuffled = session_client.post("/api/reshuffle").json()
    assert reshuffled["total_questions"] == 3
    assert reshuffled["answered_count"] == 3

    reset = session_client.post("/api/reset").json()
    assert reset == {
        "state": "ready",
        "total_questions": 6,
        "remaining_questions": 6,
        "answered_count": 0,
    }


def test_end_session(session_client) -> None:
    response = session_client.delete("/api/session")
    assert response.json() == {"status": "success"}
    assert app_globals.sessions == {}
    assert session_client.get("/api/session").status_code == 401


def test_expired_session_is_dropped(session_client, app_settings) -> None:
    (session,) = app_globals.sessions.values()
    session.created_at = datetime.now() - timedelta(minutes=app_settings.SESSION_TIMEOUT_MINUTES + 1)
    assert session_client.get("/api/question").status_code == 401
    assert app_globals.sessions == {}


def test_missing_vocabulary_starts_without_data(app_settings, tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(app_settings, "VOCAB_SOURCE", str(tmp_path / "missing.json"))
    with TestClient(create_app()) as client:
        assert client.get("/api/vocabulary").json()["loaded"] is False
        response = client.post("/api/session")
        assert response.status_code == 503
        assert response.json() == {"error": "Vocabulary not loaded"}


def test_events_disabled_by_default(client) -> None:
    assert client.get("/api/events").status_code == 404
