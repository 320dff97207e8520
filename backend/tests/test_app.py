"""
Tests for app.py - the Flask API around a game session.
"""

import pytest
import random
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import create_app
from domain import GameState
from services.high_score_store import MemoryHighScoreStore
from services.session import GameSession


@pytest.fixture
def session():
    return GameSession(game=GameState(rng=random.Random(0)), store=MemoryHighScoreStore(initial=4))


@pytest.fixture
def client(session):
    app = create_app(session=session)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestStateEndpoint:
    def test_get_state(self, client):
        response = client.get("/api/state")

        assert response.status_code == 200
        data = response.get_json()
        assert data["snake"] == [{"x": 5, "y": 5}]
        assert data["food"] == {"x": 10, "y": 10}
        assert data["direction"] == "RIGHT"
        assert data["score"] == 0
        assert data["is_over"] is False
        assert data["time_left"] == 10
        assert data["grid_size"] == 20
        assert data["high_score"] == 4

    def test_state_reflects_ticks(self, client, session):
        session.move()
        session.countdown()

        data = client.get("/api/state").get_json()

        assert data["snake"] == [{"x": 6, "y": 5}]
        assert data["time_left"] == 9


class TestDirectionEndpoint:
    def test_direction_by_name(self, client):
        response = client.post("/api/direction", json={"direction": "up"})

        assert response.status_code == 200
        assert response.get_json() == {"requested": "UP", "direction": "UP"}

    def test_direction_by_key(self, client):
        response = client.post("/api/direction", json={"key": "s"})
        assert response.get_json()["direction"] == "DOWN"

    def test_direction_by_drag(self, client):
        response = client.post("/api/direction", json={"dx": 3, "dy": -40})
        assert response.get_json()["direction"] == "UP"

    def test_reversal_is_reported_but_ignored(self, client):
        response = client.post("/api/direction", json={"direction": "LEFT"})

        data = response.get_json()
        assert data["requested"] == "LEFT"
        assert data["direction"] == "RIGHT"

    def test_tiny_drag_changes_nothing(self, client):
        response = client.post("/api/direction", json={"dx": 0, "dy": 0})

        assert response.status_code == 200
        assert response.get_json() == {"requested": None, "direction": "RIGHT"}

    @pytest.mark.parametrize("payload", [
        {"direction": "north"},
        {"key": "q"},
        {"dx": "far"},
        {"speed": 3},
    ])
    def test_bad_payload_is_400(self, client, payload):
        response = client.post("/api/direction", json=payload)

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_json_body_is_400(self, client):
        response = client.post("/api/direction", data="UP", content_type="text/plain")
        assert response.status_code == 400

    def test_session_failure_is_500(self, client, session, monkeypatch):
        def broken(direction):
            raise RuntimeError("lock poisoned")

        monkeypatch.setattr(session, "change_direction", broken)

        response = client.post("/api/direction", json={"direction": "UP"})

        assert response.status_code == 500
        assert response.get_json() == {"error": "Failed to change direction"}


class TestResetEndpoint:
    def test_reset(self, client, session):
        session.game.time_left = 0
        session.countdown()
        assert session.snapshot().is_over is True

        response = client.post("/api/reset")

        assert response.status_code == 200
        data = response.get_json()
        assert data["is_over"] is False
        assert data["snake"] == [{"x": 5, "y": 5}]
        assert data["high_score"] == 4


class TestHighScoreEndpoint:
    def test_high_score(self, client, session):
        assert client.get("/api/high-score").get_json() == {"high_score": 4}

        session.game.score = 5
        session.game.time_left = 0
        session.countdown()

        assert client.get("/api/high-score").get_json() == {"high_score": 5}


class TestFrameEndpoint:
    def test_frame_is_png(self, client):
        response = client.get("/api/frame.png")

        assert response.status_code == 200
        assert response.mimetype == "image/png"
        assert response.data[:8] == b"\x89PNG\r\n\x1a\n"

