from __future__ import annotations

from fastapi.testclient import TestClient
import pytest

from wheel_app.core.presentation import ACTION_SHOW_RESULT, ACTION_SPIN, ACTION_UPDATE_CHALLENGE
from wheel_app.server.overlay_server import BrowserSourceChannel, create_overlay_app


@pytest.fixture
def channel(broadcaster) -> BrowserSourceChannel:
    source = BrowserSourceChannel()
    broadcaster.subscribe(source)
    return source


@pytest.fixture
def client(manager, channel) -> TestClient:
    return TestClient(create_overlay_app(manager, channel))


def test_overlay_page_is_served(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "fetch('/state')" in response.text


def test_state_starts_empty(client):
    assert client.get("/state").json() == {"sequence": 0, "message": None, "challenge": None}


def test_state_follows_engine_messages(client, engine, manager, make_draft):
    wheel = manager.create_wheel("Stream")
    challenge_id = manager.add_challenge(wheel.id, make_draft(title="Collect 5 gems"))
    engine.spin(wheel.id)

    spin_state = client.get("/state").json()
    assert spin_state["sequence"] == 1
    assert spin_state["message"]["action"] == ACTION_SPIN
    assert spin_state["challenge"] is None

    engine.start_challenge(manager.get_challenge(wheel.id, challenge_id))
    engine.adjust_progress(1)
    live_state = client.get("/state").json()
    assert live_state["message"]["action"] == ACTION_UPDATE_CHALLENGE
    assert live_state["challenge"]["progress"] == 1
    assert live_state["challenge"]["title"] == "Collect 5 gems"


def test_result_clears_current_challenge(client, engine, manager, make_draft):
    wheel = manager.create_wheel("Stream")
    challenge_id = manager.add_challenge(wheel.id, make_draft())
    engine.start_challenge(manager.get_challenge(wheel.id, challenge_id))
    engine.fail_challenge()

    state = client.get("/state").json()

    assert state["message"]["action"] == ACTION_SHOW_RESULT
    assert state["message"]["donation"] == 5.0
    assert state["challenge"] is None


def test_stats_reflect_ledger(client, manager):
    manager.add_donation("A", 5)
    manager.add_donation("B", 2.5)

    assert client.get("/stats").json() == {
        "sessionStats": {"amount": 7.5, "challenges": 2},
        "totalStats": {"amount": 7.5, "challenges": 2},
    }


def test_ack_is_recorded(client, channel):
    response = client.post("/ack", json={"event": "overlay-fade-complete", "surface": "obs"})

    assert response.status_code == 202
    assert response.json() == {"accepted": True}
    assert channel.get_acknowledgements() == [{"event": "overlay-fade-complete", "surface": "obs"}]


def test_ack_rejects_empty_event(client):
    assert client.post("/ack", json={"event": ""}).status_code == 422
