"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.main import app


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _new_session(client) -> str:
    response = await client.post("/api/game/new")
    return response.json()["session_id"]


async def _act(client, session_id, action, amount=None):
    body = {"type": action}
    if amount is not None:
        body["amount"] = amount
    return await client.post(
        "/api/game/action",
        json=body,
        headers={"X-Session-ID": session_id},
    )


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_new_game(client):
    """Test creating a new game."""
    response = await client.post("/api/game/new")
    assert response.status_code == 200
    data = response.json()
    assert data["session_id"]
    assert data["state"]["game_status"] == "betting"
    assert data["state"]["credits"] == 1000
    assert data["state"]["cards_remaining"] == 104


@pytest.mark.asyncio
async def test_game_state(client):
    """Test getting game state."""
    session_id = await _new_session(client)

    response = await client.get(
        "/api/game/state",
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["game_status"] == "betting"
    assert data["counter"]["is_enabled"] is False
    assert data["player_hand"]["cards"] == []


@pytest.mark.asyncio
async def test_place_bet_and_deal(client):
    """Test placing a bet and dealing."""
    session_id = await _new_session(client)

    response = await _act(client, session_id, "place_bet", 100)
    assert response.status_code == 200
    assert response.json()["current_bet"] == 100
    assert response.json()["selected_chips"] == {"100": 1}

    response = await _act(client, session_id, "start_game")
    assert response.status_code == 200
    data = response.json()
    assert data["game_status"] in ["playing", "betting"]
    assert len(data["player_hand"]["cards"]) == 2
    assert data["cards_remaining"] == 100
    if data["game_status"] == "playing":
        hole = data["dealer_hand"]["cards"][1]
        assert hole == {"rank": None, "suit": None, "value": None, "hidden": True}


@pytest.mark.asyncio
async def test_invalid_chip_reports_message(client):
    """Test placing a chip the table does not use."""
    session_id = await _new_session(client)

    response = await _act(client, session_id, "place_bet", 25)
    assert response.status_code == 200
    assert response.json()["message"] == "Invalid chip amount: $25"
    assert response.json()["current_bet"] == 0


@pytest.mark.asyncio
async def test_bet_action_requires_amount(client):
    session_id = await _new_session(client)

    response = await _act(client, session_id, "place_bet")
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_action_rejected(client):
    session_id = await _new_session(client)

    response = await _act(client, session_id, "surrender")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_out_of_phase_action_is_ignored(client):
    session_id = await _new_session(client)

    response = await _act(client, session_id, "hit")
    assert response.status_code == 200
    assert response.json()["game_status"] == "betting"
    assert response.json()["player_hand"]["cards"] == []


@pytest.mark.asyncio
async def test_toggle_counting(client):
    session_id = await _new_session(client)

    response = await _act(client, session_id, "toggle_card_counting")
    data = response.json()
    assert data["counter"]["is_enabled"] is True
    assert data["message"] == "Card counting enabled."


@pytest.mark.asyncio
async def test_advice(client):
    session_id = await _new_session(client)

    response = await client.get(
        "/api/game/advice",
        headers={"X-Session-ID": session_id},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["action"] == "Place your bet"
    assert data["bet"] == 10
    assert data["count_reading"] == "Off"


@pytest.mark.asyncio
async def test_missing_session_header(client):
    response = await client.get("/api/game/state")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_tampered_session_id(client):
    session_id = await _new_session(client)

    response = await client.get(
        "/api/game/state",
        headers={"X-Session-ID": session_id + "x"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_session(client):
    from api.session import get_session_signer

    token = get_session_signer().sign("no-such-session")
    response = await client.get(
        "/api/game/state",
        headers={"X-Session-ID": token},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_sessions_are_independent(client):
    first = await _new_session(client)
    second = await _new_session(client)

    await _act(client, first, "place_bet", 50)
    response = await client.get("/api/game/state", headers={"X-Session-ID": second})
    assert response.json()["current_bet"] == 0
