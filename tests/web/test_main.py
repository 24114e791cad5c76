"""Tests for web API endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from bazaar_helper.web.main import app


client = TestClient(app)


def _container(answer: str):
    mock_service = AsyncMock()
    mock_service.answer.return_value = answer
    return type("Container", (), {"enchantments": mock_service})(), mock_service


def test_health_endpoint():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_endpoint():
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "bazaar-helper"
    assert data["status"] == "ok"


def test_bazaar_returns_plain_text():
    reply = "Rusty Knife ✚ Toxic☠️ = Deals 3 extra damage | This item belongs to Pygmalien."
    mock_container, mock_service = _container(reply)

    with patch("bazaar_helper.web.routers.bazaar.get_container", return_value=mock_container):
        response = client.get("/bazaar", params={"q": "Rusty Knife toxic"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == reply
    mock_service.answer.assert_awaited_once_with("Rusty Knife toxic")


def test_bazaar_domain_failures_are_still_200():
    mock_container, _ = _container('Item "Nope" not found on the wiki.')

    with patch("bazaar_helper.web.routers.bazaar.get_container", return_value=mock_container):
        response = client.get("/bazaar", params={"q": "Nope toxic"})

    assert response.status_code == 200
    assert response.text.startswith('Item "Nope"')


def test_bazaar_without_query():
    mock_container, mock_service = _container("Please specify an item and enchantment.")

    with patch("bazaar_helper.web.routers.bazaar.get_container", return_value=mock_container):
        response = client.get("/bazaar")

    assert response.status_code == 200
    mock_service.answer.assert_awaited_once_with(None)
