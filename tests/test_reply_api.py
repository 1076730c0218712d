"""
Integration tests for the HTTP surface.

Uses a fake assistants platform and a stubbed knowledge download so tests do not
require OpenAI or network access.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.errors import GenerationError, NoResponseError
from app.main import app
from app.services.platform import PlainText, RunStatus, ThreadMessage


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


# --- validation ---

@pytest.mark.parametrize("body", [{}, {"email": ""}, {"email": "   "}, {"email": None}])
def test_missing_email_returns_400_without_generating(client: TestClient, body: dict) -> None:
    with patch("app.api.handlers.generate_reply", new_callable=AsyncMock) as mock_generate:
        response = client.post("/", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing email content"}
    mock_generate.assert_not_called()


def test_missing_body_returns_400_without_generating(client: TestClient) -> None:
    with patch("app.api.handlers.generate_reply", new_callable=AsyncMock) as mock_generate:
        no_body = client.post("/")
        empty_json = client.post("/", content=b"", headers={"Content-Type": "application/json"})
        null_json = client.post("/", content=b"null", headers={"Content-Type": "application/json"})
    for response in (no_body, empty_json, null_json):
        assert response.status_code == 400
        assert response.json() == {"error": "Missing email content"}
    mock_generate.assert_not_called()


# --- generation outcomes ---

def test_generation_failure_returns_generic_500(client: TestClient) -> None:
    error = GenerationError(cause=NoResponseError("thread_1"))
    with patch("app.api.handlers.generate_reply", new_callable=AsyncMock, side_effect=error):
        response = client.post("/", json={"email": "Hello?"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate a response."}


def test_success_returns_reply(client: TestClient) -> None:
    with patch("app.api.handlers.generate_reply", new_callable=AsyncMock, return_value="Thanks!") as mock_generate:
        response = client.post("/", json={"email": "Hello?"})
    assert response.status_code == 200
    assert response.json() == {"reply": "Thanks!"}
    mock_generate.assert_awaited_once_with("Hello?")


def test_end_to_end_reply(client: TestClient, fake_platform, knowledge_download, fast_polling) -> None:
    """Run completes after two polls; the plain-string assistant message is returned."""
    fake_platform.run_statuses = [RunStatus.IN_PROGRESS, RunStatus.COMPLETED]
    fake_platform.messages = [
        ThreadMessage(id="m2", role="assistant", content=PlainText("Your order ships tomorrow.")),
        ThreadMessage(id="m1", role="user", content=PlainText("Where is my order?")),
    ]

    response = client.post("/", json={"email": "Where is my order?"})

    assert response.status_code == 200
    assert response.json() == {"reply": "Your order ships tomorrow."}
    assert fake_platform.retrieve_count == 2


def test_end_to_end_no_assistant_message(client: TestClient, fake_platform, knowledge_download, fast_polling) -> None:
    fake_platform.messages = [ThreadMessage(id="m1", role="user", content=PlainText("Where is my order?"))]

    response = client.post("/", json={"email": "Where is my order?"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate a response."}


# --- system / resources ---

def test_health_reports_cache_state(client: TestClient, fake_platform, knowledge_download, fast_polling) -> None:
    before = client.get("/health").json()
    assert before == {"ok": True, "vector_store_cached": False, "assistant_cached": False}

    client.post("/", json={"email": "Hi"})

    after = client.get("/health").json()
    assert after == {"ok": True, "vector_store_cached": True, "assistant_cached": True}


def test_delete_resources_forces_reprovisioning(
    client: TestClient, fake_platform, knowledge_download, fast_polling
) -> None:
    client.post("/", json={"email": "Hi"})
    response = client.delete("/resources")
    assert response.status_code == 200
    assert response.json() == {"cleared": True}

    client.post("/", json={"email": "Hi again"})

    assert knowledge_download.call_count == 2
    assert fake_platform.count("create_vector_store") == 2
    assert fake_platform.count("list_assistants") == 2
