"""
Pytest configuration and fixtures.

Every test runs against a fresh in-memory SQLite database and a mocked
Anthropic SDK client, so nothing touches disk or the network.
"""
import os

os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime, timezone
from unittest.mock import MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import CompletionSettings
from app.core.models.scenario_catalog import scenario_catalog
from app.core.services.chat_service import ChatService
from app.core.services.completion_service import AnthropicCompletionClient
from app.database import Base, engine, init_db
from app.services.session_store import SessionStore

FIXED_NOW = datetime(2024, 11, 5, 21, 30, tzinfo=timezone.utc)  # 08:30 in Melbourne (AEDT)


def make_status_error(error_cls, status_code, message="error"):
    """Build an anthropic status error the way the SDK raises it."""
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status_code, request=request)
    return error_cls(message, response=response, body=None)


def make_text_response(text):
    block = MagicMock()
    block.type = "text"
    block.text = text
    response = MagicMock()
    response.content = [block]
    return response


@pytest.fixture(autouse=True)
def fresh_database():
    """Recreate all tables around every test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def sdk_client():
    """Mocked anthropic.Anthropic instance that answers with a fixed reply."""
    sdk = MagicMock()
    sdk.messages.create.return_value = make_text_response("Run after 20:00 tonight 🌙 or try the indoor gym now.")
    return sdk


@pytest.fixture
def completion_client(sdk_client):
    settings = CompletionSettings(api_key="sk-ant-test-key", model_id="test-model", max_output_tokens=800)
    return AnthropicCompletionClient(settings, sdk_client=sdk_client)


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def chat_service(store, completion_client):
    return ChatService(store, completion_client, clock=lambda: FIXED_NOW)


@pytest.fixture
def scenarios():
    """Catalogue scenarios keyed by risk level."""
    return {s.risk_level: s for s in scenario_catalog.SCENARIOS}


@pytest.fixture
def client(completion_client):
    from main import app
    from app.api.v1.endpoints.chat import get_completion_client

    app.dependency_overrides[get_completion_client] = lambda: completion_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
