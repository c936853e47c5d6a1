"""
Pytest fixtures for the camp guide bot tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from agent.actions import TerminalActions
from agent.handler import EventHandler
from models.schemas import WebhookEvent
from utils.user_store import InMemoryUserStore


@pytest.fixture
def store():
    """Fresh in-memory user store."""
    return InMemoryUserStore()


@pytest.fixture
def mock_gateway():
    """LINE gateway whose reply/push calls are recorded."""
    gateway = MagicMock()
    gateway.reply_text = AsyncMock(return_value=None)
    gateway.push_text = AsyncMock(return_value=None)
    gateway.push_flex = AsyncMock(return_value=None)
    return gateway


@pytest.fixture
def mock_generation():
    """Generation service; tests set generate.return_value / side_effect."""
    generation = MagicMock()
    generation.generate = AsyncMock(return_value=None)
    return generation


@pytest.fixture
def actions(mock_generation, mock_gateway):
    return TerminalActions(generation=mock_generation, gateway=mock_gateway)


@pytest.fixture
def handler(store, mock_gateway, actions):
    return EventHandler(store=store, gateway=mock_gateway, actions=actions)


@pytest.fixture
def make_text_event():
    """Build a text message webhook event for a user."""
    def _make(text: str, user_id: str = "U123", reply_token: str = "reply-token"):
        return WebhookEvent.model_validate({
            "type": "message",
            "replyToken": reply_token,
            "source": {"type": "user", "userId": user_id},
            "message": {"type": "text", "id": "1", "text": text},
            "timestamp": 1700000000000,
        })
    return _make


@pytest.fixture
def follow_event():
    return WebhookEvent.model_validate({
        "type": "follow",
        "replyToken": "follow-token",
        "source": {"type": "user", "userId": "U123"},
        "timestamp": 1700000000000,
    })
