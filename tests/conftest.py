"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from member_sync.adapters.slack_conversation import SlackConversationAdapter, SlackUser


@pytest.fixture
def mock_conversation_client():
    """Mock ConversationClient with every capability as an AsyncMock."""
    client = MagicMock()
    client.list_members = AsyncMock(return_value=([], ""))
    client.get_users_info = AsyncMock(return_value=[])
    client.lookup_by_email = AsyncMock()
    client.invite = AsyncMock()
    client.kick = AsyncMock()
    return client


@pytest.fixture
def mock_pacer():
    """Pacer that records waits instead of sleeping."""
    pacer = MagicMock()
    pacer.wait = AsyncMock()
    return pacer


@pytest.fixture
def conversation_adapter(mock_conversation_client, mock_pacer):
    """SlackConversationAdapter wired to mocks."""
    return SlackConversationAdapter(
        mock_conversation_client, "C123", pacer=mock_pacer
    )


@pytest.fixture
def make_user():
    """Factory for SlackUser objects."""

    def _make(user_id: str, email: str = "", is_bot: bool = False) -> SlackUser:
        return SlackUser(id=user_id, email=email, is_bot=is_bot)

    return _make
