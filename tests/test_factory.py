"""Tests for adapter factories."""

from unittest.mock import patch

import pytest

from member_sync.adapters.opsgenie_oncall import (
    OpsgenieOnCallAdapter,
    OpsgenieScheduleClient,
)
from member_sync.adapters.slack_conversation import (
    SlackConversationAdapter,
    SlackConversationClient,
)
from member_sync.config import Settings
from member_sync.factory import opsgenie_oncall_adapter, slack_conversation_adapter


@pytest.fixture
def settings():
    """Settings independent of the host environment."""
    return Settings(
        _env_file=None,
        slack_bot_token="xoxb-test",
        slack_page_size=100,
        removal_delay_seconds=0.25,
        opsgenie_api_key="genie",
        opsgenie_api_url="https://api.eu.opsgenie.com",
    )


def test_slack_conversation_adapter_uses_settings(settings):
    """Should wire page size, pacer delay and token from settings."""
    adapter = slack_conversation_adapter("C123", settings=settings)

    assert isinstance(adapter, SlackConversationAdapter)
    assert adapter.channel_id == "C123"
    assert adapter._page_size == 100
    assert adapter._pacer.delay_seconds == 0.25
    assert isinstance(adapter._client, SlackConversationClient)
    assert adapter._client._token == "xoxb-test"


def test_slack_conversation_adapter_defaults_to_cached_settings(settings):
    """Should use get_settings() when no settings are passed."""
    with patch("member_sync.factory.get_settings", return_value=settings) as mock:
        adapter = slack_conversation_adapter("C123")

    mock.assert_called_once_with()
    assert adapter._page_size == 100


def test_opsgenie_oncall_adapter_uses_settings(settings):
    """Should build a read-only adapter against the configured API."""
    adapter = opsgenie_oncall_adapter("schedule-1", settings=settings)

    assert isinstance(adapter, OpsgenieOnCallAdapter)
    assert adapter.schedule_id == "schedule-1"
    assert isinstance(adapter._client, OpsgenieScheduleClient)
    assert adapter._client._api_url == "https://api.eu.opsgenie.com"


def test_opsgenie_oncall_adapter_requires_key(settings):
    """Should fail fast without an API key."""
    settings.opsgenie_api_key = None

    with pytest.raises(ValueError, match="No Opsgenie API key"):
        opsgenie_oncall_adapter("schedule-1", settings=settings)
