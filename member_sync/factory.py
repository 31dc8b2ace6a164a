"""Build adapters wired with real clients from Settings."""

from structlog.typing import FilteringBoundLogger

from member_sync.adapters.opsgenie_oncall import (
    OpsgenieOnCallAdapter,
    OpsgenieScheduleClient,
)
from member_sync.adapters.pacing import FixedDelayPacer
from member_sync.adapters.slack_conversation import (
    SlackConversationAdapter,
    SlackConversationClient,
)
from member_sync.config import Settings, get_settings


def slack_conversation_adapter(
    channel_id: str,
    settings: Settings | None = None,
    log: FilteringBoundLogger | None = None,
) -> SlackConversationAdapter:
    """Create a Slack conversation adapter.

    The Slack token is checked lazily, on the first remote call.

    Args:
        channel_id: Slack conversation ID
        settings: Settings to use (default: cached environment settings)
        log: Optional structlog logger
    """
    settings = settings or get_settings()
    return SlackConversationAdapter(
        SlackConversationClient(bot_token=settings.slack_bot_token),
        channel_id,
        page_size=settings.slack_page_size,
        pacer=FixedDelayPacer(settings.removal_delay_seconds),
        log=log,
    )


def opsgenie_oncall_adapter(
    schedule_id: str,
    settings: Settings | None = None,
    log: FilteringBoundLogger | None = None,
) -> OpsgenieOnCallAdapter:
    """Create a read-only Opsgenie on-call adapter.

    Raises:
        ValueError: If no Opsgenie API key is configured
    """
    settings = settings or get_settings()
    client = OpsgenieScheduleClient(
        api_key=settings.opsgenie_api_key or "",
        api_url=settings.opsgenie_api_url,
    )
    return OpsgenieOnCallAdapter(client, schedule_id, log=log)
