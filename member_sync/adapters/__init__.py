"""Adapters between email membership lists and external group sources.

This module provides:
- SlackConversationAdapter: Mutable Slack conversation membership
- OpsgenieOnCallAdapter: Read-only Opsgenie on-call schedule
- MembershipAdapter: Protocol shared by all adapters
- IdentityCache: Email -> remote user ID mapping
- FixedDelayPacer: Delay policy between removals
"""

from member_sync.adapters.base import MembershipAdapter
from member_sync.adapters.identity_cache import IdentityCache
from member_sync.adapters.opsgenie_oncall import (
    OnCallClient,
    OpsgenieOnCallAdapter,
    OpsgenieScheduleClient,
)
from member_sync.adapters.pacing import FixedDelayPacer, Pacer, paced
from member_sync.adapters.slack_conversation import (
    ConversationClient,
    SlackConversationAdapter,
    SlackConversationClient,
    SlackUser,
)

__all__ = [
    "ConversationClient",
    "FixedDelayPacer",
    "IdentityCache",
    "MembershipAdapter",
    "OnCallClient",
    "OpsgenieOnCallAdapter",
    "OpsgenieScheduleClient",
    "Pacer",
    "SlackConversationAdapter",
    "SlackConversationClient",
    "SlackUser",
    "paced",
]
