"""Slack conversation adapter for email-based membership sync.

Uses the Slack Web API to list, invite and kick conversation members.
Slack removes members by user ID rather than email, so the adapter keeps
an email -> user ID cache filled by ``fetch()`` and ``add_members()`` and
consumed by ``remove_members()``.

The Slack app must have been added to the conversation.
"""

import asyncio
import os
from typing import Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, Field
from slack_sdk import WebClient
from structlog.typing import FilteringBoundLogger

from member_sync.adapters.identity_cache import IdentityCache
from member_sync.adapters.pacing import FixedDelayPacer, Pacer, paced
from member_sync.errors import CacheEmptyError, RemoteCallError

logger = structlog.get_logger()

DEFAULT_PAGE_SIZE = 50


class SlackUser(BaseModel):
    """The slice of a Slack user profile the adapter needs."""

    id: str = Field(description="Slack user ID (U...)")
    email: str = Field(default="", description="Profile email, empty if hidden")
    is_bot: bool = Field(default=False, description="Bot or app user")

    @classmethod
    def from_api(cls, user: dict) -> "SlackUser":
        """Parse a user object from the Slack Web API."""
        return cls(
            id=user["id"],
            email=user.get("profile", {}).get("email") or "",
            is_bot=user.get("is_bot", False),
        )


@runtime_checkable
class ConversationClient(Protocol):
    """The subset of Slack operations the conversation adapter uses.

    Test doubles and alternate backends only need these five methods.
    """

    async def list_members(
        self, channel_id: str, cursor: str, limit: int
    ) -> tuple[list[str], str]:
        """Return one page of member IDs and the cursor for the next page."""
        ...

    async def get_users_info(self, user_ids: list[str]) -> list[SlackUser]:
        """Resolve user IDs to profiles."""
        ...

    async def lookup_by_email(self, email: str) -> SlackUser:
        """Resolve an email to a user."""
        ...

    async def invite(self, channel_id: str, user_ids: list[str]) -> None:
        """Invite users to a conversation in one call."""
        ...

    async def kick(self, channel_id: str, user_id: str) -> None:
        """Remove one user from a conversation."""
        ...


class SlackConversationClient:
    """ConversationClient backed by slack_sdk's WebClient.

    WebClient is blocking, so every call runs in a worker thread.
    """

    def __init__(self, bot_token: str | None = None):
        """Initialize with bot token.

        Args:
            bot_token: Slack bot token (xoxb-...).
                      Falls back to SLACK_BOT_TOKEN env var.
        """
        self._token = bot_token or os.environ.get("SLACK_BOT_TOKEN")
        self._client: WebClient | None = None

    def _get_client(self) -> WebClient:
        """Get or create Slack client."""
        if self._client is None:
            if not self._token:
                raise ValueError(
                    "No Slack token. Set SLACK_BOT_TOKEN env var "
                    "or pass bot_token to constructor."
                )
            self._client = WebClient(token=self._token)
        return self._client

    async def list_members(
        self, channel_id: str, cursor: str, limit: int
    ) -> tuple[list[str], str]:
        client = self._get_client()
        result = await asyncio.to_thread(
            client.conversations_members,
            channel=channel_id,
            cursor=cursor or None,
            limit=limit,
        )
        next_cursor = (result.get("response_metadata") or {}).get("next_cursor", "")
        return result.get("members", []), next_cursor or ""

    async def get_users_info(self, user_ids: list[str]) -> list[SlackUser]:
        if not user_ids:
            return []
        # users.info accepts a comma-separated "users" list for a batch
        # lookup; WebClient.users_info only exposes the single "user" form
        client = self._get_client()
        result = await asyncio.to_thread(
            client.api_call,
            "users.info",
            params={"users": ",".join(user_ids)},
        )
        return [SlackUser.from_api(user) for user in result.get("users", [])]

    async def lookup_by_email(self, email: str) -> SlackUser:
        client = self._get_client()
        result = await asyncio.to_thread(client.users_lookupByEmail, email=email)
        return SlackUser.from_api(result["user"])

    async def invite(self, channel_id: str, user_ids: list[str]) -> None:
        client = self._get_client()
        await asyncio.to_thread(
            client.conversations_invite, channel=channel_id, users=user_ids
        )

    async def kick(self, channel_id: str, user_id: str) -> None:
        client = self._get_client()
        await asyncio.to_thread(
            client.conversations_kick, channel=channel_id, user=user_id
        )


class SlackConversationAdapter:
    """Synchronise email addresses with the members of a Slack conversation.

    Not safe for concurrent use: run fetch, then add and/or remove, from a
    single caller.
    """

    def __init__(
        self,
        client: ConversationClient,
        channel_id: str,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        pacer: Pacer | None = None,
        log: FilteringBoundLogger | None = None,
    ):
        """Initialize adapter for one conversation.

        Args:
            client: Anything implementing ConversationClient
            channel_id: Slack conversation ID (C...)
            page_size: Members requested per listing page
            pacer: Delay policy between removals (default: 1 second)
            log: structlog logger (default: module logger)
        """
        self._client = client
        self._channel_id = channel_id
        self._page_size = page_size
        self._pacer = pacer or FixedDelayPacer(1.0)
        self._log = (log or logger).bind(channel_id=channel_id)
        self.cache = IdentityCache()

    @property
    def channel_id(self) -> str:
        return self._channel_id

    async def _list_member_ids(self) -> list[str]:
        """Page through conversations.members until the cursor runs out."""
        cursor = ""
        member_ids: list[str] = []
        while True:
            # Yield so a cancellation or timeout lands between pages
            await asyncio.sleep(0)
            try:
                page, cursor = await self._client.list_members(
                    self._channel_id, cursor, self._page_size
                )
            except Exception as e:
                raise RemoteCallError(
                    "slack.conversation.fetch.list_members", self._channel_id, e
                ) from e
            member_ids.extend(page)
            if not cursor:
                return member_ids

    async def fetch(self) -> list[str]:
        """Get emails of the human members of the conversation.

        Rebuilds the identity cache from the result. The cache is only
        touched once every remote call has succeeded.

        Returns:
            Member emails, bots excluded

        Raises:
            RemoteCallError: If a listing page or the profile lookup failed
        """
        self._log.info("fetching conversation members")

        member_ids = await self._list_member_ids()

        try:
            users = await self._client.get_users_info(member_ids)
        except Exception as e:
            raise RemoteCallError(
                "slack.conversation.fetch.get_users_info", self._channel_id, e
            ) from e

        emails = []
        ids_by_email: dict[str, str] = {}
        for user in users:
            if user.is_bot or not user.email:
                continue
            emails.append(user.email)
            ids_by_email[user.email] = user.id

        self.cache.replace(ids_by_email)
        self._log.info("fetched conversation members", count=len(emails))
        return emails

    async def add_members(self, emails: list[str]) -> None:
        """Invite emails to the conversation.

        Every email is resolved before the single invite call, so a lookup
        failure leaves the conversation untouched. If the invite fails the
        cache is discarded, since there is no telling which users made it in.

        Raises:
            RemoteCallError: If a lookup or the invite failed
        """
        if not emails:
            return

        self._log.info("adding conversation members", count=len(emails))
        self._log.debug("adding conversation members", emails=emails)

        user_ids = []
        for email in emails:
            try:
                user = await self._client.lookup_by_email(email)
            except Exception as e:
                raise RemoteCallError(
                    "slack.conversation.add.lookup_by_email", email, e
                ) from e
            user_ids.append(user.id)
            self.cache.record(email, user.id)

        try:
            await self._client.invite(self._channel_id, user_ids)
        except Exception as e:
            self.cache.reset()
            raise RemoteCallError(
                "slack.conversation.add.invite", self._channel_id, e
            ) from e

        self._log.info("added conversation members", count=len(user_ids))

    async def remove_members(self, emails: list[str]) -> None:
        """Kick emails from the conversation, one paced call per email.

        Stops at the first failure. Members already removed stay removed
        and are evicted from the cache; the rest are left as they were.

        Raises:
            CacheEmptyError: If nothing has been fetched or added yet
            RemoteCallError: If a kick failed
        """
        self._log.info("removing conversation members", count=len(emails))
        self._log.debug("removing conversation members", emails=emails)

        if len(self.cache) == 0:
            raise CacheEmptyError("slack.conversation.remove")

        async for email in paced(emails, self._pacer):
            user_id = self.cache.get(email)
            if not user_id:
                self._log.warning("no cached user ID for email", email=email)
            try:
                await self._client.kick(self._channel_id, user_id)
            except Exception as e:
                raise RemoteCallError(
                    "slack.conversation.remove.kick",
                    f"{self._channel_id}, {email} ({user_id})",
                    e,
                ) from e
            self.cache.evict(email)

        self._log.info("removed conversation members", count=len(emails))
