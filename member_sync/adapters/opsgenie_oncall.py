"""Opsgenie on-call adapter.

Reports who is on call for a schedule right now. An on-call rotation is
computed by Opsgenie, not edited member by member, so the adapter is
read-only: add and remove always fail without touching the API.
"""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

import httpx
import structlog
from structlog.typing import FilteringBoundLogger

from member_sync.errors import ReadOnlyError, RemoteCallError

logger = structlog.get_logger()

DEFAULT_API_URL = "https://api.opsgenie.com"


@runtime_checkable
class OnCallClient(Protocol):
    """The subset of the Opsgenie schedule API the adapter uses."""

    async def get_on_calls(self, schedule_id: str, when: datetime) -> list[str]:
        """Return the flattened on-call recipient emails at ``when``."""
        ...


class OpsgenieScheduleClient:
    """OnCallClient backed by the Opsgenie REST API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        """Initialize with an API integration key.

        Args:
            api_key: Opsgenie API key
            api_url: API base URL (EU accounts use api.eu.opsgenie.com)
            transport: Optional httpx transport, used by tests
            timeout: Request timeout in seconds
        """
        if not api_key:
            raise ValueError(
                "No Opsgenie API key. Set OPSGENIE_API_KEY env var "
                "or pass api_key to constructor."
            )
        self._api_key = api_key
        self._api_url = api_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    async def get_on_calls(self, schedule_id: str, when: datetime) -> list[str]:
        async with httpx.AsyncClient(
            base_url=self._api_url,
            headers={"Authorization": f"GenieKey {self._api_key}"},
            transport=self._transport,
            timeout=self._timeout,
        ) as client:
            response = await client.get(
                f"/v2/schedules/{schedule_id}/on-calls",
                params={
                    "scheduleIdentifierType": "id",
                    "flat": "true",
                    "date": when.isoformat(),
                },
            )
            response.raise_for_status()
            data = response.json().get("data") or {}
            return list(data.get("onCallRecipients") or [])


def _utcnow() -> datetime:
    return datetime.now(UTC)


class OpsgenieOnCallAdapter:
    """Read-only adapter returning the current on-call users of a schedule."""

    def __init__(
        self,
        client: OnCallClient,
        schedule_id: str,
        *,
        now: Callable[[], datetime] = _utcnow,
        log: FilteringBoundLogger | None = None,
    ):
        """Initialize adapter for one schedule.

        Args:
            client: Anything implementing OnCallClient
            schedule_id: Opsgenie schedule ID
            now: Clock used to pick the on-call moment
            log: structlog logger (default: module logger)
        """
        self._client = client
        self._schedule_id = schedule_id
        self._now = now
        self._log = (log or logger).bind(schedule_id=schedule_id)

    @property
    def schedule_id(self) -> str:
        return self._schedule_id

    async def fetch(self) -> list[str]:
        """Get emails of the users currently on call.

        Raises:
            RemoteCallError: If the schedule could not be read
        """
        self._log.info("fetching on-call users")

        try:
            emails = await self._client.get_on_calls(self._schedule_id, self._now())
        except Exception as e:
            raise RemoteCallError(
                "opsgenie.oncall.fetch.get_on_calls", self._schedule_id, e
            ) from e

        self._log.info("fetched on-call users", count=len(emails))
        return emails

    async def add_members(self, emails: list[str]) -> None:
        """Always fails: on-call schedules are read-only."""
        raise ReadOnlyError("opsgenie.oncall.add")

    async def remove_members(self, emails: list[str]) -> None:
        """Always fails: on-call schedules are read-only."""
        raise ReadOnlyError("opsgenie.oncall.remove")
