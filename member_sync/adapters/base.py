"""Base types for membership adapters.

This module defines the MembershipAdapter protocol shared by every
source-specific adapter, mutable or read-only.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MembershipAdapter(Protocol):
    """Protocol for adapters that expose a group's members by email.

    Adapters implement this protocol for structural subtyping -
    they don't need to inherit, just implement the methods.
    """

    async def fetch(self) -> list[str]:
        """Return the emails of the group's current members.

        Raises:
            RemoteCallError: If the remote system could not be read
        """
        ...

    async def add_members(self, emails: list[str]) -> None:
        """Add the given emails to the group.

        Raises:
            RemoteCallError: If a lookup or the add call failed
            ReadOnlyError: If the backing source cannot be mutated
        """
        ...

    async def remove_members(self, emails: list[str]) -> None:
        """Remove the given emails from the group.

        Raises:
            RemoteCallError: If a removal call failed
            CacheEmptyError: If the adapter needs a fetch() first
            ReadOnlyError: If the backing source cannot be mutated
        """
        ...
