"""Email -> remote user ID mapping learned while syncing.

The cache only knows emails the owning adapter has itself seen through
``fetch()`` or ``add_members()``. A missing entry means "not learned yet",
not "not a member".
"""

from collections.abc import Mapping


class IdentityCache:
    """In-memory email -> remote ID map owned by a single adapter.

    Not synchronized; an adapter instance is driven by one caller at a time.
    """

    def __init__(self):
        """Initialize empty cache."""
        self._ids: dict[str, str] = {}

    def record(self, email: str, remote_id: str) -> None:
        """Store (or overwrite) the remote ID for an email."""
        self._ids[email] = remote_id

    def get(self, email: str) -> str:
        """Return the cached remote ID, or an empty string if unknown."""
        return self._ids.get(email, "")

    def evict(self, email: str) -> None:
        """Forget a single email. Unknown emails are ignored."""
        self._ids.pop(email, None)

    def replace(self, mapping: Mapping[str, str]) -> None:
        """Drop every entry and repopulate from ``mapping``."""
        self._ids = dict(mapping)

    def reset(self) -> None:
        """Discard all entries."""
        self._ids = {}

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current mapping."""
        return dict(self._ids)

    def __contains__(self, email: object) -> bool:
        return email in self._ids

    def __len__(self) -> int:
        """Return number of cached emails."""
        return len(self._ids)
