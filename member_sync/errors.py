"""Exceptions raised by membership adapters.

Every error carries an operation-identifying prefix so a caller can tell
which step of a sync pass failed without re-running it. Adapters never
retry; retry policy belongs to the caller.
"""


class MemberSyncError(Exception):
    """Base class for all adapter errors."""


class RemoteCallError(MemberSyncError):
    """A call to the remote system failed.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, target: str, cause: BaseException):
        self.operation = operation
        self.target = target
        super().__init__(f"{operation}({target}) -> {cause}")


class CacheEmptyError(MemberSyncError):
    """No identity mapping is known yet. Call ``fetch()`` first."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} -> cache is empty - run fetch()")


class ReadOnlyError(MemberSyncError):
    """The backing source cannot be mutated."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} -> adapter is read-only")
