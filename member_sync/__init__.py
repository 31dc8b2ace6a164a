"""Email-based group membership adapters."""

__version__ = "0.1.0"
