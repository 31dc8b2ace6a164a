"""Pacing between successive mutating calls.

Remote APIs throttle bursts of destructive calls (Slack's
conversations.kick is a Tier 3 method). Adapters walk their work items
through ``paced()`` so the delay policy can be swapped, e.g. for a
zero-delay pacer in tests.
"""

import asyncio
from collections.abc import AsyncIterator, Iterable
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Pacer(Protocol):
    """Waits between two consecutive mutating calls."""

    async def wait(self) -> None:
        """Block until the next call may be issued."""
        ...


class FixedDelayPacer:
    """Sleep a fixed number of seconds between calls.

    The sleep is an ``asyncio.sleep``, so cancelling the calling task
    interrupts it.
    """

    def __init__(self, delay_seconds: float = 1.0):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds

    async def wait(self) -> None:
        await asyncio.sleep(self.delay_seconds)


async def paced(items: Iterable[T], pacer: Pacer) -> AsyncIterator[T]:
    """Yield ``items`` in order, waiting on ``pacer`` between them.

    The pacer runs after the consumer has finished with an item and before
    the next one is handed out. There is no wait after the last item, and a
    consumer that stops early (break or exception) triggers no wait at all.

    Args:
        items: Work items to pace
        pacer: Delay policy applied between items

    Yields:
        Each item, in input order
    """
    first = True
    for item in items:
        if not first:
            await pacer.wait()
        first = False
        yield item
