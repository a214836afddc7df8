"""Deferred tasks that run after the current render has committed.

The render engine owns one ``TaskQueue``. Resolvers queue work that needs
the rendered tree (scrolling to a post, focusing an element), and the
engine drains the queue on the next turn: an explicit ``flush()`` or the
start of the next navigation.
"""

import logging
from collections import deque
from collections.abc import Callable
from typing import Any

logger = logging.getLogger("perch.tasks")


class TaskQueue:
    """FIFO of zero-argument callbacks.

    A failing task is logged and does not stop the tasks behind it,
    matching how an uncaught timer callback behaves in a browser.
    """

    __slots__ = ("_pending",)

    def __init__(self) -> None:
        self._pending: deque[Callable[[], Any]] = deque()

    def defer(self, callback: Callable[[], Any]) -> None:
        self._pending.append(callback)

    def __len__(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run the tasks queued so far and return how many ran.

        Tasks queued while draining wait for the following turn.
        """
        count = len(self._pending)
        for _ in range(count):
            task = self._pending.popleft()
            try:
                task()
            except Exception:
                logger.exception("Deferred task %r failed", task)
        return count
