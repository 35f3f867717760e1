# installer/event_bus.py
# -*- coding: utf-8 -*-
"""
FIFO event queue shared by the UI, the animation timer and task workers.
"""

import queue
from typing import Callable, Iterator, Optional

from .events import Event


class EventBus:
    """
    Thread-safe event queue consumed by a single event loop.

    ``wake`` is called after every post so a loop blocked elsewhere (for
    example urwid waiting on its file descriptors) knows to drain the queue.
    """

    def __init__(self, wake: Optional[Callable[[], None]] = None):
        self._queue: "queue.Queue[Event]" = queue.Queue()
        self.wake = wake

    def post(self, event: Event) -> None:
        self._queue.put(event)
        if self.wake is not None:
            self.wake()

    def get(self, timeout: Optional[float] = None) -> Event:
        """Block until an event is available. Raises ``queue.Empty`` on timeout."""
        return self._queue.get(timeout=timeout)

    def drain(self) -> Iterator[Event]:
        """
        Yield the events queued when draining starts, in arrival order.

        Events posted while the caller is still iterating are left for the
        next drain.
        """
        for _ in range(self._queue.qsize()):
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return
