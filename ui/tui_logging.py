# ui/tui_logging.py
# -*- coding: utf-8 -*-
"""
Logging handler for the TUI.
"""

import logging
import queue
import threading
from typing import Callable, Optional, Tuple

from .tui_widgets import LogDisplay


class TuiLogHandler(logging.Handler):
    """
    A logging handler that directs messages to the Urwid LogDisplay.

    Records emitted on the main thread are written straight to the widget.
    Records from worker threads are queued and ``wake`` is called; the main
    loop then calls ``flush_pending`` to move them onto the screen.
    """

    def __init__(
        self,
        log_display_widget: LogDisplay,
        wake: Optional[Callable[[], None]] = None,
    ):
        super().__init__()
        self.log_display_widget = log_display_widget
        self.wake = wake
        self._pending: "queue.SimpleQueue[Tuple[str, str]]" = (
            queue.SimpleQueue()
        )
        self.formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            level_name = record.levelname.lower()
            if threading.current_thread() is threading.main_thread():
                self.log_display_widget.add_message(msg, level=level_name)
            else:
                self._pending.put((msg, level_name))
                if self.wake is not None:
                    self.wake()
        except RecursionError:  # pragma: no cover
            raise
        except Exception:  # pragma: no cover
            self.handleError(record)

    def flush_pending(self) -> int:
        """Write queued worker-thread records to the widget. Main thread only."""
        flushed = 0
        while True:
            try:
                msg, level_name = self._pending.get_nowait()
            except queue.Empty:
                return flushed
            self.log_display_widget.add_message(msg, level=level_name)
            flushed += 1
