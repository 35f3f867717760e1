# installer/headless.py
# -*- coding: utf-8 -*-
"""
Runs a pipeline without a terminal UI.

Events are consumed from the bus in arrival order exactly as the TUI consumes
them, so the same orchestrator drives both front ends.
"""

import logging
from typing import Optional

from .event_bus import EventBus
from .events import Confirmed, ExecuteTask, Quit, ScheduleTick, SelectionMoved
from .orchestrator import InstallOrchestrator, OrchestratorSnapshot, Phase
from .pipeline import MODES, Mode
from .task_runner import ThreadedTaskRunner
from .tasks import RunContext

module_logger = logging.getLogger(__name__)


def run_headless(
    mode: Mode,
    orchestrator: InstallOrchestrator,
    context: RunContext,
    delay: float = 0.0,
    event_timeout: Optional[float] = None,
    current_logger: Optional[logging.Logger] = None,
) -> OrchestratorSnapshot:
    """
    Select ``mode``, confirm it and process events until the run finishes.

    Ticks are never scheduled because there is nothing to animate.

    Args:
        mode: Pipeline to run.
        orchestrator: A fresh orchestrator in the selecting phase.
        context: Shared run context handed to each unit of work.
        delay: Pause before each unit of work.
        event_timeout: Maximum seconds to wait for any single event. ``None``
            waits indefinitely; ``queue.Empty`` is raised on expiry.
        current_logger: Optional logger instance.

    Returns:
        The orchestrator snapshot once the phase is FINISHED.
    """
    logger_to_use = current_logger if current_logger else module_logger
    bus = EventBus()
    runner = ThreadedTaskRunner(bus, context, delay, logger_to_use)

    bus.post(SelectionMoved(MODES.index(mode) - orchestrator.selected_index))
    bus.post(Confirmed())

    while orchestrator.phase is not Phase.FINISHED:
        event = bus.get(timeout=event_timeout)
        for effect in orchestrator.handle(event):
            if isinstance(effect, ExecuteTask):
                runner.dispatch(effect.index, effect.work)
            elif isinstance(effect, ScheduleTick):
                continue
            elif isinstance(effect, Quit):
                logger_to_use.debug("Quit requested before the run finished.")
                return orchestrator.snapshot()

    runner.join()
    return orchestrator.snapshot()
