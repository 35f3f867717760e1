# installer/task_runner.py
# -*- coding: utf-8 -*-
"""
Runs units of work off the event loop and reports their outcome as events.
"""

import logging
import threading
import time
from pathlib import Path
from typing import Optional

from common.system_utils import find_project_root

from .config_models import AppSettings
from .event_bus import EventBus
from .events import TaskCompleted
from .exceptions import TaskError
from .tasks import RunContext, UnitOfWork

module_logger = logging.getLogger(__name__)


def run_work(
    index: int,
    work: UnitOfWork,
    context: RunContext,
    delay: float = 0.0,
) -> TaskCompleted:
    """
    Execute ``work`` once and describe the outcome.

    ``TaskError`` becomes a failure carrying its message. Any other exception
    is logged with its traceback and reported as a failure as well, so a
    defect in one step cannot wedge the run.
    """
    if delay > 0:
        time.sleep(delay)
    try:
        work.execute(context)
    except TaskError as e:
        return TaskCompleted(index, False, e.message)
    except Exception as e:
        context.logger.critical(
            f"🔥 Unhandled exception in {work!r}: {e}", exc_info=True
        )
        return TaskCompleted(index, False, str(e) or type(e).__name__)
    return TaskCompleted(index, True)


class ThreadedTaskRunner:
    """
    Dispatches each unit of work to a daemon thread.

    The worker posts exactly one ``TaskCompleted`` to the bus and keeps no
    reference to the work afterwards.
    """

    def __init__(
        self,
        bus: EventBus,
        context: RunContext,
        delay: float = 0.0,
        runner_logger: Optional[logging.Logger] = None,
    ):
        self.bus = bus
        self.context = context
        self.delay = delay
        self.logger = runner_logger or module_logger
        self._active_worker_thread: Optional[threading.Thread] = None

    def dispatch(self, index: int, work: UnitOfWork) -> threading.Thread:
        self._active_worker_thread = threading.Thread(
            target=self._worker,
            args=(index, work),
            name=f"task-{index}",
            daemon=True,
        )
        self._active_worker_thread.start()
        return self._active_worker_thread

    def _worker(self, index: int, work: UnitOfWork) -> None:
        self.logger.debug(f"Worker started for task {index}: {work!r}")
        self.bus.post(run_work(index, work, self.context, self.delay))

    def join(self, timeout: Optional[float] = None) -> None:
        if self._active_worker_thread is not None:
            self._active_worker_thread.join(timeout)


def build_run_context(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> RunContext:
    """Resolve the shared context every unit of work of a run receives."""
    logger_to_use = current_logger if current_logger else module_logger
    return RunContext(
        project_root=find_project_root(app_settings, logger_to_use),
        install_dir=Path(app_settings.install_dir),
        go_command=app_settings.go_command,
        settings=app_settings,
        logger=logger_to_use,
    )
