# installer/orchestrator.py
# -*- coding: utf-8 -*-
"""
State machine driving an install or uninstall run.

The orchestrator owns the pipeline, the index of the running task, the phase
and the error list. ``handle`` consumes one event, mutates that state and
returns the effects the driver must perform. It never runs work itself, so it
can be exercised without a terminal, threads or a file system.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .config_models import AppSettings
from .events import (
    CancelRequested,
    Confirmed,
    Effect,
    Event,
    ExecuteTask,
    Quit,
    ScheduleTick,
    SelectionMoved,
    TaskCompleted,
    Tick,
)
from .exceptions import OrchestrationError
from .pipeline import MODES, Mode, build_pipeline
from .tasks import Task, TaskStatus, TaskView

module_logger = logging.getLogger(__name__)

PipelineFactory = Callable[[Mode], List[Task]]


class Phase(Enum):
    SELECTING = "selecting"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass(frozen=True)
class ErrorRecord:
    task_name: str
    message: str
    fatal: bool

    def __str__(self) -> str:
        if self.fatal:
            return f"{self.task_name}: {self.message}"
        return f"{self.task_name} (skipped): {self.message}"


@dataclass(frozen=True)
class OrchestratorSnapshot:
    """Read-only view of the orchestrator handed to presentation code."""

    phase: Phase
    selected_mode: Mode
    mode: Optional[Mode]
    tasks: Tuple[TaskView, ...]
    active_index: Optional[int]
    errors: Tuple[ErrorRecord, ...]
    ticks: int

    @property
    def has_fatal_error(self) -> bool:
        return any(error.fatal for error in self.errors)


class InstallOrchestrator:
    """
    Runs a pipeline one task at a time in response to events.

    Args:
        pipeline_factory: Builds the task list for a mode. Called once per run.
        orchestrator_logger: An optional logger instance.
    """

    def __init__(
        self,
        pipeline_factory: PipelineFactory,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        self.pipeline_factory = pipeline_factory
        self.logger = orchestrator_logger or module_logger
        self.phase = Phase.SELECTING
        self.selected_index = 0
        self.mode: Optional[Mode] = None
        self.tasks: List[Task] = []
        self.active_index: Optional[int] = None
        self.errors: List[ErrorRecord] = []
        self.ticks = 0

    @classmethod
    def from_settings(
        cls,
        app_settings: AppSettings,
        orchestrator_logger: Optional[logging.Logger] = None,
    ) -> "InstallOrchestrator":
        return cls(
            lambda mode: build_pipeline(mode, app_settings),
            orchestrator_logger,
        )

    @property
    def selected_mode(self) -> Mode:
        return MODES[self.selected_index]

    def snapshot(self) -> OrchestratorSnapshot:
        return OrchestratorSnapshot(
            phase=self.phase,
            selected_mode=self.selected_mode,
            mode=self.mode,
            tasks=tuple(TaskView.of(task) for task in self.tasks),
            active_index=self.active_index,
            errors=tuple(self.errors),
            ticks=self.ticks,
        )

    def handle(self, event: Event) -> List[Effect]:
        """Apply one event and return the effects to schedule, in order."""
        if isinstance(event, SelectionMoved):
            return self._on_selection_moved(event)
        if isinstance(event, Confirmed):
            return self._on_confirmed()
        if isinstance(event, CancelRequested):
            return self._on_cancel()
        if isinstance(event, TaskCompleted):
            return self._on_task_completed(event)
        if isinstance(event, Tick):
            return self._on_tick()
        raise OrchestrationError(f"Unknown event: {event!r}")

    # --- Transitions ---

    def _on_selection_moved(self, event: SelectionMoved) -> List[Effect]:
        if self.phase is not Phase.SELECTING:
            return []
        new_index = self.selected_index + event.direction
        self.selected_index = max(0, min(len(MODES) - 1, new_index))
        return []

    def _on_confirmed(self) -> List[Effect]:
        if self.phase is Phase.FINISHED:
            return [Quit()]
        if self.phase is Phase.RUNNING:
            return []

        tasks = self.pipeline_factory(self.selected_mode)
        if not tasks:
            raise OrchestrationError(
                f"Pipeline for {self.selected_mode.value} is empty."
            )
        self.mode = self.selected_mode
        self.tasks = tasks
        self.errors = []
        self.ticks = 0
        self.phase = Phase.RUNNING
        self.logger.info(
            f"Starting {self.mode.value} pipeline with {len(tasks)} tasks."
        )
        return [self._start(0), ScheduleTick()]

    def _on_cancel(self) -> List[Effect]:
        if self.phase is Phase.RUNNING:
            self.logger.warning(
                "Cancel ignored: a task is running. Wait for the run to finish."
            )
            return []
        return [Quit()]

    def _on_tick(self) -> List[Effect]:
        if self.phase is not Phase.RUNNING:
            return []
        self.ticks += 1
        return [ScheduleTick()]

    def _on_task_completed(self, event: TaskCompleted) -> List[Effect]:
        if self.phase is not Phase.RUNNING:
            raise OrchestrationError(
                f"Task completion for index {event.index} received while {self.phase.value}."
            )
        if event.index != self.active_index:
            raise OrchestrationError(
                f"Task completion for index {event.index} received, but index {self.active_index} is active."
            )

        task = self.tasks[event.index]
        if event.success:
            task.status = TaskStatus.COMPLETE
            self.logger.info(f"Task '{task.name}' completed successfully.")
        elif task.optional:
            task.status = TaskStatus.SKIPPED
            self.errors.append(ErrorRecord(task.name, event.message, False))
            self.logger.warning(
                f"Task '{task.name}' failed and was skipped: {event.message}"
            )
        else:
            task.status = TaskStatus.FAILED
            self.errors.append(ErrorRecord(task.name, event.message, True))
            self.logger.error(
                f"Task '{task.name}' failed: {event.message}. Halting the run."
            )
            self._finish()
            return []

        next_index = event.index + 1
        if next_index >= len(self.tasks):
            self._finish()
            return []
        return [self._start(next_index)]

    def _start(self, index: int) -> ExecuteTask:
        task = self.tasks[index]
        self.active_index = index
        task.status = TaskStatus.RUNNING
        self.logger.debug(f"Running task {index + 1}/{len(self.tasks)}: {task.name}")
        return ExecuteTask(index, task.work)

    def _finish(self) -> None:
        self.phase = Phase.FINISHED
        self.active_index = None
        if self.errors:
            self.logger.info(
                f"Run finished with {len(self.errors)} error(s)."
            )
        else:
            self.logger.info("Run finished successfully.")
