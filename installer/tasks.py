# installer/tasks.py
# -*- coding: utf-8 -*-
"""
Task data model: status values, the unit-of-work capability and the shared
run context handed to every unit of work.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .config_models import AppSettings


class TaskStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"
    SKIPPED = "skipped"

    @property
    def is_resolved(self) -> bool:
        return self in (
            TaskStatus.COMPLETE,
            TaskStatus.FAILED,
            TaskStatus.SKIPPED,
        )


@dataclass(frozen=True)
class RunContext:
    """Read-only values shared by every unit of work in one run."""

    project_root: Path
    install_dir: Path
    go_command: str
    settings: AppSettings
    logger: logging.Logger


class UnitOfWork(ABC):
    """
    A single fallible operation of a pipeline.

    Implementations return normally on success and raise ``TaskError`` with a
    human-readable message on failure. They never touch task status.
    """

    @abstractmethod
    def execute(self, context: RunContext) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


@dataclass
class Task:
    """A named pipeline step. Only the orchestrator changes ``status``."""

    name: str
    description: str
    work: UnitOfWork
    optional: bool = False
    status: TaskStatus = field(default=TaskStatus.PENDING)


@dataclass(frozen=True)
class TaskView:
    """Snapshot of a task as seen by presentation code."""

    name: str
    description: str
    status: TaskStatus
    optional: bool

    @classmethod
    def of(cls, task: Task) -> "TaskView":
        return cls(task.name, task.description, task.status, task.optional)
