# installer/events.py
# -*- coding: utf-8 -*-
"""
Events consumed by the orchestrator and effects it asks its driver to perform.
"""

from dataclasses import dataclass
from typing import Union

from .tasks import UnitOfWork


# --- Events ---


@dataclass(frozen=True)
class SelectionMoved:
    """Move the mode selection by ``direction`` (-1 up, +1 down)."""

    direction: int


@dataclass(frozen=True)
class Confirmed:
    pass


@dataclass(frozen=True)
class CancelRequested:
    pass


@dataclass(frozen=True)
class TaskCompleted:
    index: int
    success: bool
    message: str = ""


@dataclass(frozen=True)
class Tick:
    pass


Event = Union[SelectionMoved, Confirmed, CancelRequested, TaskCompleted, Tick]


# --- Effects ---


@dataclass(frozen=True)
class ExecuteTask:
    """Run ``work`` off the event loop and report back as ``TaskCompleted(index)``."""

    index: int
    work: UnitOfWork


@dataclass(frozen=True)
class ScheduleTick:
    """Deliver one ``Tick`` after the animation interval."""


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[ExecuteTask, ScheduleTick, Quit]
