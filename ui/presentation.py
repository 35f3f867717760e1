# ui/presentation.py
# -*- coding: utf-8 -*-
"""
Maps orchestrator snapshots to urwid text markup.

Everything here is a pure function of its arguments: nothing reads or changes
orchestrator state, so frames can be rendered and inspected in tests without a
terminal.
"""

from pathlib import Path
from typing import List, Sequence, Tuple, Union

from installer.orchestrator import OrchestratorSnapshot, Phase
from installer.pipeline import Mode
from installer.summary import Outcome, summarize
from installer.tasks import TaskStatus, TaskView

from .tui_constants import (
    HELP_FINISHED,
    HELP_RUNNING,
    HELP_SELECTING,
    Theme,
)

Markup = List[Union[str, Tuple[str, str]]]

MENU_ENTRIES: Tuple[Tuple[Mode, str, str], ...] = (
    (
        Mode.INSTALL,
        "Install syscgo",
        "Builds the binaries and installs them system-wide to {install_dir}",
    ),
    (Mode.UNINSTALL, "Uninstall syscgo", "Removes syscgo from your system"),
)

TRY_IT_COMMANDS: Tuple[str, ...] = (
    "syscgo -effect fire -theme dracula",
    "syscgo -effect aquarium -theme nord",
    "syscgo-tui",
)


def spinner_frame(ticks: int, theme: Theme) -> str:
    return theme.spinner[ticks % len(theme.spinner)]


def render_help(phase: Phase) -> str:
    if phase is Phase.SELECTING:
        return HELP_SELECTING
    if phase is Phase.FINISHED:
        return HELP_FINISHED
    return HELP_RUNNING


def render_welcome(
    snapshot: OrchestratorSnapshot, theme: Theme, install_dir: Path
) -> Markup:
    markup: Markup = ["Select an option:\n\n"]
    for mode, title, blurb in MENU_ENTRIES:
        if mode is snapshot.selected_mode:
            markup.append(("primary", theme.selection_marker))
        else:
            markup.append(" " * len(theme.selection_marker))
        markup.append(f"{title}\n")
        markup.append(f"    {blurb.format(install_dir=install_dir)}\n\n")
    markup.append(("muted", "Requires root privileges"))
    return markup


def render_task_line(task: TaskView, ticks: int, theme: Theme) -> Markup:
    if task.status is TaskStatus.RUNNING:
        return [
            ("secondary", spinner_frame(ticks, theme)),
            ("secondary", task.description),
        ]
    if task.status is TaskStatus.COMPLETE:
        return [("ok_mark", theme.ok_mark), f" {task.name}"]
    if task.status is TaskStatus.FAILED:
        return [("fail_mark", theme.fail_mark), f" {task.name}"]
    if task.status is TaskStatus.SKIPPED:
        return [("skip_mark", theme.skip_mark), f" {task.name}"]
    return [("muted", f"  {task.name}")]


def render_progress(snapshot: OrchestratorSnapshot, theme: Theme) -> Markup:
    markup: Markup = []
    for i, task in enumerate(snapshot.tasks):
        markup.extend(render_task_line(task, snapshot.ticks, theme))
        if i < len(snapshot.tasks) - 1:
            markup.append("\n")

    if snapshot.errors:
        markup.append("\n\n")
        for error in snapshot.errors:
            markup.append(("warning", f"{error}\n"))
    return markup


def render_summary(
    snapshot: OrchestratorSnapshot,
    install_dir: Path,
    binary_names: Sequence[str],
) -> Markup:
    summary = summarize(snapshot, install_dir, binary_names)
    headline_attr = (
        "error_bold" if summary.outcome is Outcome.FAILED else "accent_bold"
    )
    markup: Markup = [(headline_attr, summary.headline), "\n\n"]
    for line in summary.details:
        attr = "accent" if line.startswith("  ") else "secondary"
        markup.append((attr, f"{line}\n"))
    for error in summary.errors:
        markup.append(("warning", f"• {error}\n"))

    if summary.outcome is Outcome.ALL_CLEAR and snapshot.mode is Mode.INSTALL:
        markup.append("\n")
        markup.append(("secondary", "Try them out:\n"))
        for command in TRY_IT_COMMANDS:
            markup.append(("accent", f"  {command}\n"))
        markup.append("\n")
        markup.append(
            (
                "muted",
                "Launch syscgo-tui for an interactive TUI to browse and select animations!",
            )
        )
    return markup


def render_body(
    snapshot: OrchestratorSnapshot,
    theme: Theme,
    install_dir: Path,
    binary_names: Sequence[str],
) -> Markup:
    """Markup for the bordered main panel in the current phase."""
    if snapshot.phase is Phase.SELECTING:
        return render_welcome(snapshot, theme, install_dir)
    if snapshot.phase is Phase.RUNNING:
        return render_progress(snapshot, theme)
    return render_summary(snapshot, install_dir, binary_names)


def markup_to_text(markup: Markup) -> str:
    """Drop attributes and join the text of ``markup``."""
    return "".join(
        part if isinstance(part, str) else part[1] for part in markup
    )
