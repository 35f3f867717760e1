# -*- coding: utf-8 -*-
"""
Tests for the TUI wiring, driven without a terminal.
"""

import logging
import threading
from typing import List, Optional

import pytest
import urwid

from installer.events import Tick
from installer.exceptions import TaskError
from installer.orchestrator import InstallOrchestrator, Phase
from installer.pipeline import Mode
from installer.tasks import RunContext, Task, TaskStatus, UnitOfWork
from ui.tui_application import InstallerTUI
from ui.tui_constants import DEFAULT_THEME
from ui.tui_logging import TuiLogHandler
from ui.tui_widgets import LogDisplay


class FakeScreen:
    """Screen that never touches a terminal."""

    def register_palette(self, palette):
        self.palette = palette


class GatedWork(UnitOfWork):
    """Unit of work that blocks until released, then succeeds or fails."""

    def __init__(self, failure: Optional[str] = None):
        self.failure = failure
        self.released = threading.Event()

    def execute(self, context: RunContext) -> None:
        if not self.released.wait(timeout=5):
            raise TaskError("never released")
        if self.failure is not None:
            raise TaskError(self.failure)


@pytest.fixture
def gated_pipelines(pipeline_factory):
    """Pipelines whose units of work wait for the test to release them."""
    built: List[List[Task]] = []

    def factory(mode: Mode) -> List[Task]:
        tasks = pipeline_factory(mode)
        for task in tasks:
            task.work = GatedWork(task.work.failure)
        built.append(tasks)
        return tasks

    factory.specs = pipeline_factory.specs  # type: ignore[attr-defined]
    factory.built = built  # type: ignore[attr-defined]
    return factory


@pytest.fixture
def tui(gated_pipelines, run_context, app_settings):
    orchestrator = InstallOrchestrator(gated_pipelines)
    return InstallerTUI(orchestrator, run_context, app_settings, screen=FakeScreen())


def release_active_task(tui: InstallerTUI, gated_pipelines) -> None:
    """Let the running unit of work finish and handle its completion."""
    index = tui.orchestrator.snapshot().active_index
    gated_pipelines.built[-1][index].work.released.set()
    tui.runner.join(timeout=5)
    tui.process_pending_events()


def test_initial_frame_shows_menu(tui):
    assert "Select an option:" in tui.main_panel.body_text.text
    assert "Navigate" in tui.footer_text.text


def test_navigation_keys_are_consumed_and_posted(tui):
    passthrough = tui._filter_input(["down", "x", ("mouse press", 1, 0, 0)], [])

    assert passthrough == ["x", ("mouse press", 1, 0, 0)]
    tui.process_pending_events()
    assert tui.orchestrator.selected_mode is Mode.UNINSTALL
    assert "▸ Uninstall syscgo" in tui.main_panel.body_text.text


def test_frame_is_redrawn_after_each_event(tui, mocker):
    frames = []
    mocker.patch.object(
        tui, "redraw", side_effect=lambda: frames.append(tui.orchestrator.selected_mode)
    )

    tui._filter_input(["down", "up", "down"], [])
    tui.process_pending_events()

    assert frames == [Mode.UNINSTALL, Mode.INSTALL, Mode.UNINSTALL]


def test_completion_posted_mid_drain_waits_for_next_wake(tui, gated_pipelines):
    tui._filter_input(["enter"], [])
    tui.process_pending_events()
    works = [task.work for task in gated_pipelines.built[-1]]
    works[0].released.set()
    works[1].released.set()
    tui.runner.join(timeout=5)

    tui.process_pending_events()

    snapshot = tui.orchestrator.snapshot()
    assert snapshot.tasks[0].status is TaskStatus.COMPLETE
    assert snapshot.active_index == 1
    assert snapshot.tasks[1].status is TaskStatus.RUNNING

    tui.runner.join(timeout=5)
    tui.process_pending_events()
    assert tui.orchestrator.snapshot().tasks[1].status is TaskStatus.COMPLETE


def test_full_install_run_through_event_loop(tui, gated_pipelines):
    tui._filter_input(["enter"], [])
    tui.process_pending_events()

    assert tui.orchestrator.phase is Phase.RUNNING
    assert "Doing Check privileges" in tui.main_panel.body_text.text

    tui.bus.post(Tick())
    tui.process_pending_events()
    assert tui.main_panel.body_text.text.startswith(DEFAULT_THEME.spinner[1])

    for _ in range(5):
        assert tui.orchestrator.phase is Phase.RUNNING
        release_active_task(tui, gated_pipelines)

    snapshot = tui.orchestrator.snapshot()
    assert snapshot.phase is Phase.FINISHED
    assert [t.status for t in snapshot.tasks] == [TaskStatus.COMPLETE] * 5
    assert "Installation complete!" in tui.main_panel.body_text.text
    assert "Exit" in tui.footer_text.text


def test_quit_is_ignored_while_running_and_honoured_after(tui, gated_pipelines):
    gated_pipelines.specs[Mode.INSTALL][0] = ("Check privileges", False, "denied")
    tui._filter_input(["enter"], [])
    tui.process_pending_events()

    tui._filter_input(["q", "ctrl c"], [])
    tui.process_pending_events()
    assert tui.orchestrator.phase is Phase.RUNNING

    release_active_task(tui, gated_pipelines)
    assert tui.orchestrator.phase is Phase.FINISHED
    assert "Installation failed" in tui.main_panel.body_text.text

    tui._filter_input(["ctrl c"], [])
    with pytest.raises(urwid.ExitMainLoop):
        tui.process_pending_events()


def test_quit_from_menu(tui):
    tui._filter_input(["esc"], [])

    with pytest.raises(urwid.ExitMainLoop):
        tui.process_pending_events()


def test_log_handler_queues_records_from_worker_threads():
    display = LogDisplay()
    wakes = []
    handler = TuiLogHandler(display, wake=lambda: wakes.append(True))
    logger = logging.getLogger("tests.tui_logging")
    logger.propagate = False
    logger.addHandler(handler)
    try:
        logger.warning("from main")
        worker = threading.Thread(target=logger.error, args=("from worker",))
        worker.start()
        worker.join()

        assert len(display.log_lines) == 1
        assert wakes == [True]
        assert handler.flush_pending() == 1
        assert len(display.log_lines) == 2
        assert "from worker" in display.log_lines[1].text
    finally:
        logger.removeHandler(handler)
