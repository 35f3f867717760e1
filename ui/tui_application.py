# ui/tui_application.py
# -*- coding: utf-8 -*-
"""
Main application class and runner for the Urwid-based TUI.
"""

import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

import urwid  # type: ignore[import-untyped]

from installer.config_models import AppSettings
from installer.event_bus import EventBus
from installer.events import (
    CancelRequested,
    Confirmed,
    Effect,
    Event,
    ExecuteTask,
    Quit,
    ScheduleTick,
    SelectionMoved,
    Tick,
)
from installer.orchestrator import InstallOrchestrator, OrchestratorSnapshot
from installer.task_runner import ThreadedTaskRunner
from installer.tasks import RunContext

from .presentation import render_body, render_help
from .tui_constants import DEFAULT_THEME, HEADER_ART, Theme
from .tui_logging import TuiLogHandler
from .tui_widgets import LogDisplay, MainPanel

module_logger = logging.getLogger(__name__)

KEY_EVENTS: Dict[str, Event] = {
    "up": SelectionMoved(-1),
    "k": SelectionMoved(-1),
    "down": SelectionMoved(1),
    "j": SelectionMoved(1),
    "enter": Confirmed(),
    "q": CancelRequested(),
    "Q": CancelRequested(),
    "esc": CancelRequested(),
    "ctrl c": CancelRequested(),
}


class InstallerTUI:
    """
    Terminal front end for an install or uninstall run.

    Key presses, animation ticks and task completions are all posted to one
    ``EventBus``. The bus wakes the urwid main loop through a watch pipe, and
    the loop hands queued events to the orchestrator one at a time before
    redrawing. Units of work run on worker threads via ``ThreadedTaskRunner``.

    Attributes:
        orchestrator: The state machine being driven.
        app_settings: Installer settings (install directory, binaries, timing).
        theme: Immutable colours and marks used for rendering.
        bus: Event queue shared with worker threads.
        runner: Dispatches units of work off the main loop.
        main_loop: The urwid main loop.
    """

    def __init__(
        self,
        orchestrator: InstallOrchestrator,
        context: RunContext,
        app_settings: AppSettings,
        theme: Theme = DEFAULT_THEME,
        screen: Optional[urwid.BaseScreen] = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.app_settings = app_settings
        self.theme = theme
        self.bus = EventBus()
        self.runner = ThreadedTaskRunner(
            self.bus, context, app_settings.task_delay_seconds
        )
        self.tui_log_handler: Optional[TuiLogHandler] = None
        self._wake_fd: Optional[int] = None
        self._removed_handlers_by_tui: List[logging.Handler] = []

        self.header = urwid.AttrMap(
            urwid.Text(HEADER_ART, align="center"), "header"
        )
        self.footer_text = urwid.Text("", align="center")
        self.footer = urwid.AttrMap(self.footer_text, "footer")
        self.main_panel = MainPanel()
        self.log_display = LogDisplay()
        self.body = urwid.Pile(
            [
                ("weight", 2, self.main_panel),
                ("weight", 1, self.log_display),
            ]
        )
        self.frame = urwid.Frame(
            body=self.body, header=self.header, footer=self.footer
        )
        self.main_loop: urwid.MainLoop = urwid.MainLoop(
            urwid.AttrMap(self.frame, "body"),
            palette=theme.palette(),
            screen=screen,
            input_filter=self._filter_input,
        )
        self.redraw()

    # --- Event plumbing ---

    def _wake(self) -> None:
        if self._wake_fd is None:
            return
        try:
            os.write(self._wake_fd, b"!")
        except OSError as e:  # pragma: no cover
            module_logger.debug(f"Wake after main loop shut down ignored: {e}")

    def _filter_input(self, keys: List, raw: List[int]) -> List:
        passthrough = []
        for key in keys:
            event = KEY_EVENTS.get(key) if isinstance(key, str) else None
            if event is None:
                passthrough.append(key)
            else:
                self.bus.post(event)
        return passthrough

    def _on_wake(self, _data: bytes) -> bool:
        if self.tui_log_handler is not None:
            self.tui_log_handler.flush_pending()
        self.process_pending_events()
        return True

    def _on_tick_alarm(self, _loop: urwid.MainLoop, _user_data: None) -> None:
        self.bus.post(Tick())

    def process_pending_events(self) -> None:
        """
        Feed the currently queued events to the orchestrator one at a time.

        The frame is redrawn after each event. Events posted while draining
        (task completions, log wakeups) arrive with the next wake.
        """
        for event in self.bus.drain():
            effects = self.orchestrator.handle(event)
            self.redraw()
            for effect in effects:
                self._apply(effect)

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, ExecuteTask):
            self.runner.dispatch(effect.index, effect.work)
        elif isinstance(effect, ScheduleTick):
            self.main_loop.set_alarm_in(
                self.app_settings.tick_interval_seconds, self._on_tick_alarm
            )
        elif isinstance(effect, Quit):
            raise urwid.ExitMainLoop()

    def redraw(self) -> None:
        snapshot = self.orchestrator.snapshot()
        self.main_panel.set_markup(
            render_body(
                snapshot,
                self.theme,
                self.app_settings.install_dir,
                self.app_settings.binary_names,
            )
        )
        self.footer_text.set_text(render_help(snapshot.phase))

    # --- Logging redirection ---

    def _redirect_logging(self) -> None:
        self.tui_log_handler = TuiLogHandler(self.log_display, self._wake)
        self.tui_log_handler.setLevel(logging.DEBUG)
        root_logger = logging.getLogger()
        self._removed_handlers_by_tui.clear()
        for handler in list(root_logger.handlers):
            if isinstance(handler, logging.StreamHandler) and handler.stream in (
                sys.stdout,
                sys.stderr,
            ):
                root_logger.removeHandler(handler)
                self._removed_handlers_by_tui.append(handler)
        root_logger.addHandler(self.tui_log_handler)
        module_logger.debug(f"TUI added TuiLogHandler: {self.tui_log_handler}")

    def _restore_logging(self) -> None:
        root_logger = logging.getLogger()
        if self.tui_log_handler and self.tui_log_handler in root_logger.handlers:
            root_logger.removeHandler(self.tui_log_handler)
        for handler_to_restore in self._removed_handlers_by_tui:
            if handler_to_restore not in root_logger.handlers:
                root_logger.addHandler(handler_to_restore)
        self._removed_handlers_by_tui.clear()

    # --- Lifecycle ---

    def run(self) -> OrchestratorSnapshot:
        """
        Run the main loop until the user quits.

        Returns:
            The final orchestrator snapshot.

        Raises:
            OrchestrationError: If events arrived out of sequence.
        """
        self._wake_fd = self.main_loop.watch_pipe(self._on_wake)
        self.bus.wake = self._wake
        self._redirect_logging()

        screen = self.main_loop.screen
        original_signal_keys: Optional[Tuple] = None
        if hasattr(screen, "tty_signal_keys"):
            # Ctrl+C must arrive as a key so a running pipeline cannot be interrupted.
            original_signal_keys = screen.tty_signal_keys()
            screen.tty_signal_keys(intr="undefined")

        try:
            self.main_loop.run()
        except urwid.ExitMainLoop:  # pragma: no cover
            pass
        finally:
            if original_signal_keys is not None:
                screen.tty_signal_keys(*original_signal_keys)
            self.bus.wake = None
            wake_fd, self._wake_fd = self._wake_fd, None
            self.main_loop.remove_watch_pipe(wake_fd)
            self._restore_logging()
            print("Installer TUI has shut down.", file=sys.stderr)
        return self.orchestrator.snapshot()


def run_tui_installer(
    app_settings: AppSettings,
    context: RunContext,
    theme: Theme = DEFAULT_THEME,
) -> OrchestratorSnapshot:  # pragma: no cover
    orchestrator = InstallOrchestrator.from_settings(app_settings)
    app = InstallerTUI(orchestrator, context, app_settings, theme)
    return app.run()
