# ui/tui_widgets.py
# -*- coding: utf-8 -*-
"""
Custom Urwid widget components for the TUI.
"""

import urwid  # type: ignore[import-untyped]

LOG_LEVEL_ATTRS = {"debug", "info", "warning", "error", "critical"}


class LogDisplay(urwid.WidgetWrap):
    """A widget to display log messages in the TUI."""

    def __init__(self, max_lines: int = 500) -> None:
        self.max_lines = max_lines
        self.log_lines = urwid.SimpleFocusListWalker([])
        self.list_box = urwid.ListBox(self.log_lines)
        super().__init__(
            urwid.AttrMap(urwid.LineBox(self.list_box, title="Logs"), "border")
        )

    def add_message(self, message: str, level: str = "info") -> None:
        level = level.lower()
        attr = f"log_{level}" if level in LOG_LEVEL_ATTRS else "body"
        self.log_lines.append(urwid.Text((attr, message)))
        overflow = len(self.log_lines) - self.max_lines
        if overflow > 0:
            del self.log_lines[:overflow]
        if self.log_lines:  # pragma: no branch
            self.list_box.set_focus(len(self.log_lines) - 1)


class MainPanel(urwid.WidgetWrap):
    """Bordered panel holding the phase-specific body text."""

    def __init__(self) -> None:
        self.body_text = urwid.Text("")
        padded = urwid.Padding(self.body_text, left=2, right=2)
        filler = urwid.Filler(padded, valign="top", top=1, bottom=1)
        super().__init__(urwid.AttrMap(urwid.LineBox(filler), "border"))

    def set_markup(self, markup) -> None:
        self.body_text.set_text(markup)
