# ui/tui_constants.py
# -*- coding: utf-8 -*-
"""
Theme, palette and fixed text for the TUI.
"""

from dataclasses import dataclass
from typing import List, Tuple

PaletteEntry = Tuple[str, ...]

HEADER_ART = """\
▄▀▀▀▀ █   █ ▄▀▀▀▀ ▄▀▀▀▀       ▄▀▀▀▀ ▄▀▀▀▄    ▄▀    ▄▀
 ▀▀▀▄ ▀▀▀▀█  ▀▀▀▄ █     ▀▀▀▀▀ █ ▀▀█ █   █  ▄▀    ▄▀
▀▀▀▀  ▀▀▀▀▀ ▀▀▀▀   ▀▀▀▀        ▀▀▀   ▀▀▀  ▀     ▀
             /// SEE YOU SPACE COWBOY//               """

HELP_SELECTING = "↑/↓: Navigate  •  Enter: Continue  •  Q/Ctrl+C: Quit"
HELP_RUNNING = "Q/Ctrl+C: Cancel (available once the run stops)"
HELP_FINISHED = "Enter: Exit  •  Q/Ctrl+C: Quit"

DOT_SPINNER: Tuple[str, ...] = ("⣾ ", "⣽ ", "⣻ ", "⢿ ", "⡿ ", "⣟ ", "⣯ ", "⣷ ")


@dataclass(frozen=True)
class Theme:
    """
    Colours and marks used to render a frame.

    Colour values are urwid 16-colour names. The default is the monochrome
    look of the installer.
    """

    background: str = "black"
    primary: str = "white"
    secondary: str = "light gray"
    accent: str = "white"
    muted: str = "dark gray"
    error: str = "white"
    warning: str = "light gray"
    ok_mark: str = "[OK]"
    fail_mark: str = "[FAIL]"
    skip_mark: str = "[SKIP]"
    selection_marker: str = "▸ "
    spinner: Tuple[str, ...] = DOT_SPINNER

    def palette(self) -> List[PaletteEntry]:
        bg = self.background
        return [
            ("body", self.primary, bg),
            ("header", self.primary + ",bold", bg),
            ("footer", self.muted + ",italics", bg),
            ("border", self.primary, bg),
            ("primary", self.primary, bg),
            ("secondary", self.secondary, bg),
            ("accent", self.accent, bg),
            ("accent_bold", self.accent + ",bold", bg),
            ("muted", self.muted, bg),
            ("error_bold", self.error + ",bold", bg),
            ("warning", self.warning, bg),
            ("ok_mark", self.accent, bg),
            ("fail_mark", self.error, bg),
            ("skip_mark", self.warning, bg),
            ("log_debug", "dark gray", bg),
            ("log_info", self.secondary, bg),
            ("log_warning", "brown", bg),
            ("log_error", "light red", bg, "bold"),
            ("log_critical", "white", "dark red", "standout"),
        ]


DEFAULT_THEME = Theme()
