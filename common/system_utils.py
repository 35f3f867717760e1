# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the installer.

This module includes the privilege check and discovery of the Go module root
the binaries are built from.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from common.command_utils import log_installer
from installer.config_models import PROJECT_MARKER_FILE, AppSettings

module_logger = logging.getLogger(__name__)


def is_root() -> bool:
    """Return True when the process runs with an effective uid of 0."""
    return os.geteuid() == 0


def _walk_up_for_marker(start: Path, marker: str) -> Optional[Path]:
    directory = start.resolve()
    while True:
        if (directory / marker).is_file():
            return directory
        if directory.parent == directory:
            return None
        directory = directory.parent


def find_project_root(
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
    entry_point: Optional[Path] = None,
    start_dir: Optional[Path] = None,
    marker: str = PROJECT_MARKER_FILE,
) -> Path:
    """
    Locate the Go module root the binaries are built from.

    Resolution order:
    1. ``app_settings.project_root`` when configured.
    2. The directory containing the entry point, if it holds ``marker``.
    3. The first directory holding ``marker`` walking up from ``start_dir``
       (the working directory by default).
    4. The working directory.

    Args:
        app_settings: Installer settings.
        current_logger: Optional logger instance.
        entry_point: Path of the running entry script. Defaults to ``sys.argv[0]``.
        start_dir: Directory to start the upward search from.
        marker: File name identifying the project root.

    Returns:
        The resolved project root.
    """
    logger_to_use = current_logger if current_logger else module_logger

    if app_settings is not None and app_settings.project_root is not None:
        return Path(app_settings.project_root)

    entry = entry_point if entry_point is not None else Path(sys.argv[0])
    entry_dir = entry.resolve().parent
    if (entry_dir / marker).is_file():
        return entry_dir

    found = _walk_up_for_marker(start_dir or Path.cwd(), marker)
    if found is not None:
        return found

    log_installer(
        f"Could not find {marker} above {start_dir or Path.cwd()}; building from the current directory.",
        "warning",
        logger_to_use,
        app_settings,
    )
    return Path(".")
