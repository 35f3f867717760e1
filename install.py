# !/usr/bin/env python3
# filename: syscgo-installer/install.py
# -*- coding: utf-8 -*-
"""
Entry point for the syscgo installer.

Without ``--mode`` an interactive TUI lets the user pick install or
uninstall. With ``--mode`` the chosen pipeline runs headless and the summary
is printed to stdout.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.command_utils import command_exists
from common.logging_config import LOG_FORMATS, setup_logging
from installer.config_loader import CONFIG_FILE_DEFAULT, load_app_settings
from installer.config_models import LOG_LEVELS
from installer.exceptions import ConfigError, OrchestrationError
from installer.headless import run_headless
from installer.orchestrator import InstallOrchestrator
from installer.pipeline import MODES, Mode
from installer.summary import summarize
from installer.task_runner import build_run_context
from ui.presentation import markup_to_text, render_summary

SERVICE_NAME = "syscgo_installer"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build and install (or remove) the syscgo binaries."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE_DEFAULT,
        help=f"YAML configuration file (default: {CONFIG_FILE_DEFAULT}, ignored if missing)",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in MODES],
        help="Run this pipeline without the interactive TUI",
    )
    parser.add_argument(
        "--install-dir", help="Directory to install the binaries into"
    )
    parser.add_argument(
        "--project-root", help="Go module root to build the binaries from"
    )
    parser.add_argument("--go-command", help="Go toolchain executable")
    parser.add_argument(
        "--task-delay",
        type=float,
        help="Seconds to pause before each task",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level (overridden by --verbose)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default="text",
        help="Console log format",
    )
    return parser.parse_args(args)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    bootstrap_logger = logging.getLogger(SERVICE_NAME)

    try:
        app_settings = load_app_settings(args, args.config, bootstrap_logger)
    except ConfigError as e:
        setup_logging(SERVICE_NAME, "ERROR", args.log_format)
        bootstrap_logger.error(str(e))
        return EXIT_CONFIG_ERROR

    logger = setup_logging(
        SERVICE_NAME,
        "DEBUG" if args.verbose else app_settings.log_level,
        args.log_format,
    )

    if args.mode != Mode.UNINSTALL.value and not command_exists(
        app_settings.go_command
    ):
        print("Error: Go is not installed or not in PATH")
        print("Please install Go from https://golang.org/dl/")
        return EXIT_FAILURE

    context = build_run_context(app_settings, logger)
    logger.debug(
        f"Project root: {context.project_root}, install dir: {context.install_dir}"
    )

    try:
        if args.mode:
            orchestrator = InstallOrchestrator.from_settings(app_settings, logger)
            snapshot = run_headless(
                Mode(args.mode),
                orchestrator,
                context,
                delay=app_settings.task_delay_seconds,
                current_logger=logger,
            )
            print(
                markup_to_text(
                    render_summary(
                        snapshot,
                        app_settings.install_dir,
                        app_settings.binary_names,
                    )
                )
            )
            summary = summarize(
                snapshot, app_settings.install_dir, app_settings.binary_names
            )
            return EXIT_OK if summary.succeeded else EXIT_FAILURE

        # Imported here so headless runs work without a usable terminal.
        from ui.tui_application import run_tui_installer

        run_tui_installer(app_settings, context)
        return EXIT_OK
    except OrchestrationError as e:
        logger.critical(f"🔥 Installer event loop out of sequence: {e}", exc_info=True)
        return EXIT_FAILURE
    except Exception as e:
        logger.critical(f"🔥 Installer event loop failed: {e}", exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
