# installer/exceptions.py
# -*- coding: utf-8 -*-
"""
Exception types raised by the installer.
"""


class InstallerError(Exception):
    """Base class for installer errors."""


class TaskError(InstallerError):
    """
    Raised by a unit of work when it cannot complete.

    The message is shown to the user verbatim, prefixed by the task name.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrchestrationError(InstallerError):
    """
    Raised when events reach the orchestrator out of sequence.

    This indicates a defect in the driver, never a user-facing failure.
    """


class ConfigError(InstallerError):
    """Raised when the resolved configuration is invalid."""
