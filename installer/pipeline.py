# installer/pipeline.py
# -*- coding: utf-8 -*-
"""
Builds the ordered task list for an install or uninstall run.
"""

from enum import Enum
from typing import List

from .config_models import AppSettings
from .steps import BuildBinary, CheckPrivileges, InstallBinary, RemoveBinary
from .tasks import Task


class Mode(Enum):
    INSTALL = "install"
    UNINSTALL = "uninstall"


# Menu order of the selection screen.
MODES: List[Mode] = [Mode.INSTALL, Mode.UNINSTALL]


def _privilege_task() -> Task:
    return Task(
        name="Check privileges",
        description="Checking root access",
        work=CheckPrivileges(),
    )


def build_pipeline(mode: Mode, app_settings: AppSettings) -> List[Task]:
    """
    Return a fresh list of tasks for ``mode``.

    Install runs the privilege check, builds every configured binary and then
    installs them, all required. Uninstall runs the privilege check and removes
    each binary; removals are optional so a missing binary does not stop the
    run.
    """
    install_dir = app_settings.install_dir
    tasks = [_privilege_task()]

    if mode is Mode.UNINSTALL:
        for binary in app_settings.binaries:
            tasks.append(
                Task(
                    name=f"Remove {binary.name}",
                    description=f"Removing {install_dir / binary.name}",
                    work=RemoveBinary(binary.name),
                    optional=True,
                )
            )
        return tasks

    for binary in app_settings.binaries:
        tasks.append(
            Task(
                name=f"Build {binary.name}",
                description=f"Building {binary.name} binary",
                work=BuildBinary(binary.name, binary.package),
            )
        )
    for binary in app_settings.binaries:
        tasks.append(
            Task(
                name=f"Install {binary.name}",
                description=f"Installing {binary.name} to {install_dir}",
                work=InstallBinary(binary.name),
            )
        )
    return tasks
