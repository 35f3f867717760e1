# installer/steps.py
# -*- coding: utf-8 -*-
"""
Concrete units of work used by the install and uninstall pipelines.

Each step raises ``TaskError`` with a message suitable for the terminal
summary; the orchestrator decides whether that failure is fatal.
"""

import os
import subprocess
import tempfile
from pathlib import Path

from common.command_utils import log_installer, run_command
from common.system_utils import is_root

from .exceptions import TaskError
from .tasks import RunContext, UnitOfWork

BINARY_MODE = 0o755


class CheckPrivileges(UnitOfWork):
    def execute(self, context: RunContext) -> None:
        if not is_root():
            raise TaskError("installer must be run with sudo or as root")
        log_installer(
            f"{context.settings.symbols.get('success', '✅')} Running with root privileges.",
            "info",
            context.logger,
            context.settings,
        )


class BuildBinary(UnitOfWork):
    """Runs ``go build -o <name> <package>`` in the project root."""

    def __init__(self, name: str, package: str):
        self.name = name
        self.package = package

    def execute(self, context: RunContext) -> None:
        try:
            run_command(
                [context.go_command, "build", "-o", self.name, self.package],
                context.settings,
                check=True,
                capture_output=True,
                current_logger=context.logger,
                cwd=context.project_root,
            )
        except subprocess.CalledProcessError as e:
            output = "".join(
                part for part in (e.stdout, e.stderr) if part
            ).strip()
            raise TaskError(f"build failed: {output}") from e
        except FileNotFoundError as e:
            raise TaskError(
                f"build failed: {context.go_command} not found in PATH"
            ) from e

    def __repr__(self) -> str:
        return f"BuildBinary(name={self.name!r}, package={self.package!r})"


class InstallBinary(UnitOfWork):
    """
    Copies a freshly built binary into the install directory.

    The file is written next to its destination and renamed into place, so a
    running copy of the old binary is replaced rather than truncated.
    """

    def __init__(self, name: str):
        self.name = name

    def execute(self, context: RunContext) -> None:
        src_path = context.project_root / self.name
        dst_path = context.install_dir / self.name

        try:
            data = src_path.read_bytes()
        except OSError as e:
            raise TaskError(f"failed to read binary: {e}") from e

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.name}.", dir=context.install_dir
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.chmod(tmp_name, BINARY_MODE)
                os.replace(tmp_name, dst_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise TaskError(f"failed to install binary: {e}") from e

        log_installer(
            f"{context.settings.symbols.get('package', '📦')} Installed {dst_path}",
            "info",
            context.logger,
            context.settings,
        )

    def __repr__(self) -> str:
        return f"InstallBinary(name={self.name!r})"


class RemoveBinary(UnitOfWork):
    """Deletes an installed binary. A missing file is reported as a failure."""

    def __init__(self, name: str):
        self.name = name

    def execute(self, context: RunContext) -> None:
        path = context.install_dir / self.name
        try:
            os.remove(path)
        except FileNotFoundError as e:
            raise TaskError(f"{path} not found") from e
        except IsADirectoryError as e:
            raise TaskError(
                f"failed to remove binary: {path} is a directory"
            ) from e
        except OSError as e:
            raise TaskError(f"failed to remove binary: {e}") from e

        log_installer(
            f"Removed {path}", "info", context.logger, context.settings
        )

    def __repr__(self) -> str:
        return f"RemoveBinary(name={self.name!r})"
