# -*- coding: utf-8 -*-
"""
Tests for the concrete units of work.
"""

import os
import stat
import subprocess

import pytest

from installer.exceptions import TaskError
from installer.steps import BuildBinary, CheckPrivileges, InstallBinary, RemoveBinary


class TestCheckPrivileges:
    def test_passes_as_root(self, mocker, run_context):
        mocker.patch("common.system_utils.os.geteuid", return_value=0)

        CheckPrivileges().execute(run_context)

    def test_fails_without_root(self, mocker, run_context):
        mocker.patch("common.system_utils.os.geteuid", return_value=1000)

        with pytest.raises(TaskError) as excinfo:
            CheckPrivileges().execute(run_context)

        assert excinfo.value.message == "installer must be run with sudo or as root"


class TestBuildBinary:
    def test_runs_go_build_in_project_root(self, mocker, run_context):
        mock_run = mocker.patch(
            "common.command_utils.subprocess.run",
            return_value=subprocess.CompletedProcess([], 0, "", ""),
        )

        BuildBinary("syscgo", "./cmd/syscgo").execute(run_context)

        args, kwargs = mock_run.call_args
        assert args[0] == ["go", "build", "-o", "syscgo", "./cmd/syscgo"]
        assert kwargs["cwd"] == run_context.project_root
        assert kwargs["check"] is True
        assert kwargs["capture_output"] is True

    def test_reports_compiler_output_on_failure(self, mocker, run_context):
        mocker.patch(
            "common.command_utils.subprocess.run",
            side_effect=subprocess.CalledProcessError(
                1, ["go", "build"], output="", stderr="main.go:3: undefined: x\n"
            ),
        )

        with pytest.raises(TaskError) as excinfo:
            BuildBinary("syscgo", "./cmd/syscgo").execute(run_context)

        assert excinfo.value.message == "build failed: main.go:3: undefined: x"

    def test_reports_missing_toolchain(self, mocker, run_context):
        mocker.patch(
            "common.command_utils.subprocess.run",
            side_effect=FileNotFoundError(2, "No such file", "go"),
        )

        with pytest.raises(TaskError) as excinfo:
            BuildBinary("syscgo", "./cmd/syscgo").execute(run_context)

        assert "go not found" in excinfo.value.message


class TestInstallBinary:
    def test_copies_binary_with_exec_mode(self, run_context):
        (run_context.project_root / "syscgo").write_bytes(b"\x7fELF-binary")

        InstallBinary("syscgo").execute(run_context)

        installed = run_context.install_dir / "syscgo"
        assert installed.read_bytes() == b"\x7fELF-binary"
        assert stat.S_IMODE(installed.stat().st_mode) == 0o755
        assert sorted(p.name for p in run_context.install_dir.iterdir()) == ["syscgo"]

    def test_replaces_existing_binary(self, run_context):
        (run_context.install_dir / "syscgo").write_bytes(b"old")
        (run_context.project_root / "syscgo").write_bytes(b"new")

        InstallBinary("syscgo").execute(run_context)

        assert (run_context.install_dir / "syscgo").read_bytes() == b"new"

    def test_missing_build_output(self, run_context):
        with pytest.raises(TaskError) as excinfo:
            InstallBinary("syscgo").execute(run_context)

        assert excinfo.value.message.startswith("failed to read binary:")

    def test_unwritable_destination(self, mocker, run_context):
        (run_context.project_root / "syscgo").write_bytes(b"bin")
        mocker.patch(
            "installer.steps.tempfile.mkstemp",
            side_effect=PermissionError(13, "Permission denied"),
        )

        with pytest.raises(TaskError) as excinfo:
            InstallBinary("syscgo").execute(run_context)

        assert excinfo.value.message.startswith("failed to install binary:")

    def test_temporary_file_removed_when_rename_fails(self, mocker, run_context):
        (run_context.project_root / "syscgo").write_bytes(b"bin")
        mocker.patch("installer.steps.os.replace", side_effect=OSError(18, "Cross-device link"))

        with pytest.raises(TaskError):
            InstallBinary("syscgo").execute(run_context)

        assert list(run_context.install_dir.iterdir()) == []


class TestRemoveBinary:
    def test_removes_installed_binary(self, run_context):
        target = run_context.install_dir / "syscgo"
        target.write_bytes(b"bin")

        RemoveBinary("syscgo").execute(run_context)

        assert not target.exists()

    def test_absent_binary_reports_not_found(self, run_context):
        with pytest.raises(TaskError) as excinfo:
            RemoveBinary("syscgo").execute(run_context)

        assert excinfo.value.message == f"{run_context.install_dir / 'syscgo'} not found"

    def test_other_os_errors_are_reported(self, mocker, run_context):
        mocker.patch("installer.steps.os.remove", side_effect=PermissionError(13, "Permission denied"))

        with pytest.raises(TaskError) as excinfo:
            RemoveBinary("syscgo").execute(run_context)

        assert excinfo.value.message.startswith("failed to remove binary:")

    @pytest.mark.skipif(os.name != "posix", reason="POSIX unlink semantics")
    def test_directory_is_not_removed(self, run_context):
        (run_context.install_dir / "syscgo").mkdir()

        with pytest.raises(TaskError) as excinfo:
            RemoveBinary("syscgo").execute(run_context)

        assert "failed to remove binary" in excinfo.value.message
        assert (run_context.install_dir / "syscgo").is_dir()
