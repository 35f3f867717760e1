# tests/conftest.py
import logging
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from installer.config_models import AppSettings
from installer.exceptions import TaskError
from installer.pipeline import Mode
from installer.tasks import RunContext, Task, UnitOfWork


class FakeWork(UnitOfWork):
    """Unit of work that succeeds, or fails with ``failure`` when set."""

    def __init__(self, failure: Optional[str] = None):
        self.failure = failure
        self.calls = 0

    def execute(self, context: RunContext) -> None:
        self.calls += 1
        if self.failure is not None:
            raise TaskError(self.failure)


def fake_tasks(spec: List[tuple]) -> List[Task]:
    """Build tasks from ``(name, optional, failure)`` tuples."""
    return [
        Task(name=name, description=f"Doing {name}", work=FakeWork(failure), optional=optional)
        for name, optional, failure in spec
    ]


INSTALL_SPEC = [
    ("Check privileges", False, None),
    ("Build syscgo", False, None),
    ("Build syscgo-tui", False, None),
    ("Install syscgo", False, None),
    ("Install syscgo-tui", False, None),
]

UNINSTALL_SPEC = [
    ("Check privileges", False, None),
    ("Remove syscgo", True, None),
    ("Remove syscgo-tui", True, None),
]


@pytest.fixture
def pipeline_factory():
    """Factory returning fresh fake pipelines; override specs per test."""

    specs: Dict[Mode, List[tuple]] = {
        Mode.INSTALL: list(INSTALL_SPEC),
        Mode.UNINSTALL: list(UNINSTALL_SPEC),
    }
    built: List[List[Task]] = []

    def factory(mode: Mode) -> List[Task]:
        tasks = fake_tasks(specs[mode])
        built.append(tasks)
        return tasks

    factory.specs = specs  # type: ignore[attr-defined]
    factory.built = built  # type: ignore[attr-defined]
    return factory


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def app_settings(tmp_path: Path) -> AppSettings:
    install_dir = tmp_path / "bin"
    project_root = tmp_path / "src"
    install_dir.mkdir()
    project_root.mkdir()
    return AppSettings(
        install_dir=install_dir,
        project_root=project_root,
        task_delay_seconds=0,
    )


@pytest.fixture
def run_context(app_settings: AppSettings, mock_logger) -> RunContext:
    return RunContext(
        project_root=app_settings.project_root,
        install_dir=app_settings.install_dir,
        go_command="go",
        settings=app_settings,
        logger=mock_logger,
    )


@pytest.fixture
def make_tasks():
    return fake_tasks


@pytest.fixture
def fake_work_cls():
    return FakeWork
