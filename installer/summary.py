# installer/summary.py
# -*- coding: utf-8 -*-
"""
Terminal summary of a finished run.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence, Tuple

from .orchestrator import ErrorRecord, OrchestratorSnapshot
from .pipeline import Mode


class Outcome(Enum):
    ALL_CLEAR = "all_clear"
    CAVEATS = "caveats"
    FAILED = "failed"


@dataclass(frozen=True)
class RunSummary:
    outcome: Outcome
    headline: str
    details: Tuple[str, ...]
    errors: Tuple[ErrorRecord, ...]

    @property
    def succeeded(self) -> bool:
        return self.outcome is not Outcome.FAILED


def classify(errors: Sequence[ErrorRecord]) -> Outcome:
    if any(error.fatal for error in errors):
        return Outcome.FAILED
    if errors:
        return Outcome.CAVEATS
    return Outcome.ALL_CLEAR


def summarize(
    snapshot: OrchestratorSnapshot,
    install_dir: Path,
    binary_names: Sequence[str],
) -> RunSummary:
    """Build the summary shown once the orchestrator has finished."""
    outcome = classify(snapshot.errors)
    uninstall = snapshot.mode is Mode.UNINSTALL
    noun = "Uninstallation" if uninstall else "Installation"

    if outcome is Outcome.FAILED:
        return RunSummary(
            outcome, f"{noun} failed", ("Errors encountered:",), snapshot.errors
        )

    if outcome is Outcome.CAVEATS:
        headline = f"✓ {noun} complete with warnings"
    else:
        headline = f"✓ {noun} complete!"

    if uninstall:
        details: Tuple[str, ...] = (
            f"{' and '.join(binary_names)} are no longer installed in {install_dir}.",
        )
    else:
        details = ("Installed binaries:",) + tuple(
            f"  • {install_dir / name}" for name in binary_names
        )

    if outcome is Outcome.CAVEATS:
        details = details + ("Warnings:",)
    return RunSummary(outcome, headline, details, snapshot.errors)
