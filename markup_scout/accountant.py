# File: markup_scout/accountant.py
"""markup_scout.accountant: run-wide failure counters and the exit status they imply."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

__all__ = ["ExitStatus", "ErrorAccountant", "exit_status_for"]


class ExitStatus(IntEnum):
    """Process exit codes consumed by CI pipelines."""

    SUCCESS = 0
    FAILURE_MARKUP = 64
    FAILURE_NOT_FOUND = 65
    FAILURE_MARKUP_NOT_FOUND = 66


def exit_status_for(errors_count: int, not_founds_count: int) -> ExitStatus:
    """Classify a run from its two counters."""
    errors = errors_count > 0
    not_founds = not_founds_count > 0
    if errors and not_founds:
        return ExitStatus.FAILURE_MARKUP_NOT_FOUND
    if errors:
        return ExitStatus.FAILURE_MARKUP
    if not_founds:
        return ExitStatus.FAILURE_NOT_FOUND
    return ExitStatus.SUCCESS


@dataclass(slots=True)
class ErrorAccountant:
    """Counts invalid pages and broken references for one run.

    Counters only ever grow. One invalid page adds exactly one error no
    matter how many messages its validation produced.
    """

    errors_count: int = 0
    not_founds_count: int = 0

    def record_validation(self, is_valid: bool) -> bool:
        if not is_valid:
            self.errors_count += 1
        return is_valid

    def record_not_found(self) -> None:
        self.not_founds_count += 1

    @property
    def errors(self) -> bool:
        return self.errors_count > 0

    @property
    def not_founds(self) -> bool:
        return self.not_founds_count > 0

    @property
    def exit_status(self) -> ExitStatus:
        return exit_status_for(self.errors_count, self.not_founds_count)
