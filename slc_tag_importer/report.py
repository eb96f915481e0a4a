"""
Reporting surface for import runs.

Every message carries a severity and the name of the operation that raised
it.  Messages go to the module logger and are kept on
:attr:`Reporter.entries` so callers (and tests) can inspect exactly what a
run reported.
"""

from __future__ import annotations

import logging
from typing import List

from .models import ReportEntry, Severity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Reporter:
    """Collects info / warning / error reports for one or more runs."""

    def __init__(self, log: logging.Logger = logger):
        self._log = log
        self.entries: List[ReportEntry] = []

    def report(self, severity: Severity, operation: str, message: str) -> ReportEntry:
        entry = ReportEntry(severity, operation, message)
        self.entries.append(entry)
        self._log.log(_LOG_LEVELS[severity], "[%s] %s", operation, message)
        return entry

    def info(self, operation: str, message: str) -> ReportEntry:
        return self.report(Severity.INFO, operation, message)

    def warning(self, operation: str, message: str) -> ReportEntry:
        return self.report(Severity.WARNING, operation, message)

    def error(self, operation: str, message: str) -> ReportEntry:
        return self.report(Severity.ERROR, operation, message)

    def by_severity(self, severity: Severity) -> List[ReportEntry]:
        return [e for e in self.entries if e.severity is severity]

    def clear(self) -> None:
        self.entries.clear()
