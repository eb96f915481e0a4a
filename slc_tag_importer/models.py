"""
Shared data models, enumerations, and typed structures for the tag importer.

Provides:
- ``str``-based enums for symbol category, data type, record outcome and
  report severity.  These compare equal to plain strings
  (``DataTypeKind.INT16 == "Int16"``), so the values can be written straight
  into namespace attributes and JSON.
- Dataclasses for structured returns (ImportSummary, ReportEntry).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ===================================================================
# Enumerations
# ===================================================================

class SymbolCategory(str, Enum):
    """Data-file family of a legacy controller symbol."""
    STATUS = "Status"
    INPUT = "Input"
    OUTPUT = "Output"
    BOOLEAN = "Boolean"
    TIMER = "Timer"
    COUNTER = "Counter"
    INTEGER = "Integer"
    FLOAT = "Float"
    UNCLASSIFIED = "Unclassified"


class DataTypeKind(str, Enum):
    """Declared primitive type of an imported variable."""
    BOOLEAN = "Boolean"
    INT16 = "Int16"
    INT32 = "Int32"
    FLOAT32 = "Float32"


class RecordOutcome(str, Enum):
    """Result of importing a single CSV record."""
    IMPORTED = "imported"
    SKIPPED_BLANK = "skipped_blank"
    SKIPPED_DIRECTIVE = "skipped_directive"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED_CREATE = "failed_create"
    FAILED_CLASSIFY_OR_OTHER = "failed_classify_or_other"


class Severity(str, Enum):
    """Report severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# ===================================================================
# Dataclasses — structured returns
# ===================================================================

@dataclass
class ReportEntry:
    """One message emitted on the reporting surface."""
    severity: Severity
    operation: str
    message: str

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "operation": self.operation,
            "message": self.message,
        }


@dataclass
class ImportSummary:
    """Result of one import run.

    ``imported_count`` and ``csv_path`` are what the final summary report
    states.  ``outcomes`` tallies every record outcome for callers that want
    the detail.
    """
    csv_path: str
    imported_count: int = 0
    outcomes: Counter = field(default_factory=Counter)
    stopped: bool = False

    def record(self, outcome: RecordOutcome) -> None:
        """Tally *outcome*, counting imported records."""
        self.outcomes[outcome] += 1
        if outcome is RecordOutcome.IMPORTED:
            self.imported_count += 1

    def to_dict(self) -> dict:
        """Serialize to a plain dict (for JSON compatibility)."""
        d: dict[str, Any] = {
            "csv_path": self.csv_path,
            "imported_count": self.imported_count,
            "outcomes": {k.value: v for k, v in self.outcomes.items()},
        }
        if self.stopped:
            d["stopped"] = True
        return d
