"""
CSV tag import for RSLogix 500 symbol exports.

Reads a symbol-table CSV exported from RSLogix 500 (SLC 500 / MicroLogix)
and creates one typed variable per symbol under the ``Tags`` folder of a
communication driver station, sorted into per-data-file folders::

    Tags/
      BoolFile/     B3_0_1     (Boolean)
      IntegerFile/  N7_0       (Int16)
      TimerFile/    T4_0       (Int32)
      ...

Each CSV line is handled by :func:`import_record`, which never raises: the
result of every line is a :class:`RecordOutcome`, and failures are reported
through the :class:`Reporter`.  :class:`ImportRunner` checks the run
preconditions, streams the file, and reports the final count.

Import is append-only.  A tag whose name already exists in its destination
folder is skipped, so re-importing the same file creates nothing new.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Optional

from .classifier import classify, folder_category
from .folders import resolve_folder
from .models import ImportSummary, RecordOutcome
from .namespace import HostTree
from .report import Reporter
from .schema import (
    DESCRIPTION_FIELD,
    DESCRIPTION_NAME,
    DIRECTIVE_MARKER,
    FIELD_SEPARATOR,
    MIN_FIELD_COUNT,
    STRING_DATA_TYPE,
    SYMBOL_FIELD,
    TAGS_FOLDER,
)
from .utils import clean_description, sanitize_tag_name, strip_xml_illegal

logger = logging.getLogger(__name__)


class ImportPreconditionError(ValueError):
    """A run cannot start: bad CSV path, driver, station or Tags folder."""


# ---------------------------------------------------------------------------
# Single record
# ---------------------------------------------------------------------------

def import_record(
    tree: HostTree,
    line: Optional[str],
    target_root: Any,
    reporter: Optional[Reporter] = None,
) -> RecordOutcome:
    """Import one CSV line as a tag under *target_root*.

    Args:
        tree: Host namespace to create nodes in.
        line: Raw CSV line (trailing newline allowed).
        target_root: The station's ``Tags`` folder.
        reporter: Receives info/warning/error reports.  A private one is
            used when omitted.

    Returns:
        The :class:`RecordOutcome` for the line.  Exceptions raised while
        building or attaching the tag are reported, not propagated.
    """
    op = 'import_record'
    if reporter is None:
        reporter = Reporter()

    if line is None or not line.strip():
        return RecordOutcome.SKIPPED_BLANK

    columns = line.rstrip('\r\n').split(FIELD_SEPARATOR)
    if len(columns) < MIN_FIELD_COUNT:
        reporter.error(
            op,
            f"Malformed record, expected at least {MIN_FIELD_COUNT} fields "
            f"but got {len(columns)}: {line.strip()!r}",
        )
        return RecordOutcome.FAILED_CLASSIFY_OR_OTHER

    symbol = columns[SYMBOL_FIELD].strip()
    description = columns[DESCRIPTION_FIELD].strip()

    # File declarations, not tags.
    if symbol.startswith(DIRECTIVE_MARKER):
        return RecordOutcome.SKIPPED_DIRECTIVE

    tag_name = sanitize_tag_name(symbol)

    try:
        _, data_type = classify(symbol)

        try:
            tag = tree.make_variable(
                tag_name, data_type, symbol_name=strip_xml_illegal(symbol))
        except ValueError as e:
            reporter.warning(
                op,
                f"Failed to create tag variable for '{tag_name}': {e} "
                "Skipping it...",
            )
            return RecordOutcome.FAILED_CREATE

        desc = tree.make_variable(
            DESCRIPTION_NAME,
            STRING_DATA_TYPE,
            value=clean_description(description),
        )
        tree.add_child(tag, desc)

        parent = resolve_folder(tree, target_root, folder_category(symbol))
        if parent is None:
            parent = target_root

        # Duplicates are only checked inside the destination folder.
        if tree.get_child(parent, tag_name) is not None:
            reporter.info(
                op,
                f"Tag '{tag_name}' already exists in folder "
                f"'{tree.node_name(parent)}'. Skipping.",
            )
            return RecordOutcome.SKIPPED_DUPLICATE

        try:
            tree.add_child(parent, tag)
        except Exception as add_ex:
            reporter.error(
                op, f"Failed to add tag '{tag_name}' to folder: {add_ex}"
            )
            return RecordOutcome.FAILED_CREATE

    except Exception as e:
        reporter.error(
            op, f"Error creating tag '{tag_name}' for symbol '{symbol}': {e}"
        )
        return RecordOutcome.FAILED_CLASSIFY_OR_OTHER

    return RecordOutcome.IMPORTED


# ---------------------------------------------------------------------------
# Whole file
# ---------------------------------------------------------------------------

class ImportRunner:
    """Runs one CSV file through :func:`import_record`.

    Args:
        tree: Host namespace to import into.
        reporter: Receives every report of the run.
        stop_event: When set, the run stops at the next record boundary.
    """

    def __init__(
        self,
        tree: HostTree,
        reporter: Optional[Reporter] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.tree = tree
        self.reporter = reporter if reporter is not None else Reporter()
        self.stop_event = stop_event

    def _fatal(self, message: str) -> ImportPreconditionError:
        self.reporter.error('run', message)
        return ImportPreconditionError(message)

    def resolve_target(self, csv_path: str, driver_ref: str, station_ref: str) -> Any:
        """Check the run preconditions and return the station's Tags folder.

        Raises:
            ImportPreconditionError: After reporting the failed precondition.
        """
        if not csv_path:
            raise self._fatal(
                "Unable to retrieve the CSV file path. Please assign the "
                "'csv_path' setting a valid file path."
            )

        if not os.path.isfile(csv_path):
            raise self._fatal(
                f"CSV file not found: {csv_path}. Please make sure the file "
                "exists at the specified path."
            )

        driver = self.tree.find_driver(driver_ref)
        if driver is None:
            raise self._fatal(
                f"Communication driver '{driver_ref}' not found. Please assign "
                "the 'driver' setting to a communication driver."
            )

        station = self.tree.get_station(driver, station_ref)
        if station is None:
            raise self._fatal(
                f"Station '{station_ref}' not found under driver "
                f"'{self.tree.node_name(driver)}'."
            )

        tags_folder = self.tree.get_child(station, TAGS_FOLDER)
        if tags_folder is None:
            raise self._fatal(
                f"Station '{self.tree.node_name(station)}' has no "
                f"'{TAGS_FOLDER}' folder."
            )
        return tags_folder

    def run(self, csv_path: str, driver_ref: str, station_ref: str) -> ImportSummary:
        """Import every record of *csv_path* into the station's Tags folder.

        Records already imported stay imported if a later record fails.

        Returns:
            An :class:`ImportSummary` with the imported count.

        Raises:
            ImportPreconditionError: If a precondition fails.  No record is
                read in that case.
        """
        target_root = self.resolve_target(csv_path, driver_ref, station_ref)
        summary = ImportSummary(csv_path=csv_path)
        logger.info("Importing tags from '%s'", csv_path)

        with open(csv_path, 'r', encoding='utf-8-sig', errors='replace', newline='') as fh:
            for line in fh:
                if self.stop_event is not None and self.stop_event.is_set():
                    summary.stopped = True
                    self.reporter.warning(
                        'run', f"Import from '{csv_path}' stopped before completion."
                    )
                    break
                summary.record(
                    import_record(self.tree, line, target_root, self.reporter)
                )

        self.reporter.info(
            'run',
            f"Successfully imported {summary.imported_count} tag(s) from CSV: "
            f"{csv_path}",
        )
        return summary
