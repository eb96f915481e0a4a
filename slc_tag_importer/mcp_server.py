"""
MCP Server for the SLC Tag Importer.

Exposes the RSLogix 500 CSV tag import via the Model Context Protocol, so
an MCP client can load a target namespace, configure the import inputs,
trigger a background import run, and inspect the folders it produced.

Usage:
    python -m slc_tag_importer.mcp_server
    # or
    slc-import-mcp-server
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .classifier import classify, folder_category
from .config import load_settings, normalize_path
from .namespace import XmlNamespace
from .report import Reporter
from .schema import FOLDER_LABELS
from .task import TagImporter
from .utils import sanitize_tag_name

# ---------------------------------------------------------------------------
# Logging (stderr only -- stdout is reserved for MCP protocol)
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    stream=sys.stderr,
)
log = logging.getLogger("slc-import-mcp")

# ---------------------------------------------------------------------------
# MCP Server
# ---------------------------------------------------------------------------
mcp = FastMCP(
    "SLC Tag Importer",
    instructions=(
        "Imports RSLogix 500 (SLC 500 / MicroLogix) symbol CSV exports into "
        "a namespace document as typed variables grouped into data-file "
        "folders.\n\n"
        "Call load_namespace or new_namespace first, then configure_import, "
        "then import_tags_from_csv.  Imports run in the background; poll "
        "get_import_status for the result and save_namespace to persist."
    ),
)

# ---------------------------------------------------------------------------
# Server state
# ---------------------------------------------------------------------------
_namespace: Optional[XmlNamespace] = None
_settings = load_settings()
_reporter = Reporter(log)
_importer: Optional[TagImporter] = None


def _require_namespace() -> XmlNamespace:
    """Return the loaded namespace or raise an error."""
    if _namespace is None:
        raise RuntimeError(
            "No namespace loaded. Call load_namespace or new_namespace first."
        )
    return _namespace


def _set_namespace(namespace: XmlNamespace) -> None:
    global _namespace, _importer
    if _importer is not None:
        _importer.dispose()
    _namespace = namespace
    _importer = TagImporter(namespace, _settings, _reporter)


# ===================================================================
# 1. Namespace management
# ===================================================================

@mcp.tool()
def load_namespace(file_path: str) -> str:
    """Load a namespace XML document into memory.

    Args:
        file_path: Path to the namespace .xml file.
    """
    try:
        resolved = normalize_path(file_path)
        log.info("Resolved path: %s -> %s", file_path, resolved)
        namespace = XmlNamespace.load(resolved)
        _set_namespace(namespace)
        _settings.namespace_path = resolved
        drivers = [d['name'] for d in namespace.list_children(namespace.drivers_element)]
        return f"Loaded: {resolved}\nDrivers: {', '.join(drivers) or '(none)'}"
    except Exception as e:
        return f"Error loading namespace: {e}"


@mcp.tool()
def new_namespace(driver: str, station: str) -> str:
    """Create an empty namespace with one driver and one station.

    Args:
        driver: Communication driver name.
        station: Station name; its Tags folder is created automatically.
    """
    try:
        namespace = XmlNamespace()
        drv = namespace.add_driver(driver)
        namespace.add_station(drv, station)
        _set_namespace(namespace)
        _settings.driver = driver
        _settings.station = station
        return f"Created namespace with {driver}/{station}/Tags"
    except Exception as e:
        return f"Error creating namespace: {e}"


@mcp.tool()
def save_namespace(file_path: str = "") -> str:
    """Write the namespace to disk.

    Args:
        file_path: Destination path.  Defaults to the loaded file.
    """
    try:
        namespace = _require_namespace()
        if _importer is not None and _importer.task is not None and _importer.task.is_running:
            return (
                "Error saving namespace: an import is still running. "
                "Wait for get_import_status to report it finished."
            )
        target = normalize_path(file_path) if file_path else None
        written = namespace.write(target)
        return f"Saved namespace to {written}"
    except Exception as e:
        return f"Error saving namespace: {e}"


@mcp.tool()
def list_nodes(path: str) -> str:
    """List the child nodes at a browse path.

    Args:
        path: Browse path starting at a driver, e.g.
            ``MicroController1/Station1/Tags/IntegerFile``.
    """
    try:
        namespace = _require_namespace()
        node = namespace.resolve_path(path)
        return json.dumps(namespace.list_children(node), indent=2)
    except Exception as e:
        return f"Error listing nodes: {e}"


# ===================================================================
# 2. Import
# ===================================================================

@mcp.tool()
def configure_import(csv_path: str = "", driver: str = "", station: str = "") -> str:
    """Set the inputs used by import_tags_from_csv.  Empty values are kept.

    Args:
        csv_path: Path to the RSLogix 500 symbol CSV export.
        driver: Communication driver name.
        station: Station name under the driver.
    """
    if csv_path:
        _settings.csv_path = normalize_path(csv_path)
    if driver:
        _settings.driver = driver.strip()
    if station:
        _settings.station = station.strip()
    return json.dumps(_settings.to_dict(), indent=2)


@mcp.tool()
def import_tags_from_csv() -> str:
    """Start importing tags from the configured CSV in the background.

    A run that is still active is stopped first.
    """
    try:
        _require_namespace()
        _importer.dispose()
        _reporter.clear()
        _importer.import_tags_from_csv()
        return f"Import started from {_settings.csv_path or '(no csv_path)'}"
    except Exception as e:
        return f"Error starting import: {e}"


@mcp.tool()
def get_import_status(wait_seconds: float = 0.0) -> str:
    """Report the state of the last import run and its messages.

    Args:
        wait_seconds: How long to wait for a running import to finish.
    """
    if _importer is None or _importer.task is None:
        return "No import has been started."
    task = _importer.task
    if wait_seconds > 0:
        task.wait(wait_seconds)

    result = {
        'running': task.is_running,
        'reports': [e.to_dict() for e in _reporter.entries],
    }
    if task.result is not None:
        result['summary'] = task.result.to_dict()
    if task.error is not None:
        result['error'] = str(task.error)
    return json.dumps(result, indent=2)


@mcp.tool()
def classify_symbol(symbol: str) -> str:
    """Show how a symbol would be imported: tag name, data type and folder.

    Args:
        symbol: RSLogix 500 address, e.g. ``N7:0`` or ``B3:0/1``.
    """
    category, data_type = classify(symbol)
    placement = folder_category(symbol)
    return json.dumps({
        'symbol': symbol,
        'tag_name': sanitize_tag_name(symbol.strip()),
        'category': category.value,
        'data_type': data_type.value,
        'folder': FOLDER_LABELS.get(placement, 'Tags'),
    }, indent=2)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def load_configured_namespace() -> Optional[str]:
    """Load the namespace named by the ``namespace_path`` setting, if any.

    Returns:
        The result message of :func:`load_namespace`, or ``None`` when no
        namespace path is configured.
    """
    if not _settings.namespace_path:
        return None
    result = load_namespace(_settings.namespace_path)
    log.info(result)
    return result


def main():
    """Run the MCP server on stdio transport."""
    load_configured_namespace()
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
