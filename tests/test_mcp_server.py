"""Tests for the MCP server tools.

The tool functions are called directly; FastMCP's decorator returns them
unchanged.
"""

from __future__ import annotations

import json

import pytest

pytest.importorskip("mcp.server.fastmcp")

from slc_tag_importer import mcp_server
from slc_tag_importer.config import ImporterSettings
from slc_tag_importer.report import Reporter
from slc_tag_importer.task import LongRunningTask


@pytest.fixture(autouse=True)
def fresh_server(monkeypatch):
    monkeypatch.setattr(mcp_server, "_namespace", None)
    monkeypatch.setattr(mcp_server, "_importer", None)
    monkeypatch.setattr(mcp_server, "_settings", ImporterSettings())
    monkeypatch.setattr(mcp_server, "_reporter", Reporter())
    yield
    if mcp_server._importer is not None:
        mcp_server._importer.dispose()


def _csv(tmp_path):
    path = tmp_path / "symbols.csv"
    path.write_text('N7:0,0,0,"Speed setpoint"\nB3:0/1,0,0,"Start button"\n', encoding="utf-8")
    return str(path)


class TestNamespaceTools:
    def test_requires_namespace(self):
        assert mcp_server.import_tags_from_csv().startswith("Error")
        assert mcp_server.list_nodes("MicroController1").startswith("Error")
        assert mcp_server.save_namespace().startswith("Error")

    def test_new_and_list(self):
        result = mcp_server.new_namespace("MicroController1", "Station1")
        assert "MicroController1/Station1/Tags" in result
        nodes = json.loads(mcp_server.list_nodes("MicroController1/Station1"))
        assert nodes == [{"name": "Tags", "kind": "Folder"}]

    def test_save_and_load(self, tmp_path):
        mcp_server.new_namespace("MicroController1", "Station1")
        path = tmp_path / "ns.xml"
        assert "Saved" in mcp_server.save_namespace(str(path))
        result = mcp_server.load_namespace(str(path))
        assert "MicroController1" in result

    def test_load_missing(self, tmp_path):
        assert mcp_server.load_namespace(str(tmp_path / "nope.xml")).startswith("Error")

    def test_configured_namespace_loaded_at_startup(self, tmp_path, monkeypatch):
        mcp_server.new_namespace("MicroController1", "Station1")
        path = tmp_path / "ns.xml"
        mcp_server.save_namespace(str(path))
        monkeypatch.setattr(mcp_server, "_namespace", None)
        monkeypatch.setattr(mcp_server, "_settings", ImporterSettings(namespace_path=str(path)))

        assert "MicroController1" in mcp_server.load_configured_namespace()
        nodes = json.loads(mcp_server.list_nodes("MicroController1/Station1"))
        assert nodes == [{"name": "Tags", "kind": "Folder"}]

    def test_no_configured_namespace(self):
        assert mcp_server.load_configured_namespace() is None

    def test_save_refused_while_import_running(self, tmp_path):
        mcp_server.new_namespace("MicroController1", "Station1")
        task = LongRunningTask(lambda stop: stop.wait(10))
        task.start()
        mcp_server._importer._task = task
        try:
            result = mcp_server.save_namespace(str(tmp_path / "ns.xml"))
            assert result.startswith("Error")
            assert not (tmp_path / "ns.xml").exists()
        finally:
            task.dispose(5)
        assert "Saved" in mcp_server.save_namespace(str(tmp_path / "ns.xml"))


class TestImportTools:
    def test_import_flow(self, tmp_path):
        mcp_server.new_namespace("MicroController1", "Station1")
        settings = json.loads(mcp_server.configure_import(csv_path=_csv(tmp_path)))
        assert settings["driver"] == "MicroController1"

        assert "Import started" in mcp_server.import_tags_from_csv()
        status = json.loads(mcp_server.get_import_status(wait_seconds=10))
        assert status["running"] is False
        assert status["summary"]["imported_count"] == 2

        nodes = json.loads(mcp_server.list_nodes("MicroController1/Station1/Tags/IntegerFile"))
        assert nodes[0]["name"] == "N7_0"
        assert nodes[0]["data_type"] == "Int16"
        assert nodes[0]["description"] == "Speed setpoint"

    def test_import_precondition_error(self, tmp_path):
        mcp_server.new_namespace("MicroController1", "Station1")
        mcp_server.configure_import(csv_path=str(tmp_path / "missing.csv"))
        mcp_server.import_tags_from_csv()
        status = json.loads(mcp_server.get_import_status(wait_seconds=10))
        assert "error" in status
        assert status["reports"][0]["severity"] == "error"

    def test_status_before_import(self):
        assert mcp_server.get_import_status() == "No import has been started."


class TestClassifySymbol:
    def test_integer(self):
        info = json.loads(mcp_server.classify_symbol("N7:0"))
        assert info == {
            "symbol": "N7:0",
            "tag_name": "N7_0",
            "category": "Integer",
            "data_type": "Int16",
            "folder": "IntegerFile",
        }

    def test_unclassified(self):
        info = json.loads(mcp_server.classify_symbol("R6:0"))
        assert info["folder"] == "Tags"
        assert info["data_type"] == "Boolean"
