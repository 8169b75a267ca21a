import json
import logging
import typing

import pytest

from fsgate.mcp_tools import (
    TOOL_REGISTRY,
    filesystem_delete_directory,
    filesystem_delete_file,
    filesystem_file_exists,
    filesystem_list_directory,
    filesystem_read_file,
    filesystem_write_file,
    get_available_tools,
    get_tool,
    invoke_tool,
)
from fsgate.utils.exceptions import ToolNotFoundError


EXPECTED_FILESYSTEM_TOOLS = {
    "list-directory",
    "read-file",
    "write-file",
    "create-directory",
    "move-path",
    "delete-file",
    "delete-directory",
    "file-exists",
    "get-directory-tree",
    "search-file",
    "get-file-info",
}


@pytest.fixture
def registry_file(tmp_path):
    path = tmp_path / "component-registry.json"
    path.write_text(json.dumps([
        {"name": "Weather Server", "description": "JavaScript weather component", "uri": "oci://example.com/weather-js"},
        {"name": "Time Server", "description": "Rust time component", "uri": "oci://example.com/time-rs"},
    ]), encoding="utf-8")
    return path


def test_every_operation_is_registered():
    names = {tool["name"] for tool in get_available_tools("filesystem")}
    assert names == EXPECTED_FILESYSTEM_TOOLS
    assert {tool["name"] for tool in get_available_tools("registry")} == {"search-components", "get-component"}
    assert set(TOOL_REGISTRY) == EXPECTED_FILESYSTEM_TOOLS | {"search-components", "get-component"}


def test_tool_parameters_describe_requirements():
    tree = next(tool for tool in get_available_tools() if tool["name"] == "get-directory-tree")
    assert tree["parameters"] == {"path": {"required": True}, "max_depth": {"required": False}}


def test_get_tool_unknown():
    with pytest.raises(ToolNotFoundError, match="Unknown tool 'format-disk'"):
        get_tool("format-disk")


def test_write_then_read_through_envelopes(tmp_path):
    target = tmp_path / "new" / "file.txt"

    written = filesystem_write_file(str(target), "hello")
    assert written == {"success": True, "result": f"Successfully wrote to file '{target}'"}

    assert filesystem_read_file(str(target)) == {"success": True, "result": "hello"}
    assert filesystem_file_exists(str(target)) == {"success": True, "result": True}


def test_errors_cross_the_boundary_as_strings(tmp_path):
    outcome = filesystem_delete_file(str(tmp_path))
    assert outcome == {
        "success": False,
        "error": f"'{tmp_path}' is a directory, use delete-directory instead",
        "tool": "delete-file",
    }

    (tmp_path / "f").write_text("x")
    outcome = filesystem_delete_directory(str(tmp_path / "f"))
    assert outcome["error"] == f"'{tmp_path / 'f'}' is not a directory, use delete-file instead"


def test_resolution_failure_is_an_error_string(monkeypatch):
    monkeypatch.delenv("HOME", raising=False)
    outcome = filesystem_list_directory("~")
    assert outcome["success"] is False
    assert outcome["error"] == "Cannot determine home directory from $HOME"


def test_invoke_tool_unknown_name():
    assert invoke_tool("nope", {}) == {"success": False, "error": "Unknown tool 'nope'", "tool": "nope"}


def test_invoke_tool_missing_argument():
    outcome = invoke_tool("move-path", {"source": "/a"})
    assert outcome["success"] is False
    assert "destination" in outcome["error"]


def test_invoke_tool_ignores_unknown_arguments(tmp_path):
    outcome = invoke_tool("file-exists", {"path": str(tmp_path), "verbose": True})
    assert outcome == {"success": True, "result": True}


def test_invoke_tree_uses_configured_default_depth(tmp_path, monkeypatch):
    (tmp_path / "a" / "b").mkdir(parents=True)
    (tmp_path / "a" / "b" / "c.txt").write_text("x")

    monkeypatch.setenv("FSGATE_TREE_DEPTH", "0")
    outcome = invoke_tool("get-directory-tree", {"path": str(tmp_path)})
    assert outcome == {"success": True, "result": "└── [DIR] a\n"}

    outcome = invoke_tool("get-directory-tree", {"path": str(tmp_path), "max_depth": 2})
    assert outcome["result"].endswith("        └── c.txt\n")


def test_invoke_search(tmp_path):
    (tmp_path / "Foo.txt").write_text("x")
    outcome = invoke_tool("search-file", {"path": str(tmp_path), "pattern": "foo"})
    assert outcome == {"success": True, "result": str(tmp_path / "Foo.txt")}


def test_registry_tools(registry_file):
    outcome = invoke_tool("search-components", {"query": "weather rust", "registry_file": str(registry_file)})
    assert [c["name"] for c in outcome["result"]] == ["Weather Server", "Time Server"]

    outcome = invoke_tool("get-component", {"name_or_uri": "time server", "registry_file": str(registry_file)})
    assert outcome["result"]["uri"] == "oci://example.com/time-rs"


def test_registry_tool_uses_configured_file(registry_file, monkeypatch):
    monkeypatch.setenv("FSGATE_REGISTRY_FILE", str(registry_file))
    outcome = invoke_tool("search-components", {})
    assert len(outcome["result"]) == 2


def test_registry_get_component_not_found(registry_file):
    outcome = invoke_tool("get-component", {"name_or_uri": "Clock", "registry_file": str(registry_file)})
    assert outcome["success"] is False
    assert outcome["error"] == f"Component 'Clock' not found in registry '{registry_file}'"


def test_registry_parse_error_is_reported(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    outcome = invoke_tool("search-components", {"registry_file": str(broken)})
    assert outcome["success"] is False
    assert outcome["error"].startswith("Failed to parse component registry JSON")


def test_invalid_path_and_content_are_handled_errors(tmp_path, caplog):
    bad = str(tmp_path / "a\0b")
    target = tmp_path / "out.txt"
    target.write_text("kept")

    with caplog.at_level(logging.WARNING, logger="fsgate.utils.error_handling"):
        read = invoke_tool("read-file", {"path": bad})
        written = invoke_tool("write-file", {"path": str(target), "content": "ok\udcff"})

    assert read["error"].startswith(f"Failed to read file '{bad}': ")
    assert written["error"].startswith(f"Failed to write to file '{target}': ")
    assert target.read_text() == "kept"
    assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.WARNING]


def test_tool_results_match_annotated_return_types(tmp_path):
    (tmp_path / "f.txt").write_text("x")
    calls = {
        "list-directory": {"path": str(tmp_path)},
        "read-file": {"path": str(tmp_path / "f.txt")},
        "file-exists": {"path": str(tmp_path)},
        "get-directory-tree": {"path": str(tmp_path), "max_depth": 0},
    }
    for name, arguments in calls.items():
        annotation = typing.get_type_hints(get_tool(name).__wrapped__)["return"]
        result = invoke_tool(name, arguments)["result"]
        assert isinstance(result, typing.get_origin(annotation) or annotation), name
