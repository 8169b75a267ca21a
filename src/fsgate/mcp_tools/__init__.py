"""
Tools Module

Every operation fsgate exposes, registered under a stable hyphenated tool
name. A tool call always returns an envelope:

- ``{"success": True, "result": <str | bool | list>}``
- ``{"success": False, "error": <message>, "tool": <name>}``

Tool Categories:
- filesystem: path-resolving file and directory operations
- registry: component registry search and lookup
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from fsgate.utils.config_manager import get_config
from fsgate.utils.error_handling import safe_parameter_mapping
from fsgate.utils.exceptions import ToolNotFoundError

from .filesystem import *
from .registry_tools import registry_get_component, registry_search_components

logger = logging.getLogger(__name__)

# Marks a parameter the caller must supply
REQUIRED = object()


def _tool(function: Callable, category: str, description: str, **parameters: Any) -> Dict[str, Any]:
    return {
        "name": function.tool_name,
        "function": function,
        "category": category,
        "description": description,
        "parameters": parameters,
    }


TOOL_REGISTRY: Dict[str, Dict[str, Any]] = {
    entry["name"]: entry
    for entry in [
        _tool(filesystem_list_directory, "filesystem",
              "List directory entries tagged [DIR], [FILE] or [UNKNOWN]", path=REQUIRED),
        _tool(filesystem_read_file, "filesystem",
              "Read a whole file as text", path=REQUIRED),
        _tool(filesystem_write_file, "filesystem",
              "Write text to a file, creating parent directories", path=REQUIRED, content=REQUIRED),
        _tool(filesystem_create_directory, "filesystem",
              "Create a directory and any missing parents", path=REQUIRED),
        _tool(filesystem_move_path, "filesystem",
              "Move or rename a file or directory", source=REQUIRED, destination=REQUIRED),
        _tool(filesystem_delete_file, "filesystem",
              "Delete a file", path=REQUIRED),
        _tool(filesystem_delete_directory, "filesystem",
              "Delete an empty directory", path=REQUIRED),
        _tool(filesystem_file_exists, "filesystem",
              "Check whether a path exists", path=REQUIRED),
        _tool(filesystem_get_directory_tree, "filesystem",
              "Render a directory tree to a maximum depth", path=REQUIRED, max_depth=None),
        _tool(filesystem_search_file, "filesystem",
              "Find names containing a pattern, ignoring case", path=REQUIRED, pattern=REQUIRED),
        _tool(filesystem_get_file_info, "filesystem",
              "Show type, size, read-only flag and modification time", path=REQUIRED),
        _tool(registry_search_components, "registry",
              "Search the component registry", query=None, registry_file=None),
        _tool(registry_get_component, "registry",
              "Fetch a component by name or URI", name_or_uri=REQUIRED, registry_file=None),
    ]
}


def get_available_tools(category: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Describe the registered tools.

    Args:
        category: Only return tools of this category

    Returns:
        List of ``{"name", "category", "description", "parameters"}`` dicts,
        where ``parameters`` lists the parameter names and whether each is
        required
    """
    tools = []
    for entry in TOOL_REGISTRY.values():
        if category is not None and entry["category"] != category:
            continue
        tools.append({
            "name": entry["name"],
            "category": entry["category"],
            "description": entry["description"],
            "parameters": {
                name: {"required": default is REQUIRED}
                for name, default in entry["parameters"].items()
            },
        })
    return tools


def get_tool(tool_name: str) -> Callable:
    """Look up a tool function by name."""
    try:
        return TOOL_REGISTRY[tool_name]["function"]
    except KeyError:
        raise ToolNotFoundError(f"Unknown tool '{tool_name}'") from None


def invoke_tool(tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Call a tool by name with keyword arguments.

    Unknown arguments are ignored and optional ones take their defaults; a
    missing required argument or an unknown tool name is reported in the
    same envelope the tools return.
    """
    try:
        function = get_tool(tool_name)
    except ToolNotFoundError as e:
        logger.warning(str(e))
        return {"success": False, "error": str(e), "tool": tool_name}

    expected = TOOL_REGISTRY[tool_name]["parameters"]
    mapped = safe_parameter_mapping(arguments or {}, expected)

    missing = [name for name, value in mapped.items() if value is REQUIRED]
    if missing:
        error = f"Missing required argument(s) for tool '{tool_name}': {', '.join(missing)}"
        return {"success": False, "error": error, "tool": tool_name}

    if tool_name == "get-directory-tree" and mapped["max_depth"] is None:
        mapped["max_depth"] = get_config().filesystem.default_tree_depth

    logger.debug(f"Invoking tool {tool_name}")
    return function(**mapped)


__all__ = [
    "filesystem_list_directory",
    "filesystem_read_file",
    "filesystem_write_file",
    "filesystem_create_directory",
    "filesystem_move_path",
    "filesystem_delete_file",
    "filesystem_delete_directory",
    "filesystem_file_exists",
    "filesystem_get_directory_tree",
    "filesystem_search_file",
    "filesystem_get_file_info",
    "registry_search_components",
    "registry_get_component",
    "TOOL_REGISTRY",
    "get_available_tools",
    "get_tool",
    "invoke_tool",
]
