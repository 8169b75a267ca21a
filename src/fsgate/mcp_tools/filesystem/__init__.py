"""
File System Tools

Filesystem operations exposed behind a string-in/string-out contract.

These tools handle:
- Directory listing, creation and deletion
- Whole-file reading and writing with parent directory creation
- Moving, deleting and existence checks
- Depth-bounded tree rendering and recursive name search
- Metadata reporting

Every path argument goes through ``~`` expansion first.
"""

from .path_resolution import resolve_path

from .file_operations import (
    FileInfo,
    format_size,
    read_file,
    write_file,
    move_path,
    delete_file,
    file_exists,
    get_file_info,
    filesystem_read_file,
    filesystem_write_file,
    filesystem_move_path,
    filesystem_delete_file,
    filesystem_file_exists,
    filesystem_get_file_info,
)

from .directory_operations import (
    list_directory,
    create_directory,
    delete_directory,
    get_directory_tree,
    search_file,
    filesystem_list_directory,
    filesystem_create_directory,
    filesystem_delete_directory,
    filesystem_get_directory_tree,
    filesystem_search_file,
)

__all__ = [
    "resolve_path",
    "FileInfo",
    "format_size",

    # Raising operations
    "list_directory",
    "read_file",
    "write_file",
    "create_directory",
    "move_path",
    "delete_file",
    "delete_directory",
    "file_exists",
    "get_directory_tree",
    "search_file",
    "get_file_info",

    # Tool wrappers
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
]
