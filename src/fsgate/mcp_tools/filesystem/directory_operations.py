"""
Directory Operations Tools

Listing, creation, deletion, tree rendering and name search for directories.

Listing is the one operation that tolerates partial failure: an entry that
cannot be read becomes an ``Error reading entry`` line and the listing goes
on. Every other operation stops at the first error.
"""

import logging
import os
from typing import List

from fsgate.constants import NOT_EMPTY_HINT, TAG_DIRECTORY, TAG_FILE, TAG_UNKNOWN
from fsgate.utils.error_handling import tool_error_handler
from fsgate.utils.exceptions import (
    FsIOError,
    NotFoundError,
    WrongTypeError,
    describe_os_error,
)

from .path_resolution import resolve_path
from .traversal import display_name, render_tree, scan_directory, search_names

logger = logging.getLogger(__name__)


def _entry_tag(entry: os.DirEntry) -> str:
    try:
        is_dir = entry.is_dir(follow_symlinks=False)
    except OSError:
        return TAG_UNKNOWN
    return TAG_DIRECTORY if is_dir else TAG_FILE


def list_directory(path: str) -> List[str]:
    """
    List the entries of a directory, one tagged line per entry.

    Lines look like ``"[DIR] src\\n"`` or ``"[FILE] README.md\\n"``; the
    order is whatever the operating system returns.

    Raises:
        ResolutionError: ``~`` expansion failed
        FsIOError: The directory itself cannot be read
    """
    resolved = resolve_path(path)
    lines = []
    for scanned in scan_directory(resolved):
        if isinstance(scanned, OSError):
            lines.append(f"Error reading entry: {describe_os_error(scanned)}\n")
            continue
        lines.append(f"{_entry_tag(scanned)} {display_name(scanned.name)}\n")

    logger.debug(f"Listed directory: {resolved} ({len(lines)} entries)")
    return lines


def create_directory(path: str) -> str:
    """
    Create a directory and all missing ancestors. An existing directory is
    not an error.

    Raises:
        ResolutionError: ``~`` expansion failed
        FsIOError: Creation failed
    """
    resolved = resolve_path(path)
    try:
        os.makedirs(resolved, exist_ok=True)
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to create directory '{resolved}': {describe_os_error(e)}", path=resolved, cause=e
        ) from e

    logger.info(f"Created directory: {resolved}")
    return f"Successfully created directory '{resolved}'"


def delete_directory(path: str) -> str:
    """
    Remove an empty directory.

    A failure whose message says the directory is not empty gets a hint to
    remove the contents first.

    Raises:
        ResolutionError: ``~`` expansion failed
        NotFoundError: Nothing exists at ``path``
        WrongTypeError: ``path`` is not a directory
        FsIOError: The removal failed
    """
    resolved = resolve_path(path)

    if not os.path.exists(resolved):
        raise NotFoundError(f"Directory '{resolved}' does not exist", path=resolved)
    if not os.path.isdir(resolved):
        raise WrongTypeError(
            f"'{resolved}' is not a directory, use delete-file instead", path=resolved
        )

    try:
        os.rmdir(resolved)
    except (OSError, ValueError) as e:
        reason = describe_os_error(e)
        message = f"Failed to delete directory '{resolved}': {reason}"
        if "not empty" in reason.lower():
            message += NOT_EMPTY_HINT
        raise FsIOError(message, path=resolved, cause=e) from e

    logger.info(f"Deleted directory: {resolved}")
    return f"Successfully deleted directory '{resolved}'"


def get_directory_tree(path: str, max_depth: int) -> str:
    """
    Render the directory under ``path`` as a tree, ``max_depth`` levels deep
    (0 shows only the immediate children).

    Raises:
        ResolutionError: ``~`` expansion failed
        NotFoundError: Nothing exists at ``path``
        WrongTypeError: ``path`` is not a directory
        FsIOError: Some directory in the subtree could not be read
    """
    resolved = resolve_path(path)

    if not os.path.exists(resolved):
        raise NotFoundError(f"Path '{resolved}' does not exist", path=resolved)
    if not os.path.isdir(resolved):
        raise WrongTypeError(f"'{resolved}' is not a directory", path=resolved)

    try:
        return render_tree(resolved, max_depth)
    except FsIOError as e:
        raise FsIOError(
            f"Failed to build directory tree: {e}", path=resolved, cause=e.cause
        ) from e


def search_file(path: str, pattern: str) -> str:
    """
    Find entries under ``path`` whose name contains ``pattern``, ignoring case.

    Returns:
        str: Matching paths joined by newlines, or a message saying nothing
        matched

    Raises:
        ResolutionError: ``~`` expansion failed
        FsIOError: Any part of the subtree could not be read
    """
    resolved = resolve_path(path)
    try:
        matches = search_names(resolved, pattern)
    except FsIOError as e:
        raise FsIOError(
            f"Failed to search directory: {e}", path=resolved, cause=e.cause
        ) from e

    if not matches:
        return f"No files matching pattern '{pattern}' found in '{resolved}'"
    return "\n".join(matches)


# ============================================================================
# Tool wrappers
# ============================================================================

@tool_error_handler("list-directory")
def filesystem_list_directory(path: str) -> List[str]:
    """List a directory's entries tagged [DIR], [FILE] or [UNKNOWN]."""
    return list_directory(path)


@tool_error_handler("create-directory")
def filesystem_create_directory(path: str) -> str:
    """Create a directory and any missing parents."""
    return create_directory(path)


@tool_error_handler("delete-directory")
def filesystem_delete_directory(path: str) -> str:
    """Delete an empty directory."""
    return delete_directory(path)


@tool_error_handler("get-directory-tree")
def filesystem_get_directory_tree(path: str, max_depth: int) -> str:
    """Render a directory subtree up to ``max_depth`` levels."""
    return get_directory_tree(path, max_depth)


@tool_error_handler("search-file")
def filesystem_search_file(path: str, pattern: str) -> str:
    """Search a directory recursively for names containing ``pattern``."""
    return search_file(path, pattern)
