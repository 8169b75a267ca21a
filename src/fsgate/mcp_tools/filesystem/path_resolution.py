"""
Path Resolution

Expands a leading ``~`` to the caller's home directory. Every filesystem
operation runs its path arguments through :func:`resolve_path` before touching
the disk; nothing is cached between calls.
"""

import os
from typing import Mapping, Optional

from fsgate.constants import HOME_ENV_VAR
from fsgate.utils.exceptions import ResolutionError


def resolve_path(path: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Resolve a possibly ``~``-prefixed path string.

    Only ``"~"`` and paths starting with ``"~/"`` are expanded; ``~user``
    forms and every other string come back unchanged. No existence check is
    made.

    Args:
        path: Path string as supplied by the caller
        environ: Environment mapping to read the home directory from
            (defaults to ``os.environ``)

    Returns:
        str: The resolved path

    Raises:
        ResolutionError: Expansion is needed and the home directory is unset
    """
    if path != "~" and not path.startswith("~/"):
        return path

    env = os.environ if environ is None else environ
    home_dir = env.get(HOME_ENV_VAR)
    if home_dir is None:
        raise ResolutionError(
            f"Cannot determine home directory from ${HOME_ENV_VAR}", path=path
        )

    if path == "~":
        return home_dir
    return os.path.join(home_dir, path[2:])
