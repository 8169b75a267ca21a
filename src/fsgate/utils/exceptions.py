"""Custom exceptions for fsgate.

Every failure inside the filesystem and registry layers is raised as one of
these typed errors. The message is formatted once, at construction, so that
``str(exc)`` is the exact text handed back across the tool boundary; the
paths involved stay available as attributes for logging and tests.
"""

from typing import Optional


class FsGateError(Exception):
    """Base class for custom exceptions in fsgate."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class ResolutionError(FsGateError):
    """The home directory is unavailable while expanding a ``~`` path."""
    pass


class NotFoundError(FsGateError):
    """The target path (or move source) does not exist."""
    pass


class WrongTypeError(FsGateError):
    """A file operation was applied to a directory, or the other way round."""
    pass


class FsIOError(FsGateError):
    """An underlying read, write, rename, remove, metadata or decode failure."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        cause: Optional[BaseException] = None,
        destination: Optional[str] = None,
    ):
        super().__init__(message, path=path)
        self.cause = cause
        self.destination = destination


class RegistryParseError(FsGateError):
    """The component registry document is not valid JSON of the expected shape."""
    pass


class ToolNotFoundError(FsGateError):
    """No tool is registered under the requested name."""
    pass


def describe_os_error(exc: BaseException) -> str:
    """Short human-readable text for an OS or decode failure."""
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)
