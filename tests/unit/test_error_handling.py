import logging

from fsgate.utils.error_handling import safe_parameter_mapping, tool_error_handler
from fsgate.utils.exceptions import (
    FsGateError,
    FsIOError,
    NotFoundError,
    describe_os_error,
)


def test_success_is_wrapped():
    @tool_error_handler("echo")
    def echo(value):
        return value

    assert echo("hi") == {"success": True, "result": "hi"}
    assert echo(False) == {"success": True, "result": False}
    assert echo.tool_name == "echo"
    assert echo.__name__ == "echo"


def test_taxonomy_errors_become_their_message(caplog):
    @tool_error_handler("missing")
    def missing():
        raise NotFoundError("File '/x' does not exist", path="/x")

    with caplog.at_level(logging.WARNING, logger="fsgate.utils.error_handling"):
        outcome = missing()

    assert outcome == {"success": False, "error": "File '/x' does not exist", "tool": "missing"}
    assert "NotFoundError" in caplog.text


def test_unexpected_errors_are_logged_with_traceback(caplog):
    @tool_error_handler("boom")
    def boom():
        raise RuntimeError("kaput")

    with caplog.at_level(logging.ERROR, logger="fsgate.utils.error_handling"):
        outcome = boom()

    assert outcome == {"success": False, "error": "kaput", "tool": "boom"}
    assert caplog.records[-1].exc_info is not None


def test_error_keeps_structure():
    cause = FileNotFoundError(2, "No such file or directory")
    error = FsIOError("Failed to read file 'a': No such file or directory", path="a", cause=cause)
    assert isinstance(error, FsGateError)
    assert error.path == "a"
    assert error.cause is cause
    assert str(error) == "Failed to read file 'a': No such file or directory"


def test_describe_os_error():
    assert describe_os_error(OSError(39, "Directory not empty")) == "Directory not empty"
    assert describe_os_error(OSError("no errno")) == "no errno"
    assert describe_os_error(ValueError("bad value")) == "bad value"


def test_safe_parameter_mapping():
    mapped = safe_parameter_mapping({"path": "/a", "extra": 1}, {"path": None, "max_depth": 3})
    assert mapped == {"path": "/a", "max_depth": 3}
