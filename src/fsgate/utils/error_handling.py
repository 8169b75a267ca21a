"""Error Handling for fsgate Tools"""

import logging
from functools import wraps
from typing import Any, Callable, Dict

from .exceptions import FsGateError

logger = logging.getLogger(__name__)


def tool_error_handler(tool_name: str) -> Callable:
    """Decorator that turns a raising operation into a tool envelope.

    The wrapped function returns its success value or raises. The wrapper
    returns ``{"success": True, "result": value}`` or
    ``{"success": False, "error": message, "tool": tool_name}``; the error
    message is the only thing about a failure that leaves the tool layer.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Dict[str, Any]:
            try:
                result = func(*args, **kwargs)
            except FsGateError as e:
                logger.warning(f"Tool {tool_name} failed ({type(e).__name__}): {e}")
                return {"success": False, "error": str(e), "tool": tool_name}
            except Exception as e:
                logger.error(f"Tool {tool_name} raised unexpectedly: {e}", exc_info=True)
                return {"success": False, "error": str(e), "tool": tool_name}
            return {"success": True, "result": result}

        wrapper.tool_name = tool_name
        return wrapper
    return decorator


def safe_parameter_mapping(params: Dict[str, Any], expected_params: Dict[str, Any]) -> Dict[str, Any]:
    """Safely map parameters with fallbacks"""
    mapped = {}
    for key, default in expected_params.items():
        mapped[key] = params.get(key, default)
    return mapped
