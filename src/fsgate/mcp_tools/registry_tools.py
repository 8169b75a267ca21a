"""
Registry Tools

Tool wrappers around the component registry. The registry file defaults to
the configured ``registry.registry_file``.
"""

import logging
from typing import Any, Dict, List, Optional

from fsgate.registry import find_component_by_name_or_uri, load_registry, search_components
from fsgate.utils.config_manager import get_config
from fsgate.utils.error_handling import tool_error_handler
from fsgate.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def _registry_file(registry_file: Optional[str]) -> str:
    return registry_file or get_config().registry.registry_file


@tool_error_handler("search-components")
def registry_search_components(
    query: Optional[str] = None,
    registry_file: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Search the component registry; every term is OR-matched against name, description and URI."""
    components = load_registry(_registry_file(registry_file))
    results = search_components(components, query)
    logger.debug(f"Registry search '{query}': {len(results)} of {len(components)} components")
    return [component.model_dump() for component in results]


@tool_error_handler("get-component")
def registry_get_component(
    name_or_uri: str,
    registry_file: Optional[str] = None,
) -> Dict[str, Any]:
    """Fetch one component by case-insensitive name or exact URI."""
    path = _registry_file(registry_file)
    component = find_component_by_name_or_uri(load_registry(path), name_or_uri)
    if component is None:
        raise NotFoundError(f"Component '{name_or_uri}' not found in registry '{path}'")
    return component.model_dump()
