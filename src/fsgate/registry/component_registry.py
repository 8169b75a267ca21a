"""Component registry lookup.

A registry is a JSON array of ``{"name", "description", "uri"}`` records.
Searching is a linear, case-insensitive substring scan; lookups match a name
case-insensitively or a URI exactly. Nothing here is cached or mutated.
"""

import json
import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from fsgate.mcp_tools.filesystem.path_resolution import resolve_path
from fsgate.utils.exceptions import FsIOError, RegistryParseError, describe_os_error

logger = logging.getLogger(__name__)


class RegistryComponent(BaseModel):
    """One named, described, URI-addressed registry entry."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name, matched case-insensitively")
    description: str = Field(..., description="Free-text description")
    uri: str = Field(..., description="Location of the component, matched exactly")

    def matches_any(self, terms: Sequence[str]) -> bool:
        """True if any lower-cased term occurs in the name, description or URI."""
        name_lower = self.name.lower()
        desc_lower = self.description.lower()
        uri_lower = self.uri.lower()
        return any(
            term in name_lower or term in desc_lower or term in uri_lower
            for term in terms
        )


_COMPONENT_LIST = TypeAdapter(List[RegistryComponent])


def parse_registry(registry_json: str) -> List[RegistryComponent]:
    """Parse the registry document.

    Raises:
        RegistryParseError: The text is not JSON, or not an array of
            name/description/uri objects
    """
    try:
        data = json.loads(registry_json)
        return _COMPONENT_LIST.validate_python(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise RegistryParseError(f"Failed to parse component registry JSON: {e}") from e


def load_registry(path: str) -> List[RegistryComponent]:
    """Read and parse a registry file. ``~`` in ``path`` is expanded."""
    resolved = resolve_path(path)
    try:
        with open(resolved, "r", encoding="utf-8") as f:
            registry_json = f.read()
    except (OSError, ValueError) as e:
        raise FsIOError(
            f"Failed to read component registry '{resolved}': {describe_os_error(e)}",
            path=resolved,
            cause=e,
        ) from e

    components = parse_registry(registry_json)
    logger.debug(f"Loaded {len(components)} components from {resolved}")
    return components


def search_components(
    components: Sequence[RegistryComponent],
    query: Optional[str] = None,
) -> List[RegistryComponent]:
    """Filter components by a free-text query.

    The query is split on whitespace into lower-cased terms and a component
    is kept when any term matches any of its fields (OR, not AND). No query,
    or a query with no terms, returns every component.
    """
    if query is None:
        return list(components)

    terms = [term.lower() for term in query.split()]
    if not terms:
        return list(components)

    return [component for component in components if component.matches_any(terms)]


def find_component_by_name_or_uri(
    components: Sequence[RegistryComponent],
    name_or_uri: str,
) -> Optional[RegistryComponent]:
    """First component whose name matches case-insensitively or whose URI is identical."""
    wanted_name = name_or_uri.lower()
    for component in components:
        if component.name.lower() == wanted_name or component.uri == name_or_uri:
            return component
    return None


def new_component_uris(
    current: Sequence[RegistryComponent],
    baseline: Sequence[RegistryComponent],
) -> List[str]:
    """URIs present in ``current`` but not in ``baseline``, sorted.

    These are the entries that are new or whose URI changed since the
    baseline, i.e. the ones that need validating again.
    """
    known = {component.uri for component in baseline}
    return sorted({component.uri for component in current} - known)
