from .component_registry import (
    RegistryComponent,
    parse_registry,
    load_registry,
    search_components,
    find_component_by_name_or_uri,
    new_component_uris,
)

__all__ = [
    "RegistryComponent",
    "parse_registry",
    "load_registry",
    "search_components",
    "find_component_by_name_or_uri",
    "new_component_uris",
]
