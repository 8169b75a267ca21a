"""fsgate: filesystem operations and component registry lookup behind a string contract."""

__version__ = "0.1.0"
