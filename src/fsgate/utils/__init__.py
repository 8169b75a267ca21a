"""Shared utilities: exceptions, error handling, configuration and logging."""
