"""Adapter-specific exceptions."""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class SourceUnavailableError(AdapterError):
    """Raised when a source cannot answer a query (store error or timeout)."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""
