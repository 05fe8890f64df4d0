"""Base adapter interface — Abstract classes for content source adapters."""

from toursearch.adapters.base.adapter import AdapterHealth, SourceAdapter
from toursearch.adapters.base.registry import AdapterRegistry

__all__ = ["AdapterHealth", "AdapterRegistry", "SourceAdapter"]
