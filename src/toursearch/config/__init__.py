"""Configuration layer."""

from toursearch.config.settings import Settings

__all__ = ["Settings"]
