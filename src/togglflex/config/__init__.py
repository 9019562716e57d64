"""Configuration for togglflex."""

from togglflex.config.settings import FlexSettings

__all__ = ["FlexSettings"]
