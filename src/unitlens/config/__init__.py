"""Configuration management for unitlens.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides with the ``UNITLENS_`` prefix.
"""

from unitlens.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
