"""Core: config, exception handlers, lifespan, rate limits."""

from custom_domains.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
