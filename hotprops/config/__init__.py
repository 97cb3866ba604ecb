"""CLI settings loading and validation."""

from hotprops.config.loader import get_settings, load_settings

__all__ = ["get_settings", "load_settings"]
