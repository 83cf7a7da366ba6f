"""Configuration management for the Founder pipeline."""

from .settings import get_settings, Settings

__all__ = ["get_settings", "Settings"]
