"""
Configuration package for clformat

Provides directive defaults and CLI settings via environment variables using
pydantic-settings.
"""

from .settings import appsettings, AppSettings

__all__ = ["appsettings", "AppSettings"]
