"""
Configuration package for inkpage

Provides application settings via environment variables using pydantic-settings.
"""

from .settings import appsettings, AppSettings, PACKAGE_ROOT

__all__ = ["appsettings", "AppSettings", "PACKAGE_ROOT"]
